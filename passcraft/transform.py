"""
pass-craft - Transform Pipeline

Turns a raw hex digest into the final password. Stages run in a fixed order:

    1. truncate          keep the first `cut` characters
    2. uppercase_prefix  uppercase the first `upper_start` of those
    3. place_end         overwrite the tail with `end`

`end` replaces the last len(end) characters rather than extending the
string, so the password is always exactly `cut` characters long. It is
placed after uppercasing and is never case-folded.

Worked example (sha512, cut 8, upper-start 5, end "+"):
    digest     b5cb3043cd6b...
    truncate   b5cb3043
    uppercase  B5CB3043
    end        B5CB304+
    result     john,B5CB304+,john.com
"""

import logging
from dataclasses import dataclass

from . import digest
from .config import HashSpec, IdentityRecord
from .errors import (
    CutExceedsDigestLengthError,
    EndExceedsCutError,
    InvalidNumericValueError,
    UpperStartExceedsCutError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedPassword:
    """Every intermediate value of one run, kept for the report."""

    identity: IdentityRecord
    spec: HashSpec
    base_text: str
    raw_digest: str
    truncated: str
    uppercased: str
    final: str

    @property
    def result(self) -> str:
        return render_result(self.identity, self.final)


# =============================================================================
# Stages
# =============================================================================

def truncate(value: str, cut: int) -> str:
    """
    Keep the first `cut` characters of the digest.

    Raises:
        InvalidNumericValueError: If cut is not positive
        CutExceedsDigestLengthError: If cut is longer than the digest (no padding)
    """
    if cut <= 0:
        raise InvalidNumericValueError(f"cut must be positive, got {cut}")
    if cut > len(value):
        raise CutExceedsDigestLengthError(f"cut {cut} exceeds digest length {len(value)}")
    return value[:cut]


def uppercase_prefix(value: str, upper_start: int) -> str:
    """Uppercase the first `upper_start` characters; the rest is untouched."""
    if upper_start > len(value):
        raise UpperStartExceedsCutError(
            f"upper-start {upper_start} exceeds cut {len(value)}"
        )
    return value[:upper_start].upper() + value[upper_start:]


def place_end(value: str, end: str) -> str:
    """Overwrite the last len(end) characters with `end`. Empty end is a no-op."""
    if not end:
        return value
    if len(end) > len(value):
        raise EndExceedsCutError(f"end '{end}' is longer than cut {len(value)}")
    return value[:len(value) - len(end)] + end


def render_result(identity: IdentityRecord, final: str) -> str:
    """The identity fields bookend the password: name,password,site."""
    return f"{identity.name},{final},{identity.site}"


# =============================================================================
# Pipeline
# =============================================================================

def generate_password(identity: IdentityRecord, spec: HashSpec) -> GeneratedPassword:
    """
    Run digest and all transform stages for one configuration.

    Deterministic: no salt, no randomness. The same identity and spec always
    give the same password.

    Args:
        identity: name/email/site
        spec: method/cut/end/upper-start (normally already validated)

    Returns:
        GeneratedPassword with every intermediate value
    """
    text = identity.base_text
    raw = digest.compute_digest(text, spec.method)
    truncated = truncate(raw, spec.cut)
    uppercased = uppercase_prefix(truncated, spec.upper_start)
    final = place_end(uppercased, spec.end)

    logger.debug("Generated password for %s at %s", identity.name, identity.site)

    return GeneratedPassword(
        identity=identity,
        spec=spec,
        base_text=text,
        raw_digest=raw,
        truncated=truncated,
        uppercased=uppercased,
        final=final,
    )
