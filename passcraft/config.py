"""
pass-craft - Config Parser

Turns user input into (IdentityRecord, HashSpec) pairs.

Line grammar (ConfigLine):
    name:<v>,email:<v>,site:<v>;method:<alg>,cut:<int>,end:<str>,upper-start:<int>

Accepted input shapes:
- sslf: one string, identity fields and hash fields separated by ';'
- text + hash: the two halves given as separate strings
- slkv: one comma-separated string holding every key
- file: one sslf line per line; '#' comment lines, <!-- --> comments
  and blank lines are skipped

Parsing rules:
- Segments split on ',', empty segments are skipped (trailing commas OK)
- Each segment splits on its FIRST ':' so values may contain ':'
- Keys and values are stripped; keys are case-insensitive
- Unknown keys are ignored (logged at DEBUG)
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from . import digest
from .errors import (
    ConfigFileNotFoundError,
    CutExceedsDigestLengthError,
    EndExceedsCutError,
    InvalidNumericValueError,
    MalformedLineError,
    MissingFieldError,
    FileReadFailureError,
    PassCraftError,
    UpperStartExceedsCutError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

IDENTITY_KEYS = ("name", "email", "site")
HASH_KEYS = ("method", "cut", "end", "upper-start")
REQUIRED_KEYS = ("name", "email", "site", "method")

# Used when a hash key is absent
DEFAULT_CUT = 8
DEFAULT_END = "!"
DEFAULT_UPPER_START = 3

GROUP_SEPARATOR = ";"
FIELD_SEPARATOR = ","
KEY_SEPARATOR = ":"

_INT_RE = re.compile(r"[0-9]+")
_COMMENT_LINE_RE = re.compile(r"^\s*#.*")
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->")

# These would not survive a save and reload: ";" splits the groups and
# comment markers are stripped by clean_line()
RESERVED_IDENTITY_TEXT = (GROUP_SEPARATOR, "<!--", "-->")
RESERVED_END_TEXT = ("<!--", "-->")


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class IdentityRecord:
    """Who the password is for."""

    name: str
    email: str
    site: str

    @property
    def base_text(self) -> str:
        return digest.base_text(self.name, self.email, self.site)


@dataclass(frozen=True)
class HashSpec:
    """How the digest is turned into a password."""

    method: str
    cut: int = DEFAULT_CUT
    end: str = DEFAULT_END
    upper_start: int = DEFAULT_UPPER_START


@dataclass(frozen=True)
class ConfigEntry:
    """One parsed configuration plus where it came from."""

    identity: IdentityRecord
    spec: HashSpec
    source: str = ""
    line_no: Optional[int] = None


# =============================================================================
# Field Parsing
# =============================================================================

def parse_fields(text: str) -> Dict[str, str]:
    """
    Split a `key:value,key:value` group into a dict.

    Later duplicates win. Keys come back lowercased.

    Raises:
        MalformedLineError: If a non-empty segment has no ':'
    """
    fields: Dict[str, str] = {}
    for segment in text.split(FIELD_SEPARATOR):
        if not segment.strip():
            continue
        if KEY_SEPARATOR not in segment:
            raise MalformedLineError(f"expected key:value, got '{segment.strip()}'")
        key, value = segment.split(KEY_SEPARATOR, 1)
        fields[key.strip().lower()] = value.strip()
    return fields


def _pick(fields: Dict[str, str], keys) -> Dict[str, str]:
    unknown = sorted(set(fields) - set(keys))
    if unknown:
        logger.debug("Ignoring unknown keys: %s", ", ".join(unknown))
    return {k: v for k, v in fields.items() if k in keys}


def _check_reserved(key: str, value: str, reserved) -> str:
    for marker in reserved:
        if marker in value:
            raise MalformedLineError(f"{key} may not contain '{marker}', got '{value}'")
    return value


def _parse_int(key: str, value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise InvalidNumericValueError(f"{key} must be a non-negative integer, got '{value}'")
    return int(value)


def build_entry(
    identity_fields: Dict[str, str],
    hash_fields: Dict[str, str],
    source: str = "",
    line_no: Optional[int] = None,
) -> ConfigEntry:
    """
    Build a ConfigEntry from already-split field dicts.

    Missing identity fields become empty strings; validate_entry() is what
    turns them into MissingField errors. Numeric fields are converted here,
    so InvalidNumericValue surfaces even without validation.

    Raises:
        MalformedLineError: If an identity value contains ';' or a comment
            marker, or end contains a comment marker. Such values would
            not read back the same from a save file.
    """
    identity = IdentityRecord(**{
        key: _check_reserved(key, identity_fields.get(key, ""), RESERVED_IDENTITY_TEXT)
        for key in IDENTITY_KEYS
    })

    cut = DEFAULT_CUT
    if "cut" in hash_fields:
        cut = _parse_int("cut", hash_fields["cut"])

    upper_start = DEFAULT_UPPER_START
    if "upper-start" in hash_fields:
        upper_start = _parse_int("upper-start", hash_fields["upper-start"])

    spec = HashSpec(
        method=hash_fields.get("method", ""),
        cut=cut,
        end=_check_reserved("end", hash_fields.get("end", DEFAULT_END), RESERVED_END_TEXT),
        upper_start=upper_start,
    )
    return ConfigEntry(identity=identity, spec=spec, source=source, line_no=line_no)


# =============================================================================
# Validation
# =============================================================================

def validate_entry(entry: ConfigEntry) -> ConfigEntry:
    """
    Check an entry against every rule before anything is computed.

    Order: required fields, algorithm, cut range, upper-start, end length.
    Out-of-range values are rejected, never clamped.

    Returns:
        The same entry, for chaining

    Raises:
        MissingFieldError, UnsupportedAlgorithmError, InvalidNumericValueError,
        CutExceedsDigestLengthError, UpperStartExceedsCutError,
        EndExceedsCutError
    """
    identity, spec = entry.identity, entry.spec
    values = {
        "name": identity.name,
        "email": identity.email,
        "site": identity.site,
        "method": spec.method,
    }
    for key in REQUIRED_KEYS:
        if not values[key]:
            raise MissingFieldError(key)

    max_cut = digest.digest_length(spec.method)

    if spec.cut <= 0:
        raise InvalidNumericValueError(f"cut must be positive, got {spec.cut}")
    if spec.cut > max_cut:
        raise CutExceedsDigestLengthError(
            f"cut {spec.cut} exceeds {spec.method} digest length {max_cut}"
        )
    if spec.upper_start > spec.cut:
        raise UpperStartExceedsCutError(
            f"upper-start {spec.upper_start} exceeds cut {spec.cut}"
        )
    if len(spec.end) > spec.cut:
        raise EndExceedsCutError(f"end '{spec.end}' is longer than cut {spec.cut}")

    return entry


# =============================================================================
# Input Modes
# =============================================================================

def parse_sslf(line: str, line_no: Optional[int] = None, validate: bool = True) -> ConfigEntry:
    """
    Parse a combined `identity;hash` line.

    Args:
        line: e.g. "name:john,email:john@gmail.com,site:john.com;method:sha512,cut:8"
        line_no: Position in a config file, for error messages
        validate: Run validate_entry() on the result

    Raises:
        MalformedLineError: If there is no ';' separating the two groups
    """
    if GROUP_SEPARATOR not in line:
        raise MalformedLineError(f"missing '{GROUP_SEPARATOR}' between identity and hash fields")
    head, _, tail = line.partition(GROUP_SEPARATOR)
    entry = build_entry(
        _pick(parse_fields(head), IDENTITY_KEYS),
        _pick(parse_fields(tail), HASH_KEYS),
        source=line.strip(),
        line_no=line_no,
    )
    return validate_entry(entry) if validate else entry


def parse_text_hash(text: Optional[str], hash_text: Optional[str], validate: bool = True) -> ConfigEntry:
    """Parse separate identity (`--text`) and hash (`--hash`) strings."""
    text = text or ""
    hash_text = hash_text or ""
    entry = build_entry(
        _pick(parse_fields(text), IDENTITY_KEYS),
        _pick(parse_fields(hash_text), HASH_KEYS),
        source=f"{text}{GROUP_SEPARATOR}{hash_text}",
    )
    return validate_entry(entry) if validate else entry


def parse_slkv(text: str, validate: bool = True) -> ConfigEntry:
    """Parse one flat `key:value,...` string carrying all keys."""
    fields = _pick(parse_fields(text), IDENTITY_KEYS + HASH_KEYS)
    entry = build_entry(fields, fields, source=text.strip())
    return validate_entry(entry) if validate else entry


def clean_line(line: str) -> str:
    """Strip '#' comment lines and <!-- --> comments from one line."""
    line = _COMMENT_LINE_RE.sub("", line)
    line = _HTML_COMMENT_RE.sub("", line)
    return line.strip()


def load_file(path: str, validate: bool = True) -> List[ConfigEntry]:
    """
    Read every config line from a file, in order.

    The whole file is parsed (and validated) before returning, so a bad
    line anywhere aborts the batch before any output is produced.

    Args:
        path: Config file (UTF-8)
        validate: Run validate_entry() on every line

    Returns:
        One ConfigEntry per non-blank, non-comment line

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        FileReadFailureError: If the file cannot be read
        MalformedLineError: If a line is not valid UTF-8
        PassCraftError: First parse/validation error, tagged with its line
    """
    if not os.path.isfile(path):
        raise ConfigFileNotFoundError(path)

    entries = []
    try:
        with open(path, 'rb') as f:
            for line_no, raw_bytes in enumerate(f, 1):
                try:
                    raw = raw_bytes.decode('utf-8').rstrip("\r\n")
                except UnicodeDecodeError as e:
                    raise MalformedLineError(
                        f"not valid UTF-8 at byte {e.start}: {e.reason}"
                    ).at_line(line_no, repr(raw_bytes.rstrip(b"\r\n"))) from e
                line = clean_line(raw)
                if not line:
                    continue
                try:
                    entries.append(parse_sslf(line, line_no=line_no, validate=validate))
                except PassCraftError as e:
                    e.at_line(line_no, raw)
                    raise
    except OSError as e:
        raise FileReadFailureError(f"{path}: {e.strerror or e}") from e

    logger.info("Loaded %d config line(s) from %s", len(entries), path)
    return entries


# =============================================================================
# Serialization
# =============================================================================

def format_config_line(identity: IdentityRecord, spec: HashSpec) -> str:
    """Serialize a pair back into the ConfigLine grammar."""
    return (
        f"name:{identity.name},email:{identity.email},site:{identity.site}"
        f"{GROUP_SEPARATOR}"
        f"method:{spec.method},cut:{spec.cut},end:{spec.end},upper-start:{spec.upper_start}"
    )
