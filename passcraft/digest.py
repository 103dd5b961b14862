"""
pass-craft - Digest Engine

Computes the hex digest that every generated password starts from.

Supported algorithms are a fixed table (see HASH_ALGORITHMS). Anything else
is rejected with UnsupportedAlgorithm; there is no fallback.

The input is the canonical base string:
    "{name},{email},{site}"
joined in that fixed order. Nothing is trimmed here: whatever the parser
hands over is hashed byte-for-byte (UTF-8).
"""

import logging
from typing import Dict, Type

from cryptography.hazmat.primitives import hashes

from .errors import UnsupportedAlgorithmError


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

# name -> digest class; lookups are case-insensitive
HASH_ALGORITHMS: Dict[str, Type[hashes.HashAlgorithm]] = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
    "sha512": hashes.SHA512,
}


# =============================================================================
# Digest
# =============================================================================

def supported_algorithms():
    """Sorted list of algorithm names accepted by `method:`."""
    return sorted(HASH_ALGORITHMS)


def resolve_algorithm(method: str) -> hashes.HashAlgorithm:
    """
    Look up a digest algorithm by name.

    Args:
        method: Algorithm name, e.g. "sha512" or "SHA512"

    Returns:
        A fresh cryptography HashAlgorithm instance

    Raises:
        UnsupportedAlgorithmError: If the name is not in HASH_ALGORITHMS
    """
    algorithm = HASH_ALGORITHMS.get(method.strip().lower())
    if algorithm is None:
        raise UnsupportedAlgorithmError(
            f"{method} (supported: {', '.join(supported_algorithms())})"
        )
    return algorithm()


def digest_length(method: str) -> int:
    """Length of the hex digest for `method` (two hex chars per byte)."""
    return resolve_algorithm(method).digest_size * 2


def base_text(name: str, email: str, site: str) -> str:
    """Build the canonical base string fed to the digest."""
    return f"{name},{email},{site}"


def compute_digest(text: str, method: str) -> str:
    """
    Hash `text` and return the lowercase hex digest.

    Args:
        text: Canonical base string
        method: Algorithm name from HASH_ALGORITHMS

    Returns:
        Lowercase hex string, digest_length(method) characters long
    """
    h = hashes.Hash(resolve_algorithm(method))
    h.update(text.encode('utf-8'))
    value = h.finalize().hex()
    logger.debug("Computed %s digest (%d hex chars)", method, len(value))
    return value
