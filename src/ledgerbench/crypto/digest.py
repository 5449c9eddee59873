"""
ledgerbench - Digest Functions

Fixed-length digest functions used as the hashing capability of the
Merkle tree builder and verifier.

A digest function takes arbitrary bytes and returns a fixed-length byte
string. The tree only requires that every call within one tree returns
the same length.
"""

import hashlib
from collections.abc import Callable

DigestFunction = Callable[[bytes], bytes]

# Default digest length in bytes
DEFAULT_DIGEST_LENGTH = 32


class UnsupportedDigestError(ValueError):
    """Digest name is unknown or its output length is not supported."""

    pass


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute SHA3-256 of raw bytes."""
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """Compute BLAKE2b with a 32-byte output."""
    return hashlib.blake2b(data, digest_size=32).digest()


def blake2s_256(data: bytes) -> bytes:
    """Compute BLAKE2s (32-byte output)."""
    return hashlib.blake2s(data).digest()


DIGEST_FUNCTIONS: dict[str, DigestFunction] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "blake2b": blake2b_256,
    "blake2s": blake2s_256,
}


def get_digest_function(
    name: str,
    expected_length: int | None = None,
) -> DigestFunction:
    """
    Look up a digest function by name.

    Args:
        name: Registered digest name (case-insensitive, "-" and "_" are equivalent)
        expected_length: If given, the function output must have this length

    Returns:
        Digest function

    Raises:
        UnsupportedDigestError: If the name is unknown or the length does not match
    """
    key = name.lower().replace("-", "_")
    try:
        fn = DIGEST_FUNCTIONS[key]
    except KeyError:
        supported = ", ".join(sorted(DIGEST_FUNCTIONS))
        raise UnsupportedDigestError(
            f"Unsupported digest algorithm '{name}' (supported: {supported})"
        ) from None

    if expected_length is not None and digest_size(fn) != expected_length:
        raise UnsupportedDigestError(
            f"Digest '{name}' produces {digest_size(fn)} bytes, "
            f"expected {expected_length}"
        )
    return fn


def digest_size(fn: DigestFunction) -> int:
    """Return the output length of a digest function."""
    return len(fn(b""))


def digest_name(fn: DigestFunction) -> str:
    """Return the registered name of a digest function, or its __name__."""
    for name, registered in DIGEST_FUNCTIONS.items():
        if registered is fn:
            return name
    return getattr(fn, "__name__", "custom")


def double_digest(fn: DigestFunction, data: bytes) -> bytes:
    """Apply a digest function twice: fn(fn(data))."""
    return fn(fn(data))
