"""
ledgerbench - Input Generators

Leaf and key generators for the benchmarks. Randomness comes from an
injected random.Random so runs can be reproduced with a seed.
"""

import random


def _check(count: int, length: int) -> None:
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")


def sequential_leaf(index: int, length: int = 32) -> bytes:
    """
    Byte pattern for one sequentially numbered item.

    The index is written big-endian into the first 8 bytes and the rest is
    zero padded (or the index is truncated to its low bytes if length < 8).
    """
    raw = index.to_bytes(8, "big")
    if length <= 8:
        return raw[8 - length:]
    return raw + bytes(length - 8)


def sequential_leaves(count: int, length: int = 32) -> list[bytes]:
    """
    Generate count distinct leaves numbered 0..count-1.

    Raises:
        ValueError: If count is negative or length is not positive
    """
    _check(count, length)
    return [sequential_leaf(i, length) for i in range(count)]


def random_keys(
    count: int,
    length: int = 20,
    rng: random.Random | None = None,
) -> list[bytes]:
    """
    Generate random fixed-length keys.

    Args:
        count: Number of keys
        length: Key length in bytes
        rng: Random source; a fresh unseeded one is used if omitted

    Raises:
        ValueError: If count is negative or length is not positive
    """
    _check(count, length)
    rng = rng or random.Random()
    return [rng.randbytes(length) for _ in range(count)]
