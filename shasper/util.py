"""Hashing helpers shared by the consensus building blocks."""

from __future__ import annotations

from typing import Protocol

USIZE_LEN = 8


class Hasher(Protocol):
    """Anything that turns a byte string into a fixed-length digest."""

    def hash(self, data: bytes) -> bytes:
        ...


def hash(hasher: Hasher, seed: bytes) -> bytes:  # noqa: A001
    """Hash bytes with a hasher."""
    return hasher.hash(bytes(seed))


def hash2(hasher: Hasher, seed: bytes, a: bytes) -> bytes:
    """Hash the concatenation of two byte strings."""
    return hasher.hash(bytes(seed) + bytes(a))


def hash3(hasher: Hasher, seed: bytes, a: bytes, b: bytes) -> bytes:
    """Hash the concatenation of three byte strings."""
    return hasher.hash(bytes(seed) + bytes(a) + bytes(b))


def to_usize(v: bytes) -> int:
    """Read exactly eight little-endian bytes as an unsigned integer."""
    if len(v) != USIZE_LEN:
        raise ValueError(f"expected {USIZE_LEN} bytes, got {len(v)}")
    return int.from_bytes(v, "little")