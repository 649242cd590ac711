"""RANDAO constructs.

Participants publish the outer layer of a hash chain (the "onion") and
reveal one layer each time they add entropy to the shared random value.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field

from .util import Hasher, hash2


def _xor(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError("values to mix must have the same length")
    return bytes(x ^ y for x, y in zip(a, b))


@dataclass
class RandaoConfig:
    """RANDAO configuration."""

    lookahead: int = 0


@dataclass
class RandaoMix:
    """Combines revealed values together."""

    hasher: Hasher = field(compare=False, repr=False)
    data: bytes

    def mix(self, reveal: bytes) -> None:
        """Mix the current value with a new reveal."""
        self.data = self.hasher.hash(_xor(self.data, reveal))

    def get(self) -> bytes:
        """The inner RANDAO value."""
        return self.data


class RandaoProducer:
    """Produces seeds from mixed reveals, with a lookahead history."""

    def __init__(self, hasher: Hasher, val: bytes, config: RandaoConfig) -> None:
        self.hasher = hasher
        self.config = config
        self.history = [val] * (config.lookahead + 2)
        self.offset = 0
        self._mix = RandaoMix(hasher, val)

    def mix(self, reveal: bytes) -> None:
        """Mix the current value with a new reveal."""
        self._mix.mix(reveal)

    def advance_epoch(self, f: bytes, update: bool) -> None:
        """Advance the epoch, recording a new seed."""
        self.history.insert(0, hash2(self.hasher, self._mix.get(), f))
        if update:
            self.offset = 0
            del self.history[self.config.lookahead + 2:]
        else:
            self.offset += 1

    def current(self) -> bytes:
        """The current seed."""
        return self.history[self.offset + self.config.lookahead]

    def previous(self) -> bytes:
        """The previous seed."""
        return self.history[self.offset + self.config.lookahead + 1]


@dataclass
class RandaoCommitment:
    """A commitment to the outer layer of an onion."""

    hasher: Hasher = field(compare=False, repr=False)
    data: bytes

    def reveal(self, reveal: bytes, layers: int) -> bool:
        """Reveal `layers` layers; on success the commitment moves inward."""
        revealed = reveal
        for _ in range(layers):
            revealed = self.hasher.hash(revealed)
        if revealed != self.data:
            return False
        self.data = reveal
        return True


class RandaoOnion:
    """A hash chain whose layers are revealed one slot at a time."""

    def __init__(self, hasher: Hasher, data: list[bytes]) -> None:
        if not data:
            raise ValueError("an onion needs at least its seed")
        self.hasher = hasher
        self.data = list(data)

    @classmethod
    def generate(cls, hasher: Hasher, seed: bytes, n: int) -> RandaoOnion:
        """Build an onion of `n` layers over the seed."""
        data = [seed]
        for _ in range(n):
            data.append(hasher.hash(data[-1]))
        return cls(hasher, data)

    def at(self, slot: int) -> bytes:
        """The value to reveal at the given slot offset."""
        if not 0 <= slot < len(self.data):
            raise IndexError(f"slot {slot} is outside the onion")
        return self.data[len(self.data) - 1 - slot]

    def commitment(self) -> RandaoCommitment:
        """The commitment to this onion's outermost layer."""
        return RandaoCommitment(self.hasher, self.data[-1])

    def save(self, path: str | os.PathLike) -> None:
        """Save the onion to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(["0x" + item.hex() for item in self.data], f)
            f.flush()
            os.fsync(f.fileno())

    @classmethod
    def load(cls, hasher: Hasher, path: str | os.PathLike) -> RandaoOnion:
        """Load an onion from a JSON file written by `save`."""
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list) or not all(isinstance(v, str) for v in raw):
            raise ValueError("onion file must hold a list of hex strings")
        try:
            data = [bytes.fromhex(v[2:] if v.startswith("0x") else v) for v in raw]
        except ValueError as exc:
            raise ValueError("onion file holds invalid hex") from exc
        return cls(hasher, data)