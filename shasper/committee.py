"""Committee assignment for Casper through swap-or-not shuffling."""

from __future__ import annotations

from dataclasses import dataclass, field

from .util import USIZE_LEN, Hasher, hash2, hash3, to_usize


@dataclass
class ShuffleConfig:
    """Shuffle configuration."""

    rounds: int = 0
    target_committee_len: int = 0
    shard_count: int = 0
    # Number of splits across all shards; slots per epoch on the beacon chain.
    split_count: int = 0


@dataclass(frozen=True)
class SeedUpdate:
    """Update the seeds only."""

    current_seed: bytes
    previous_seed: bytes


@dataclass(frozen=True)
class SeedAndLenUpdate:
    """Update the seeds and the validator count."""

    current_seed: bytes
    previous_seed: bytes
    length: int


def committee_count(length: int, config: ShuffleConfig) -> int:
    """Number of committees per epoch for the given validator count."""
    per_split = min(
        config.shard_count // config.split_count,
        length // config.split_count // config.target_committee_len,
    )
    return max(1, per_split) * config.split_count


def permuted_index(hasher: Hasher, index: int, seed: bytes, length: int, rounds: int) -> int:
    """Shuffled position of `index` among `length` items."""
    if index >= length:
        index %= length
    for r in range(rounds):
        round_byte = bytes([r & 0xFF])
        pivot = to_usize(hash2(hasher, seed, round_byte)[:USIZE_LEN]) % length
        flip = abs(pivot - index) % length
        position = max(index, flip)
        source = hash3(
            hasher,
            seed,
            round_byte,
            ((position // 256) & 0xFFFFFFFF).to_bytes(4, "little"),
        )
        byte = source[(position % 256) // 8]
        if (byte >> (position % 8)) % 2 == 1:
            index = flip
    return index


@dataclass
class CommitteeProcess:
    """Assigns validators to committees for the current and previous epoch."""

    hasher: Hasher = field(compare=False, repr=False)
    current_len: int
    previous_len: int
    current_seed: bytes
    previous_seed: bytes
    config: ShuffleConfig
    current_shard_offset: int = 0
    previous_shard_offset: int = 0

    @classmethod
    def new(cls, hasher: Hasher, length: int, seed: bytes, config: ShuffleConfig) -> CommitteeProcess:
        """A process whose current and previous state are the same."""
        return cls(hasher, length, length, seed, seed, config)

    def __init__(
        self,
        hasher: Hasher,
        current_len: int,
        previous_len: int | None = None,
        current_seed: bytes | None = None,
        previous_seed: bytes | None = None,
        config: ShuffleConfig | None = None,
        current_shard_offset: int = 0,
        previous_shard_offset: int = 0,
    ) -> None:
        if current_seed is None or config is None:
            raise TypeError("a seed and a config are required")
        self.hasher = hasher
        self.current_len = current_len
        self.previous_len = current_len if previous_len is None else previous_len
        self.current_seed = current_seed
        self.previous_seed = current_seed if previous_seed is None else previous_seed
        self.config = config
        self.current_shard_offset = current_shard_offset
        self.previous_shard_offset = previous_shard_offset

    def advance_epoch(self, update: SeedUpdate | SeedAndLenUpdate) -> None:
        """Move to the next epoch with new seeds and optionally a new length."""
        self.previous_shard_offset = self.current_shard_offset
        self.previous_len = self.current_len
        self.current_seed = update.current_seed
        self.previous_seed = update.previous_seed
        if isinstance(update, SeedAndLenUpdate):
            self.current_shard_offset = (
                self.current_shard_offset + committee_count(update.length, self.config)
            ) % self.config.shard_count
            self.current_len = update.length
        elif not isinstance(update, SeedUpdate):
            raise TypeError(f"unknown shuffle update: {update!r}")

    def _committees_at(self, offset: int, is_current: bool) -> list[list[int]]:
        length = self.current_len if is_current else self.previous_len
        seed = self.current_seed if is_current else self.previous_seed
        count = committee_count(length, self.config)
        per_slot = count // self.config.split_count
        size = max(1, length // count)
        return [
            [
                permuted_index(
                    self.hasher,
                    (per_slot * offset + i) * size + j,
                    seed,
                    length,
                    self.config.rounds,
                )
                for j in range(size)
            ]
            for i in range(per_slot)
        ]

    def current_committees_at(self, offset: int) -> list[list[int]]:
        """Current committees at a slot offset within the epoch."""
        return self._committees_at(offset, True)

    def previous_committees_at(self, offset: int) -> list[list[int]]:
        """Previous committees at a slot offset within the epoch."""
        return self._committees_at(offset, False)