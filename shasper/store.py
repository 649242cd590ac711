"""Store interfaces and balance helpers for Casper."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Sequence

from .context import Attestation


class ValidatorStore(ABC):
    """Holds validator activity and balance information."""

    @abstractmethod
    def total_balance(self, validators: Sequence[Hashable]) -> int:
        """Total balance of the given validators."""

    @abstractmethod
    def active_validators(self, epoch: int) -> list[Hashable]:
        """All validators active at the given epoch."""


class PendingAttestationsStore(ABC):
    """Holds pending attestations."""

    @abstractmethod
    def attestations(self) -> list[Attestation]:
        """The current list of attestations."""

    @abstractmethod
    def retain(self, predicate: Callable[[Attestation], bool]) -> None:
        """Keep only attestations for which the predicate holds."""


class BlockStore(ABC):
    """Holds general block information."""

    @abstractmethod
    def epoch(self) -> int:
        """The current epoch."""

    def next_epoch(self) -> int:
        """The epoch after the current one."""
        return self.epoch() + 1

    def previous_epoch(self) -> int:
        """The epoch before the current one, never below zero."""
        epoch = self.epoch()
        return 0 if epoch == 0 else epoch - 1


def _canon_attesting_balance(store, epoch: int, epoch_of) -> int:
    validators = [
        validator_id
        for attestation in store.attestations()
        if attestation.is_casper_canon() and epoch_of(attestation) == epoch
        for validator_id in attestation.validator_ids()
    ]
    return store.total_balance(validators)


def canon_target_attesting_balance(store, epoch: int) -> int:
    """Balance of validators attesting a canon target at the epoch."""
    return _canon_attesting_balance(store, epoch, lambda a: a.target_epoch())


def canon_source_attesting_balance(store, epoch: int) -> int:
    """Balance of validators attesting a canon source at the epoch."""
    return _canon_attesting_balance(store, epoch, lambda a: a.source_epoch())


def active_total_balance(store, epoch: int) -> int:
    """Total balance of validators active at the epoch."""
    return store.total_balance(list(store.active_validators(epoch)))