"""Casper FFG justification and finalization."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass

from .context import Attestation
from .store import active_total_balance, canon_target_attesting_balance

_U64_MASK = (1 << 64) - 1


def slashable(a: Attestation, b: Attestation) -> list[Hashable]:
    """Validators caught by the Casper slashing conditions on two attestations.

    Two distinct attestations with the same target are a double vote; one whose
    source and target surround the other's is a surround vote. The result lists
    the validators present in both attestations, in the order of `a`.
    """
    if a == b:
        return []

    double_vote = a.target_epoch() == b.target_epoch()
    a_surrounds_b = a.source_epoch() < b.source_epoch() and b.target_epoch() < a.target_epoch()
    b_surrounds_a = b.source_epoch() < a.source_epoch() and a.target_epoch() < b.target_epoch()

    if not (double_vote or a_surrounds_b or b_surrounds_a):
        return []

    b_ids = b.validator_ids()
    return [validator_id for validator_id in a.validator_ids() if validator_id in b_ids]


@dataclass(init=False)
class CasperProcess:
    """State needed for Casper consensus."""

    justification_bitfield: int
    epoch: int
    justified_epoch: int
    finalized_epoch: int
    previous_justified_epoch: int

    def __init__(self, genesis_epoch: int = 0) -> None:
        self.justification_bitfield = 0
        self.epoch = genesis_epoch
        self.justified_epoch = genesis_epoch
        self.finalized_epoch = genesis_epoch
        self.previous_justified_epoch = genesis_epoch

    def next_epoch(self) -> int:
        """The epoch after the current one."""
        return self.epoch + 1

    def previous_epoch(self) -> int:
        """The epoch before the current one, never below zero."""
        return 0 if self.epoch == 0 else self.epoch - 1

    def validate_attestation(self, attestation: Attestation) -> bool:
        """Whether an attestation may be included in pending attestations."""
        if not attestation.is_source_canon():
            return False
        if attestation.target_epoch() == self.epoch:
            return attestation.source_epoch() == self.justified_epoch
        return attestation.source_epoch() == self.previous_justified_epoch

    def _is_supermajority(self, store, epoch: int) -> bool:
        return 3 * canon_target_attesting_balance(store, epoch) >= 2 * active_total_balance(store, epoch)

    def advance_epoch(self, store) -> None:
        """Update justification and finalization, then start a new epoch."""
        if self.epoch != store.epoch():
            raise ValueError("store block epoch must equal the casper epoch")
        assert all(
            self.validate_attestation(attestation) for attestation in store.attestations()
        ), "pending attestations must pass casper validation"

        previous_epoch = self.previous_epoch()
        current_epoch = self.epoch

        new_justified_epoch = self.justified_epoch
        self.justification_bitfield = (self.justification_bitfield << 1) & _U64_MASK
        if self._is_supermajority(store, previous_epoch):
            self.justification_bitfield |= 2
            new_justified_epoch = previous_epoch
        if self._is_supermajority(store, current_epoch):
            self.justification_bitfield |= 1
            new_justified_epoch = current_epoch

        bits = self.justification_bitfield
        if (
            (bits >> 1) % 8 == 0b111
            and previous_epoch > 1
            and self.previous_justified_epoch == previous_epoch - 2
        ):
            self.finalized_epoch = self.previous_justified_epoch
        if (
            (bits >> 1) % 4 == 0b11
            and previous_epoch >= 1
            and self.previous_justified_epoch == previous_epoch - 1
        ):
            self.finalized_epoch = self.previous_justified_epoch
        if bits % 8 == 0b111 and previous_epoch >= 1 and self.justified_epoch == previous_epoch - 1:
            self.finalized_epoch = self.justified_epoch
        if bits % 4 == 0b11 and self.justified_epoch == previous_epoch:
            self.finalized_epoch = self.justified_epoch

        store.retain(lambda attestation: attestation.target_epoch() >= current_epoch)

        self.previous_justified_epoch = self.justified_epoch
        self.justified_epoch = new_justified_epoch
        self.epoch += 1