"""Attestation data as carried on chain."""

from __future__ import annotations

from dataclasses import dataclass, field

from .context import SlotAttestation


@dataclass
class UnsignedAttestation:
    """The content a validator signs when attesting."""

    slot: int
    slot_block_hash: bytes
    source_epoch: int
    source_epoch_block_hash: bytes
    target_epoch: int
    target_epoch_block_hash: bytes
    validator_indexes: list[int] = field(default_factory=list)


@dataclass
class CheckedAttestation(SlotAttestation):
    """An attestation whose signature has been verified against the chain."""

    data: UnsignedAttestation
    slot_canon: bool
    source_canon: bool
    target_canon: bool
    validators: list[bytes]
    distance: int

    def validator_ids(self) -> list[bytes]:
        """Validator ids of the signers."""
        return list(self.validators)

    def is_source_canon(self) -> bool:
        """Whether the source block is on the canon chain."""
        return self.source_canon

    def is_target_canon(self) -> bool:
        """Whether the target block is on the canon chain."""
        return self.target_canon

    def source_epoch(self) -> int:
        """Source epoch of the attestation."""
        return self.data.source_epoch

    def target_epoch(self) -> int:
        """Target epoch of the attestation."""
        return self.data.target_epoch

    def slot(self) -> int:
        """Slot the attestation was made at."""
        return self.data.slot

    def is_slot_canon(self) -> bool:
        """Whether the slot block is on the canon chain."""
        return self.slot_canon

    def inclusion_distance(self) -> int:
        """Slots between the attestation and its inclusion."""
        return self.distance