"""Attestation interfaces used by the Casper FFG logic."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable


class Attestation(ABC):
    """A Casper attestation. The source should always be canon."""

    @abstractmethod
    def validator_ids(self) -> list[Hashable]:
        """Validator ids of this attestation."""

    @abstractmethod
    def is_source_canon(self) -> bool:
        """Whether the source is on the canon chain."""

    @abstractmethod
    def is_target_canon(self) -> bool:
        """Whether the target is on the canon chain."""

    @abstractmethod
    def source_epoch(self) -> int:
        """Source epoch of this attestation."""

    @abstractmethod
    def target_epoch(self) -> int:
        """Target epoch of this attestation."""

    def is_casper_canon(self) -> bool:
        """Whether both source and target are on the canon chain."""
        return self.is_source_canon() and self.is_target_canon()


class SlotAttestation(Attestation):
    """An attestation bound to a specific slot."""

    @abstractmethod
    def slot(self) -> int:
        """Slot of this attestation."""

    @abstractmethod
    def is_slot_canon(self) -> bool:
        """Whether the slot is on the canon chain."""

    @abstractmethod
    def inclusion_distance(self) -> int:
        """Distance between the attestation slot and its inclusion."""