"""Chain constants, slot/epoch arithmetic and the genesis slot."""

from __future__ import annotations

CYCLE_LENGTH = 4
BASE_REWARD_QUOTIENT = 32
INACTIVITY_PENALTY_QUOTIENT = 16777216
INCLUDER_REWARD_QUOTIENT = 8
MIN_ATTESTATION_INCLUSION_DELAY = 0
WHISTLEBLOWER_REWARD_QUOTIENT = 512
SLOT_DURATION = 12
SLOT_INHERENT_EXTRINSIC_INDEX = 0
RANDAO_INHERENT_EXTRINSIC_INDEX = 1
ATTESTATION_EXTRINSIC_START_INDEX = 2

# Genesis parameters for the RANDAO producer and committee shuffling.
GENESIS_RANDAO_LOOKAHEAD = 1
GENESIS_SHUFFLE_ROUNDS = 9
GENESIS_TARGET_COMMITTEE_LEN = 2
GENESIS_SHARD_COUNT = 4
GENESIS_VALIDATOR_BALANCE = 1000000


def _check_unsigned(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


def slot_to_epoch(slot: int) -> int:
    """The epoch a slot belongs to."""
    _check_unsigned("slot", slot)
    return slot // CYCLE_LENGTH


def epoch_to_slot(epoch: int) -> int:
    """The first slot of an epoch."""
    _check_unsigned("epoch", epoch)
    return epoch * CYCLE_LENGTH


def genesis_slot(timestamp: int) -> int:
    """The genesis slot for a genesis timestamp, aligned to an epoch boundary."""
    _check_unsigned("timestamp", timestamp)
    slot = timestamp // SLOT_DURATION
    return (slot // CYCLE_LENGTH) * CYCLE_LENGTH