"""Reward and penalty calculation for Casper and the beacon chain."""

from __future__ import annotations

import math
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from enum import Enum

from .casper import CasperProcess


class CasperRewardType(Enum):
    """Casper reward categories."""

    EXPECTED_SOURCE = "expected_source"
    NO_EXPECTED_SOURCE = "no_expected_source"
    EXPECTED_TARGET = "expected_target"
    NO_EXPECTED_TARGET = "no_expected_target"


class BeaconRewardType(Enum):
    """Beacon chain head reward categories."""

    EXPECTED_HEAD = "expected_head"
    NO_EXPECTED_HEAD = "no_expected_head"


@dataclass(frozen=True)
class InclusionDistance:
    """Beacon reward for the inclusion distance of an attestation."""

    distance: int


class RewardKind(Enum):
    """What a reward action does to a balance."""

    ADD = "add"
    SUB = "sub"
    PENALIZE = "penalize"


@dataclass(frozen=True)
class RewardAction:
    """A change to a validator's balance; PENALIZE also exits the validator."""

    kind: RewardKind
    amount: int


@dataclass
class DefaultSchemeConfig:
    """Configuration of the default reward scheme."""

    base_reward_quotient: int
    inactivity_penalty_quotient: int
    includer_reward_quotient: int
    min_attestation_inclusion_delay: int
    whistleblower_reward_quotient: int


def integer_sqrt(n: int) -> int:
    """Largest integer whose square does not exceed n."""
    return math.isqrt(n)


def _unsigned(value: int) -> int:
    if value < 0:
        raise OverflowError("balance arithmetic went below zero")
    return value


def _without(validators: list, attested: Sequence) -> list:
    return [v for v in validators if v not in attested]


def beacon_rewards(store) -> list[tuple[Hashable, BeaconRewardType | InclusionDistance]]:
    """Beacon chain reward categories for the previous epoch."""
    no_expected_head = list(store.active_validators(store.previous_epoch()))
    rewards: list = []

    for attestation in store.attestations():
        if attestation.target_epoch() != store.previous_epoch():
            continue
        ids = attestation.validator_ids()
        distance = InclusionDistance(attestation.inclusion_distance())
        rewards.extend((v, distance) for v in ids)
        if attestation.is_slot_canon():
            rewards.extend((v, BeaconRewardType.EXPECTED_HEAD) for v in ids)
            no_expected_head = _without(no_expected_head, ids)

    rewards.extend((v, BeaconRewardType.NO_EXPECTED_HEAD) for v in no_expected_head)
    return rewards


def casper_rewards(context: CasperProcess, store) -> list[tuple[Hashable, CasperRewardType]]:
    """Casper reward categories.

    Call after all pending attestations are in the store, before the epoch advances.
    """
    no_expected_source = list(store.active_validators(context.previous_epoch()))
    no_expected_target = list(no_expected_source)
    rewards: list = []

    for attestation in store.attestations():
        if attestation.target_epoch() != store.previous_epoch():
            continue
        ids = attestation.validator_ids()
        rewards.extend((v, CasperRewardType.EXPECTED_SOURCE) for v in ids)
        no_expected_source = _without(no_expected_source, ids)
        if attestation.is_target_canon():
            rewards.extend((v, CasperRewardType.EXPECTED_TARGET) for v in ids)
            no_expected_target = _without(no_expected_target, ids)

    rewards.extend((v, CasperRewardType.NO_EXPECTED_SOURCE) for v in no_expected_source)
    rewards.extend((v, CasperRewardType.NO_EXPECTED_TARGET) for v in no_expected_target)
    return rewards


def _validators_with(rewards: Sequence, *kinds) -> list:
    return [validator_id for validator_id, kind in rewards if kind in kinds]


def default_scheme_rewards(
    store,
    beacon_rewards: Sequence,
    casper_rewards: Sequence,
    epochs_since_finality: int,
    config: DefaultSchemeConfig,
) -> list[tuple[Hashable, RewardAction]]:
    """Justification and finalization rewards under the default scheme."""
    previous_active = list(store.active_validators(store.previous_epoch()))
    previous_total = store.total_balance(previous_active)
    quotient = max(1, integer_sqrt(previous_total) // config.base_reward_quotient)
    delay = config.min_attestation_inclusion_delay or 1

    def base_reward(validator_id) -> int:
        return store.total_balance([validator_id]) // quotient // 5

    def inactivity_penalty(validator_id) -> int:
        return (
            base_reward(validator_id)
            + store.total_balance([validator_id])
            * epochs_since_finality
            // config.inactivity_penalty_quotient
            // 2
        )

    def add(validator_id, amount):
        rewards.append((validator_id, RewardAction(RewardKind.ADD, amount)))

    def sub(validator_id, amount):
        rewards.append((validator_id, RewardAction(RewardKind.SUB, _unsigned(amount))))

    rewards: list[tuple[Hashable, RewardAction]] = []

    if epochs_since_finality <= 4:
        head_total = store.total_balance(
            _validators_with(
                beacon_rewards, BeaconRewardType.EXPECTED_HEAD, BeaconRewardType.NO_EXPECTED_HEAD
            )
        )
        source_total = store.total_balance(
            _validators_with(
                casper_rewards, CasperRewardType.EXPECTED_SOURCE, CasperRewardType.NO_EXPECTED_SOURCE
            )
        )
        target_total = store.total_balance(
            _validators_with(
                casper_rewards, CasperRewardType.EXPECTED_TARGET, CasperRewardType.NO_EXPECTED_TARGET
            )
        )

        for validator_id, kind in beacon_rewards:
            if kind is BeaconRewardType.EXPECTED_HEAD:
                add(validator_id, base_reward(validator_id) * head_total // previous_total)
            elif kind is BeaconRewardType.NO_EXPECTED_HEAD:
                sub(validator_id, base_reward(validator_id))
            elif isinstance(kind, InclusionDistance):
                distance = kind.distance or 1
                add(validator_id, base_reward(validator_id) // delay // distance)

        for validator_id, kind in casper_rewards:
            if kind is CasperRewardType.EXPECTED_SOURCE:
                add(validator_id, base_reward(validator_id) * source_total // previous_total)
            elif kind is CasperRewardType.NO_EXPECTED_SOURCE:
                sub(validator_id, base_reward(validator_id))
            elif kind is CasperRewardType.EXPECTED_TARGET:
                add(validator_id, base_reward(validator_id) * target_total // previous_total)
            elif kind is CasperRewardType.NO_EXPECTED_TARGET:
                sub(validator_id, base_reward(validator_id))
    else:
        for validator_id, kind in beacon_rewards:
            if kind is BeaconRewardType.NO_EXPECTED_HEAD:
                sub(validator_id, inactivity_penalty(validator_id))
            elif isinstance(kind, InclusionDistance):
                distance = kind.distance or 1
                base = base_reward(validator_id)
                sub(validator_id, base - base * delay // distance)

        for validator_id, kind in casper_rewards:
            if kind is CasperRewardType.NO_EXPECTED_SOURCE:
                sub(validator_id, base_reward(validator_id))
                sub(validator_id, inactivity_penalty(validator_id))

    return rewards


def default_scheme_penalties(
    store,
    whistleblower: Hashable,
    slashings: Sequence,
    epochs_since_finality: int,
    config: DefaultSchemeConfig,
) -> list[tuple[Hashable, RewardAction]]:
    """Slashing penalties, whistleblower rewards and inactivity leaks."""
    rewards: list[tuple[Hashable, RewardAction]] = []

    for validator_id in slashings:
        whistleblower_reward = store.total_balance([validator_id]) // config.whistleblower_reward_quotient
        rewards.append((whistleblower, RewardAction(RewardKind.ADD, whistleblower_reward)))
        rewards.append((validator_id, RewardAction(RewardKind.PENALIZE, whistleblower_reward)))

    if epochs_since_finality > 4:
        previous_active = list(store.active_validators(store.previous_epoch()))
        previous_total = store.total_balance(previous_active)
        quotient = integer_sqrt(previous_total) // config.base_reward_quotient

        def base_reward(validator_id) -> int:
            return store.total_balance([validator_id]) // quotient // 5

        def inactivity_penalty(validator_id) -> int:
            return (
                base_reward(validator_id)
                + store.total_balance([validator_id])
                * epochs_since_finality
                // config.inactivity_penalty_quotient
                // 2
            )

        for validator_id in previous_active:
            if validator_id not in slashings:
                amount = inactivity_penalty(validator_id) * 2 + base_reward(validator_id)
                rewards.append((validator_id, RewardAction(RewardKind.SUB, amount)))

    return rewards