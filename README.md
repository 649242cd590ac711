# shasper

Building blocks for a Casper FFG proof-of-stake chain, in pure Python with no
third-party dependencies.

## Modules

- `shasper.casper`: `CasperProcess` holds the current, justified, finalized and
  previously justified epochs and a justification bitfield.
  `advance_epoch(store)` justifies an epoch when the canon target attesting
  balance reaches two thirds of the active balance, applies the finalization
  rules, prunes pending attestations older than the current epoch, and moves to
  the next epoch. `validate_attestation` checks whether an attestation may be
  added to the pending list. `slashable(a, b)` returns the validators present
  in both of two attestations that form a double vote or a surround vote.
- `shasper.reward`: `beacon_rewards(store)` and `casper_rewards(context, store)`
  classify validators (`BeaconRewardType`, `InclusionDistance`,
  `CasperRewardType`); `default_scheme_rewards` and `default_scheme_penalties`
  turn those into `RewardAction` values (`RewardKind.ADD`, `SUB`, `PENALIZE`)
  using a `DefaultSchemeConfig`. `integer_sqrt` is the integer square root.
- `shasper.randao`: `RandaoOnion` (a hash chain, with `generate`, `at`,
  `commitment`, and JSON `save`/`load`), `RandaoCommitment.reveal`,
  `RandaoMix`, and `RandaoProducer` with a configurable lookahead
  (`RandaoConfig`).
- `shasper.committee`: `CommitteeProcess` assigns validator indexes to
  committees for the current and previous epoch using swap-or-not shuffling
  (`permuted_index`), driven by a `ShuffleConfig` and advanced with
  `SeedUpdate` or `SeedAndLenUpdate`. `committee_count` gives the number of
  committees per epoch.
- `shasper.store`: the abstract `ValidatorStore`, `PendingAttestationsStore`
  and `BlockStore` that you implement over your own state, plus
  `canon_target_attesting_balance`, `canon_source_attesting_balance` and
  `active_total_balance`.
- `shasper.context`: the abstract `Attestation` and `SlotAttestation`
  interfaces.
- `shasper.attestation`: `UnsignedAttestation` and `CheckedAttestation`, a
  concrete `SlotAttestation`.
- `shasper.chain`: chain constants (`CYCLE_LENGTH`, `SLOT_DURATION`, reward
  quotients), `slot_to_epoch`, `epoch_to_slot`, and `genesis_slot`, which
  aligns a genesis timestamp to an epoch boundary.
- `shasper.timing`: `timestamp_now`, `timestamp_and_slot_now`, `slot_now` and
  `time_until_next` for slot timing.
- `shasper.util`: `hash`, `hash2`, `hash3` and `to_usize`.

## Hashers

Wherever a hasher is needed, pass any object with a `hash(data: bytes) -> bytes`
method:

```python
import hashlib

class Sha3:
    def hash(self, data):
        return hashlib.sha3_256(data).digest()
```

## Example

```python
from shasper.randao import RandaoOnion
from shasper.committee import CommitteeProcess, ShuffleConfig

hasher = Sha3()

onion = RandaoOnion.generate(hasher, bytes(32), 100)
commitment = onion.commitment()
assert commitment.reveal(onion.at(1), 1)

config = ShuffleConfig(rounds=9, target_committee_len=2, shard_count=4, split_count=4)
process = CommitteeProcess.new(hasher, 8, bytes(32), config)
committees = process.current_committees_at(0)  # list of lists of validator indexes
```

To run `CasperProcess.advance_epoch` or the reward functions, implement the
store interfaces from `shasper.store` over your own validator and attestation
data, and use `CheckedAttestation` or your own `Attestation` subclass.

## What this package does not do

It has no node, command-line program, networking, block import or fork choice,
and no persistent chain storage: the stores are interfaces you supply. It does
not sign or verify attestation signatures; `CheckedAttestation` records the
outcome of checks made elsewhere. Applying `RewardAction` values to balances is
left to the caller.

## Running the tests

```
pip install .[test]
pytest
```