from shasper.attestation import CheckedAttestation, UnsignedAttestation
from shasper.casper import CasperProcess, slashable

ALICE = b"\x01" * 48
BOB = b"\x02" * 48
HASH_A = b"\xaa" * 32
HASH_B = b"\xbb" * 32


def make(source, target, validators, *, slot=0, source_canon=True, target_canon=True,
         slot_canon=True, distance=0, target_hash=HASH_A):
    data = UnsignedAttestation(
        slot=slot,
        slot_block_hash=HASH_A,
        source_epoch=source,
        source_epoch_block_hash=HASH_A,
        target_epoch=target,
        target_epoch_block_hash=target_hash,
        validator_indexes=list(range(len(validators))),
    )
    return CheckedAttestation(
        data=data,
        slot_canon=slot_canon,
        source_canon=source_canon,
        target_canon=target_canon,
        validators=list(validators),
        distance=distance,
    )


def test_accessors_reflect_data():
    att = make(1, 2, [ALICE, BOB], slot=9, distance=3, slot_canon=False)
    assert att.source_epoch() == 1
    assert att.target_epoch() == 2
    assert att.slot() == 9
    assert att.inclusion_distance() == 3
    assert att.is_slot_canon() is False
    assert att.validator_ids() == [ALICE, BOB]


def test_validator_ids_is_a_copy():
    att = make(0, 1, [ALICE])
    att.validator_ids().append(BOB)
    assert att.validator_ids() == [ALICE]


def test_casper_canon_needs_source_and_target():
    assert make(0, 1, [ALICE]).is_casper_canon() is True
    assert make(0, 1, [ALICE], target_canon=False).is_casper_canon() is False
    assert make(0, 1, [ALICE], source_canon=False).is_casper_canon() is False


def test_unsigned_default_indexes_empty():
    data = UnsignedAttestation(0, HASH_A, 0, HASH_A, 1, HASH_B)
    assert data.validator_indexes == []


def test_equality_follows_content():
    assert make(0, 1, [ALICE]) == make(0, 1, [ALICE])
    assert make(0, 1, [ALICE]) != make(0, 1, [BOB])


def test_validated_by_casper_process():
    casper = CasperProcess(0)
    assert casper.validate_attestation(make(0, 0, [ALICE]))
    assert not casper.validate_attestation(make(0, 0, [ALICE], source_canon=False))


def test_double_vote_is_slashable():
    a = make(0, 2, [ALICE, BOB])
    b = make(1, 2, [BOB], target_hash=HASH_B)
    assert slashable(a, b) == [BOB]


def test_identical_attestations_not_slashable():
    assert slashable(make(0, 2, [ALICE]), make(0, 2, [ALICE])) == []