import hashlib

import pytest

from shasper.committee import (
    CommitteeProcess,
    SeedAndLenUpdate,
    SeedUpdate,
    ShuffleConfig,
    committee_count,
    permuted_index,
)


class Sha256:
    def hash(self, data):
        return hashlib.sha256(data).digest()


ZERO = bytes(32)
OTHER = hashlib.sha256(b"other").digest()
CONFIG = ShuffleConfig(rounds=9, target_committee_len=2, shard_count=4, split_count=4)


@pytest.mark.parametrize("length", [1, 2, 7, 16, 64, 200])
def test_committee_count_is_multiple_of_split(length):
    count = committee_count(length, CONFIG)
    assert count % CONFIG.split_count == 0
    assert CONFIG.split_count <= count <= CONFIG.shard_count


def test_committee_count_small_set_keeps_one_per_split():
    assert committee_count(2, CONFIG) == CONFIG.split_count


@pytest.mark.parametrize("length", [1, 5, 13, 100])
def test_permuted_index_in_range(length):
    for index in range(length * 2):
        assert 0 <= permuted_index(Sha256(), index, ZERO, length, 9) < length


def test_permuted_index_zero_rounds_is_modulo():
    assert permuted_index(Sha256(), 13, ZERO, 5, 0) == 13 % 5
    assert permuted_index(Sha256(), 3, ZERO, 5, 0) == 3


def test_permuted_index_reduces_index_before_shuffling():
    h = Sha256()
    for index in range(10):
        result = permuted_index(h, index, OTHER, 10, 9)
        assert 0 <= result < 10
        assert permuted_index(Sha256(), index + 10, OTHER, 10, 9) == result


def test_permuted_index_empty_set_fails():
    with pytest.raises(ZeroDivisionError):
        permuted_index(Sha256(), 0, ZERO, 0, 1)


def test_committees_shape():
    process = CommitteeProcess.new(Sha256(), 10, ZERO, CONFIG)
    count = committee_count(10, CONFIG)
    for offset in range(CONFIG.split_count):
        committees = process.current_committees_at(offset)
        assert len(committees) == count // CONFIG.split_count
        for committee in committees:
            assert len(committee) == max(1, 10 // count)
            assert all(0 <= v < 10 for v in committee)


def test_new_process_current_equals_previous():
    process = CommitteeProcess.new(Sha256(), 6, ZERO, CONFIG)
    for offset in range(4):
        assert process.current_committees_at(offset) == process.previous_committees_at(offset)


def test_seed_update_keeps_lengths_and_offsets():
    process = CommitteeProcess.new(Sha256(), 6, ZERO, CONFIG)
    before = process.current_committees_at(0)
    process.advance_epoch(SeedUpdate(current_seed=OTHER, previous_seed=ZERO))
    assert process.current_seed == OTHER
    assert process.previous_seed == ZERO
    assert process.current_len == 6
    assert process.current_shard_offset == 0
    assert process.previous_committees_at(0) == before


def test_seed_and_len_update_moves_shard_offset():
    process = CommitteeProcess.new(Sha256(), 6, ZERO, CONFIG)
    process.advance_epoch(SeedAndLenUpdate(current_seed=OTHER, previous_seed=ZERO, length=12))
    assert process.current_len == 12
    assert process.previous_len == 6
    assert process.current_shard_offset == committee_count(12, CONFIG) % CONFIG.shard_count
    assert all(v < 12 for c in process.current_committees_at(1) for v in c)
    assert all(v < 6 for c in process.previous_committees_at(1) for v in c)