import pytest

from shasper import chain


def test_cycle_and_slot_duration_drive_conversions():
    assert chain.epoch_to_slot(1) == 4
    assert chain.slot_to_epoch(7) == 1
    assert chain.genesis_slot(60) == 4
    assert chain.genesis_slot(47) == 0


@pytest.mark.parametrize("epoch", [0, 1, 2, 7, 1000])
def test_epoch_slot_round_trip(epoch):
    assert chain.slot_to_epoch(chain.epoch_to_slot(epoch)) == epoch


@pytest.mark.parametrize("slot", [0, 1, 3, 4, 5, 99])
def test_slot_lies_within_its_epoch(slot):
    start = chain.epoch_to_slot(chain.slot_to_epoch(slot))
    assert start <= slot < start + chain.CYCLE_LENGTH


@pytest.mark.parametrize("timestamp", [0, 11, 12, 1551894866, 1551914094])
def test_genesis_slot_is_epoch_aligned(timestamp):
    slot = chain.genesis_slot(timestamp)
    raw = timestamp // chain.SLOT_DURATION
    assert slot % chain.CYCLE_LENGTH == 0
    assert raw - chain.CYCLE_LENGTH < slot <= raw


def test_genesis_slot_at_zero():
    assert chain.genesis_slot(0) == 0


def test_negative_inputs_raise():
    with pytest.raises(ValueError):
        chain.slot_to_epoch(-1)
    with pytest.raises(ValueError):
        chain.epoch_to_slot(-1)
    with pytest.raises(ValueError):
        chain.genesis_slot(-1)