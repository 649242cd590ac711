import pytest

from shasper.context import Attestation, SlotAttestation


class Simple(Attestation):
    def __init__(self, source_canon, target_canon):
        self._source = source_canon
        self._target = target_canon

    def validator_ids(self):
        return [1]

    def is_source_canon(self):
        return self._source

    def is_target_canon(self):
        return self._target

    def source_epoch(self):
        return 0

    def target_epoch(self):
        return 1


class Slotted(Simple, SlotAttestation):
    def slot(self):
        return 5

    def is_slot_canon(self):
        return True

    def inclusion_distance(self):
        return 2


@pytest.mark.parametrize(
    "source,target,expected",
    [(True, True, True), (True, False, False), (False, True, False), (False, False, False)],
)
def test_is_casper_canon(source, target, expected):
    assert Attestation.is_casper_canon(Simple(source, target)) is expected


def test_abstract_attestation_cannot_be_built():
    with pytest.raises(TypeError):
        Attestation()


def test_slot_attestation_requires_slot_methods():
    with pytest.raises(TypeError):
        SlotAttestation()


def test_slot_attestation_values():
    att = Slotted(True, True)
    assert att.slot() == 5
    assert att.inclusion_distance() == 2
    assert SlotAttestation.is_casper_canon(att) is True
    assert Attestation.is_casper_canon(Slotted(True, False)) is False