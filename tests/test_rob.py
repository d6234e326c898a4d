import pytest

from rvsim.common import CAPACITY, DecodedInst, Inst
from rvsim.rob import ReorderBuffer, RoBEntry


def test_fresh_buffer_is_empty_and_not_full():
    rob = ReorderBuffer()
    assert not rob.full()
    assert rob.entries.empty()
    assert rob.reset is False


def test_push_returns_distinct_increasing_slots():
    rob = ReorderBuffer()
    ids = [rob.push(RoBEntry(dest=n)) for n in range(4)]
    assert ids == sorted(set(ids))
    assert len(ids) == 4


def test_push_beyond_capacity_raises():
    rob = ReorderBuffer()
    for n in range(CAPACITY):
        rob.push(RoBEntry(dest=n))
    with pytest.raises(IndexError):
        rob.push(RoBEntry())


def test_staged_pushes_do_not_fill_visible_buffer():
    rob = ReorderBuffer()
    for _ in range(CAPACITY):
        rob.push(RoBEntry())
    assert not rob.full()


def test_entry_defaults_are_independent():
    first = RoBEntry()
    second = RoBEntry()
    first.inst.rd = 3
    assert second.inst.rd == 0
    assert RoBEntry(inst=DecodedInst(inst=Inst.LW)).inst.inst == Inst.LW