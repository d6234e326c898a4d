import pytest

from rvsim.registers import RegisterFile


def test_value_visible_after_update():
    regs = RegisterFile()
    regs.set_val(5, 1234)
    assert regs[5] == 0
    regs.update()
    assert regs[5] == 1234


def test_value_persists_across_updates():
    regs = RegisterFile()
    regs.set_val(7, 42)
    regs.update()
    regs.update()
    assert regs[7] == 42


def test_register_zero_is_hardwired():
    regs = RegisterFile()
    regs.set_val(0, 99)
    regs.set_busy(0, 3)
    regs.update()
    assert regs[0] == 0
    assert regs.b[0] is False
    assert regs.q[0] == 0


def test_busy_tag_lasts_one_update():
    regs = RegisterFile()
    regs.set_busy(3, 11)
    regs.update()
    assert regs.b[3] is True
    assert regs.q[3] == 11
    regs.update()
    assert regs.b[3] is False


def test_set_val_clears_pending_busy():
    regs = RegisterFile()
    regs.set_busy(4, 2)
    regs.set_val(4, 8)
    regs.update()
    assert regs.b[4] is False
    assert regs[4] == 8


@pytest.mark.parametrize("reset,expected", [(True, False), (False, True)])
def test_reset_drops_pending_rename(reset, expected):
    regs = RegisterFile()
    regs.set_busy(6, 1)
    regs.evaluate(reset)
    regs.update()
    assert regs.b[6] is expected