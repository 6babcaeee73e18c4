"""Keypad latch, keyboard layout and the wait-key stall."""

from __future__ import annotations

import pytest

from chip8.interpreter import Flow
from chip8.keypad import KEY_LOCATIONS, KEYBOARD_LAYOUT, Keypad, key_for_char


def test_keys_start_released() -> None:
    keypad = Keypad()
    assert keypad.pressed_keys() == ()
    assert keypad.first_pressed() is None


def test_set_and_release_key() -> None:
    keypad = Keypad()
    keypad.set_key(0xB, True)
    assert keypad.is_pressed(0xB)
    keypad.set_key(0xB, False)
    assert not keypad.is_pressed(0xB)


@pytest.mark.parametrize("index", [-1, 16, 0x100])
def test_out_of_range_key_rejected(index: int) -> None:
    with pytest.raises(ValueError):
        Keypad().set_key(index, True)


def test_first_pressed_is_lowest_index() -> None:
    keypad = Keypad()
    keypad.set_key(0xC, True)
    keypad.set_key(0x3, True)
    assert keypad.first_pressed() == 0x3
    assert keypad.pressed_keys() == (0x3, 0xC)


def test_keyboard_layout_matches_hex_pad() -> None:
    assert len(KEYBOARD_LAYOUT) == 16
    assert key_for_char("1") == 0x1
    assert key_for_char("v") == 0xF
    assert key_for_char("x") == 0x0
    assert key_for_char("P") is None
    assert KEY_LOCATIONS[0x0].row == 3 and KEY_LOCATIONS[0x0].column == 1


def test_wait_key_stalls_pc_and_timers_until_press(make_chip) -> None:
    chip = make_chip(0xF30A)
    chip.timers.set_delay(10)
    chip.timers.set_sound(10)

    for _ in range(5):
        result = chip.step()
        assert result.flow is Flow.WAIT
        assert result.stalled
        assert chip.regs.pc == 0x200
    assert (chip.timers.delay, chip.timers.sound) == (10, 10)
    assert chip.instruction_count == 0
    assert chip.cycle_count == 5

    chip.set_key(0x9, True)
    chip.step()

    assert chip.regs.get_v(3) == 0x9
    assert chip.regs.pc == 0x202
    assert (chip.timers.delay, chip.timers.sound) == (9, 9)
    assert chip.instruction_count == 1


def test_wait_key_takes_lowest_of_several_pressed(make_chip) -> None:
    chip = make_chip(0xF30A)
    chip.set_key(0xE, True)
    chip.set_key(0x4, True)
    chip.step()
    assert chip.regs.get_v(3) == 0x4


def test_reset_releases_keys(make_chip) -> None:
    chip = make_chip(0xF30A)
    chip.set_key(0x1, True)
    chip.reset()
    assert chip.keypad.pressed_keys() == ()
