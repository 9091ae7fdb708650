import pytest

from sipflow.keybinding import (
    KEY_DOWN,
    KEY_ESC,
    KEY_INTRO,
    KEY_UP,
    MAX_BINDINGS,
    Action,
    KeyBindings,
    key_ctrl,
    key_f,
    key_from_str,
    key_is_printable,
    key_to_str,
)


@pytest.fixture
def bindings():
    return KeyBindings()


@pytest.mark.parametrize("name", ["F1", "F5", "F10", "Esc", "Enter", "Space"])
def test_named_keys_round_trip(name):
    assert key_to_str(key_from_str(name)) == name


def test_key_from_str_special():
    assert key_from_str("Esc") == KEY_ESC
    assert key_from_str("ENTER") == KEY_INTRO
    assert key_from_str("space") == ord(" ")
    assert key_from_str("F3") == key_f(3)


def test_key_from_str_single_char():
    assert key_from_str("x") == ord("x")
    assert key_from_str("Q") == ord("Q")


def test_key_from_str_control_sequences():
    assert key_from_str("^a") == key_ctrl("A")
    assert key_from_str("Ctrl-b") == key_ctrl("B")
    assert key_from_str("ctrl-L") == key_ctrl("L")


def test_key_from_str_unknown_and_empty():
    assert key_from_str(None) == 0
    assert key_from_str("") == 0
    assert key_from_str("bogus") == 0


def test_key_ctrl_is_offset_by_64():
    assert key_ctrl("A") == ord("A") - 64
    assert key_ctrl(ord("Z")) == ord("Z") - 64


def test_key_is_printable_limits():
    assert key_is_printable(ord(" "))
    assert key_is_printable(ord("a"))
    assert not key_is_printable(33)
    assert not key_is_printable(126)
    assert not key_is_printable(KEY_UP)


def test_key_to_str_printable_and_not():
    assert key_to_str(ord("a")) == "a"
    assert key_to_str(KEY_UP) == ""
    assert key_to_str(ord(" ")) == "Space"


def test_find_action_printable_first(bindings):
    assert bindings.find_action(ord("k"), -1) == Action.PRINTABLE
    assert bindings.find_action(ord("k"), Action.PRINTABLE) == Action.UP


def test_find_action_non_printable(bindings):
    assert bindings.find_action(KEY_DOWN, -1) == Action.DOWN
    assert bindings.find_action(KEY_ESC, -1) == Action.PREV_SCREEN


def test_find_action_exhausted(bindings):
    assert bindings.find_action(ord("q"), Action.PREV_SCREEN) is None


def test_action_id(bindings):
    assert bindings.action_id("up") == Action.UP
    assert bindings.action_id("PrevScreen") == Action.PREV_SCREEN
    assert bindings.action_id("nope") is None


def test_binding_data(bindings):
    data = bindings.binding_data(Action.SHOW_HELP)
    assert data.name == "help"
    assert data.keys[0] == key_f(1)
    assert bindings.binding_data(Action.SHOW_HOSTNAMES) is None


def test_bind_and_unbind(bindings):
    key = ord("y")
    bindings.bind(Action.SAVE, key)
    assert bindings.find_action(key, Action.PRINTABLE) == Action.SAVE
    bindings.unbind(Action.SAVE, key)
    assert bindings.find_action(key, Action.PRINTABLE) is None
    assert key not in bindings.binding_data(Action.SAVE).keys


def test_bind_respects_limit(bindings):
    for key in range(ord("1"), ord("9")):
        bindings.bind(Action.SHOW_STATS, key)
    assert len(bindings.binding_data(Action.SHOW_STATS).keys) == MAX_BINDINGS


def test_bindings_are_independent():
    first, second = KeyBindings(), KeyBindings()
    first.unbind(Action.UP, KEY_UP)
    assert KEY_UP not in first.binding_data(Action.UP).keys
    assert KEY_UP in second.binding_data(Action.UP).keys


def test_action_key(bindings):
    assert bindings.action_key(Action.UP, False) == KEY_UP
    assert bindings.action_key(Action.UP, True) == ord("k")
    assert bindings.action_key(Action.SHOW_STATS, True) == ord("i")
    assert bindings.action_key(Action.SHOW_HOSTNAMES, False) is None


def test_action_key_str(bindings):
    assert bindings.action_key_str(Action.SHOW_HELP, False) == "F1"
    assert bindings.action_key_str(Action.SHOW_HELP, True) == "h"
    assert bindings.action_key_str(Action.PREV_SCREEN, False) == "Esc"
    assert bindings.action_key_str(Action.SHOW_HOSTNAMES, True) is None


def test_dump_lists_every_key(bindings):
    lines = bindings.dump()
    up_lines = [line for line in lines if "ActionName: up " in line]
    assert len(up_lines) == 2
    assert up_lines[1].endswith("(k)")
    assert lines[0].startswith("ActionID: 1\t")