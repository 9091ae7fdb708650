"""Key bindings: mapping of terminal key codes to user interface actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

#: Number of keys that may be bound to a single action
MAX_BINDINGS = 5

# Terminal key codes (curses numbering)
KEY_DOWN = 258
KEY_UP = 259
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_HOME = 262
KEY_BACKSPACE = 263
KEY_F0 = 264
KEY_DC = 330
KEY_NPAGE = 338
KEY_PPAGE = 339
KEY_END = 360
KEY_RESIZE = 410

# Key codes with no curses name
KEY_ESC = 27
KEY_INTRO = 10
KEY_TAB = 9
KEY_BACKSPACE2 = 8
KEY_BACKSPACE3 = 127
KEY_SPACE = ord(" ")


def key_ctrl(char: str | int) -> int:
    """Return the key code produced by Ctrl plus the given upper-case character."""
    code = ord(char) if isinstance(char, str) else char
    return code - 64


def key_f(n: int) -> int:
    """Return the key code of function key ``n``."""
    return KEY_F0 + n


class Action(IntEnum):
    """User interface actions that keys can be bound to."""

    PRINTABLE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    DELETE = 5
    BACKSPACE = 6
    NPAGE = 7
    PPAGE = 8
    HNPAGE = 9
    HPPAGE = 10
    BEGIN = 11
    END = 12
    PREV_FIELD = 13
    NEXT_FIELD = 14
    RESIZE_SCREEN = 15
    CLEAR = 16
    CLEAR_CALLS = 17
    CLEAR_CALLS_SOFT = 18
    TOGGLE_SYNTAX = 19
    CYCLE_COLOR = 20
    COMPRESS = 21
    SHOW_HOSTNAMES = 22
    SHOW_ALIAS = 23
    TOGGLE_PAUSE = 24
    PREV_SCREEN = 25
    SHOW_HELP = 26
    SHOW_RAW = 27
    SHOW_FLOW = 28
    SHOW_FLOW_EX = 29
    SHOW_FILTERS = 30
    SHOW_COLUMNS = 31
    SHOW_SETTINGS = 32
    SHOW_STATS = 33
    COLUMN_MOVE_UP = 34
    COLUMN_MOVE_DOWN = 35
    SDP_INFO = 36
    DISP_FILTER = 37
    SAVE = 38
    SELECT = 39
    CONFIRM = 40
    TOGGLE_MEDIA = 41
    ONLY_MEDIA = 42
    TOGGLE_RAW = 43
    INCREASE_RAW = 44
    DECREASE_RAW = 45
    RESET_RAW = 46
    ONLY_SDP = 47
    TOGGLE_HINT = 48
    AUTOSCROLL = 49
    SORT_PREV = 50
    SORT_NEXT = 51
    SORT_SWAP = 52
    TOGGLE_TIME = 53


@dataclass
class KeyBinding:
    """An action, its configuration name and the keys bound to it."""

    action: Action
    name: str
    keys: list[int] = field(default_factory=list)


def _default_table() -> list[KeyBinding]:
    c = key_ctrl
    f = key_f
    rows = [
        (Action.PRINTABLE, "", []),
        (Action.UP, "up", [KEY_UP, ord("k")]),
        (Action.DOWN, "down", [KEY_DOWN, ord("j")]),
        (Action.LEFT, "left", [KEY_LEFT, ord("h")]),
        (Action.RIGHT, "right", [KEY_RIGHT, ord("l")]),
        (Action.DELETE, "delete", [KEY_DC]),
        (Action.BACKSPACE, "backspace", [KEY_BACKSPACE, KEY_BACKSPACE2, KEY_BACKSPACE3]),
        (Action.NPAGE, "npage", [KEY_NPAGE, c("F")]),
        (Action.PPAGE, "ppage", [KEY_PPAGE, c("B")]),
        (Action.HNPAGE, "hnpage", [c("D")]),
        # Declared with two slots but a single key: the second slot stays zero.
        (Action.HPPAGE, "hppage", [c("U"), 0]),
        (Action.BEGIN, "begin", [KEY_HOME, c("A")]),
        (Action.END, "end", [KEY_END, c("E")]),
        (Action.PREV_FIELD, "pfield", [KEY_UP]),
        (Action.NEXT_FIELD, "nfield", [KEY_DOWN, KEY_TAB]),
        (Action.RESIZE_SCREEN, "", [KEY_RESIZE]),
        (Action.CLEAR, "clear", [c("U"), c("W")]),
        (Action.CLEAR_CALLS, "clearcalls", [f(5), c("L")]),
        (Action.CLEAR_CALLS_SOFT, "clearcallssoft", [f(9), 0]),
        (Action.TOGGLE_SYNTAX, "togglesyntax", [f(8), ord("C")]),
        (Action.CYCLE_COLOR, "colormode", [ord("c")]),
        (Action.COMPRESS, "compress", [ord("s")]),
        (Action.SHOW_ALIAS, "togglealias", [ord("a")]),
        (Action.TOGGLE_PAUSE, "pause", [ord("p")]),
        (Action.PREV_SCREEN, "prevscreen", [KEY_ESC, ord("q"), ord("Q")]),
        (Action.SHOW_HELP, "help", [f(1), ord("h"), ord("H"), ord("?")]),
        (Action.SHOW_RAW, "raw", [f(6), ord("R"), ord("r")]),
        (Action.SHOW_FLOW, "flow", [KEY_INTRO]),
        (Action.SHOW_FLOW_EX, "flowex", [f(4), ord("x")]),
        (Action.SHOW_FILTERS, "filters", [f(7), ord("f"), ord("F")]),
        (Action.SHOW_COLUMNS, "columns", [f(10), ord("t"), ord("T")]),
        (Action.SHOW_SETTINGS, "settings", [f(8), ord("o"), ord("O")]),
        (Action.SHOW_STATS, "stats", [ord("i")]),
        (Action.COLUMN_MOVE_UP, "columnup", [ord("-")]),
        (Action.COLUMN_MOVE_DOWN, "columndown", [ord("+")]),
        (Action.SDP_INFO, "sdpinfo", [f(2), ord("d")]),
        (Action.DISP_FILTER, "search", [f(3), ord("/"), KEY_TAB]),
        (Action.SAVE, "save", [f(2), ord("s"), ord("S")]),
        (Action.SELECT, "select", [KEY_SPACE]),
        (Action.CONFIRM, "confirm", [KEY_INTRO]),
        (Action.TOGGLE_MEDIA, "togglemedia", [f(3), ord("m")]),
        (Action.ONLY_MEDIA, "onlymedia", [ord("M")]),
        (Action.TOGGLE_RAW, "rawpreview", [ord("t")]),
        (Action.INCREASE_RAW, "morerawpreview", [ord("9")]),
        (Action.DECREASE_RAW, "lessrawpreview", [ord("0")]),
        (Action.RESET_RAW, "resetrawpreview", [ord("T")]),
        (Action.ONLY_SDP, "onlysdp", [ord("D")]),
        (Action.AUTOSCROLL, "autoscroll", [ord("A")]),
        (Action.TOGGLE_HINT, "hintalt", [ord("K")]),
        (Action.SORT_PREV, "sortprev", [ord("<")]),
        (Action.SORT_NEXT, "sortnext", [ord(">")]),
        (Action.SORT_SWAP, "sortswap", [ord("z")]),
        (Action.TOGGLE_TIME, "toggletime", [ord("w")]),
    ]
    return [KeyBinding(action, name, list(keys)) for action, name, keys in rows]


def key_is_printable(key: int) -> bool:
    """Return True if the key is a space or a printable character."""
    return key == ord(" ") or 33 < key < 126 or 160 < key < 255


def _keyname(key: int) -> str:
    if key >= 128:
        return "M-" + _keyname(key - 128)
    return chr(key)


_SPECIAL_NAMES = {key_f(n): f"F{n}" for n in range(1, 11)}
_SPECIAL_NAMES.update({KEY_ESC: "Esc", KEY_INTRO: "Enter", ord(" "): "Space"})


def key_to_str(key: int) -> str:
    """Return a human readable name for a key, or an empty string."""
    if key in _SPECIAL_NAMES:
        return _SPECIAL_NAMES[key]
    if key_is_printable(key):
        return _keyname(key)
    return ""


def _atoi(text: str) -> int:
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def key_from_str(key: str | None) -> int:
    """Parse a human key declaration into a key code; 0 if it is not understood."""
    if not key:
        return 0
    if len(key) == 1:
        return ord(key)
    if key[0] == "F":
        return key_f(_atoi(key[1:]))
    if key[0] == "^":
        return key_ctrl(key[1].upper())
    if key[:5].lower() == "ctrl-":
        return key_ctrl(key[5].upper()) if len(key) > 5 else key_ctrl(0)
    lowered = key.lower()
    if lowered == "esc":
        return KEY_ESC
    if lowered == "space":
        return ord(" ")
    if lowered == "enter":
        return KEY_INTRO
    return 0


class KeyBindings:
    """The table of actions and the keys bound to each of them."""

    def __init__(self) -> None:
        self._table = _default_table()

    def binding_data(self, action: int) -> KeyBinding | None:
        """Return the binding of an action, or None if the action is unknown."""
        return next((b for b in self._table[1:] if b.action == action), None)

    def bind(self, action: int, key: int) -> None:
        """Bind one more key to an action, up to MAX_BINDINGS keys."""
        binding = self.binding_data(action)
        if binding is None or len(binding.keys) >= MAX_BINDINGS:
            return
        binding.keys.append(key)

    def unbind(self, action: int, key: int) -> None:
        """Remove every binding of a key from an action."""
        binding = self.binding_data(action)
        if binding is None:
            return
        binding.keys = [k for k in binding.keys if k != key]

    def find_action(self, key: int, start: int) -> Action | None:
        """Return the next action bound to key, searching after table position start.

        Pass -1 as start to search from the beginning.
        """
        for index in range(start + 1, len(self._table)):
            binding = self._table[index]
            if index == Action.PRINTABLE and key_is_printable(key):
                return Action.PRINTABLE
            if key in binding.keys:
                return binding.action
        return None

    def action_id(self, name: str) -> Action | None:
        """Return the action whose configuration name matches (case-insensitively)."""
        lowered = name.lower()
        return next((b.action for b in self._table[1:] if b.name.lower() == lowered), None)

    def action_key(self, action: int, alt_hint: bool) -> int | None:
        """Return the main key of an action, or its first alternative when hinted."""
        binding = self.binding_data(action)
        if binding is None:
            return None
        if alt_hint and len(binding.keys) > 1:
            return binding.keys[1]
        return binding.keys[0] if binding.keys else 0

    def action_key_str(self, action: int, alt_hint: bool) -> str | None:
        """Return the human readable key shown as hint for an action."""
        key = self.action_key(action, alt_hint)
        return None if key is None else key_to_str(key)

    def dump(self) -> list[str]:
        """Return one descriptive line per configured key binding."""
        return [
            f"ActionID: {int(b.action)}\t ActionName: {b.name:<21} Key: {key} ({key_to_str(key)})"
            for b in self._table[1:]
            for key in b.keys
        ]