"""Translate Textual key names into controller events, per mode."""

from __future__ import annotations

from todo_tui.controller import Event, EventKind, Mode

INTERRUPT_KEYS = ("ctrl+c",)

_LIST_KEYS: dict[str, EventKind] = {
    "j": EventKind.MOVE_DOWN,
    "down": EventKind.MOVE_DOWN,
    "k": EventKind.MOVE_UP,
    "up": EventKind.MOVE_UP,
    "d": EventKind.DELETE,
    "x": EventKind.TOGGLE_DONE,
    "enter": EventKind.TOGGLE_DONE,
    "t": EventKind.SWITCH_LIST,
    "q": EventKind.QUIT,
}

KEYS: dict[Mode, dict[str, EventKind]] = {
    Mode.NORMAL: {
        **_LIST_KEYS,
        "a": EventKind.ADD,
        "e": EventKind.EDIT,
        "h": EventKind.HELP,
    },
    Mode.DONE_LIST: dict(_LIST_KEYS),
    Mode.HELP: {
        "q": EventKind.CANCEL,
        "escape": EventKind.CANCEL,
    },
}

# "q" cancels instead of typing a q, matching the documented command set
INPUT_KEYS: dict[str, EventKind] = {
    "enter": EventKind.SUBMIT,
    "q": EventKind.CANCEL,
    "escape": EventKind.CANCEL,
    "backspace": EventKind.BACKSPACE,
    "delete": EventKind.DELETE_CHAR,
    "left": EventKind.CARET_LEFT,
    "right": EventKind.CARET_RIGHT,
    "home": EventKind.CARET_HOME,
    "end": EventKind.CARET_END,
}
KEYS[Mode.ADD_TASK] = INPUT_KEYS
KEYS[Mode.EDIT_TASK] = INPUT_KEYS


def translate(mode: Mode, key: str, character: str | None = None) -> Event | None:
    """Map a key press to an Event, or None if the key means nothing here.

    character is the printable text of the key, if any; it becomes an
    INSERT_TEXT event in the add and edit modes.
    """
    if key in INTERRUPT_KEYS:
        return Event(EventKind.FORCE_QUIT)

    kind = KEYS[mode].get(key)
    if kind is not None:
        return Event(kind)

    if mode in (Mode.ADD_TASK, Mode.EDIT_TASK) and character and character.isprintable():
        return Event(EventKind.INSERT_TEXT, character)
    return None
