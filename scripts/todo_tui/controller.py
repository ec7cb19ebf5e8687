"""
Interaction controller: the modal state machine behind the TUI.

handle() takes the current ControllerState and one abstract Event and
returns the next state plus an Effect. Handlers are pure; the only
side effect they can request is Effect.QUIT, which tells the caller to
persist the store and exit.

Cursor rules:
- cursor is 1-based into the displayed list (done in DONE_LIST,
  pending in every other mode); 0 means nothing is selected
- cursor is 0 exactly when the displayed list is empty
- delete/toggle act on cursor - 1 of the displayed list
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable

from todo_tui.line_input import LineInput
from todo_tui.models import Task, TaskStore

ADD_PLACEHOLDER = "New task name..."


class Mode(Enum):
    NORMAL = "normal"
    DONE_LIST = "done_list"
    ADD_TASK = "add_task"
    EDIT_TASK = "edit_task"
    HELP = "help"


class EventKind(Enum):
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    ADD = "add"
    DELETE = "delete"
    EDIT = "edit"
    HELP = "help"
    TOGGLE_DONE = "toggle_done"
    SWITCH_LIST = "switch_list"
    QUIT = "quit"
    FORCE_QUIT = "force_quit"
    CANCEL = "cancel"
    SUBMIT = "submit"
    # line editing
    INSERT_TEXT = "insert_text"
    BACKSPACE = "backspace"
    DELETE_CHAR = "delete_char"
    CARET_LEFT = "caret_left"
    CARET_RIGHT = "caret_right"
    CARET_HOME = "caret_home"
    CARET_END = "caret_end"


class Effect(Enum):
    NONE = "none"
    QUIT = "quit"


@dataclass(frozen=True)
class Event:
    """An abstract input event. text is only used by INSERT_TEXT."""

    kind: EventKind
    text: str = ""


@dataclass(frozen=True)
class ControllerState:
    """Complete controller state snapshot."""

    mode: Mode
    cursor: int
    store: TaskStore
    add_input: LineInput = field(
        default_factory=lambda: LineInput(placeholder=ADD_PLACEHOLDER)
    )
    edit_input: LineInput = field(default_factory=LineInput)

    @classmethod
    def initial(cls, store: TaskStore) -> ControllerState:
        return cls(mode=Mode.NORMAL, cursor=_reset_cursor(store.pending), store=store)

    def displayed(self) -> tuple[Task, ...]:
        """The list the cursor indexes into."""
        if self.mode is Mode.DONE_LIST:
            return self.store.done
        return self.store.pending

    def selected(self) -> Task | None:
        tasks = self.displayed()
        if 0 < self.cursor <= len(tasks):
            return tasks[self.cursor - 1]
        return None


Transition = tuple[ControllerState, Effect]
Handler = Callable[[ControllerState, Event, datetime | None], Transition]


def _reset_cursor(tasks: tuple[Task, ...]) -> int:
    return 1 if tasks else 0


def _without(tasks: tuple[Task, ...], index: int) -> tuple[Task, ...]:
    return tasks[:index] + tasks[index + 1 :]


def _stay(state: ControllerState) -> Transition:
    return state, Effect.NONE


def _move(state: ControllerState, kind: EventKind, size: int) -> Transition:
    if kind is EventKind.MOVE_DOWN:
        return replace(state, cursor=min(state.cursor + 1, size)), Effect.NONE
    if size == 0:
        return _stay(state)
    return replace(state, cursor=max(state.cursor - 1, 1)), Effect.NONE


# -------------------- list modes --------------------


def _normal(state: ControllerState, event: Event, now: datetime | None) -> Transition:
    kind = event.kind
    store = state.store
    pending = store.pending

    if kind in (EventKind.MOVE_DOWN, EventKind.MOVE_UP):
        return _move(state, kind, len(pending))

    if kind is EventKind.ADD:
        return replace(state, mode=Mode.ADD_TASK), Effect.NONE

    if kind is EventKind.HELP:
        return replace(state, mode=Mode.HELP), Effect.NONE

    if kind is EventKind.SWITCH_LIST:
        return (
            replace(state, mode=Mode.DONE_LIST, cursor=_reset_cursor(store.done)),
            Effect.NONE,
        )

    if kind is EventKind.QUIT:
        return state, Effect.QUIT

    if state.cursor == 0:
        return _stay(state)
    index = state.cursor - 1

    if kind is EventKind.DELETE:
        remaining = _without(pending, index)
        return (
            replace(
                state,
                store=replace(store, pending=remaining),
                cursor=_reset_cursor(remaining),
            ),
            Effect.NONE,
        )

    if kind is EventKind.EDIT:
        name = pending[index].name
        edit_input = replace(state.edit_input, placeholder=name).set(name)
        return replace(state, mode=Mode.EDIT_TASK, edit_input=edit_input), Effect.NONE

    if kind is EventKind.TOGGLE_DONE:
        task = pending[index].mark(True)
        remaining = _without(pending, index)
        return (
            replace(
                state,
                store=replace(store, pending=remaining, done=store.done + (task,)),
                cursor=_reset_cursor(remaining),
            ),
            Effect.NONE,
        )

    return _stay(state)


def _done_list(state: ControllerState, event: Event, now: datetime | None) -> Transition:
    kind = event.kind
    store = state.store
    done = store.done

    if kind in (EventKind.MOVE_DOWN, EventKind.MOVE_UP):
        return _move(state, kind, len(done))

    if kind is EventKind.SWITCH_LIST:
        return (
            replace(state, mode=Mode.NORMAL, cursor=_reset_cursor(store.pending)),
            Effect.NONE,
        )

    if kind is EventKind.QUIT:
        return state, Effect.QUIT

    if state.cursor == 0:
        return _stay(state)
    index = state.cursor - 1

    if kind is EventKind.DELETE:
        remaining = _without(done, index)
        return (
            replace(
                state,
                store=replace(store, done=remaining),
                cursor=_reset_cursor(remaining),
            ),
            Effect.NONE,
        )

    if kind is EventKind.TOGGLE_DONE:
        task = done[index].mark(False)
        remaining = _without(done, index)
        return (
            replace(
                state,
                store=replace(store, pending=store.pending + (task,), done=remaining),
                cursor=_reset_cursor(remaining),
            ),
            Effect.NONE,
        )

    return _stay(state)


# -------------------- input modes --------------------

_BUFFER_OPS: dict[EventKind, Callable[[LineInput], LineInput]] = {
    EventKind.BACKSPACE: LineInput.backspace,
    EventKind.DELETE_CHAR: LineInput.delete,
    EventKind.CARET_LEFT: LineInput.move_left,
    EventKind.CARET_RIGHT: LineInput.move_right,
    EventKind.CARET_HOME: LineInput.home,
    EventKind.CARET_END: LineInput.end,
}


def _edit_buffer(buffer: LineInput, event: Event) -> LineInput | None:
    """Apply a line-editing event, or return None if it isn't one."""
    if event.kind is EventKind.INSERT_TEXT:
        return buffer.insert(event.text)
    op = _BUFFER_OPS.get(event.kind)
    if op is None:
        return None
    return op(buffer)


def _add_task(state: ControllerState, event: Event, now: datetime | None) -> Transition:
    kind = event.kind

    if kind is EventKind.CANCEL:
        return (
            replace(state, mode=Mode.NORMAL, add_input=state.add_input.clear()),
            Effect.NONE,
        )

    if kind is EventKind.SUBMIT:
        name = state.add_input.value
        if not name:
            return _stay(state)
        store, _ = state.store.new_task(name, now)
        return (
            replace(
                state,
                mode=Mode.NORMAL,
                store=store,
                cursor=state.cursor + 1,
                add_input=state.add_input.clear(),
            ),
            Effect.NONE,
        )

    buffer = _edit_buffer(state.add_input, event)
    if buffer is None:
        return _stay(state)
    return replace(state, add_input=buffer), Effect.NONE


def _edit_task(state: ControllerState, event: Event, now: datetime | None) -> Transition:
    kind = event.kind

    if kind is EventKind.CANCEL:
        return (
            replace(state, mode=Mode.NORMAL, edit_input=LineInput()),
            Effect.NONE,
        )

    if kind is EventKind.SUBMIT:
        name = state.edit_input.value
        if not name:
            return _stay(state)
        store = state.store
        index = state.cursor - 1
        renamed = store.pending[index].rename(name)
        pending = store.pending[:index] + (renamed,) + store.pending[index + 1 :]
        return (
            replace(
                state,
                mode=Mode.NORMAL,
                store=replace(store, pending=pending),
                edit_input=LineInput(),
            ),
            Effect.NONE,
        )

    buffer = _edit_buffer(state.edit_input, event)
    if buffer is None:
        return _stay(state)
    return replace(state, edit_input=buffer), Effect.NONE


def _help(state: ControllerState, event: Event, now: datetime | None) -> Transition:
    if event.kind is EventKind.CANCEL:
        return replace(state, mode=Mode.NORMAL), Effect.NONE
    return _stay(state)


_HANDLERS: dict[Mode, Handler] = {
    Mode.NORMAL: _normal,
    Mode.DONE_LIST: _done_list,
    Mode.ADD_TASK: _add_task,
    Mode.EDIT_TASK: _edit_task,
    Mode.HELP: _help,
}


def handle(
    state: ControllerState, event: Event, now: datetime | None = None
) -> Transition:
    """Compute the next state for one event.

    now overrides the creation timestamp of a task added by this event.
    """
    if event.kind is EventKind.FORCE_QUIT:
        return state, Effect.QUIT
    return _HANDLERS[state.mode](state, event, now)
