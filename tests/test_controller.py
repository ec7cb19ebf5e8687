"""Tests for controller.py - the modal interaction state machine."""

import json
import random
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from todo_tui import storage  # noqa: E402
from todo_tui.controller import (  # noqa: E402
    ADD_PLACEHOLDER,
    ControllerState,
    Effect,
    Event,
    EventKind,
    Mode,
    handle,
)
from todo_tui.line_input import LineInput  # noqa: E402
from todo_tui.models import Task, TaskStore  # noqa: E402

NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def press(state: ControllerState, *kinds: EventKind) -> ControllerState:
    for kind in kinds:
        state, _ = handle(state, Event(kind), now=NOW)
    return state


def type_text(state: ControllerState, text: str) -> ControllerState:
    for char in text:
        state, _ = handle(state, Event(EventKind.INSERT_TEXT, char), now=NOW)
    return state


def add(state: ControllerState, name: str) -> ControllerState:
    state = press(state, EventKind.ADD)
    state = type_text(state, name)
    return press(state, EventKind.SUBMIT)


def make_state(pending: tuple[str, ...] = (), done: tuple[str, ...] = ()) -> ControllerState:
    tasks = [Task(i, name, False, NOW) for i, name in enumerate(pending, start=1)]
    tasks += [
        Task(i, name, True, NOW) for i, name in enumerate(done, start=len(pending) + 1)
    ]
    return ControllerState.initial(TaskStore.from_tasks(tasks))


class TestInitialState:
    """Tests for ControllerState.initial."""

    def test_empty_store(self) -> None:
        state = ControllerState.initial(TaskStore())

        assert state.mode is Mode.NORMAL
        assert state.cursor == 0
        assert state.add_input.placeholder == ADD_PLACEHOLDER

    def test_cursor_on_first_pending(self) -> None:
        state = make_state(pending=("a", "b"))

        assert state.cursor == 1
        assert state.selected().name == "a"

    def test_only_done_tasks_has_no_selection(self) -> None:
        state = make_state(done=("a",))

        assert state.cursor == 0
        assert state.selected() is None


class TestMovement:
    """Tests for move-up / move-down."""

    def test_move_down_is_bounded(self) -> None:
        state = make_state(pending=("a", "b"))

        state = press(state, EventKind.MOVE_DOWN, EventKind.MOVE_DOWN, EventKind.MOVE_DOWN)

        assert state.cursor == 2

    def test_move_up_is_bounded(self) -> None:
        state = make_state(pending=("a", "b"))

        state = press(state, EventKind.MOVE_DOWN, EventKind.MOVE_UP, EventKind.MOVE_UP)

        assert state.cursor == 1

    def test_moves_on_empty_list_keep_cursor_zero(self) -> None:
        state = make_state()

        state = press(state, EventKind.MOVE_DOWN, EventKind.MOVE_UP)

        assert state.cursor == 0

    def test_done_list_bounded_by_done(self) -> None:
        state = make_state(pending=("a", "b", "c"), done=("x",))

        state = press(state, EventKind.SWITCH_LIST, EventKind.MOVE_DOWN, EventKind.MOVE_DOWN)

        assert state.mode is Mode.DONE_LIST
        assert state.cursor == 1


class TestAddTask:
    """Tests for the add mode."""

    def test_add_enters_add_mode(self) -> None:
        state = press(make_state(), EventKind.ADD)

        assert state.mode is Mode.ADD_TASK

    def test_submit_appends_task(self) -> None:
        state = add(make_state(pending=("a",)), "b")

        assert state.mode is Mode.NORMAL
        assert [t.name for t in state.store.pending] == ["a", "b"]
        assert state.store.pending[-1] == Task(2, "b", False, NOW)
        assert state.store.latest_task_id == 2
        assert state.cursor == 2
        assert state.add_input.value == ""

    def test_submit_empty_is_noop(self) -> None:
        state = press(make_state(pending=("a",)), EventKind.ADD)

        after, effect = handle(state, Event(EventKind.SUBMIT))

        assert after == state
        assert effect is Effect.NONE
        assert after.mode is Mode.ADD_TASK

    def test_cancel_clears_buffer(self) -> None:
        state = press(make_state(), EventKind.ADD)
        state = type_text(state, "half")

        state = press(state, EventKind.CANCEL)

        assert state.mode is Mode.NORMAL
        assert state.add_input.value == ""
        assert state.store.pending == ()

    def test_buffer_editing_is_delegated(self) -> None:
        state = press(make_state(), EventKind.ADD)
        state = type_text(state, "milc")
        state = press(state, EventKind.BACKSPACE)
        state = type_text(state, "k")
        state = press(state, EventKind.CARET_HOME)
        state = type_text(state, "Buy ")

        assert state.add_input.value == "Buy milk"

    def test_ids_keep_growing_after_deletes(self) -> None:
        state = add(add(make_state(), "a"), "b")
        state = press(state, EventKind.DELETE, EventKind.DELETE)
        assert state.store.pending == ()

        state = add(state, "c")

        assert state.store.pending[0].id == 3

    def test_new_ids_exceed_loaded_ids(self) -> None:
        store = TaskStore.from_tasks([Task(7, "old", True, NOW)])

        state = add(ControllerState.initial(store), "new")

        assert state.store.pending[0].id == 8


class TestEditTask:
    """Tests for the edit mode."""

    def test_edit_prefills_name(self) -> None:
        state = make_state(pending=("a", "b"))

        state = press(state, EventKind.MOVE_DOWN, EventKind.EDIT)

        assert state.mode is Mode.EDIT_TASK
        assert state.edit_input.value == "b"
        assert state.edit_input.placeholder == "b"

    def test_submit_renames_selected(self) -> None:
        state = make_state(pending=("a", "b"))
        state = press(state, EventKind.MOVE_DOWN, EventKind.EDIT)
        state = type_text(state, "2")

        state = press(state, EventKind.SUBMIT)

        assert state.mode is Mode.NORMAL
        assert [t.name for t in state.store.pending] == ["a", "b2"]
        assert state.edit_input == LineInput()
        assert state.store.pending[1].id == 2
        assert state.cursor == 2

    def test_submit_empty_is_noop(self) -> None:
        state = press(make_state(pending=("ab",)), EventKind.EDIT)
        state = press(state, EventKind.BACKSPACE, EventKind.BACKSPACE)

        after, effect = handle(state, Event(EventKind.SUBMIT))

        assert after == state
        assert effect is Effect.NONE
        assert after.mode is Mode.EDIT_TASK

    def test_cancel_keeps_name(self) -> None:
        state = press(make_state(pending=("a",)), EventKind.EDIT)
        state = type_text(state, "zzz")

        state = press(state, EventKind.CANCEL)

        assert state.mode is Mode.NORMAL
        assert state.store.pending[0].name == "a"
        assert state.edit_input.value == ""
        assert state.edit_input.placeholder == ""

    def test_edit_without_selection_is_noop(self) -> None:
        state = make_state()

        assert press(state, EventKind.EDIT) == state


class TestDeleteAndToggle:
    """Tests for delete and toggle-done in both list modes."""

    def test_delete_pending(self) -> None:
        state = make_state(pending=("a", "b", "c"))

        state = press(state, EventKind.MOVE_DOWN, EventKind.DELETE)

        assert [t.name for t in state.store.pending] == ["a", "c"]
        assert state.cursor == 1

    def test_delete_last_pending_zeroes_cursor(self) -> None:
        state = press(make_state(pending=("a",)), EventKind.DELETE)

        assert state.store.pending == ()
        assert state.cursor == 0

    def test_delete_with_no_selection_is_noop(self) -> None:
        state = make_state()

        assert press(state, EventKind.DELETE) == state

    def test_delete_in_done_list_removes_from_done(self) -> None:
        state = make_state(pending=("a", "b"), done=("x", "y"))

        state = press(state, EventKind.SWITCH_LIST, EventKind.MOVE_DOWN, EventKind.DELETE)

        assert [t.name for t in state.store.done] == ["x"]
        assert [t.name for t in state.store.pending] == ["a", "b"]
        assert state.cursor == 1

    def test_toggle_done_moves_to_done(self) -> None:
        state = make_state(pending=("a", "b"), done=("x",))

        state = press(state, EventKind.MOVE_DOWN, EventKind.TOGGLE_DONE)

        assert [t.name for t in state.store.pending] == ["a"]
        assert [t.name for t in state.store.done] == ["x", "b"]
        assert state.store.done[-1].is_done is True
        assert state.cursor == 1

    def test_toggle_in_done_list_moves_to_pending(self) -> None:
        state = make_state(pending=("a",), done=("x",))

        state = press(state, EventKind.SWITCH_LIST, EventKind.TOGGLE_DONE)

        assert state.mode is Mode.DONE_LIST
        assert state.store.done == ()
        assert [t.name for t in state.store.pending] == ["a", "x"]
        assert state.store.pending[-1].is_done is False
        assert state.cursor == 0

    def test_toggle_round_trip(self) -> None:
        state = make_state(pending=("a", "b", "c"))
        original = state.store.pending[1]

        state = press(state, EventKind.MOVE_DOWN, EventKind.TOGGLE_DONE)
        state = press(state, EventKind.SWITCH_LIST, EventKind.TOGGLE_DONE)

        assert state.store.pending[-1] == original
        assert state.store.done == ()

    def test_toggle_with_no_selection_is_noop(self) -> None:
        state = press(make_state(pending=("a",)), EventKind.SWITCH_LIST)

        assert press(state, EventKind.TOGGLE_DONE) == state


class TestModeSwitching:
    """Tests for switch-list, help and quitting."""

    def test_switch_list_resets_cursor(self) -> None:
        state = make_state(pending=("a", "b"), done=("x",))
        state = press(state, EventKind.MOVE_DOWN)

        state = press(state, EventKind.SWITCH_LIST)
        assert (state.mode, state.cursor) == (Mode.DONE_LIST, 1)

        state = press(state, EventKind.SWITCH_LIST)
        assert (state.mode, state.cursor) == (Mode.NORMAL, 1)

    def test_switch_to_empty_done_list(self) -> None:
        state = press(make_state(pending=("a",)), EventKind.SWITCH_LIST)

        assert state.cursor == 0

    def test_help_and_back(self) -> None:
        state = make_state(pending=("a",))

        state = press(state, EventKind.HELP)
        assert state.mode is Mode.HELP
        assert press(state, EventKind.MOVE_DOWN) == state

        state = press(state, EventKind.CANCEL)
        assert state.mode is Mode.NORMAL

    @pytest.mark.parametrize("mode_events", [
        (),
        (EventKind.SWITCH_LIST,),
    ])
    def test_quit_from_list_modes(self, mode_events: tuple) -> None:
        state = press(make_state(pending=("a",)), *mode_events)

        after, effect = handle(state, Event(EventKind.QUIT))

        assert effect is Effect.QUIT
        assert after == state

    @pytest.mark.parametrize("mode_events", [
        (),
        (EventKind.SWITCH_LIST,),
        (EventKind.ADD,),
        (EventKind.EDIT,),
        (EventKind.HELP,),
    ])
    def test_force_quit_from_any_mode(self, mode_events: tuple) -> None:
        state = press(make_state(pending=("a",)), *mode_events)

        after, effect = handle(state, Event(EventKind.FORCE_QUIT))

        assert effect is Effect.QUIT
        assert after == state

    def test_unlisted_events_are_ignored(self) -> None:
        state = press(make_state(pending=("a",)), EventKind.SWITCH_LIST)

        for kind in (EventKind.ADD, EventKind.EDIT, EventKind.HELP, EventKind.SUBMIT):
            after, effect = handle(state, Event(kind))
            assert after == state
            assert effect is Effect.NONE


class TestCursorInvariant:
    """Random event sequences never leave the cursor out of range."""

    EVENTS = [
        Event(kind)
        for kind in EventKind
        if kind not in (EventKind.QUIT, EventKind.FORCE_QUIT, EventKind.INSERT_TEXT)
    ] + [Event(EventKind.INSERT_TEXT, "z")] * 4

    @pytest.mark.parametrize("seed", range(25))
    def test_cursor_stays_valid(self, seed: int) -> None:
        rng = random.Random(seed)
        state = make_state(pending=("a", "b"), done=("x",))
        seen_ids = {t.id for t in state.store.all_tasks()}

        for _ in range(300):
            state, _ = handle(state, rng.choice(self.EVENTS), now=NOW)
            displayed = state.displayed()

            assert 0 <= state.cursor <= len(displayed)
            assert (state.cursor == 0) == (len(displayed) == 0)
            state.store.check()

            for task in state.store.all_tasks():
                if task.id not in seen_ids:
                    assert task.id > max(seen_ids)
                    seen_ids.add(task.id)


class TestScenarios:
    """End-to-end sessions through controller and storage."""

    def test_fresh_session(self, tmp_path: Path) -> None:
        tasks_file = tmp_path / ".todo-cli"
        store = storage.load(tasks_file)
        assert (store.pending, store.done, store.latest_task_id) == ((), (), 0)

        state = add(ControllerState.initial(store), "Buy milk")
        assert state.store.pending == (Task(1, "Buy milk", False, NOW),)
        assert state.cursor == 1

        state = press(state, EventKind.TOGGLE_DONE)
        assert state.store.pending == ()
        assert state.store.done == (Task(1, "Buy milk", True, NOW),)
        assert state.cursor == 0

        state = press(state, EventKind.SWITCH_LIST)
        assert (state.mode, state.cursor) == (Mode.DONE_LIST, 1)
        state = press(state, EventKind.SWITCH_LIST)
        assert (state.mode, state.cursor) == (Mode.NORMAL, 0)
        state = press(state, EventKind.SWITCH_LIST)
        assert (state.mode, state.cursor) == (Mode.DONE_LIST, 1)

        state, effect = handle(state, Event(EventKind.QUIT))
        assert effect is Effect.QUIT
        storage.save(state.store, tasks_file)

        records = json.loads(tasks_file.read_text())
        assert len(records) == 1
        assert records[0]["id"] == 1
        assert records[0]["name"] == "Buy milk"
        assert records[0]["is_done"] is True
