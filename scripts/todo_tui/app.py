"""
Todo TUI Application.

Runs the controller inside a Textual event loop: each key press becomes
an Event, the controller computes the next state, and the screen is
redrawn. The store is saved once, on the transition that quits.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from todo_tui.controller import (
    ControllerState,
    Effect,
    Event,
    EventKind,
    handle,
)
from todo_tui.keymap import translate
from todo_tui.models import TaskRepository, TaskStore
from todo_tui.storage import FileTaskRepository, StorageError
from todo_tui.views.screen import TodoScreen

logger = logging.getLogger(__name__)


class TodoApp(App[int]):
    """Main todo application."""

    TITLE = "todo"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    # Interrupt saves like any other quit path
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("ctrl+q", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        tasks_file: Path | None = None,
        repository: TaskRepository | None = None,
        store: TaskStore | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._repository = repository or FileTaskRepository(tasks_file)
        if store is None:
            store = self._repository.load()
        self._state = ControllerState.initial(store)
        self._finished = False
        self.error: StorageError | None = None

    @property
    def state(self) -> ControllerState:
        return self._state

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(TodoScreen(self._state))

    def handle_key(self, key: str, character: str | None = None) -> None:
        """Translate a key for the current mode and dispatch it."""
        event = translate(self._state.mode, key, character)
        if event is None:
            return
        self.dispatch(event)

    def dispatch(self, event: Event) -> None:
        """Run one controller transition and act on its effect."""
        if self._finished:
            return
        previous = self._state.mode
        self._state, effect = handle(self._state, event)
        if self._state.mode is not previous:
            logger.debug("Mode %s -> %s", previous.value, self._state.mode.value)

        if effect is Effect.QUIT:
            self._save_and_exit()
            return

        if isinstance(self.screen, TodoScreen):
            self.screen.show(self._state)

    def _save_and_exit(self) -> None:
        self._finished = True
        try:
            self._repository.save(self._state.store)
        except StorageError as exc:
            logger.error("Saving tasks failed: %s", exc)
            self.error = exc
            self.exit(1, return_code=1)
            return
        self.exit(0)

    async def action_quit(self) -> None:
        """Save the tasks, then quit."""
        self.dispatch(Event(EventKind.FORCE_QUIT))


def run(tasks_file: Path | None = None) -> int:
    """Run the TUI application. Returns the process exit status."""
    app = TodoApp(tasks_file=tasks_file)
    app.run()
    if app.error is not None:
        raise app.error
    return 0
