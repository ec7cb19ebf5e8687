"""Main screen: shows the projected text and forwards keys to the app."""

from textual import events
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Static

from todo_tui.controller import ControllerState, Mode
from todo_tui.views.projector import render

MODE_DISPLAY = {
    Mode.NORMAL: "Tasks",
    Mode.DONE_LIST: "Done Tasks",
    Mode.ADD_TASK: "Add",
    Mode.EDIT_TASK: "Edit",
    Mode.HELP: "Help",
}


class TaskView(Static):
    """Text body of the screen."""

    DEFAULT_CSS = """
    TaskView {
        height: 1fr;
        padding: 1 2;
        border: solid $primary;
    }
    """


class TodoScreen(Screen):
    """The single screen of the app; every key goes to the controller."""

    DEFAULT_CSS = """
    TodoScreen {
        layout: vertical;
    }
    """

    def __init__(self, state: ControllerState, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state = state

    def compose(self) -> ComposeResult:
        yield Header()
        yield TaskView(render(self._state), id="body", markup=False)

    def show(self, state: ControllerState) -> None:
        """Re-render the body for a new state."""
        self._state = state
        self.sub_title = MODE_DISPLAY[state.mode]
        self.query_one("#body", TaskView).update(render(state))

    def on_mount(self) -> None:
        self.sub_title = MODE_DISPLAY[self._state.mode]

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.handle_key(event.key, event.character)
