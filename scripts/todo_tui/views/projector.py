"""Pure text projection of the controller state."""

from __future__ import annotations

from datetime import datetime

from todo_tui.controller import ControllerState, Mode
from todo_tui.line_input import LineInput

TIME_FORMAT = "%Y-%m-%d %H:%M"
CURSOR_MARK = ">"
CARET = "\u2588"

NO_TASKS = "You have no tasks. Press 'a' to add your task!"
NO_DONE_TASKS = "You have no done tasks."
INPUT_PROMPT = "Input the new task name"

LIST_TITLES = {
    Mode.NORMAL: "YOUR TASKS",
    Mode.DONE_LIST: "YOUR DONE TASKS",
}

USAGE_TEXT = """\
--Normal Mode--

j - move cursor one line down
k - move cursor one line up
a - add a new task (switch to add mode)
d - remove a task
e - edit the task name (switch to edit mode)
h - help (switch to help mode)
x, enter - mark as done
t - switch to done tasks list mode
q - save tasks and close this app

--Done Tasks List Mode--

j - move cursor one line down
k - move cursor one line up
d - remove a task
t - switch to normal mode
x, enter - mark as not done
q - save tasks and close this app

--Add Mode--

q, esc - switch to normal mode
enter - submit

--Edit Mode--

q, esc - switch to normal mode
enter - submit

--Help Mode--

q, esc - switch to normal mode

ctrl+c - save tasks and close this app (any mode)
"""


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def render_input(buffer: LineInput) -> str:
    """Show the buffer with the caret drawn at its position."""
    if not buffer.content:
        return f"> {CARET}{buffer.placeholder}"
    head, tail = buffer.content[: buffer.position], buffer.content[buffer.position :]
    return f"> {head}{CARET}{tail}"


def render_list(state: ControllerState) -> str:
    tasks = state.displayed()
    if not tasks:
        return NO_DONE_TASKS if state.mode is Mode.DONE_LIST else NO_TASKS

    lines = [LIST_TITLES[state.mode], ""]
    for number, task in enumerate(tasks, start=1):
        mark = CURSOR_MARK if number == state.cursor else " "
        lines.append(
            f"{mark} #{task.id}: {task.name} ({format_timestamp(task.created_at)})"
        )
    return "\n".join(lines)


def render(state: ControllerState) -> str:
    """Render the screen text for the current mode."""
    if state.mode in (Mode.NORMAL, Mode.DONE_LIST):
        return render_list(state)
    if state.mode is Mode.ADD_TASK:
        return "\n".join(["Add Task", "", INPUT_PROMPT, "", render_input(state.add_input)])
    if state.mode is Mode.EDIT_TASK:
        return "\n".join(["Edit Task", "", INPUT_PROMPT, "", render_input(state.edit_input)])
    return "USAGE\n\n" + USAGE_TEXT
