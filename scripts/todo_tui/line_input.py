"""Single-line text buffer used by the add and edit modes."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LineInput:
    """Immutable line-editing state: text, placeholder and caret position."""

    content: str = ""
    placeholder: str = ""
    position: int = 0

    @property
    def value(self) -> str:
        return self.content

    def set(self, text: str) -> LineInput:
        """Replace the content and put the caret at the end."""
        return replace(self, content=text, position=len(text))

    def clear(self) -> LineInput:
        return replace(self, content="", position=0)

    def insert(self, text: str) -> LineInput:
        # Line buffer: drop anything that would break the line
        text = text.replace("\r", "").replace("\n", "")
        if not text:
            return self
        head, tail = self.content[: self.position], self.content[self.position :]
        return replace(
            self, content=head + text + tail, position=self.position + len(text)
        )

    def backspace(self) -> LineInput:
        if self.position == 0:
            return self
        head, tail = self.content[: self.position - 1], self.content[self.position :]
        return replace(self, content=head + tail, position=self.position - 1)

    def delete(self) -> LineInput:
        if self.position >= len(self.content):
            return self
        head, tail = self.content[: self.position], self.content[self.position + 1 :]
        return replace(self, content=head + tail)

    def move_left(self) -> LineInput:
        return replace(self, position=max(self.position - 1, 0))

    def move_right(self) -> LineInput:
        return replace(self, position=min(self.position + 1, len(self.content)))

    def home(self) -> LineInput:
        return replace(self, position=0)

    def end(self) -> LineInput:
        return replace(self, position=len(self.content))
