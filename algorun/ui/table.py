"""Scrollable table with a selectable row, driven by key messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .messages import KeyMsg, WindowSizeMsg
from .style import Style, truncate, visible_width

_HEADER_HEIGHT = 2
_ELLIPSIS = "…"

_UP = {"up", "k"}
_DOWN = {"down", "j"}
_PAGE_UP = {"pgup", "b"}
_PAGE_DOWN = {"pgdown", "f", " "}
_HALF_UP = {"ctrl+u", "u"}
_HALF_DOWN = {"ctrl+d", "d"}
_TOP = {"home", "g"}
_BOTTOM = {"end", "G"}


@dataclass
class Column:
    """A table column: its heading and its width in cells."""

    title: str
    width: int


def _fit(value: str, width: int) -> str:
    width = max(0, width)
    if visible_width(value) > width:
        value = truncate(value, width - 1) + _ELLIPSIS if width > 0 else ""
    return value + " " * (width - visible_width(value))


@dataclass
class Table:
    """Rows of text under a header; the cursor marks the selected row."""

    columns: List[Column] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    focused: bool = False
    width: int = 0
    height: int = 20
    cursor: int = 0
    selected_style: Style = field(default_factory=lambda: Style(foreground="229", background="4"))
    header_border_color: str = "240"
    _offset: int = field(default=0, init=False, repr=False)

    def set_rows(self, rows: List[List[str]]) -> None:
        """Replace the rows, keeping the cursor inside them."""
        self.rows = list(rows)
        if self.cursor > len(self.rows) - 1:
            self.cursor = max(0, len(self.rows) - 1)

    def set_columns(self, columns: List[Column]) -> None:
        self.columns = list(columns)

    def selected_row(self) -> Optional[List[str]]:
        """The row under the cursor, or None when there are no rows."""
        if not 0 <= self.cursor < len(self.rows):
            return None
        return self.rows[self.cursor]

    def _body_height(self) -> int:
        return max(0, self.height - _HEADER_HEIGHT)

    def _move(self, delta: int) -> None:
        self.cursor = max(0, min(self.cursor + delta, len(self.rows) - 1))

    def handle_message(self, msg: Any) -> None:
        """Move the cursor for navigation keys while focused."""
        if isinstance(msg, WindowSizeMsg) or not isinstance(msg, KeyMsg) or not self.focused:
            return
        key = str(msg)
        page = self._body_height()
        if key in _UP:
            self._move(-1)
        elif key in _DOWN:
            self._move(1)
        elif key in _PAGE_UP:
            self._move(-page)
        elif key in _PAGE_DOWN:
            self._move(page)
        elif key in _HALF_UP:
            self._move(-(page // 2))
        elif key in _HALF_DOWN:
            self._move(page // 2)
        elif key in _TOP:
            self.cursor = 0
        elif key in _BOTTOM:
            self.cursor = max(0, len(self.rows) - 1)

    def _visible_indices(self) -> range:
        body = self._body_height()
        if body == 0:
            return range(0)
        if self.cursor < self._offset:
            self._offset = self.cursor
        elif self.cursor >= self._offset + body:
            self._offset = self.cursor - body + 1
        self._offset = max(0, min(self._offset, max(0, len(self.rows) - body)))
        return range(self._offset, min(len(self.rows), self._offset + body))

    def _render_row(self, index: int) -> str:
        row = self.rows[index]
        text = "".join(" " + _fit(value, column.width) + " " for value, column in zip(row, self.columns))
        if index == self.cursor:
            return self.selected_style.render(text)
        return text

    def view(self) -> str:
        header = "".join(" " + _fit(column.title, column.width) + " " for column in self.columns)
        rule = Style(foreground=self.header_border_color).render("─" * visible_width(header)) if header else ""
        body = [self._render_row(index) for index in self._visible_indices()]
        body += [""] * (self._body_height() - len(body))
        lines = [header, rule] + body
        if self.width > 0:
            lines = [truncate(line, self.width) for line in lines]
        return "\n".join(lines)