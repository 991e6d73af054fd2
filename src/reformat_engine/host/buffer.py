"""In-memory ``EditorHost`` used by the CLI and tests."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, List, Optional

from reformat_engine.runtime import telemetry

from .protocol import HostValidationError, LineColumn, Selection


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Document text and selection as they were before one replacement."""

    text: str
    selection: Selection


class TextBuffer:
    """Plain string document with a selection, a view, and undo history.

    ``edit_count`` and ``view_calls`` count mutating document and view calls
    so callers can check that a no-op format touched nothing.
    """

    def __init__(
        self,
        text: str = "",
        *,
        path: Optional[str] = None,
        read_only: bool = False,
        is_text: bool = True,
        workspace_path: str = "",
        caret: int = 0,
        anchor: Optional[int] = None,
        top_line: Optional[int] = 0,
        on_save: Optional[Callable[["TextBuffer"], None]] = None,
    ) -> None:
        self._text = text
        self._path = path
        self._read_only = read_only
        self._is_text = is_text
        self._workspace_path = workspace_path
        self._top_line = top_line
        self._on_save = on_save
        self.history: List[UndoEntry] = []
        self.edit_count = 0
        self.view_calls = 0
        self.save_count = 0
        self.saved_text: Optional[str] = None
        self._active = self._check_offset(caret)
        self._anchor = self._check_offset(anchor if anchor is not None else caret)

    @classmethod
    def from_file(cls, path: str, *, encoding: str = "utf-8", **kwargs) -> "TextBuffer":
        with open(path, "r", encoding=encoding, newline="") as handle:
            text = handle.read()
        return cls(text, path=os.path.abspath(path), **kwargs)

    # -- document -----------------------------------------------------
    @property
    def text(self) -> str:
        return self._text

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def is_text(self) -> bool:
        return self._is_text

    @property
    def workspace_path(self) -> str:
        return self._workspace_path

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def line_count(self) -> int:
        return len(_split_lines(self._text))

    def text_range(self, start: int, end: int) -> str:
        start, end = sorted((self._check_offset(start), self._check_offset(end)))
        return self._text[start:end]

    def line_length(self, line: int) -> int:
        lines = _split_lines(self._text)
        if line < 0 or line >= len(lines):
            raise HostValidationError("Line out of range", position=(line, 0))
        return len(lines[line].rstrip("\r"))

    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace ``[start, end)`` as one undoable edit; the caret ends after it."""

        start, end = sorted((self._check_offset(start), self._check_offset(end)))
        with telemetry.span(
            "buffer::replace_range",
            component="buffer",
            metadata={"path": self._path or "<memory>"},
        ):
            self.history.append(
                UndoEntry(text=self._text, selection=(self._anchor, self._active))
            )
            self._text = self._text[:start] + text + self._text[end:]
            self._anchor = self._active = start + len(text)
            self.edit_count += 1

    def undo_last(self) -> bool:
        if not self.history:
            return False
        entry = self.history.pop()
        self._text = entry.text
        self._anchor, self._active = entry.selection
        return True

    def save(self) -> None:
        self.saved_text = self._text
        self.save_count += 1
        if self._on_save is not None:
            self._on_save(self)

    # -- selection ----------------------------------------------------
    def selection(self) -> Selection:
        return (self._anchor, self._active)

    def select(self, anchor: int, active: int) -> None:
        self._anchor = self._check_offset(anchor)
        self._active = self._check_offset(active)

    @property
    def caret(self) -> int:
        return self._active

    def caret_line_column(self) -> LineColumn:
        return position_from_offset(self._text, self._active)

    def move_caret(self, offset: int) -> None:
        self._anchor = self._active = self._check_offset(offset)
        self.view_calls += 1

    def move_caret_to(self, line: int, column: int) -> None:
        self.move_caret(offset_from_position(self._text, (line, column)))

    # -- view ---------------------------------------------------------
    def top_line(self) -> Optional[int]:
        return self._top_line

    def show_line_at_top(self, line: int) -> None:
        self._top_line = max(0, min(line, self.line_count - 1))
        self.view_calls += 1

    def _check_offset(self, offset: int) -> int:
        if offset < 0 or offset > len(self._text):
            raise HostValidationError("Offset out of range", offset=offset)
        return offset


def _split_lines(text: str) -> List[str]:
    return text.split("\n")


def offset_from_position(text: str, position: LineColumn) -> int:
    lines = _split_lines(text)
    row, col = position
    if row < 0 or row >= len(lines):
        raise HostValidationError("Line out of range", position=position)
    if col < 0 or col > len(lines[row].rstrip("\r")):
        raise HostValidationError("Column out of range", position=position)
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + col


def position_from_offset(text: str, offset: int) -> LineColumn:
    if offset < 0 or offset > len(text):
        raise HostValidationError("Offset out of range", offset=offset)
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


__all__ = [
    "TextBuffer",
    "UndoEntry",
    "offset_from_position",
    "position_from_offset",
]
