"""``EditorHost`` implementation backed by a Textual ``TextArea``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from reformat_engine.host import HostValidationError, LineColumn, Selection

if TYPE_CHECKING:  # pragma: no cover - typing only
    from textual.widgets import TextArea


class TextAreaHost:
    """Bridges the orchestrator to a ``TextArea`` widget.

    Offsets follow ``TextArea.text``, which joins lines with the document's
    detected newline, so they agree with ``Document.get_index_from_location``.
    """

    def __init__(
        self,
        area: "TextArea | Any",
        *,
        path: Optional[str] = None,
        workspace_path: str = "",
        encoding: str = "utf-8",
        on_save: Optional[Callable[["TextAreaHost"], None]] = None,
    ) -> None:
        self.area = area
        self._path = path
        self._workspace_path = workspace_path
        self._encoding = encoding
        self._on_save = on_save

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def read_only(self) -> bool:
        return bool(getattr(self.area, "read_only", False))

    @property
    def is_text(self) -> bool:
        return True

    @property
    def workspace_path(self) -> str:
        return self._workspace_path

    @property
    def length(self) -> int:
        return len(self.area.text)

    @property
    def line_count(self) -> int:
        return int(self.area.document.line_count)

    def text_range(self, start: int, end: int) -> str:
        start, end = sorted((start, end))
        self._check_offset(start)
        self._check_offset(end)
        return self.area.text[start:end]

    def selection(self) -> Selection:
        selection = self.area.selection
        return (self._index(selection.start), self._index(selection.end))

    def caret_line_column(self) -> LineColumn:
        row, column = self.area.cursor_location
        return (row, column)

    def line_length(self, line: int) -> int:
        if line < 0 or line >= self.line_count:
            raise HostValidationError("Line out of range", position=(line, 0))
        return len(self.area.document.get_line(line))

    def top_line(self) -> Optional[int]:
        return int(self.area.scroll_offset.y)

    def replace_range(self, start: int, end: int, text: str) -> None:
        start, end = sorted((start, end))
        self.area.replace(text, self._location(start), self._location(end))

    def move_caret(self, offset: int) -> None:
        self.area.move_cursor(self._location(offset))

    def move_caret_to(self, line: int, column: int) -> None:
        if line < 0 or line >= self.line_count:
            raise HostValidationError("Line out of range", position=(line, column))
        self.area.move_cursor((line, column))

    def show_line_at_top(self, line: int) -> None:
        self.area.scroll_to(y=line, animate=False)

    def save(self) -> None:
        if self._path:
            with open(self._path, "w", encoding=self._encoding, newline="") as handle:
                handle.write(self.area.text)
        if self._on_save is not None:
            self._on_save(self)

    def _index(self, location: Tuple[int, int]) -> int:
        return int(self.area.document.get_index_from_location(location))

    def _location(self, offset: int) -> Tuple[int, int]:
        self._check_offset(offset)
        row, column = self.area.document.get_location_from_index(offset)
        return (row, column)

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset > self.length:
            raise HostValidationError("Offset out of range", offset=offset)


__all__ = ["TextAreaHost"]
