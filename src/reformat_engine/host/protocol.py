"""Boundary types describing what the engine needs from a host editor."""

from __future__ import annotations

from typing import Optional, Protocol, Tuple

Selection = Tuple[int, int]  # (anchor, active) absolute offsets
LineColumn = Tuple[int, int]  # (line, column), both 0-based


class EditorHost(Protocol):
    """Document, selection, and view surface an adapter must expose.

    Offsets index into the full document text; lines and columns are 0-based.
    """

    @property
    def path(self) -> Optional[str]:
        ...

    @property
    def read_only(self) -> bool:
        ...

    @property
    def is_text(self) -> bool:
        ...

    @property
    def length(self) -> int:
        ...

    @property
    def line_count(self) -> int:
        ...

    @property
    def workspace_path(self) -> str:
        ...

    def text_range(self, start: int, end: int) -> str:
        ...

    def selection(self) -> Selection:
        ...

    def caret_line_column(self) -> LineColumn:
        ...

    def line_length(self, line: int) -> int:
        """Length of ``line`` without its line terminator."""
        ...

    def top_line(self) -> Optional[int]:
        """First visible line, or ``None`` when no view is showing."""
        ...

    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace ``[start, end)`` with ``text`` as one atomic edit."""
        ...

    def move_caret(self, offset: int) -> None:
        ...

    def move_caret_to(self, line: int, column: int) -> None:
        ...

    def show_line_at_top(self, line: int) -> None:
        ...

    def save(self) -> None:
        ...


class HostValidationError(RuntimeError):
    """Raised when a host is given an out-of-range offset or position."""

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        position: LineColumn | None = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.position = position


__all__ = ["EditorHost", "HostValidationError", "LineColumn", "Selection"]
