"""Host editor boundary and an in-memory host implementation."""

from .buffer import (
    TextBuffer,
    UndoEntry,
    offset_from_position,
    position_from_offset,
)
from .events import DOCUMENT_OPENED, DOCUMENT_SAVED, EditorBus
from .protocol import EditorHost, HostValidationError, LineColumn, Selection

__all__ = [
    "EditorHost",
    "HostValidationError",
    "LineColumn",
    "Selection",
    "TextBuffer",
    "UndoEntry",
    "offset_from_position",
    "position_from_offset",
    "DOCUMENT_OPENED",
    "DOCUMENT_SAVED",
    "EditorBus",
]
