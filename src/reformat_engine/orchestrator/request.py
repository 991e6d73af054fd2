"""Per-operation value types for the format orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from reformat_engine.anchor import Fingerprint

FORMATTED = "formatted"
UNCHANGED = "unchanged"
INELIGIBLE = "ineligible"
LAUNCH_FAILED = "launch_failed"
FORMATTER_FAILED = "formatter_failed"
ERROR = "error"

CARET_FINGERPRINT = "fingerprint"
CARET_LINE_COLUMN = "line_column"


@dataclass(frozen=True, slots=True)
class ViewState:
    """View and caret position recorded before formatting (0-based)."""

    top_line: int
    caret_line: int
    caret_column: int
    caret_line_length: int


@dataclass(frozen=True, slots=True)
class FormatRequest:
    """Snapshot of one formatting operation; discarded when it ends."""

    start: int
    end: int
    selection_only: bool
    language: str
    text: str
    fingerprint: Fingerprint
    view: ViewState
    document_path: Optional[str] = None


@dataclass(slots=True)
class FormatOutcome:
    """Result returned from ``FormatOrchestrator.format_document``."""

    status: str
    message: str = ""
    caret: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status in (FORMATTED, UNCHANGED)

    @property
    def changed(self) -> bool:
        return self.status == FORMATTED


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class FormatHooks:
    """Callbacks the orchestrator uses for user-visible side effects."""

    update_status: Callable[[str], None] = _noop
    set_busy: Callable[[bool], None] = _noop


__all__ = [
    "FORMATTED",
    "UNCHANGED",
    "INELIGIBLE",
    "LAUNCH_FAILED",
    "FORMATTER_FAILED",
    "ERROR",
    "CARET_FINGERPRINT",
    "CARET_LINE_COLUMN",
    "ViewState",
    "FormatRequest",
    "FormatOutcome",
    "FormatHooks",
]
