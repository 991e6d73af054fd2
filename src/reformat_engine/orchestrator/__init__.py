"""Format orchestration: one external-formatter pass per call."""

from .events import AutoFormatter
from .orchestrator import (
    STATUS_BUSY,
    STATUS_DONE,
    FormatOrchestrator,
    Runner,
    fallback_position,
)
from .request import (
    CARET_FINGERPRINT,
    CARET_LINE_COLUMN,
    ERROR,
    FORMATTED,
    FORMATTER_FAILED,
    INELIGIBLE,
    LAUNCH_FAILED,
    UNCHANGED,
    FormatHooks,
    FormatOutcome,
    FormatRequest,
    ViewState,
)

__all__ = [
    "AutoFormatter",
    "FormatOrchestrator",
    "Runner",
    "STATUS_BUSY",
    "STATUS_DONE",
    "fallback_position",
    "CARET_FINGERPRINT",
    "CARET_LINE_COLUMN",
    "ERROR",
    "FORMATTED",
    "FORMATTER_FAILED",
    "INELIGIBLE",
    "LAUNCH_FAILED",
    "UNCHANGED",
    "FormatHooks",
    "FormatOutcome",
    "FormatRequest",
    "ViewState",
]
