"""External formatter process and transient-file plumbing."""

from .process import ExternalResult, FormatterLaunchError, run_formatter
from .transient import read_transient, transient_file

__all__ = [
    "ExternalResult",
    "FormatterLaunchError",
    "run_formatter",
    "read_transient",
    "transient_file",
]
