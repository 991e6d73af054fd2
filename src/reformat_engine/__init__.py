"""Run an external source formatter and keep the caret where it was."""

__all__ = [
    "adapters",
    "anchor",
    "config",
    "formatter",
    "host",
    "orchestrator",
    "runtime",
]

__version__ = "0.1.0"
