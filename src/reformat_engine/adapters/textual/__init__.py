"""Textual integration: a ``TextArea`` host and a demo editor app."""

from .controller import TextAreaHost

__all__ = ["TextAreaHost"]
