"""Minimal event bus carrying host document events."""

from __future__ import annotations

from typing import Callable, Dict

DOCUMENT_OPENED = "document.opened"
DOCUMENT_SAVED = "document.saved"


class EditorBus:
    """Routes named host events (payload is usually an ``EditorHost``)."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = ["DOCUMENT_OPENED", "DOCUMENT_SAVED", "EditorBus"]
