"""Format-on-open / format-on-save wiring."""

from __future__ import annotations

from typing import Optional, cast

from reformat_engine.host import DOCUMENT_OPENED, DOCUMENT_SAVED, EditorBus, EditorHost

from .orchestrator import FormatOrchestrator
from .request import FormatOutcome


class AutoFormatter:
    """Formats documents in response to host open/save events.

    A format triggered by a save re-saves the document; the save event that
    re-save raises is ignored so formatting does not recurse.
    """

    def __init__(
        self, orchestrator: FormatOrchestrator, *, bus: Optional[EditorBus] = None
    ) -> None:
        self.orchestrator = orchestrator
        self._ignore_next_save = False
        if bus is not None:
            self.attach(bus)

    def attach(self, bus: EditorBus) -> None:
        bus.subscribe(DOCUMENT_OPENED, self._on_opened)
        bus.subscribe(DOCUMENT_SAVED, self._on_saved)

    def detach(self, bus: EditorBus) -> None:
        bus.unsubscribe(DOCUMENT_OPENED, self._on_opened)
        bus.unsubscribe(DOCUMENT_SAVED, self._on_saved)

    def document_opened(self, host: EditorHost) -> Optional[FormatOutcome]:
        if not self.orchestrator.profile.format_on_open:
            return None
        return self.orchestrator.format_document(host)

    def document_saved(self, host: EditorHost) -> Optional[FormatOutcome]:
        if self._ignore_next_save or not self.orchestrator.profile.format_on_save:
            return None
        outcome = self.orchestrator.format_document(host)
        if outcome.changed:
            self._ignore_next_save = True
            try:
                host.save()
            finally:
                self._ignore_next_save = False
        return outcome

    def _on_opened(self, payload: object) -> None:
        self.document_opened(cast(EditorHost, payload))

    def _on_saved(self, payload: object) -> None:
        self.document_saved(cast(EditorHost, payload))


__all__ = ["AutoFormatter"]
