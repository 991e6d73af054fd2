"""Executable Textual app: edit a file and run the formatter on it."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use reformat_engine.adapters.textual.app"
    ) from exc

from reformat_engine.config import Profile
from reformat_engine.host import DOCUMENT_OPENED, DOCUMENT_SAVED, EditorBus
from reformat_engine.orchestrator import AutoFormatter, FormatHooks, FormatOrchestrator
from reformat_engine.runtime import env

from .controller import TextAreaHost


class ReformatApp(App[None]):
    """Single-file editor with format-document and format-selection commands."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+l", "format_document", "Format"),
        ("ctrl+k", "format_selection", "Format selection"),
        ("ctrl+s", "save", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        path: str,
        *,
        profile: Optional[Profile] = None,
        workspace_path: str = "",
    ) -> None:
        super().__init__()
        self.path = os.path.abspath(path)
        self.profile = profile or Profile.from_env()
        self.bus = EditorBus()
        self.orchestrator = FormatOrchestrator(
            self.profile,
            hooks=FormatHooks(update_status=self._update_status),
            workspace_path=workspace_path,
        )
        self.auto_formatter = AutoFormatter(self.orchestrator, bus=self.bus)
        self.host: TextAreaHost | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TextArea(
            "", id="editor", soft_wrap=False, show_line_numbers=True
        )
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", TextArea)
        if os.path.exists(self.path):
            with open(self.path, "r", encoding=self.profile.encoding, newline="") as handle:
                area.load_text(handle.read())
        self.host = TextAreaHost(
            area,
            path=self.path,
            workspace_path=self.orchestrator.workspace_path,
            encoding=self.profile.encoding,
            on_save=lambda host: self.bus.emit(DOCUMENT_SAVED, host),
        )
        self.bus.emit(DOCUMENT_OPENED, self.host)
        area.focus()
        self.refresh_bindings()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action == "format_document":
            return self.orchestrator.can_format(self.host)
        if action == "format_selection":
            return self.orchestrator.can_format(self.host, selection_only=True)
        return True

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        del event
        self.refresh_bindings()

    def action_format_document(self) -> None:
        if self.host is not None:
            self.orchestrator.format_document(self.host)

    def action_format_selection(self) -> None:
        if self.host is not None:
            self.orchestrator.format_document(self.host, selection_only=True)

    def action_save(self) -> None:
        if self.host is not None:
            self.host.save()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file with formatter support.")
    parser.add_argument("path", help="File to open")
    parser.add_argument(
        "--workspace",
        default=env("WORKSPACE", "") or "",
        help="Value substituted for %%SOLUTION%% in the command line",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = ReformatApp(args.path, workspace_path=args.workspace)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
