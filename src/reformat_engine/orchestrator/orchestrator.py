"""Runs one external-formatter pass over a host document."""

from __future__ import annotations

import os
from typing import Callable, Optional, Tuple

from reformat_engine.anchor import Matched, decode_caret, encode_caret
from reformat_engine.config import (
    OutputSource,
    Profile,
    build_command_line,
    language_for_path,
)
from reformat_engine.formatter import (
    ExternalResult,
    FormatterLaunchError,
    read_transient,
    run_formatter,
    transient_file,
)
from reformat_engine.host import EditorHost
from reformat_engine.runtime import telemetry

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

Runner = Callable[..., ExternalResult]

STATUS_BUSY = "Formatting document. Please wait..."
STATUS_DONE = "Document was successfully formatted."


class FormatOrchestrator:
    """Sequences snapshot, formatter run, splice, and caret restore.

    The orchestrator holds no per-document state between calls; every
    ``format_document`` call builds and drops its own ``FormatRequest``.
    """

    def __init__(
        self,
        profile: Optional[Profile] = None,
        *,
        hooks: Optional[FormatHooks] = None,
        runner: Runner = run_formatter,
        workspace_path: str = "",
        logger_name: str | None = "reformat_engine.orchestrator",
    ) -> None:
        self.profile = profile or Profile()
        self.hooks = hooks or FormatHooks()
        self.runner = runner
        self.workspace_path = workspace_path
        self._logger_name = logger_name

    # -- eligibility -------------------------------------------------
    def language_for(
        self, host: Optional[EditorHost], *, selection_only: bool = False
    ) -> Optional[str]:
        """Return the formatter language tag, or ``None`` if ineligible."""

        if host is None or host.read_only or not host.is_text:
            return None
        entry = language_for_path(host.path)
        if entry is None or not self.profile.language_filter.accepts(entry.filter):
            return None
        if selection_only:
            anchor, active = host.selection()
            if anchor == active:
                return None
        return entry.tag

    def can_format(
        self, host: Optional[EditorHost], *, selection_only: bool = False
    ) -> bool:
        return self.language_for(host, selection_only=selection_only) is not None

    # -- operation ---------------------------------------------------
    def format_document(
        self, host: EditorHost, *, selection_only: bool = False
    ) -> FormatOutcome:
        language = self.language_for(host, selection_only=selection_only)
        if language is None:
            return FormatOutcome(status=INELIGIBLE)

        with telemetry.span(
            "orchestrator::format",
            logger_name=self._logger_name,
            component="orchestrator",
            metadata={
                "path": host.path,
                "language": language,
                "selection_only": selection_only,
            },
        ) as handle:
            self.hooks.update_status(STATUS_BUSY)
            self.hooks.set_busy(True)
            try:
                outcome = self._format(host, language, selection_only)
            except FormatterLaunchError as exc:
                handle.fail(f"launch: {exc}")
                outcome = FormatOutcome(
                    status=LAUNCH_FAILED,
                    message=f"Could not launch {self.profile.program_name}.",
                )
            except Exception as exc:
                handle.fail(str(exc))
                outcome = FormatOutcome(
                    status=ERROR,
                    message=f"Could not format the active document: {exc}",
                )
            finally:
                self.hooks.set_busy(False)
            handle.note("done", status=outcome.status)

        self.hooks.update_status(outcome.message)
        return outcome

    def snapshot(
        self, host: EditorHost, language: str, *, selection_only: bool = False
    ) -> FormatRequest:
        anchor, active = host.selection()
        if selection_only:
            start, end = min(anchor, active), max(anchor, active)
        else:
            start, end = 0, host.length
        text = host.text_range(start, end)
        caret = min(max(active, start), end)

        line, column = host.caret_line_column()
        top_line = host.top_line()
        view = ViewState(
            top_line=line if top_line is None else top_line,
            caret_line=line,
            caret_column=column,
            caret_line_length=host.line_length(line),
        )
        return FormatRequest(
            start=start,
            end=end,
            selection_only=selection_only,
            language=language,
            text=text,
            fingerprint=encode_caret(text, caret - start),
            view=view,
            document_path=host.path,
        )

    def _format(
        self, host: EditorHost, language: str, selection_only: bool
    ) -> FormatOutcome:
        request = self.snapshot(host, language, selection_only=selection_only)
        result, formatted = self._invoke(request, host)
        if not result.exited_cleanly:
            detail = result.errors.strip().splitlines()
            message = (
                f"{self.profile.program_name} failed with exit code {result.exit_code}."
            )
            if detail:
                message = f"{message} {detail[0]}"
            return FormatOutcome(status=FORMATTER_FAILED, message=message)

        if formatted == request.text:
            return FormatOutcome(status=UNCHANGED, message=STATUS_DONE)

        host.replace_range(request.start, request.end, formatted)
        caret = self._restore_view(host, request)
        return FormatOutcome(status=FORMATTED, message=STATUS_DONE, caret=caret)

    def _invoke(
        self, request: FormatRequest, host: EditorHost
    ) -> Tuple[ExternalResult, str]:
        profile = self.profile
        suffix = os.path.splitext(request.document_path or "")[1] or ".tmp"
        with transient_file(
            request.text, suffix=suffix, encoding=profile.encoding
        ) as path:
            command_line = build_command_line(
                profile,
                source_path=path,
                document_path=request.document_path,
                language=request.language,
                workspace_path=self.workspace_path or host.workspace_path,
                selection_only=request.selection_only,
            )
            result = self.runner(
                profile.program,
                command_line,
                cwd=_working_dir(request.document_path),
                encoding=profile.encoding,
            )
            if not result.exited_cleanly:
                return result, request.text
            if profile.output_source is OutputSource.STDOUT:
                return result, result.output
            return result, read_transient(path, encoding=profile.encoding)

    # -- view restore --------------------------------------------------
    def _restore_view(
        self, host: EditorHost, request: FormatRequest
    ) -> Optional[str]:
        try:
            host.show_line_at_top(request.view.top_line)
            decoded = decode_caret(
                host.text_range(request.start, host.length), request.fingerprint
            )
            if isinstance(decoded, Matched):
                host.move_caret(request.start + decoded.offset)
                return CARET_FINGERPRINT

            telemetry.record_event(
                "anchor.decode_miss",
                data={"path": request.document_path, "start": request.start},
                logger_name=self._logger_name,
            )
            line, column = fallback_position(host, request.view)
            host.move_caret_to(line, column)
            return CARET_LINE_COLUMN
        except Exception as exc:
            telemetry.record_event(
                "orchestrator.restore_failed",
                level="warning",
                data={"path": request.document_path, "reason": str(exc)},
                logger_name=self._logger_name,
            )
            return None


def fallback_position(host: EditorHost, view: ViewState) -> Tuple[int, int]:
    """Old (line, column), nudged left when the caret's line got shorter."""

    line = max(0, min(view.caret_line, host.line_count - 1))
    new_length = host.line_length(line)
    column = view.caret_column
    delta = new_length - view.caret_line_length
    if delta < 0 and column > new_length:
        column += delta
    return line, max(0, min(column, new_length))


def _working_dir(document_path: Optional[str]) -> Optional[str]:
    if not document_path:
        return None
    directory = os.path.dirname(document_path)
    return directory if directory and os.path.isdir(directory) else None


__all__ = [
    "FormatOrchestrator",
    "Runner",
    "STATUS_BUSY",
    "STATUS_DONE",
    "fallback_position",
]
