"""Command-line entry point: format one file and report the restored caret."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO, Tuple

from reformat_engine.config import LanguageFilter, OutputSource, Profile
from reformat_engine.host import HostValidationError, TextBuffer
from reformat_engine.orchestrator import INELIGIBLE, FormatHooks, FormatOrchestrator
from reformat_engine.runtime import env, telemetry

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INELIGIBLE = 2


def _selection(value: str) -> Tuple[int, int]:
    try:
        anchor, active = (int(part) for part in value.split(":", 1))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected START:END offsets, got '{value}'"
        ) from exc
    return anchor, active


def _language_filter(value: str) -> LanguageFilter:
    try:
        return LanguageFilter.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reformat-engine",
        description="Run an external formatter over a file and restore the caret.",
    )
    parser.add_argument("path", help="Source file to format")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--caret",
        type=int,
        default=0,
        help="Caret offset before formatting (default: 0)",
    )
    target.add_argument(
        "--selection",
        type=_selection,
        default=None,
        help="Format only ANCHOR:ACTIVE; the caret sits at ACTIVE",
    )
    parser.add_argument("--program", default=None, help="Formatter executable")
    parser.add_argument(
        "--command-line",
        default=None,
        help="Argument template with %%CFGFILE%%, %%FILE%%, %%LANGUAGE%%, ...",
    )
    parser.add_argument(
        "--config", dest="config_file", default=None, help="Formatter config file"
    )
    parser.add_argument(
        "--language-filter",
        type=_language_filter,
        default=None,
        help="Only format files of this language (ALL, CPP, CS, D, JAVA)",
    )
    parser.add_argument(
        "--stdout-output",
        action="store_true",
        help="Read formatted text from the formatter's stdout instead of the file",
    )
    parser.add_argument(
        "--no-fragment",
        action="store_true",
        help="Do not append --frag when formatting a selection",
    )
    parser.add_argument(
        "--workspace",
        default=env("WORKSPACE", "") or "",
        help="Value substituted for %%SOLUTION%%",
    )
    parser.add_argument(
        "--write",
        action="store_true",
        help="Write the result back to PATH instead of printing it",
    )
    parser.add_argument(
        "--log-preset",
        default=env("LOG_PRESET", "quiet"),
        help="Telemetry preset: development, quiet, production (default: quiet)",
    )
    return parser.parse_args(argv)


def _profile(args: argparse.Namespace) -> Profile:
    return Profile.from_env().with_overrides(
        program=args.program,
        command_line=args.command_line,
        config_file=args.config_file,
        language_filter=args.language_filter,
        output_source=OutputSource.STDOUT if args.stdout_output else None,
        fragment_formatting=False if args.no_fragment else None,
    )


def run(
    argv: Optional[Sequence[str]] = None,
    *,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    profile = _profile(args)

    if args.selection is not None:
        anchor, active = args.selection
    else:
        anchor = active = args.caret
    try:
        buffer = TextBuffer.from_file(
            args.path,
            encoding=profile.encoding,
            caret=active,
            anchor=anchor,
            workspace_path=args.workspace,
            top_line=None,
        )
    except (OSError, HostValidationError) as exc:
        print(f"cannot load {args.path}: {exc}", file=stderr)
        return EXIT_FAILED

    def report(text: str) -> None:
        if text:
            print(text, file=stderr)

    orchestrator = FormatOrchestrator(
        profile,
        hooks=FormatHooks(update_status=report),
        workspace_path=args.workspace,
    )
    outcome = orchestrator.format_document(
        buffer, selection_only=args.selection is not None
    )

    if outcome.status == INELIGIBLE:
        print(f"not eligible for formatting: {args.path}", file=stderr)
        return EXIT_INELIGIBLE
    if not outcome.succeeded:
        return EXIT_FAILED

    line, column = buffer.caret_line_column()
    print(
        f"caret offset={buffer.caret} line={line} column={column}"
        f" restored_by={outcome.caret or 'none'}",
        file=stderr,
    )
    if args.write:
        if outcome.changed:
            with open(args.path, "w", encoding=profile.encoding, newline="") as handle:
                handle.write(buffer.text)
    else:
        stdout.write(buffer.text)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(run(argv))


if __name__ == "__main__":  # pragma: no cover - manual entry
    main()
