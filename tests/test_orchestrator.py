import os
import sys
from pathlib import Path
from typing import List, Optional

import pytest
from conftest import FakeFormatter, collapse_spaces

from reformat_engine.config import LanguageFilter, OutputSource, Profile
from reformat_engine.formatter import ExternalResult, FormatterLaunchError, transient
from reformat_engine.host import TextBuffer
from reformat_engine.orchestrator import (
    CARET_FINGERPRINT,
    CARET_LINE_COLUMN,
    ERROR,
    FORMATTED,
    FORMATTER_FAILED,
    INELIGIBLE,
    LAUNCH_FAILED,
    STATUS_BUSY,
    STATUS_DONE,
    UNCHANGED,
    FormatHooks,
    FormatOrchestrator,
    ViewState,
    fallback_position,
)

FILE_TEMPLATE = '"%FILE%"'


def make_profile(**overrides) -> Profile:
    return Profile(command_line=FILE_TEMPLATE).with_overrides(**overrides)


def make_orchestrator(
    runner, statuses: Optional[List[str]] = None, **profile_overrides
) -> FormatOrchestrator:
    hooks = FormatHooks(
        update_status=(statuses.append if statuses is not None else lambda _: None)
    )
    return FormatOrchestrator(
        make_profile(**profile_overrides), hooks=hooks, runner=runner
    )


def make_buffer(text: str, *, path: str = "/work/main.cpp", **kwargs) -> TextBuffer:
    return TextBuffer(text, path=path, **kwargs)


def test_format_document_restores_caret_from_fingerprint(temp_dir: Path) -> None:
    statuses: List[str] = []
    runner = FakeFormatter()
    buffer = make_buffer("int  x;\n  y();", caret=len("int  x;\n  "))

    outcome = make_orchestrator(runner, statuses).format_document(buffer)

    assert outcome.status == FORMATTED
    assert outcome.caret == CARET_FINGERPRINT
    assert buffer.text == "int x;\ny();"
    assert buffer.caret == 7
    assert statuses == [STATUS_BUSY, STATUS_DONE]
    assert list(temp_dir.iterdir()) == []


def test_transient_file_uses_document_extension(temp_dir: Path) -> None:
    runner = FakeFormatter()
    buffer = make_buffer("class A {}", path="/work/A.java")

    make_orchestrator(runner).format_document(buffer)

    assert runner.calls[0]["path"].endswith(".java")
    assert runner.calls[0]["program"] == "uncrustify"


def test_identical_output_touches_nothing(temp_dir: Path) -> None:
    runner = FakeFormatter(lambda text: text)
    buffer = make_buffer("int x;\nint y;", caret=6, anchor=0)

    outcome = make_orchestrator(runner).format_document(buffer, selection_only=True)

    assert outcome.status == UNCHANGED
    assert outcome.succeeded and not outcome.changed
    assert buffer.edit_count == 0
    assert buffer.view_calls == 0
    assert buffer.selection() == (0, 6)


def test_launch_failure_leaves_document_and_removes_temp(temp_dir: Path) -> None:
    statuses: List[str] = []
    buffer = make_buffer("int  x;")
    orchestrator = FormatOrchestrator(
        Profile(program="/nonexistent/bin/formatter-binary"),
        hooks=FormatHooks(update_status=statuses.append),
    )

    outcome = orchestrator.format_document(buffer)

    assert outcome.status == LAUNCH_FAILED
    assert outcome.message == "Could not launch formatter-binary."
    assert statuses[-1] == outcome.message
    assert buffer.text == "int  x;"
    assert buffer.edit_count == 0
    assert list(temp_dir.iterdir()) == []


def test_runner_launch_error_is_reported(temp_dir: Path) -> None:
    runner = FakeFormatter(error=FormatterLaunchError("nope", program="fmt"))
    buffer = make_buffer("a  b;")

    outcome = make_orchestrator(runner, program="fmt").format_document(buffer)

    assert outcome.status == LAUNCH_FAILED
    assert outcome.message == "Could not launch fmt."
    assert buffer.edit_count == 0


def test_unexpected_exception_becomes_error_status(temp_dir: Path) -> None:
    runner = FakeFormatter(error=RuntimeError("boom"))
    buffer = make_buffer("a  b;")

    outcome = make_orchestrator(runner).format_document(buffer)

    assert outcome.status == ERROR
    assert outcome.message == "Could not format the active document: boom"
    assert buffer.text == "a  b;"
    assert list(temp_dir.iterdir()) == []


def test_nonzero_exit_does_not_splice(temp_dir: Path) -> None:
    runner = FakeFormatter(
        result=ExternalResult(
            exited_cleanly=False, exit_code=3, errors="bad config\nmore"
        )
    )
    buffer = make_buffer("a  b;")

    outcome = make_orchestrator(runner).format_document(buffer)

    assert outcome.status == FORMATTER_FAILED
    assert outcome.message == "uncrustify failed with exit code 3. bad config"
    assert not outcome.succeeded
    assert buffer.edit_count == 0


def test_ineligible_targets_are_silent_noops(temp_dir: Path) -> None:
    statuses: List[str] = []
    runner = FakeFormatter()
    orchestrator = make_orchestrator(runner, statuses)
    java_only = make_orchestrator(runner, statuses, language_filter=LanguageFilter.JAVA)

    cases = [
        (orchestrator, make_buffer("a  b;", read_only=True), False),
        (orchestrator, make_buffer("a  b;", is_text=False), False),
        (orchestrator, make_buffer("a  b", path="/work/script.py"), False),
        (orchestrator, make_buffer("a  b;", path=None), False),
        (java_only, make_buffer("a  b;"), False),
        (orchestrator, make_buffer("a  b;", caret=2), True),
    ]
    for target, buffer, selection_only in cases:
        outcome = target.format_document(buffer, selection_only=selection_only)
        assert outcome.status == INELIGIBLE
        assert outcome.message == ""
        assert buffer.text == "a  b;" or buffer.text == "a  b"

    assert runner.calls == []
    assert statuses == []


def test_can_format_respects_language_filter() -> None:
    runner = FakeFormatter()
    java_only = make_orchestrator(runner, language_filter=LanguageFilter.JAVA)

    assert java_only.can_format(make_buffer("", path="/work/A.java"))
    assert not java_only.can_format(make_buffer("", path="/work/a.cpp"))
    assert not java_only.can_format(None)
    assert make_orchestrator(runner).can_format(make_buffer("", path="/w/a.CS"))


def test_language_tag_reaches_command_line(temp_dir: Path) -> None:
    runner = FakeFormatter(lambda text: text)
    orchestrator = make_orchestrator(runner, command_line='-l %LANGUAGE% "%FILE%"')

    orchestrator.format_document(make_buffer("class A {}", path="/w/A.cs"))

    assert runner.calls[0]["args"][:2] == ["-l", "CSharp"]


def test_selection_format_splices_only_selection(temp_dir: Path) -> None:
    runner = FakeFormatter()
    buffer = make_buffer("keep  this;\nx  =  1;\n", anchor=12, caret=20)

    outcome = make_orchestrator(runner).format_document(buffer, selection_only=True)

    assert outcome.status == FORMATTED
    assert buffer.text == "keep  this;\nx = 1;\n"
    assert buffer.caret == 18
    assert runner.calls[0]["args"][-1] == "--frag"


def test_selection_without_fragment_flag(temp_dir: Path) -> None:
    runner = FakeFormatter()
    buffer = make_buffer("keep  this;\nx  =  1;\n", anchor=12, caret=20)

    make_orchestrator(runner, fragment_formatting=False).format_document(
        buffer, selection_only=True
    )

    assert "--frag" not in runner.calls[0]["args"]


def test_reversed_selection_keeps_caret_at_range_start(temp_dir: Path) -> None:
    runner = FakeFormatter()
    buffer = make_buffer("keep  this;\nx  =  1;\n", anchor=20, caret=12)

    make_orchestrator(runner).format_document(buffer, selection_only=True)

    assert buffer.text == "keep  this;\nx = 1;\n"
    assert buffer.caret == 12


def test_decode_miss_falls_back_to_line_and_column(temp_dir: Path) -> None:
    runner = FakeFormatter(
        lambda text: collapse_spaces(text.replace("alpha", "ALPHA"))
    )
    buffer = make_buffer("alpha  beta\ngamma", caret=9)

    outcome = make_orchestrator(runner).format_document(buffer)

    assert buffer.text == "ALPHA beta\ngamma"
    assert outcome.caret == CARET_LINE_COLUMN
    assert buffer.caret_line_column() == (0, 9)


def test_fallback_shifts_column_on_shortened_line(temp_dir: Path) -> None:
    runner = FakeFormatter(
        lambda text: collapse_spaces(text.replace("value", "VALUE"))
    )
    buffer = make_buffer("value   =   1;\nnext", caret=14)

    outcome = make_orchestrator(runner).format_document(buffer)

    assert buffer.text == "VALUE = 1;\nnext"
    assert outcome.caret == CARET_LINE_COLUMN
    assert buffer.caret_line_column() == (0, 10)


def test_fallback_position_clamps_line_and_column() -> None:
    buffer = TextBuffer("ab\ncd")
    view = ViewState(top_line=0, caret_line=5, caret_column=30, caret_line_length=40)

    assert fallback_position(buffer, view) == (1, 0)


def test_top_line_is_restored(temp_dir: Path) -> None:
    runner = FakeFormatter()
    buffer = make_buffer("a;\nb;\nc  ;\nd;", caret=9, top_line=1)

    make_orchestrator(runner).format_document(buffer)

    assert buffer.top_line() == 1


def test_restore_failure_does_not_fail_format(temp_dir: Path) -> None:
    class StubbornBuffer(TextBuffer):
        def move_caret(self, offset: int) -> None:
            raise RuntimeError("caret is pinned")

    runner = FakeFormatter()
    buffer = StubbornBuffer("int  x;", path="/w/a.c", caret=7)

    outcome = make_orchestrator(runner).format_document(buffer)

    assert outcome.status == FORMATTED
    assert outcome.caret is None
    assert buffer.text == "int x;"


def test_failed_temp_cleanup_does_not_fail_format(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def deny(path: str) -> None:
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr(transient.os, "remove", deny)
    runner = FakeFormatter()
    buffer = make_buffer("int  x;", caret=7)

    outcome = make_orchestrator(runner).format_document(buffer)

    assert outcome.status == FORMATTED
    assert buffer.text == "int x;"
    assert os.path.exists(runner.calls[0]["path"])


def test_stdout_output_source(temp_dir: Path) -> None:
    runner = FakeFormatter(
        result=ExternalResult(exited_cleanly=True, output="a b;\n")
    )
    buffer = make_buffer("a  b;\n", caret=6)

    outcome = make_orchestrator(
        runner, output_source=OutputSource.STDOUT
    ).format_document(buffer)

    assert outcome.status == FORMATTED
    assert buffer.text == "a b;\n"
    assert buffer.caret == 5


def test_real_process_round_trip(
    temp_dir: Path, tmp_path: Path, collapse_script: Path
) -> None:
    profile = Profile(
        program=sys.executable, command_line=f'"{collapse_script}" "%FILE%"'
    )
    buffer = make_buffer(
        "int  x;\n  y();", path=str(tmp_path / "main.c"), caret=len("int  x;\n  ")
    )

    outcome = FormatOrchestrator(profile).format_document(buffer)

    assert outcome.status == FORMATTED
    assert buffer.text == "int x;\ny();"
    assert buffer.caret == 7
    assert list(temp_dir.iterdir()) == []
