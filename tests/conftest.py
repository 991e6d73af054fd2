import os
import shlex
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from reformat_engine.formatter import ExternalResult


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("REFORMAT_ENGINE_") and not key.startswith(
            "REFORMAT_ENGINE_LOG"
        ):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Route transient formatter files into an inspectable directory."""

    directory = tmp_path / "transient"
    directory.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(directory))
    return directory


def collapse_spaces(text: str) -> str:
    return "\n".join(" ".join(line.split()) for line in text.split("\n"))


class FakeFormatter:
    """Runner double that rewrites the transient file in place."""

    def __init__(
        self,
        transform: Callable[[str], str] = collapse_spaces,
        *,
        result: Optional[ExternalResult] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.transform = transform
        self.result = result
        self.error = error
        self.calls: List[dict] = []

    def __call__(
        self,
        program: str,
        command_line: str,
        *,
        cwd: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> ExternalResult:
        args = shlex.split(command_line)
        path = [arg for arg in args if arg != "--frag"][-1]
        self.calls.append(
            {"program": program, "args": args, "path": path, "cwd": cwd}
        )
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        with open(path, "r", encoding=encoding, newline="") as handle:
            text = handle.read()
        with open(path, "w", encoding=encoding, newline="") as handle:
            handle.write(self.transform(text))
        return ExternalResult(exited_cleanly=True)


COLLAPSE_SCRIPT = """\
import sys

path = sys.argv[-1]
with open(path, "r", encoding="utf-8", newline="") as handle:
    text = handle.read()
lines = [" ".join(line.split()) for line in text.split("\\n")]
with open(path, "w", encoding="utf-8", newline="") as handle:
    handle.write("\\n".join(lines))
"""


@pytest.fixture
def collapse_script(tmp_path: Path) -> Path:
    script = tmp_path / "collapse.py"
    script.write_text(COLLAPSE_SCRIPT, encoding="utf-8")
    return script
