"""Blocking invocation of the external formatter executable."""

from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Union

from reformat_engine.runtime import telemetry


@dataclass(slots=True)
class ExternalResult:
    """Outcome of one formatter run."""

    exited_cleanly: bool
    output: str = ""
    exit_code: int = 0
    errors: str = ""


class FormatterLaunchError(RuntimeError):
    """Raised when the formatter process could not be started at all."""

    def __init__(self, message: str, *, program: str) -> None:
        super().__init__(message)
        self.program = program


def _command(program: str, command_line: str) -> Union[str, list[str]]:
    if os.name == "nt":
        return f"{subprocess.list2cmdline([program])} {command_line}".strip()
    return [program, *shlex.split(command_line)]


def run_formatter(
    program: str,
    command_line: str,
    *,
    cwd: Optional[str] = None,
    encoding: str = "utf-8",
) -> ExternalResult:
    """Run ``program`` with ``command_line`` and wait for it to exit.

    There is no timeout: the caller blocks for the whole process lifetime.
    """

    if not program:
        raise FormatterLaunchError("No formatter program configured", program=program)

    telemetry.record_event(
        "formatter.launch",
        data={"program": program, "args": command_line},
    )
    try:
        # shlex rejects unbalanced quotes with ValueError.
        command = _command(program, command_line)
        completed = subprocess.run(
            command,
            cwd=cwd or None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except (OSError, ValueError) as exc:
        raise FormatterLaunchError(str(exc), program=program) from exc

    return ExternalResult(
        exited_cleanly=completed.returncode == 0,
        output=completed.stdout.decode(encoding, errors="replace"),
        exit_code=completed.returncode,
        errors=completed.stderr.decode(encoding, errors="replace"),
    )


__all__ = ["ExternalResult", "FormatterLaunchError", "run_formatter"]
