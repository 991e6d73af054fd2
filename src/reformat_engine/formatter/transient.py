"""Temporary file used to hand a snapshot to the formatter and back."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from typing import Iterator

from reformat_engine.runtime import telemetry


@contextmanager
def transient_file(
    text: str, *, suffix: str = ".tmp", encoding: str = "utf-8"
) -> Iterator[str]:
    """Write ``text`` to a fresh temp file and remove it on every exit path."""

    fd, path = tempfile.mkstemp(prefix="reformat-", suffix=suffix)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(text)
        yield path
    finally:
        _discard(path)


def read_transient(path: str, *, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding, newline="") as handle:
        return handle.read()


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        telemetry.record_event(
            "transient.cleanup_failed",
            level="warning",
            data={"path": path, "reason": str(exc)},
        )


__all__ = ["transient_file", "read_transient"]
