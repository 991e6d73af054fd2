"""Formatter profile: which program to run and how to call it."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional

from reformat_engine.runtime.environment import ENV_PREFIX, env, env_flag

from .languages import LanguageFilter

DEFAULT_PROFILE_NAME = "Default Profile"
DEFAULT_PROGRAM = "uncrustify"
DEFAULT_COMMAND_LINE = '-c "%CFGFILE%" -q -l %LANGUAGE% --no-backup "%FILE%"'
FRAGMENT_FLAG = "--frag"

PLACEHOLDERS = (
    "%CFGFILE%",
    "%FILE%",
    "%FILENAME%",
    "%FILE_DIR%",
    "%LANGUAGE%",
    "%SOLUTION%",
)


class OutputSource(Enum):
    """Where the formatted text is collected from once the process exits."""

    FILE = "file"
    STDOUT = "stdout"

    @classmethod
    def parse(cls, value: "str | OutputSource") -> "OutputSource":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text == member.value:
                return member
        raise ValueError(f"Unknown output source '{value}'.")


@dataclass(frozen=True, slots=True)
class Profile:
    """Immutable formatter settings handed to the orchestrator per operation."""

    name: str = DEFAULT_PROFILE_NAME
    program: str = DEFAULT_PROGRAM
    command_line: str = DEFAULT_COMMAND_LINE
    config_file: str = ""
    language_filter: LanguageFilter = LanguageFilter.ALL
    fragment_formatting: bool = True
    format_on_open: bool = False
    format_on_save: bool = False
    output_source: OutputSource = OutputSource.FILE
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "language_filter", LanguageFilter.parse(self.language_filter)
        )
        object.__setattr__(
            self, "output_source", OutputSource.parse(self.output_source)
        )

    @property
    def program_name(self) -> str:
        base = os.path.basename(self.program.rstrip("/\\"))
        return os.path.splitext(base)[0] or "the formatter"

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "Profile":
        """Build a profile from ``<prefix>*`` variables, defaulting the rest."""

        defaults = cls()
        return cls(
            name=env("PROFILE", defaults.name, prefix=prefix) or defaults.name,
            program=env("PROGRAM", defaults.program, prefix=prefix) or "",
            command_line=env("COMMAND_LINE", defaults.command_line, prefix=prefix)
            or "",
            config_file=env("CFG_FILE", defaults.config_file, prefix=prefix) or "",
            language_filter=LanguageFilter.parse(
                env("LANGUAGE_FILTER", defaults.language_filter.name, prefix=prefix)
                or LanguageFilter.ALL.name
            ),
            fragment_formatting=env_flag(
                "FRAGMENT", defaults.fragment_formatting, prefix=prefix
            ),
            format_on_open=env_flag(
                "FORMAT_ON_OPEN", defaults.format_on_open, prefix=prefix
            ),
            format_on_save=env_flag(
                "FORMAT_ON_SAVE", defaults.format_on_save, prefix=prefix
            ),
            output_source=OutputSource.parse(
                env("OUTPUT", defaults.output_source.value, prefix=prefix)
                or OutputSource.FILE.value
            ),
            encoding=env("ENCODING", defaults.encoding, prefix=prefix)
            or defaults.encoding,
        )

    def with_overrides(self, **changes: Any) -> "Profile":
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown profile fields: {sorted(unknown)}")
        return replace(
            self, **{key: value for key, value in changes.items() if value is not None}
        )


def expand_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Literal substitution of the ``PLACEHOLDERS`` tokens found in ``values``.

    Any other ``%NAME%`` text in ``template`` is left as written.
    """

    result = template
    for token in PLACEHOLDERS:
        if token in values:
            result = result.replace(token, values[token])
    return result


def build_command_line(
    profile: Profile,
    *,
    source_path: str,
    document_path: Optional[str],
    language: str,
    workspace_path: str = "",
    selection_only: bool = False,
) -> str:
    document_path = document_path or ""
    values = {
        "%CFGFILE%": profile.config_file,
        "%FILE%": source_path,
        "%FILENAME%": os.path.basename(document_path),
        "%FILE_DIR%": os.path.dirname(document_path),
        "%LANGUAGE%": language,
        "%SOLUTION%": workspace_path,
    }
    command_line = expand_placeholders(profile.command_line, values)
    if selection_only and profile.fragment_formatting:
        command_line = f"{command_line} {FRAGMENT_FLAG}".strip()
    return command_line


__all__ = [
    "DEFAULT_PROFILE_NAME",
    "DEFAULT_PROGRAM",
    "DEFAULT_COMMAND_LINE",
    "FRAGMENT_FLAG",
    "PLACEHOLDERS",
    "OutputSource",
    "Profile",
    "expand_placeholders",
    "build_command_line",
]
