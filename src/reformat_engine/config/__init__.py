"""Formatter profiles and language mapping."""

from .languages import (
    EXTENSION_LANGUAGES,
    LanguageEntry,
    LanguageFilter,
    language_for_path,
)
from .profile import (
    DEFAULT_COMMAND_LINE,
    DEFAULT_PROFILE_NAME,
    DEFAULT_PROGRAM,
    FRAGMENT_FLAG,
    PLACEHOLDERS,
    OutputSource,
    Profile,
    build_command_line,
    expand_placeholders,
)

__all__ = [
    "EXTENSION_LANGUAGES",
    "LanguageEntry",
    "LanguageFilter",
    "language_for_path",
    "DEFAULT_COMMAND_LINE",
    "DEFAULT_PROFILE_NAME",
    "DEFAULT_PROGRAM",
    "FRAGMENT_FLAG",
    "PLACEHOLDERS",
    "OutputSource",
    "Profile",
    "build_command_line",
    "expand_placeholders",
]
