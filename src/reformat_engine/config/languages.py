"""File-extension to formatter-language mapping and language filters."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


class LanguageFilter(Enum):
    """Languages a profile is allowed to submit to the formatter."""

    ALL = "<All languages>"
    CPP = "C/C++"
    CS = "C#"
    D = "D"
    JAVA = "Java"

    @property
    def description(self) -> str:
        return self.value

    def accepts(self, language: "LanguageFilter") -> bool:
        return self is LanguageFilter.ALL or self is language

    @classmethod
    def parse(cls, value: "str | LanguageFilter") -> "LanguageFilter":
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.upper() == member.name or text == member.value:
                return member
        raise ValueError(f"Unknown language filter '{value}'.")


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    filter: LanguageFilter
    tag: str


_TAGS: Dict[LanguageFilter, str] = {
    LanguageFilter.CPP: "CPP",
    LanguageFilter.CS: "CSharp",
    LanguageFilter.D: "D",
    LanguageFilter.JAVA: "JAVA",
    LanguageFilter.ALL: "OTHER",
}


def _build_extension_map() -> Mapping[str, LanguageEntry]:
    table: Dict[str, LanguageEntry] = {}

    def add(language: LanguageFilter, *extensions: str) -> None:
        for ext in extensions:
            table[f".{ext}"] = LanguageEntry(language, _TAGS[language])

    add(LanguageFilter.CPP, "c", "cpp", "h", "cc", "cxx", "hpp", "hh", "hxx")
    add(LanguageFilter.CS, "cs")
    add(LanguageFilter.D, "d")
    add(LanguageFilter.JAVA, "java")
    return MappingProxyType(table)


EXTENSION_LANGUAGES = _build_extension_map()


def language_for_path(path: Optional[str]) -> Optional[LanguageEntry]:
    if not path:
        return None
    ext = os.path.splitext(path)[1].lower()
    return EXTENSION_LANGUAGES.get(ext)


__all__ = [
    "LanguageFilter",
    "LanguageEntry",
    "EXTENSION_LANGUAGES",
    "language_for_path",
]
