"""Whitespace-tolerant caret fingerprints.

A caret position is encoded as the non-whitespace characters that precede it
(the *skeleton*) followed by one space per whitespace character between the
last skeleton character and the caret. Reformatting usually rewrites how much
whitespace sits between tokens but keeps the tokens themselves, so the
skeleton can be matched against the reformatted text while the trailing
spaces act as a whitespace budget.

Decoding is a best-effort heuristic and not an exact inverse of encoding:
a formatter that renames, reorders, or rewrites tokens legitimately yields
``NOT_FOUND`` and callers fall back to a line/column restore.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Optional, Union

WILDCARD = " "

# Only these count as whitespace while decoding; ``\r`` is skipped on its own.
_DECODE_WHITESPACE = frozenset(" \n\t")

# Information separators are whitespace to str.isspace but control characters
# to the encoder, which drops them.
_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


@dataclass(frozen=True, slots=True)
class Fingerprint:
    """Encoded caret position produced by ``encode_caret``."""

    text: str = ""

    @property
    def skeleton(self) -> str:
        return self.text.rstrip(WILDCARD)

    @property
    def trailing_whitespace(self) -> int:
        return len(self.text) - len(self.skeleton)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def __bool__(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True, slots=True)
class Matched:
    """Decode hit; ``offset`` indexes into the decoded text."""

    offset: int

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NotFound:
    """Decode miss: the skeleton does not occur in the decoded text."""

    @property
    def found(self) -> bool:
        return False


NOT_FOUND = NotFound()

DecodeResult = Union[Matched, NotFound]


def _is_control(char: str) -> bool:
    return unicodedata.category(char) == "Cc"


def encode_caret(text: str, caret: int) -> Fingerprint:
    """Fingerprint the caret located ``caret`` characters into ``text``.

    ``text`` starts at the beginning of the formatted region. Carriage
    returns are ignored entirely; any other whitespace, newlines included,
    grows the trailing budget without resetting it. Other control characters
    are dropped and every remaining character joins the skeleton and resets
    the budget.
    """

    if caret < 0 or caret > len(text):
        raise ValueError(f"caret {caret} outside text of length {len(text)}")

    skeleton: list[str] = []
    trailing = 0
    for char in text[:caret]:
        if char == "\r" or char in _SEPARATORS:
            continue
        if char.isspace():
            trailing += 1
        elif not _is_control(char):
            skeleton.append(char)
            trailing = 0

    return Fingerprint("".join(skeleton) + WILDCARD * trailing)


def decode_caret(
    text: str, fingerprint: Union[Fingerprint, str, None]
) -> DecodeResult:
    """Locate ``fingerprint`` in ``text``.

    Returns ``Matched(offset)`` with ``offset`` a valid index into ``text``,
    or ``NOT_FOUND`` when a non-whitespace character of ``text`` contradicts
    the skeleton. An empty fingerprint always matches offset 0.
    """

    pattern = str(fingerprint) if fingerprint is not None else ""
    if not pattern:
        return Matched(0)

    size, expected = len(text), len(pattern)
    i = j = 0
    while i < size and j < expected:
        actual = text[i]
        wanted = pattern[j]
        if actual == wanted:
            j += 1
        elif actual in _DECODE_WHITESPACE:
            # Whitespace spends budget only once the skeleton is exhausted.
            if wanted == WILDCARD:
                j += 1
        elif actual != "\r":
            if wanted == WILDCARD:
                break
            return NOT_FOUND
        i += 1

    # Ran out of text with budget left: stay on the line before a final newline.
    if i == size and j < expected and i > 0 and text[i - 1] == "\n":
        i -= 1

    return Matched(i)


def restore_offset(
    text: str, fingerprint: Union[Fingerprint, str, None]
) -> Optional[int]:
    result = decode_caret(text, fingerprint)
    if isinstance(result, Matched):
        return result.offset
    return None


__all__ = [
    "WILDCARD",
    "Fingerprint",
    "Matched",
    "NotFound",
    "NOT_FOUND",
    "DecodeResult",
    "encode_caret",
    "decode_caret",
    "restore_offset",
]
