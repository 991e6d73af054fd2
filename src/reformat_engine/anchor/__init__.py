"""Caret anchoring that survives whitespace-only reformatting."""

from .codec import (
    NOT_FOUND,
    WILDCARD,
    DecodeResult,
    Fingerprint,
    Matched,
    NotFound,
    decode_caret,
    encode_caret,
    restore_offset,
)

__all__ = [
    "NOT_FOUND",
    "WILDCARD",
    "DecodeResult",
    "Fingerprint",
    "Matched",
    "NotFound",
    "decode_caret",
    "encode_caret",
    "restore_offset",
]
