"""Utility functions for ustxconv."""

from ustxconv.utils.lyrics import compose_lyric, split_lyric
from ustxconv.utils.validation import ValidationError, validate_note_timing

__all__ = [
    "compose_lyric",
    "split_lyric",
    "ValidationError",
    "validate_note_timing",
]
