"""
Data validation utilities for project data.

Note timing validation is non-fatal: overlapping notes are excluded,
never shifted or truncated. The value validators raise ValidationError.
"""

import logging
from typing import List, Optional, Sequence, Tuple, TypeVar

from ustxconv.models.project import DroppedItem, Note

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ValidationError(Exception):
    """Raised when project data validation fails."""

    pass


def validate_note_timing(
    notes: Sequence[Note],
    note_pitches: Optional[Sequence[T]] = None,
    dropped: Optional[List[DroppedItem]] = None,
    voice_part_index: int = 0,
    track_index: int = 0,
) -> Tuple[List[Note], Optional[List[T]]]:
    """
    Drop notes that start before the previous accepted note has ended.

    A running cursor starts at tick 0. A note is accepted when its start
    tick is at or after the cursor, which then moves to the note's end.

    Args:
        notes: Candidate notes in source order
        note_pitches: Optional pitch data parallel to ``notes``
        dropped: Optional list receiving a DroppedItem per rejected note
        voice_part_index: Source voice part, for diagnostics
        track_index: Target track, for diagnostics

    Returns:
        (accepted notes, accepted pitch data or None)
    """
    accepted: List[Note] = []
    accepted_pitches: Optional[List[T]] = [] if note_pitches is not None else None
    cursor = 0

    for i, note in enumerate(notes):
        if note.tick_on >= cursor:
            accepted.append(note)
            if accepted_pitches is not None:
                accepted_pitches.append(note_pitches[i])
            cursor = note.tick_off
            continue

        logger.debug(
            "Dropping note %d (%r) in voice part %d: starts at %d before %d",
            i,
            note.lyric,
            voice_part_index,
            note.tick_on,
            cursor,
        )
        if dropped is not None:
            dropped.append(
                DroppedItem(
                    kind="note",
                    voice_part_index=voice_part_index,
                    track_index=track_index,
                    note_index=i,
                    reason=f"overlaps previous note (starts at {note.tick_on}, clear at {cursor})",
                )
            )

    return accepted, accepted_pitches


def validate_midi_value(value: int, name: str = "value") -> None:
    """
    Validate that a value is in MIDI range (0-127).

    Raises:
        ValidationError: If value is out of range
    """
    if not 0 <= value <= 127:
        raise ValidationError(f"{name} must be 0-127, got {value}")


def validate_tempo(bpm: float) -> None:
    """
    Validate a tempo value.

    Raises:
        ValidationError: If tempo is not positive or unreasonably fast
    """
    if not 0 < bpm <= 1000:
        raise ValidationError(f"Tempo must be in (0, 1000] BPM, got {bpm}")


def validate_time_signature(numerator: int, denominator: int) -> None:
    """
    Validate time signature.

    Args:
        numerator: Beats per measure
        denominator: Beat unit (1, 2, 4, 8, 16, 32)

    Raises:
        ValidationError: If time signature is invalid
    """
    if not 1 <= numerator <= 32:
        raise ValidationError(f"Time signature numerator must be 1-32, got {numerator}")

    valid_denominators = [1, 2, 4, 8, 16, 32]
    if denominator not in valid_denominators:
        raise ValidationError(
            f"Time signature denominator must be one of {valid_denominators}, got {denominator}"
        )
