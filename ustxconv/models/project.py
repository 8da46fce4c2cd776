"""
Generic project model - the format-agnostic side of every conversion.

A Project holds tracks of notes plus the tempo and time signature maps.
Each Track may carry a merged Pitch curve sampled at absolute ticks.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass
class Note:
    """
    A single sung note.

    Attributes:
        id: Track-local index, reassigned densely in tick order
        key: MIDI note number
        lyric: Display lyric
        tick_on: Absolute start tick
        tick_off: Absolute end tick
        phoneme: Optional phoneme string
    """

    id: int
    key: int
    lyric: str
    tick_on: int
    tick_off: int
    phoneme: Optional[str] = None

    @property
    def length(self) -> int:
        """Note length in ticks."""
        return self.tick_off - self.tick_on


@dataclass
class PitchPoint:
    """One pitch sample: cent offset from the sounding note's key at a tick."""

    tick: int
    cents: float


@dataclass
class Pitch:
    """
    Track-level pitch curve.

    Samples are ordered by tick. Values are cent offsets from the key of
    the note sounding at that tick (the latest note starting at or before
    the tick, or the first note for ticks before any onset).
    """

    points: List[PitchPoint] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def first_tick(self) -> Optional[int]:
        return self.points[0].tick if self.points else None

    @property
    def last_tick(self) -> Optional[int]:
        return self.points[-1].tick if self.points else None


@dataclass
class Track:
    """
    A voice track.

    Attributes:
        id: Track index (0-based)
        name: Track name
        notes: Tick-ascending, non-overlapping notes
        pitch: Optional merged pitch curve
    """

    id: int
    name: str
    notes: List[Note] = field(default_factory=list)
    pitch: Optional[Pitch] = None

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    @property
    def tick_span(self) -> Optional[tuple]:
        """(first tick_on, last tick_off), or None for an empty track."""
        if not self.notes:
            return None
        return self.notes[0].tick_on, self.notes[-1].tick_off


@dataclass
class Tempo:
    """Tempo change at a tick position."""

    tick_position: int
    bpm: float


@dataclass
class TimeSignature:
    """Time signature change at a measure position."""

    measure_position: int
    numerator: int
    denominator: int


class Format(Enum):
    """Supported project formats and their file naming convention."""

    USTX = ".ustx"

    @property
    def extension(self) -> str:
        return self.value

    def get_file_name(self, project_name: str) -> str:
        """Return the canonical output file name for a project."""
        return f"{project_name}{self.extension}"


class Feature(Enum):
    """Optional export features a caller may request."""

    CONVERT_PITCH = "convert_pitch"


class ExportNotification(Enum):
    """Notices reported to the caller after an export."""

    PITCH_DATA_EXPORTED = "pitch_data_exported"


@dataclass
class ImportParams:
    """
    Import options.

    Attributes:
        simple_import: Skip all pitch data and keep only timing and lyrics
    """

    simple_import: bool = False


@dataclass
class DroppedItem:
    """
    Describes an input item silently excluded during import.

    Attributes:
        kind: "note" or "voice_part"
        voice_part_index: Index of the voice part in the source document
        track_index: Target track index referenced by the voice part
        note_index: Index of the note within its voice part, if a note
        reason: Human readable reason
    """

    kind: str
    voice_part_index: int
    track_index: int
    note_index: Optional[int] = None
    reason: str = ""


@dataclass
class Project:
    """
    Complete generic project.

    Attributes:
        format: Source format
        input_files: Files the project was read from
        name: Project name
        tracks: Tracks sorted by id
        time_signatures: Time signature map (at least one entry)
        tempos: Tempo map (at least one entry)
        measure_prefix: Measures inserted before the first note
        import_warnings: Warnings raised during import
    """

    format: Format
    name: str
    tracks: List[Track] = field(default_factory=list)
    time_signatures: List[TimeSignature] = field(default_factory=list)
    tempos: List[Tempo] = field(default_factory=list)
    input_files: List[Path] = field(default_factory=list)
    measure_prefix: int = 0
    import_warnings: List[str] = field(default_factory=list)

    @property
    def note_count(self) -> int:
        return sum(len(t.notes) for t in self.tracks)

    def __repr__(self) -> str:
        return (
            f"Project(name={self.name!r}, tracks={len(self.tracks)}, "
            f"notes={self.note_count}, tempos={len(self.tempos)})"
        )


@dataclass
class ExportResult:
    """
    Output of an export.

    Attributes:
        data: Serialized file contents
        file_name: Suggested output file name
        notifications: Notices for the caller
    """

    data: bytes
    file_name: str
    notifications: List[ExportNotification] = field(default_factory=list)
