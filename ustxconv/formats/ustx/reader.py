"""
USTX project reader.

Reads OpenUtau .ustx documents and converts them to the generic Project
model.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ustxconv.formats.ustx.schema import UstxNote, UstxProject, UstxVoicePart, load_project
from ustxconv.models.project import (
    DroppedItem,
    Format,
    ImportParams,
    Note,
    Pitch,
    Project,
    Tempo,
    TimeSignature,
    Track,
)
from ustxconv.pitch.ustx_pitch import (
    NotePitchData,
    NotePitchPoint,
    PartPitchData,
    Shape,
    VibratoParams,
    merge_pitch_from_ustx_parts,
    pitch_from_ustx_part,
    reduce_repeated_pitch_points,
)
from ustxconv.utils.lyrics import split_lyric
from ustxconv.utils.validation import validate_note_timing

logger = logging.getLogger(__name__)

PITCH_CURVE_ABBR = "pitd"

DEFAULT_BPM = 120.0
DEFAULT_BEAT_PER_BAR = 4
DEFAULT_BEAT_UNIT = 4


def default_tempos(project: UstxProject) -> List[Tempo]:
    """Explicit tempo list, or a single tempo from ``bpm`` (120 if absent)."""
    if project.tempos:
        return [Tempo(tick_position=t.position, bpm=t.bpm) for t in project.tempos]
    bpm = project.bpm if project.bpm is not None else DEFAULT_BPM
    return [Tempo(tick_position=0, bpm=bpm)]


def default_time_signatures(project: UstxProject) -> List[TimeSignature]:
    """Explicit time signature list, or one from ``beat_per_bar``/``beat_unit`` (4/4 if absent)."""
    if project.time_signatures:
        return [
            TimeSignature(
                measure_position=t.bar_position,
                numerator=t.beat_per_bar,
                denominator=t.beat_unit,
            )
            for t in project.time_signatures
        ]
    return [
        TimeSignature(
            measure_position=0,
            numerator=project.beat_per_bar if project.beat_per_bar is not None else DEFAULT_BEAT_PER_BAR,
            denominator=project.beat_unit if project.beat_unit is not None else DEFAULT_BEAT_UNIT,
        )
    ]


def parse_note_pitch(note: UstxNote) -> NotePitchData:
    """Convert a USTX note's pitch points and vibrato."""
    points = [
        NotePitchPoint(x=d.x, y=d.y, shape=Shape.from_text(d.shape)) for d in note.pitch.data
    ]
    v = note.vibrato
    vibrato = VibratoParams(
        length=v.length,
        period=v.period,
        depth=v.depth,
        fade_in=v.fade_in,
        fade_out=v.fade_out,
        phase_shift=v.shift,
        drift=v.drift,
    )
    return NotePitchData(points=points, vibrato=vibrato)


@dataclass
class _TrackBuilder:
    """Accumulates notes and pitch from every voice part of one track."""

    id: int
    name: str
    notes: List[Note] = field(default_factory=list)
    pitch: Optional[Pitch] = None

    def add(self, notes: List[Note], pitch: Optional[Pitch]) -> None:
        self.notes.extend(notes)
        self.pitch = merge_pitch_from_ustx_parts(self.pitch, pitch)

    def build(self) -> Track:
        ordered = sorted(self.notes, key=lambda n: n.tick_on)
        for index, note in enumerate(ordered):
            note.id = index
        return Track(
            id=self.id,
            name=self.name,
            notes=ordered,
            pitch=reduce_repeated_pitch_points(self.pitch),
        )


class UstxReader:
    """
    Reader for OpenUtau USTX project files.

    Voice parts are mapped onto tracks by ``track_no``; parts pointing at
    a missing track and notes overlapping an earlier note are dropped.
    Pass a list as ``dropped`` to receive a descriptor for each.

    Example:
        project = UstxReader.read("song.ustx")
        print(f"Project: {project.name}, Tracks: {len(project.tracks)}")
    """

    PITCH_CURVE_ABBR = PITCH_CURVE_ABBR

    def __init__(
        self,
        params: Optional[ImportParams] = None,
        dropped: Optional[List[DroppedItem]] = None,
    ):
        self.params = params or ImportParams()
        self.dropped = dropped

    @classmethod
    def read(
        cls,
        filepath: Union[str, Path],
        params: Optional[ImportParams] = None,
        dropped: Optional[List[DroppedItem]] = None,
    ) -> Project:
        """
        Read a USTX file and return a Project.

        Args:
            filepath: Path to .ustx file
            params: Import options
            dropped: Optional list receiving dropped-item descriptors

        Returns:
            Parsed Project object
        """
        reader = cls(params, dropped)
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Project:
        """Parse a USTX file from disk."""
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        return self.parse_text(filepath.read_text(encoding="utf-8"), input_file=filepath)

    def parse_text(self, text: str, input_file: Optional[Path] = None) -> Project:
        """
        Parse USTX document text.

        Raises:
            UstxFormatError: If the document does not match the USTX schema
        """
        return self.parse_document(load_project(text), input_file)

    def parse_document(self, ustx: UstxProject, input_file: Optional[Path] = None) -> Project:
        """Convert a decoded USTX document to a Project."""
        tempos = default_tempos(ustx)
        time_signatures = default_time_signatures(ustx)
        tracks = self._parse_tracks(ustx, tempos)

        project = Project(
            format=Format.USTX,
            name=ustx.name,
            tracks=tracks,
            time_signatures=time_signatures,
            tempos=tempos,
            input_files=[input_file] if input_file is not None else [],
            measure_prefix=0,
            import_warnings=[],
        )
        logger.debug("Parsed %r", project)
        return project

    def _parse_tracks(self, ustx: UstxProject, tempos: List[Tempo]) -> List[Track]:
        builders = []
        for index, track in enumerate(ustx.tracks):
            name = track.track_name if track.track_name is not None else f"Track {index + 1}"
            builders.append(_TrackBuilder(id=index, name=name))

        for part_index, voice_part in enumerate(ustx.voice_parts):
            track_no = voice_part.track_no
            if not 0 <= track_no < len(builders):
                logger.debug(
                    "Dropping voice part %d (%r): unknown track %d",
                    part_index,
                    voice_part.name,
                    track_no,
                )
                if self.dropped is not None:
                    self.dropped.append(
                        DroppedItem(
                            kind="voice_part",
                            voice_part_index=part_index,
                            track_index=track_no,
                            reason=f"track {track_no} does not exist",
                        )
                    )
                continue

            notes, pitch = self._parse_voice_part(voice_part, part_index, tempos)
            builders[track_no].add(notes, pitch)

        return sorted((b.build() for b in builders), key=lambda t: t.id)

    def _parse_voice_part(
        self, voice_part: UstxVoicePart, part_index: int, tempos: List[Tempo]
    ):
        tick_prefix = voice_part.position
        notes = []
        for raw in voice_part.notes:
            lyric, phoneme = split_lyric(raw.lyric)
            notes.append(
                Note(
                    id=0,
                    key=raw.tone,
                    lyric=lyric,
                    phoneme=phoneme,
                    tick_on=raw.position + tick_prefix,
                    tick_off=raw.position + raw.duration + tick_prefix,
                )
            )

        if self.params.simple_import:
            validated, _ = validate_note_timing(
                notes, None, self.dropped, part_index, voice_part.track_no
            )
            return validated, None

        note_pitches = [parse_note_pitch(n) for n in voice_part.notes]
        validated, validated_pitches = validate_note_timing(
            notes, note_pitches, self.dropped, part_index, voice_part.track_no
        )

        curve = voice_part.find_curve(PITCH_CURVE_ABBR)
        curve_points = None
        if curve is not None:
            # Values truncate toward zero
            curve_points = [
                (x + tick_prefix, int(y)) for x, y in zip(curve.xs, curve.ys)
            ]

        pitch = None
        if validated_pitches or curve_points is not None:
            part_pitch = PartPitchData(
                curve=curve_points or [],
                notes=validated_pitches or [],
            )
            pitch = pitch_from_ustx_part(validated, part_pitch, tempos)

        return validated, pitch
