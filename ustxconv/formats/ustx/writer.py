"""
USTX project writer.

Writes generic Project objects as OpenUtau .ustx documents, filling the
fields the generic model does not carry from an export template.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ustxconv.formats.ustx.reader import PITCH_CURVE_ABBR, parse_note_pitch
from ustxconv.formats.ustx.schema import (
    UstxCurve,
    UstxNote,
    UstxNotePitch,
    UstxProject,
    UstxTempo,
    UstxTimeSignature,
    UstxTrack,
    UstxVoicePart,
    dump_project,
)
from ustxconv.formats.ustx.template import ExportDefaults, load_export_defaults
from ustxconv.models.project import Feature, Note, Project, Tempo, TimeSignature, Track
from ustxconv.pitch.ustx_pitch import legato_first_point_value, to_ustx_pitch_curve
from ustxconv.utils.lyrics import compose_lyric

logger = logging.getLogger(__name__)


class UstxWriter:
    """
    Writer for OpenUtau USTX project files.

    Each generic track becomes one USTX track and one voice part at
    position 0. Pitch is exported as a ``pitd`` curve when
    Feature.CONVERT_PITCH is requested.

    Example:
        UstxWriter.write(project, "song.ustx", [Feature.CONVERT_PITCH])
    """

    def __init__(self, template_path: Optional[Union[str, Path]] = None):
        """
        Initialize writer.

        Args:
            template_path: USTX file supplying default field values.
                           If None, uses the embedded default project.
        """
        self.defaults: ExportDefaults = load_export_defaults(template_path)

    @classmethod
    def write(
        cls,
        project: Project,
        filepath: Union[str, Path],
        features: Sequence[Feature] = (),
        template_path: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Write a Project to a USTX file.

        Args:
            project: Project to write
            filepath: Output file path
            features: Requested export features
            template_path: Optional USTX template file
        """
        writer = cls(template_path)
        text = writer.to_text(project, features)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(text, encoding="utf-8")

    def to_text(self, project: Project, features: Sequence[Feature] = ()) -> str:
        """Convert a Project to USTX YAML text."""
        return dump_project(self.to_document(project, features))

    def to_document(self, project: Project, features: Sequence[Feature] = ()) -> UstxProject:
        """Convert a Project to a USTX document."""
        template = self.defaults.project
        tempos = project.tempos or [Tempo(0, template.bpm or 120.0)]
        time_signatures = project.time_signatures or [
            TimeSignature(0, template.beat_per_bar or 4, template.beat_unit or 4)
        ]
        convert_pitch = Feature.CONVERT_PITCH in features

        tracks = [self._generate_track(track) for track in project.tracks]
        voice_parts = [
            self._generate_voice_part(track, tempos, convert_pitch) for track in project.tracks
        ]

        document = UstxProject(
            name=project.name,
            comment=template.comment,
            output_dir=template.output_dir,
            cache_dir=template.cache_dir,
            ustx_version=template.ustx_version,
            resolution=template.resolution,
            bpm=tempos[0].bpm,
            beat_per_bar=time_signatures[0].numerator,
            beat_unit=time_signatures[0].denominator,
            expressions={
                key: e.model_copy(deep=True) for key, e in self.defaults.expressions.items()
            },
            time_signatures=[
                UstxTimeSignature(
                    bar_position=t.measure_position,
                    beat_per_bar=t.numerator,
                    beat_unit=t.denominator,
                )
                for t in time_signatures
            ],
            tempos=[UstxTempo(position=t.tick_position, bpm=t.bpm) for t in tempos],
            tracks=tracks,
            voice_parts=voice_parts,
        )
        logger.debug(
            "Generated USTX %r: %d tracks, %d voice parts",
            document.name,
            len(tracks),
            len(voice_parts),
        )
        return document

    def _generate_track(self, track: Track) -> UstxTrack:
        return UstxTrack(
            phonemizer=self.defaults.track.phonemizer,
            mute=self.defaults.track.mute,
            solo=self.defaults.track.solo,
            volume=self.defaults.track.volume,
            track_name=track.name,
        )

    def _generate_voice_part(
        self, track: Track, tempos: List[Tempo], convert_pitch: bool
    ) -> UstxVoicePart:
        notes = []
        last_note: Optional[Note] = None
        for note in track.notes:
            notes.append(self._generate_note(last_note, note))
            last_note = note

        curves: List[UstxCurve] = []
        if convert_pitch:
            note_pitches = [parse_note_pitch(n) for n in notes]
            points = to_ustx_pitch_curve(track.pitch, track.notes, note_pitches, tempos)
            if points:
                curves.append(
                    UstxCurve(
                        xs=[p[0] for p in points],
                        ys=[float(p[1]) for p in points],
                        abbr=PITCH_CURVE_ABBR,
                    )
                )
            else:
                logger.debug("Track %d (%r): no pitch points to export", track.id, track.name)

        return UstxVoicePart(
            name=track.name,
            comment=self.defaults.voice_part_comment,
            track_no=track.id,
            position=0,
            notes=notes,
            curves=curves,
        )

    def _generate_note(self, last_note: Optional[Note], this_note: Note) -> UstxNote:
        template_pitch = self.defaults.note_pitch
        data = [d.model_copy() for d in template_pitch.data]
        if data:
            data[0].y = legato_first_point_value(last_note, this_note)

        return UstxNote(
            position=this_note.tick_on,
            duration=this_note.length,
            tone=this_note.key,
            lyric=compose_lyric(this_note.lyric, this_note.phoneme),
            pitch=UstxNotePitch(data=data, snap_first=template_pitch.snap_first),
            vibrato=self.defaults.note_vibrato.model_copy(),
        )
