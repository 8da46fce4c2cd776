"""
Export template for USTX output.

The generic model does not carry phonemizer names, mute/solo flags,
expression definitions, note pitch point shapes or vibrato. These come
from a reference USTX project: the embedded default below, or a user
supplied file with at least one track, voice part and note.
"""

import copy
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Union

from ustxconv.formats.ustx.schema import (
    UstxExpression,
    UstxFormatError,
    UstxNotePitch,
    UstxProject,
    UstxTrack,
    UstxVibrato,
    load_project,
)

# Known-good empty OpenUtau project with one placeholder note
_EMBEDDED_TEMPLATE = """\
name: New Project
comment: ''
output_dir: Vocal
cache_dir: UCache
ustx_version: 0.5
resolution: 480
bpm: 120
beat_per_bar: 4
beat_unit: 4
expressions:
  vel:
    name: velocity
    abbr: vel
    type: Numerical
    min: 0
    max: 200
    default_value: 100
    is_flag: false
    flag: ''
  vol:
    name: volume
    abbr: vol
    type: Numerical
    min: 0
    max: 200
    default_value: 100
    is_flag: false
    flag: ''
  atk:
    name: attack
    abbr: atk
    type: Numerical
    min: 0
    max: 200
    default_value: 100
    is_flag: false
    flag: ''
  dec:
    name: decay
    abbr: dec
    type: Numerical
    min: 0
    max: 100
    default_value: 0
    is_flag: false
    flag: ''
  gen:
    name: gender
    abbr: gen
    type: Numerical
    min: -100
    max: 100
    default_value: 0
    is_flag: true
    flag: g
  bre:
    name: breath
    abbr: bre
    type: Numerical
    min: 0
    max: 100
    default_value: 0
    is_flag: true
    flag: B
  lft:
    name: lowpass
    abbr: lft
    type: Numerical
    min: 0
    max: 100
    default_value: 0
    is_flag: true
    flag: H
  mod:
    name: modulation
    abbr: mod
    type: Numerical
    min: 0
    max: 100
    default_value: 0
    is_flag: false
    flag: ''
  pitd:
    name: pitch deviation
    abbr: pitd
    type: Curve
    min: -1200
    max: 1200
    default_value: 0
    is_flag: false
    flag: ''
tracks:
- phonemizer: OpenUtau.Core.DefaultPhonemizer
  mute: false
  solo: false
  volume: 0
voice_parts:
- name: New Part
  comment: ''
  track_no: 0
  position: 0
  notes:
  - position: 0
    duration: 480
    tone: 60
    lyric: a
    pitch:
      data:
      - x: -25
        y: 0
        shape: io
      - x: 25
        y: 0
        shape: io
      snap_first: true
    vibrato:
      length: 0
      period: 175
      depth: 25
      in: 10
      out: 10
      shift: 0
      drift: 0
  curves: []
"""


@dataclass
class ExportDefaults:
    """
    Field values the generic model does not carry.

    Attributes:
        project: Template project supplying metadata and expressions
        track: Track settings used for every exported track
        voice_part_comment: Comment of every exported voice part
        note_pitch: Pitch points copied into every exported note
        note_vibrato: Vibrato copied into every exported note
    """

    project: UstxProject
    track: UstxTrack
    voice_part_comment: str
    note_pitch: UstxNotePitch
    note_vibrato: UstxVibrato

    @property
    def expressions(self) -> Dict[str, UstxExpression]:
        return self.project.expressions

    @classmethod
    def from_project(cls, project: UstxProject) -> "ExportDefaults":
        """
        Extract defaults from a template project.

        Raises:
            UstxFormatError: If the template lacks a track, voice part or note
        """
        if not project.tracks:
            raise UstxFormatError("Template has no tracks")
        if not project.voice_parts:
            raise UstxFormatError("Template has no voice parts")
        voice_part = project.voice_parts[0]
        if not voice_part.notes:
            raise UstxFormatError("Template voice part has no notes")
        note = voice_part.notes[0]
        if not note.pitch.data:
            raise UstxFormatError("Template note has no pitch points")

        return cls(
            project=project,
            track=project.tracks[0],
            voice_part_comment=voice_part.comment,
            note_pitch=note.pitch,
            note_vibrato=note.vibrato,
        )

    def copy(self) -> "ExportDefaults":
        """Create a deep copy of these defaults."""
        return copy.deepcopy(self)


@lru_cache(maxsize=1)
def _embedded_defaults() -> ExportDefaults:
    return ExportDefaults.from_project(load_project(_EMBEDDED_TEMPLATE))


def load_export_defaults(template_path: Optional[Union[str, Path]] = None) -> ExportDefaults:
    """
    Load export defaults.

    Args:
        template_path: USTX file to use as template.
                       If None, uses the embedded default project.

    Returns:
        ExportDefaults owned by the caller
    """
    if template_path is None:
        return _embedded_defaults().copy()

    path = Path(template_path)
    if not path.exists():
        raise FileNotFoundError(f"Template not found: {path}")

    return ExportDefaults.from_project(load_project(path.read_text(encoding="utf-8")))
