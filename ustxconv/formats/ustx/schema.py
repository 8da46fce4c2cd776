"""
USTX document schema.

Pydantic models mirroring the keys of an OpenUtau USTX (YAML) project.
Unknown keys are ignored and null values count as absent; missing required
keys and wrongly typed values raise UstxFormatError naming the offending
path.
"""

from typing import Annotated, Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, ValidationError, model_validator


class UstxFormatError(ValueError):
    """Raised when a document does not match the USTX schema."""

    pass


def _number(value: float) -> Any:
    """Emit integral floats as ints to keep documents tidy."""
    return int(value) if float(value).is_integer() else value


Number = Annotated[float, PlainSerializer(_number)]


class UstxModel(BaseModel):
    """Base for USTX records."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class UstxExpression(UstxModel):
    """Expression definition, passed through unchanged."""

    name: str
    abbr: str
    type: str
    min: Number
    max: Number
    default_value: Number
    is_flag: bool
    flag: Optional[str] = None
    options: Optional[List[str]] = None


class UstxTrack(UstxModel):
    """Track settings."""

    phonemizer: str
    mute: bool = False
    solo: bool = False
    volume: Number = 0.0
    track_name: Optional[str] = None


class UstxPitchDatum(UstxModel):
    """Note pitch point (x: ms from note start, y: 10-cent units)."""

    x: Number
    y: Number
    shape: str


class UstxNotePitch(UstxModel):
    """Pitch point list of a note."""

    data: List[UstxPitchDatum]
    snap_first: bool


class UstxVibrato(UstxModel):
    """Note vibrato, stored under USTX keys (``in``/``out`` are fades)."""

    length: Number
    period: Number
    depth: Number
    fade_in: Number = Field(alias="in")
    fade_out: Number = Field(alias="out")
    shift: Number
    drift: Number


class UstxNote(UstxModel):
    """Note inside a voice part; position is relative to the part."""

    position: int
    duration: int
    tone: int
    lyric: str
    pitch: UstxNotePitch
    vibrato: UstxVibrato


class UstxCurve(UstxModel):
    """Part-level expression curve, identified by ``abbr``."""

    xs: List[int]
    ys: List[Number]
    abbr: str


class UstxVoicePart(UstxModel):
    """Group of notes placed on a track at a tick offset."""

    name: str
    comment: str
    track_no: int
    position: int
    notes: List[UstxNote]
    curves: Optional[List[UstxCurve]] = None

    def find_curve(self, abbr: str) -> Optional[UstxCurve]:
        """Return the first curve with the given abbreviation."""
        for curve in self.curves or []:
            if curve.abbr == abbr:
                return curve
        return None


class UstxTempo(UstxModel):
    position: int
    bpm: Number


class UstxTimeSignature(UstxModel):
    bar_position: int
    beat_per_bar: int
    beat_unit: int


class UstxProject(UstxModel):
    """
    Complete USTX project document.

    Attributes:
        name: Project name
        comment: Free text comment
        output_dir: Render output directory
        cache_dir: Render cache directory
        ustx_version: Document format version
        resolution: Ticks per quarter note
        bpm: Global tempo, used when ``tempos`` is absent
        beat_per_bar: Global numerator, used when ``time_signatures`` is absent
        beat_unit: Global denominator, used when ``time_signatures`` is absent
        expressions: Expression definitions by name
        tracks: Track settings by index
        voice_parts: Voice parts referencing tracks by ``track_no``
    """

    name: str
    comment: str
    output_dir: str
    cache_dir: str
    ustx_version: Number
    resolution: Optional[int] = None
    bpm: Optional[Number] = None
    beat_per_bar: Optional[int] = None
    beat_unit: Optional[int] = None
    expressions: Dict[str, UstxExpression]
    time_signatures: Optional[List[UstxTimeSignature]] = None
    tempos: Optional[List[UstxTempo]] = None
    tracks: List[UstxTrack]
    voice_parts: List[UstxVoicePart]


def _format_location(loc) -> str:
    path = "project"
    for item in loc:
        path += f"[{item}]" if isinstance(item, int) else f".{item}"
    return path


def _format_validation_errors(exc: ValidationError) -> str:
    return "; ".join(f"{_format_location(e['loc'])}: {e['msg']}" for e in exc.errors())


def load_project(text: str) -> UstxProject:
    """
    Decode a USTX document.

    Raises:
        UstxFormatError: If the text is not YAML or does not match the schema
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise UstxFormatError(f"Invalid USTX document: {e}") from e

    if not isinstance(data, dict):
        raise UstxFormatError("Invalid USTX document: top level is not a mapping")

    try:
        return UstxProject.model_validate(data)
    except ValidationError as e:
        raise UstxFormatError(f"Invalid USTX document: {_format_validation_errors(e)}") from e


def dump_project(project: UstxProject) -> str:
    """Encode a USTX document as YAML text."""
    return yaml.safe_dump(
        project.model_dump(by_alias=True, exclude_none=True),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
