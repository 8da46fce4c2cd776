"""Pitch curve conversion shared by the format handlers."""

from ustxconv.pitch.tick_time import TickTimeTransformer
from ustxconv.pitch.ustx_pitch import (
    NotePitchData,
    NotePitchPoint,
    NotePitchRenderer,
    PartPitchData,
    Shape,
    VibratoParams,
    legato_first_point_value,
    merge_pitch_from_ustx_parts,
    pitch_from_ustx_part,
    reduce_repeated_pitch_points,
    to_ustx_pitch_curve,
)

__all__ = [
    "TickTimeTransformer",
    "NotePitchData",
    "NotePitchPoint",
    "NotePitchRenderer",
    "PartPitchData",
    "Shape",
    "VibratoParams",
    "legato_first_point_value",
    "merge_pitch_from_ustx_parts",
    "pitch_from_ustx_part",
    "reduce_repeated_pitch_points",
    "to_ustx_pitch_curve",
]
