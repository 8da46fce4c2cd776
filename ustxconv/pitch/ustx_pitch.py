"""
Pitch conversion between USTX voice parts and the generic Pitch curve.

USTX describes pitch in two layers:

- Per-note pitch points: x in milliseconds relative to the note start,
  y in units of 10 cents relative to the note key, plus a vibrato.
- A part-level ``pitd`` curve: cents added on top, sampled at part ticks.

The generic Pitch stores cent offsets from the sounding key at absolute
ticks. Import renders both layers onto a fixed tick grid; export
subtracts what the exported note points will render, so that reading the
result back reproduces the curve.
"""

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ustxconv.models.project import Note, Pitch, PitchPoint, Tempo
from ustxconv.pitch.tick_time import TickTimeTransformer

SAMPLING_INTERVAL_TICK = 5

# 10 cents per USTX pitch point unit
POINT_UNIT_CENTS = 10.0


class Shape(Enum):
    """Interpolation shape of a note pitch point."""

    EASE_IN_OUT = "io"
    EASE_IN = "i"
    EASE_OUT = "o"
    LINEAR = "l"

    @classmethod
    def from_text(cls, text: str) -> "Shape":
        """Look up a shape by its USTX code, falling back to ease-in-out."""
        for shape in cls:
            if shape.value == text:
                return shape
        return cls.EASE_IN_OUT

    def ease(self, ratio: float) -> float:
        """Map linear progress 0..1 to eased progress 0..1."""
        if self is Shape.LINEAR:
            return ratio
        if self is Shape.EASE_IN:
            return 1.0 - math.cos(math.pi * ratio / 2.0)
        if self is Shape.EASE_OUT:
            return math.sin(math.pi * ratio / 2.0)
        return (1.0 - math.cos(math.pi * ratio)) / 2.0


@dataclass
class NotePitchPoint:
    """Note-local pitch point (x: ms from note start, y: 10-cent units)."""

    x: float
    y: float
    shape: Shape = Shape.EASE_IN_OUT


@dataclass
class VibratoParams:
    """
    Note vibrato.

    Attributes:
        length: Percentage of the note, measured back from its end
        period: Cycle length in milliseconds
        depth: Amplitude in cents
        fade_in: Fade-in as a percentage of the vibrato length
        fade_out: Fade-out as a percentage of the vibrato length
        phase_shift: Phase offset as a percentage of the period
        drift: Center offset as a percentage of the depth
    """

    length: float = 0.0
    period: float = 175.0
    depth: float = 25.0
    fade_in: float = 10.0
    fade_out: float = 10.0
    phase_shift: float = 0.0
    drift: float = 0.0

    def value_at(self, ms: float, note_start_ms: float, note_end_ms: float) -> float:
        """Vibrato offset in cents at an absolute time."""
        if self.length <= 0 or self.period <= 0:
            return 0.0

        vibrato_length = (note_end_ms - note_start_ms) * min(self.length, 100.0) / 100.0
        vibrato_start = note_end_ms - vibrato_length
        if vibrato_length <= 0 or not vibrato_start <= ms <= note_end_ms:
            return 0.0

        position = ms - vibrato_start
        phase = 2.0 * math.pi * (position / self.period + self.phase_shift / 100.0)
        value = self.depth * (math.sin(phase) + self.drift / 100.0)

        fade_in_length = vibrato_length * self.fade_in / 100.0
        if fade_in_length > 0 and position < fade_in_length:
            value *= position / fade_in_length

        fade_out_length = vibrato_length * self.fade_out / 100.0
        remaining = vibrato_length - position
        if fade_out_length > 0 and remaining < fade_out_length:
            value *= remaining / fade_out_length

        return value


@dataclass
class NotePitchData:
    """Pitch points and vibrato of one USTX note."""

    points: List[NotePitchPoint] = field(default_factory=list)
    vibrato: VibratoParams = field(default_factory=VibratoParams)


@dataclass
class PartPitchData:
    """
    Pitch data of one voice part.

    Attributes:
        curve: ``pitd`` samples as (absolute tick, cents)
        notes: Pitch data parallel to the part's notes
    """

    curve: List[Tuple[int, int]] = field(default_factory=list)
    notes: List[NotePitchData] = field(default_factory=list)


@dataclass
class _RenderedNote:
    """A note with its pitch points resolved to absolute ticks."""

    note: Note
    start: float
    ticks: List[float]
    cents: List[float]
    shapes: List[Shape]
    vibrato: VibratoParams
    start_ms: float
    end_ms: float

    def cents_at(self, tick: float, transformer: TickTimeTransformer) -> float:
        """Offset from this note's key, in cents, at an absolute tick."""
        value = 0.0
        if self.ticks:
            if tick <= self.ticks[0]:
                value = self.cents[0]
            elif tick >= self.ticks[-1]:
                value = self.cents[-1]
            else:
                i = bisect_right(self.ticks, tick) - 1
                x0, x1 = self.ticks[i], self.ticks[i + 1]
                y0, y1 = self.cents[i], self.cents[i + 1]
                if x1 <= x0:
                    value = y1
                else:
                    ratio = self.shapes[i].ease((tick - x0) / (x1 - x0))
                    value = y0 + (y1 - y0) * ratio

        return value + self.vibrato.value_at(
            transformer.tick_to_ms(tick), self.start_ms, self.end_ms
        )


class NotePitchRenderer:
    """
    Renders the absolute pitch produced by a sequence of notes.

    Each note owns the curve from its earliest pitch point (or its onset)
    until the next note takes over; later notes win where they reach back
    over earlier ones.
    """

    def __init__(
        self,
        notes: Sequence[Note],
        note_pitches: Sequence[NotePitchData],
        tempos: Sequence[Tempo],
    ):
        self.notes = list(notes)
        self.transformer = TickTimeTransformer(tempos)
        self._rendered = [
            self._render(note, data) for note, data in zip(self.notes, note_pitches)
        ]

        # Monotonic ownership starts, later notes taking precedence
        self._starts: List[float] = [r.start for r in self._rendered]
        for i in range(len(self._starts) - 2, -1, -1):
            self._starts[i] = min(self._starts[i], self._starts[i + 1])

        self._onsets = [n.tick_on for n in self.notes]

    def _render(self, note: Note, data: NotePitchData) -> _RenderedNote:
        start_ms = self.transformer.tick_to_ms(note.tick_on)
        end_ms = self.transformer.tick_to_ms(note.tick_off)
        points = sorted(data.points, key=lambda p: p.x)
        ticks = [self.transformer.ms_to_tick(start_ms + p.x) for p in points]
        start = min([float(note.tick_on)] + ticks[:1])
        return _RenderedNote(
            note=note,
            start=start,
            ticks=ticks,
            cents=[p.y * POINT_UNIT_CENTS for p in points],
            shapes=[p.shape for p in points],
            vibrato=data.vibrato,
            start_ms=start_ms,
            end_ms=end_ms,
        )

    @property
    def span(self) -> Optional[Tuple[int, int]]:
        """(first onset, last offset) of the rendered notes."""
        if not self.notes:
            return None
        return self.notes[0].tick_on, self.notes[-1].tick_off

    def sounding_key(self, tick: float) -> int:
        """Key of the latest note starting at or before ``tick``."""
        index = max(0, bisect_right(self._onsets, tick) - 1)
        return self.notes[index].key

    def absolute_cents(self, tick: float) -> float:
        """Absolute pitch in cents (key * 100 + deviation) at a tick."""
        if not self._rendered:
            return 0.0
        index = max(0, bisect_right(self._starts, tick) - 1)
        owner = self._rendered[index]
        return owner.note.key * 100.0 + owner.cents_at(tick, self.transformer)


def _curve_value_at(curve: Sequence[Tuple[int, int]], ticks: Sequence[int], tick: int) -> float:
    """Linearly interpolated ``pitd`` value; zero outside the curve."""
    if not curve or tick < ticks[0] or tick > ticks[-1]:
        return 0.0
    i = bisect_right(ticks, tick) - 1
    x0, y0 = curve[i]
    if x0 == tick or i + 1 >= len(curve):
        return float(y0)
    x1, y1 = curve[i + 1]
    if x1 <= x0:
        return float(y1)
    return y0 + (y1 - y0) * (tick - x0) / (x1 - x0)


def _sample_ticks(start: int, end: int) -> List[int]:
    ticks = list(range(start, end, SAMPLING_INTERVAL_TICK))
    ticks.append(end)
    return ticks


def pitch_from_ustx_part(
    notes: Sequence[Note],
    part_pitch: PartPitchData,
    tempos: Sequence[Tempo],
) -> Optional[Pitch]:
    """
    Build a Pitch curve for one voice part.

    Args:
        notes: Validated notes of the part, absolute ticks
        part_pitch: Note pitch data parallel to ``notes`` and the ``pitd`` curve
        tempos: Project tempo map

    Returns:
        Pitch sampled every SAMPLING_INTERVAL_TICK ticks over the notes' span,
        or None if the part has no notes
    """
    if not notes:
        return None

    note_pitches = list(part_pitch.notes)
    if len(note_pitches) < len(notes):
        note_pitches += [NotePitchData() for _ in range(len(notes) - len(note_pitches))]

    renderer = NotePitchRenderer(notes, note_pitches, tempos)
    curve = sorted(part_pitch.curve, key=lambda p: p[0])
    curve_ticks = [p[0] for p in curve]

    start, end = renderer.span
    points = []
    for tick in _sample_ticks(start, end):
        absolute = renderer.absolute_cents(tick) + _curve_value_at(curve, curve_ticks, tick)
        cents = round(absolute - renderer.sounding_key(tick) * 100.0, 1)
        points.append(PitchPoint(tick, cents))

    return Pitch(points)


def merge_pitch_from_ustx_parts(existing: Optional[Pitch], new: Optional[Pitch]) -> Optional[Pitch]:
    """
    Merge the pitch of a later voice part into a track's accumulated pitch.

    Points of ``existing`` inside the tick range of ``new`` are replaced.
    """
    if existing is None or existing.is_empty:
        return new if new is not None else existing
    if new is None or new.is_empty:
        return existing

    before = [p for p in existing.points if p.tick < new.first_tick]
    after = [p for p in existing.points if p.tick > new.last_tick]
    return Pitch(before + list(new.points) + after)


def reduce_repeated_pitch_points(pitch: Optional[Pitch]) -> Optional[Pitch]:
    """Collapse adjacent samples with identical tick and value."""
    if pitch is None:
        return None

    reduced: List[PitchPoint] = []
    for point in pitch.points:
        if reduced and reduced[-1].tick == point.tick and reduced[-1].cents == point.cents:
            continue
        reduced.append(point)
    return Pitch(reduced)


def legato_first_point_value(last_note: Optional[Note], this_note: Note) -> float:
    """
    First pitch point value for an exported note.

    A note starting exactly where the previous one ends glides from the
    previous key, expressed in 10-cent units; otherwise it starts at 0.
    """
    if last_note is not None and last_note.tick_off == this_note.tick_on:
        return (last_note.key - this_note.key) * 10.0
    return 0.0


def to_ustx_pitch_curve(
    pitch: Optional[Pitch],
    notes: Sequence[Note],
    note_pitches: Sequence[NotePitchData],
    tempos: Sequence[Tempo],
) -> List[Tuple[int, int]]:
    """
    Convert a track's Pitch into ``pitd`` samples.

    Only samples within the notes' span are kept. Values are the cents
    needed on top of what ``note_pitches`` render for ``notes``.

    Returns:
        List of (tick, cents); empty if nothing can be exported
    """
    if pitch is None or pitch.is_empty or not notes:
        return []

    renderer = NotePitchRenderer(notes, note_pitches, tempos)
    start, end = renderer.span

    result: List[Tuple[int, int]] = []
    for point in pitch.points:
        if not start <= point.tick <= end:
            continue
        target = renderer.sounding_key(point.tick) * 100.0 + point.cents
        value = int(round(target - renderer.absolute_cents(point.tick)))
        if result and result[-1][0] == point.tick:
            result[-1] = (point.tick, value)
        else:
            result.append((point.tick, value))
    return result
