"""
Tick <-> millisecond conversion over a tempo map.
"""

from bisect import bisect_right
from typing import List, Sequence

from ustxconv.models.project import Tempo

DEFAULT_RESOLUTION = 480  # ticks per quarter note
DEFAULT_BPM = 120.0


class TickTimeTransformer:
    """
    Converts between ticks and milliseconds for a tempo map.

    Tempos are sorted by tick; a map without an entry at tick 0 uses the
    first tempo from the start. An empty map means 120 BPM.

    Example:
        transformer = TickTimeTransformer([Tempo(0, 120.0)])
        transformer.tick_to_ms(480)  # 500.0
    """

    def __init__(self, tempos: Sequence[Tempo], resolution: int = DEFAULT_RESOLUTION):
        self.resolution = resolution
        ordered = sorted(tempos, key=lambda t: t.tick_position)
        if not ordered:
            ordered = [Tempo(0, DEFAULT_BPM)]
        if ordered[0].tick_position > 0:
            ordered.insert(0, Tempo(0, ordered[0].bpm))

        self._ticks: List[int] = []
        self._bpms: List[float] = []
        self._start_ms: List[float] = []

        elapsed = 0.0
        for i, tempo in enumerate(ordered):
            if i > 0:
                elapsed += self._ms_per_tick(self._bpms[-1]) * (
                    tempo.tick_position - self._ticks[-1]
                )
            self._ticks.append(tempo.tick_position)
            self._bpms.append(tempo.bpm)
            self._start_ms.append(elapsed)

    def _ms_per_tick(self, bpm: float) -> float:
        return 60000.0 / (bpm * self.resolution)

    def tick_to_ms(self, tick: float) -> float:
        """Convert an absolute tick to milliseconds."""
        index = max(0, bisect_right(self._ticks, tick) - 1)
        return self._start_ms[index] + (tick - self._ticks[index]) * self._ms_per_tick(
            self._bpms[index]
        )

    def ms_to_tick(self, ms: float) -> float:
        """Convert milliseconds to a (fractional) absolute tick."""
        index = max(0, bisect_right(self._start_ms, ms) - 1)
        return self._ticks[index] + (ms - self._start_ms[index]) / self._ms_per_tick(
            self._bpms[index]
        )
