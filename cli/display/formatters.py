"""
Display formatting utilities for CLI output.

Provides bar graphics, note names and other formatting helpers.
"""

from typing import Optional, Tuple

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def density_bar(
    used: int,
    total: int,
    width: int = 20,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """
    Create a density/usage bar with percentage.

    Returns:
        Formatted string like "[████████░░░░░░░░░░░░] 42.0% (128/304)"
    """
    if total <= 0:
        return f"[{empty_char * width}]   0.0% (0/0)"

    clamped = max(0, min(used, total))
    percent = (clamped / total) * 100
    fill_count = int((clamped / total) * width)
    empty_count = width - fill_count

    bar = filled_char * fill_count + empty_char * empty_count

    return f"[{bar}] {percent:5.1f}% ({used}/{total})"


def key_name(key: int) -> str:
    """
    Format a MIDI key as a note name.

    Returns:
        "C4" for 60, "A4" for 69
    """
    return f"{NOTE_NAMES[key % 12]}{key // 12 - 1}"


def key_range_str(keys) -> str:
    """
    Format the range of a set of keys.

    Returns:
        "C4-G5 (60-79)" or "N/A"
    """
    keys = list(keys)
    if not keys:
        return "N/A"
    low, high = min(keys), max(keys)
    return f"{key_name(low)}-{key_name(high)} ({low}-{high})"


def tick_span_str(span: Optional[Tuple[int, int]]) -> str:
    """
    Format a tick span.

    Returns:
        "0-1920 (1920 ticks)" or "N/A"
    """
    if span is None:
        return "N/A"
    start, end = span
    return f"{start}-{end} ({end - start} ticks)"


def format_tempo(bpm: float) -> str:
    """
    Format tempo.

    Returns:
        "120.0 BPM"
    """
    return f"{bpm:.1f} BPM"


def format_time_signature(numerator: int, denominator: int) -> str:
    """Format a time signature as "4/4"."""
    return f"{numerator}/{denominator}"


def cents_range_str(values) -> str:
    """
    Format the range of pitch offsets.

    Returns:
        "-120.0..+35.5 cents" or "N/A"
    """
    values = list(values)
    if not values:
        return "N/A"
    return f"{min(values):+.1f}..{max(values):+.1f} cents"
