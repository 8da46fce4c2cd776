"""
Lyric field helpers.

Some phonemizers store phonemes inside the lyric as ``lyric [phonemes]``
or ``[phonemes]``.
"""

import re
from typing import Optional, Tuple

_PHONEME_SUFFIX = re.compile(r"\[([^\[\]]*)\]$")


def split_lyric(raw: str) -> Tuple[str, Optional[str]]:
    """
    Split a raw lyric into (lyric, phoneme).

    Examples:
        "ka [k a]" -> ("ka", "k a")
        "[k a]"    -> ("k a", "k a")
        "ka"       -> ("ka", None)
    """
    match = _PHONEME_SUFFIX.search(raw)
    if match is None:
        return raw, None

    phoneme = match.group(1).strip()
    lyric = raw[: match.start()].strip()
    return (lyric or phoneme), phoneme


def compose_lyric(lyric: str, phoneme: Optional[str] = None) -> str:
    """Build a raw lyric, appending `` [phoneme]`` when phoneme is not blank."""
    if phoneme is not None and phoneme.strip():
        return f"{lyric} [{phoneme}]"
    return lyric
