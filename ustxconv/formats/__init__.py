"""Format handlers."""

from ustxconv.formats.ustx import UstxReader, UstxWriter

__all__ = ["UstxReader", "UstxWriter"]
