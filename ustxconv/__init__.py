"""
ustxconv - Converter between OpenUtau USTX projects and a generic
singing-synthesis project model.

This library provides tools to:
- Read USTX projects (.ustx) into the generic Project model
- Write generic projects back to USTX, optionally with pitch curves
- Reconcile note pitch points and vibrato with absolute pitch curves

Example usage:
    from ustxconv import UstxReader, UstxWriter, Feature

    project = UstxReader.read("song.ustx")
    UstxWriter.write(project, "out.ustx", [Feature.CONVERT_PITCH])
"""

__version__ = "0.1.0"
__author__ = "ustxconv Contributors"

from ustxconv.formats.ustx.reader import UstxReader
from ustxconv.formats.ustx.schema import UstxFormatError
from ustxconv.formats.ustx.writer import UstxWriter
from ustxconv.models.project import (
    ExportNotification,
    ExportResult,
    Feature,
    Format,
    ImportParams,
    Note,
    Pitch,
    Project,
    Track,
)

__all__ = [
    "UstxReader",
    "UstxWriter",
    "UstxFormatError",
    "ExportNotification",
    "ExportResult",
    "Feature",
    "Format",
    "ImportParams",
    "Note",
    "Pitch",
    "Project",
    "Track",
]
