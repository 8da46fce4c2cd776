"""Data models for the generic project representation."""

from ustxconv.models.project import (
    DroppedItem,
    ExportNotification,
    ExportResult,
    Feature,
    Format,
    ImportParams,
    Note,
    Pitch,
    PitchPoint,
    Project,
    Tempo,
    TimeSignature,
    Track,
)

__all__ = [
    "DroppedItem",
    "ExportNotification",
    "ExportResult",
    "Feature",
    "Format",
    "ImportParams",
    "Note",
    "Pitch",
    "PitchPoint",
    "Project",
    "Tempo",
    "TimeSignature",
    "Track",
]
