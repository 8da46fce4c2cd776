"""
CLI display modules.
"""

from cli.display.tables import (
    display_dropped_items,
    display_project_info,
    display_timing,
    display_tracks,
)

__all__ = [
    "display_dropped_items",
    "display_project_info",
    "display_timing",
    "display_tracks",
]
