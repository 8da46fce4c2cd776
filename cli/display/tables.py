"""
Rich table displays for project information.

Provides formatted output for USTX project analysis.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import (
    cents_range_str,
    density_bar,
    format_tempo,
    format_time_signature,
    key_range_str,
    tick_span_str,
)
from ustxconv.models.project import DroppedItem, Project

console = Console()


def display_project_info(
    project: Project, dropped: Optional[List[DroppedItem]] = None, filepath: str = ""
) -> None:
    """Display complete project information with Rich formatting."""

    header_content = f"""[bold]File:[/bold] {filepath or "N/A"}
[bold]Project:[/bold] {project.name or "N/A"}
[bold]Format:[/bold] {project.format.name}
[bold]Tracks:[/bold] {len(project.tracks)}
[bold]Notes:[/bold] {project.note_count}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]Project Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    display_timing(project)
    display_tracks(project)

    if dropped:
        display_dropped_items(dropped)


def display_timing(project: Project) -> None:
    """Display tempo and time signature maps side by side."""
    tempo_table = Table(title="Tempos", box=box.ROUNDED, header_style="bold cyan")
    tempo_table.add_column("Tick", style="dim", justify="right")
    tempo_table.add_column("Tempo")
    for tempo in project.tempos:
        tempo_table.add_row(str(tempo.tick_position), format_tempo(tempo.bpm))

    signature_table = Table(title="Time Signatures", box=box.ROUNDED, header_style="bold cyan")
    signature_table.add_column("Measure", style="dim", justify="right")
    signature_table.add_column("Signature")
    for signature in project.time_signatures:
        signature_table.add_row(
            str(signature.measure_position),
            format_time_signature(signature.numerator, signature.denominator),
        )

    console.print(tempo_table)
    console.print(signature_table)


def display_tracks(project: Project) -> None:
    """Display per-track summary."""
    total_notes = max(1, project.note_count)

    track_table = Table(
        title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold green"
    )
    track_table.add_column("#", style="dim", width=3)
    track_table.add_column("Name", style="cyan")
    track_table.add_column("Notes", justify="right")
    track_table.add_column("Share", width=36)
    track_table.add_column("Span")
    track_table.add_column("Keys")
    track_table.add_column("Pitch")

    for track in project.tracks:
        if track.pitch is None:
            pitch_str = "[dim]None[/dim]"
        else:
            pitch_str = (
                f"{len(track.pitch.points)} pts, "
                f"{cents_range_str(p.cents for p in track.pitch.points)}"
            )
        track_table.add_row(
            str(track.id),
            track.name,
            str(len(track.notes)),
            density_bar(len(track.notes), total_notes, width=12),
            tick_span_str(track.tick_span),
            key_range_str(n.key for n in track.notes),
            pitch_str,
        )

    console.print(track_table)


def display_dropped_items(dropped: List[DroppedItem]) -> None:
    """Display notes and voice parts excluded during import."""
    table = Table(
        title="Dropped During Import",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold yellow",
    )
    table.add_column("Kind", style="yellow")
    table.add_column("Part", justify="right")
    table.add_column("Track", justify="right")
    table.add_column("Note", justify="right")
    table.add_column("Reason")

    for item in dropped:
        table.add_row(
            item.kind,
            str(item.voice_part_index),
            str(item.track_index),
            str(item.note_index) if item.note_index is not None else "-",
            item.reason,
        )

    console.print(table)
