"""
Convert command - normalize a USTX project through the generic model.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cli.display.logs import enable_verbose_logging
from ustxconv.converters import generate, parse_file
from ustxconv.models.project import DroppedItem, ExportNotification, Feature, ImportParams

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source file (.ustx)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    pitch: bool = typer.Option(True, "--pitch/--no-pitch", help="Export pitch curves"),
    simple: bool = typer.Option(False, "--simple", "-s", help="Skip pitch data on import"),
    template: Optional[Path] = typer.Option(
        None, "--template", "-t", help="Template USTX file for export defaults"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Re-export a USTX project through the generic model.

    Overlapping notes are removed, notes are renumbered and pitch is
    rebuilt as a single curve per track.

    Examples:

        ustxconv convert song.ustx -o clean.ustx

        ustxconv convert song.ustx --no-pitch -t template.ustx
    """
    if verbose:
        enable_verbose_logging()

    if not source.exists():
        console.print(f"[red]Error: Source file not found: {source}[/red]")
        raise typer.Exit(1)

    if source.suffix.lower() != ".ustx":
        console.print(f"[red]Error: Unknown file type: {source.suffix}[/red]")
        console.print("Supported formats: .ustx (OpenUtau)")
        raise typer.Exit(1)

    features = [Feature.CONVERT_PITCH] if pitch else []
    dropped: List[DroppedItem] = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Converting USTX...", total=None)

        try:
            project = parse_file(source, ImportParams(simple_import=simple), dropped)
            result = generate(project, features, template)

            output_path = output or source.with_name(result.file_name)
            if output is None and output_path.resolve() == source.resolve():
                output_path = source.with_name(f"{source.stem}_converted{source.suffix}")
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "wb") as f:
                f.write(result.data)

            progress.update(task, description="Done!")

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(
        f"[dim]Tracks: {len(project.tracks)}, notes: {project.note_count}, "
        f"output size: {len(result.data)} bytes[/dim]"
    )

    if dropped:
        console.print(f"[yellow]Dropped {len(dropped)} overlapping or orphaned item(s)[/yellow]")

    if ExportNotification.PITCH_DATA_EXPORTED in result.notifications:
        console.print("[cyan]Pitch data exported as 'pitd' curves[/cyan]")


if __name__ == "__main__":
    app()
