"""
Info command - display project information.
"""

from pathlib import Path
from typing import List

import typer
from rich.console import Console

from cli.display.logs import enable_verbose_logging
from cli.display.tables import display_project_info
from ustxconv.converters import parse_file
from ustxconv.models.project import DroppedItem, ImportParams

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="USTX project file"),
    simple: bool = typer.Option(False, "--simple", "-s", help="Skip pitch data (simple import)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """
    Show tracks, timing and pitch summary of a USTX project.

    Examples:

        ustxconv info song.ustx

        ustxconv info song.ustx --simple
    """
    if verbose:
        enable_verbose_logging()

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    dropped: List[DroppedItem] = []
    try:
        project = parse_file(file, ImportParams(simple_import=simple), dropped)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    display_project_info(project, dropped, str(file))


if __name__ == "__main__":
    app()
