"""
ustxconv - Convert and inspect OpenUtau USTX projects.

A CLI tool for normalizing USTX projects through the generic project model.
"""

import typer
from rich.console import Console

from cli.commands.convert import convert
from cli.commands.info import info
from cli.commands.validate import validate
from ustxconv import __version__

console = Console()

# Main app
app = typer.Typer(
    name="ustxconv",
    help="Convert and inspect OpenUtau USTX project files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="convert")(convert)
app.command(name="validate")(validate)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]ustxconv[/bold] version {__version__}")
    console.print("[dim]Converter between OpenUtau USTX and the generic project model[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    ustxconv - Convert and inspect OpenUtau USTX projects.

    [bold]Quick Start:[/bold]

        ustxconv info song.ustx              # Tracks, timing and pitch summary
        ustxconv validate song.ustx          # Schema and content checks
        ustxconv convert song.ustx -o out.ustx

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
