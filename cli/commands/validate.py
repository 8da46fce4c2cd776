"""
Validate command - check a USTX project for schema and content problems.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.logs import enable_verbose_logging
from ustxconv.converters import parse_text
from ustxconv.formats.ustx.schema import UstxFormatError
from ustxconv.models.project import DroppedItem, ImportParams, Project
from ustxconv.utils.validation import (
    ValidationError,
    validate_midi_value,
    validate_tempo,
    validate_time_signature,
)

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    message: str


@dataclass
class ValidationResult:
    """Result of validating a USTX file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class UstxValidator:
    """Validate USTX document structure and content."""

    def __init__(self, text: str, filepath: str):
        self.text = text
        self.filepath = filepath
        self.issues: List[ValidationIssue] = []
        self.dropped: List[DroppedItem] = []
        self.project: Optional[Project] = None

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []
        self.dropped = []

        self._validate_schema()
        if self.project is not None:
            self._validate_tempos()
            self._validate_time_signatures()
            self._validate_notes()
            self._validate_dropped()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=not errors,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add(self, severity: str, area: str, message: str) -> None:
        self.issues.append(ValidationIssue(severity, area, message))

    def _validate_schema(self) -> None:
        try:
            self.project = parse_text(self.text, ImportParams(simple_import=True), dropped=self.dropped)
        except UstxFormatError as e:
            self._add("error", "Schema", str(e))
            return
        self._add("info", "Schema", "Document matches the USTX schema")

    def _validate_tempos(self) -> None:
        ok = True
        for tempo in self.project.tempos:
            try:
                validate_tempo(tempo.bpm)
            except ValidationError as e:
                self._add("error", "Tempo", f"tick {tempo.tick_position}: {e}")
                ok = False
        if ok:
            self._add("info", "Tempo", f"{len(self.project.tempos)} tempo(s) in range")

    def _validate_time_signatures(self) -> None:
        ok = True
        for signature in self.project.time_signatures:
            try:
                validate_time_signature(signature.numerator, signature.denominator)
            except ValidationError as e:
                self._add("error", "Time Signature", f"measure {signature.measure_position}: {e}")
                ok = False
        if ok:
            self._add(
                "info",
                "Time Signature",
                f"{len(self.project.time_signatures)} time signature(s) valid",
            )

    def _validate_notes(self) -> None:
        ok = True
        for track in self.project.tracks:
            for note in track.notes:
                try:
                    validate_midi_value(note.key, "Note key")
                except ValidationError as e:
                    self._add("error", "Notes", f"track {track.id} note {note.id}: {e}")
                    ok = False
                if note.length <= 0:
                    self._add(
                        "warning",
                        "Notes",
                        f"track {track.id} note {note.id}: non-positive length {note.length}",
                    )
                    ok = False
        if ok:
            self._add("info", "Notes", f"{self.project.note_count} note(s) valid")

    def _validate_dropped(self) -> None:
        for item in self.dropped:
            where = f"part {item.voice_part_index}"
            if item.note_index is not None:
                where += f" note {item.note_index}"
            self._add("warning", "Dropped", f"{item.kind} ({where}): {item.reason}")


def display_validation(result: ValidationResult) -> None:
    """Display validation result with Rich formatting."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    border = "green" if result.valid else "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {result.filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=16)
        table.add_column("Message")

        for issue in result.errors:
            table.add_row("[red]ERROR[/red]", issue.area, issue.message)

        for issue in result.warnings:
            table.add_row("[yellow]WARN[/yellow]", issue.area, issue.message)

        console.print(table)

    if result.info and (not result.errors and not result.warnings):
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("", width=60)

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {issue.area}: {issue.message}")

        console.print(info_table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="USTX file to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate a USTX project's structure and content.

    Checks for:

    - Conformance to the USTX schema
    - Valid tempo and time signature values
    - Note keys in MIDI range
    - Overlapping notes and voice parts on missing tracks

    Examples:

        ustxconv validate song.ustx

        ustxconv validate song.ustx --strict
    """
    if verbose:
        enable_verbose_logging()

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    text = file.read_text(encoding="utf-8")

    validator = UstxValidator(text, str(file))
    result = validator.validate()

    if strict and result.warnings:
        result.valid = False

    display_validation(result)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
