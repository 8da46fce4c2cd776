"""
USTX <-> generic project conversion.

Entry points for importing OpenUtau projects into the generic model and
exporting generic projects back to USTX.

Example:
    from ustxconv.converters import parse_file, generate

    project = parse_file("song.ustx")
    result = generate(project, [Feature.CONVERT_PITCH])
    Path(result.file_name).write_bytes(result.data)
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ustxconv.formats.ustx.reader import (
    UstxReader,
    default_tempos,
    default_time_signatures,
)
from ustxconv.formats.ustx.writer import UstxWriter
from ustxconv.models.project import (
    DroppedItem,
    ExportNotification,
    ExportResult,
    Feature,
    Format,
    ImportParams,
    Project,
)

logger = logging.getLogger(__name__)

FORMAT = Format.USTX


def parse_text(
    text: str,
    params: Optional[ImportParams] = None,
    input_file: Optional[Path] = None,
    dropped: Optional[List[DroppedItem]] = None,
) -> Project:
    """
    Convert USTX document text to a Project.

    Args:
        text: USTX YAML text
        params: Import options
        input_file: Source path recorded on the project
        dropped: Optional list receiving descriptors of excluded notes and parts

    Raises:
        UstxFormatError: If the document does not match the USTX schema
    """
    return UstxReader(params, dropped).parse_text(text, input_file=input_file)


def parse_file(
    filepath: Union[str, Path],
    params: Optional[ImportParams] = None,
    dropped: Optional[List[DroppedItem]] = None,
) -> Project:
    """Read and convert a USTX file."""
    return UstxReader.read(filepath, params, dropped)


async def parse(
    filepath: Union[str, Path],
    params: Optional[ImportParams] = None,
    dropped: Optional[List[DroppedItem]] = None,
) -> Project:
    """
    Read a USTX file without blocking the event loop, then convert it.

    Only the file read is awaited; conversion itself is synchronous.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    text = await asyncio.to_thread(filepath.read_text, encoding="utf-8")
    return parse_text(text, params, input_file=filepath, dropped=dropped)


def generate_text(
    project: Project,
    features: Sequence[Feature] = (),
    template_path: Optional[Union[str, Path]] = None,
) -> str:
    """Convert a Project to USTX YAML text."""
    return UstxWriter(template_path).to_text(project, features)


def generate(
    project: Project,
    features: Sequence[Feature] = (),
    template_path: Optional[Union[str, Path]] = None,
) -> ExportResult:
    """
    Convert a Project to a USTX export artifact.

    Args:
        project: Project to export
        features: Requested export features
        template_path: Optional USTX template file

    Returns:
        ExportResult with UTF-8 document bytes, the suggested file name and
        a pitch notification when pitch conversion was requested
    """
    text = generate_text(project, features, template_path)
    notifications = []
    if Feature.CONVERT_PITCH in features:
        notifications.append(ExportNotification.PITCH_DATA_EXPORTED)

    result = ExportResult(
        data=text.encode("utf-8"),
        file_name=FORMAT.get_file_name(project.name),
        notifications=notifications,
    )
    logger.debug("Generated %s (%d bytes)", result.file_name, len(result.data))
    return result


__all__ = [
    "default_tempos",
    "default_time_signatures",
    "generate",
    "generate_text",
    "parse",
    "parse_file",
    "parse_text",
]
