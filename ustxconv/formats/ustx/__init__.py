"""USTX (OpenUtau) format handlers."""

from ustxconv.formats.ustx.reader import UstxReader
from ustxconv.formats.ustx.schema import UstxFormatError, UstxProject, dump_project, load_project
from ustxconv.formats.ustx.template import ExportDefaults, load_export_defaults
from ustxconv.formats.ustx.writer import UstxWriter

__all__ = [
    "UstxReader",
    "UstxWriter",
    "UstxFormatError",
    "UstxProject",
    "ExportDefaults",
    "dump_project",
    "load_project",
    "load_export_defaults",
]
