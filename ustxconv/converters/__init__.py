"""
Project converters between USTX and the generic model.

Example:
    from ustxconv.converters import parse_file, generate

    project = parse_file("song.ustx")
    result = generate(project)
"""

from ustxconv.converters.ustx import (
    default_tempos,
    default_time_signatures,
    generate,
    generate_text,
    parse,
    parse_file,
    parse_text,
)

__all__ = [
    "default_tempos",
    "default_time_signatures",
    "generate",
    "generate_text",
    "parse",
    "parse_file",
    "parse_text",
]
