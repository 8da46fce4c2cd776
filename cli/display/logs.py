"""
Logging setup for CLI commands.
"""

import logging

from rich.logging import RichHandler


def enable_verbose_logging() -> None:
    """Route library debug logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
