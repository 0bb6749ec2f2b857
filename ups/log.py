"""
ups Logging

Root logger setup; records go to stderr through rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = "WARNING") -> None:
    """Set the root level and install a single RichHandler on stderr.

    Unknown level names fall back to WARNING. Calling this again only
    changes the level.
    """
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)

    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root.addHandler(handler)
