"""
ups Data Store

Tab-separated persistence for the registry. One line per application:

    name<TAB>snapshot<TAB>latest<TAB>script_path<TAB>

``NONE`` stands for a missing snapshot or latest value. The format has no
version marker, so any change to it is breaking.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ups.errors import DataFileError
from ups.paths import data_path
from ups.registry import Registry, TrackedApplication

logger = logging.getLogger(__name__)

NONE = "NONE"
FIELD_SEP = "\t"


def _encode_value(value: Optional[str]) -> str:
    return NONE if value is None else value


def _decode_value(token: str) -> Optional[str]:
    return None if token == NONE else token


def format_line(app: TrackedApplication) -> str:
    """Serialize one application, including the trailing tab and newline."""
    fields = [
        app.name,
        _encode_value(app.snapshot_value),
        _encode_value(app.latest_value),
        str(app.script_path),
    ]
    for value in fields:
        if not value or any(ch in value for ch in "\t\n\r"):
            raise DataFileError(f"Can not store {value!r} for app `{app.name}`: "
                                "values must be non-empty and free of tabs and newlines")
    return FIELD_SEP.join(fields) + FIELD_SEP + "\n"


def parse_line(line: str, line_number: Optional[int] = None) -> TrackedApplication:
    """Parse one data line. Raises DataFileError if a field is missing."""
    fields = line.rstrip("\r\n").split(FIELD_SEP)
    # The trailing tab produces an empty last field; tolerate it, don't require it
    while fields and fields[-1] == "":
        fields.pop()

    if len(fields) < 4 or not all(fields[:4]):
        raise DataFileError(f"expected 4 fields, got {line.rstrip()!r}", line_number)

    name, snapshot_value, latest_value, script_path = fields[:4]
    return TrackedApplication(
        name=name,
        script_path=Path(script_path),
        latest_value=_decode_value(latest_value),
        snapshot_value=_decode_value(snapshot_value),
    )


class DataStore:
    """Loads and saves the registry to a single data file."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else data_path()

    def load(self) -> Registry:
        """Read the data file into a new Registry.

        A missing file yields an empty registry. Any malformed line fails
        the whole load; nothing partial is returned.
        """
        if not self.path.exists():
            logger.debug("No data file at %s, starting empty", self.path)
            return Registry()

        registry = Registry()
        with open(self.path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                registry.add(parse_line(line, line_number))

        logger.debug("Loaded %d apps from %s", len(registry), self.path)
        return registry

    def save(self, registry: Registry):
        """Rewrite the data file with the registry's current state.

        Writes to a temporary file next to the target and renames it into
        place, creating the directory on first use.
        """
        # Serialize first so a bad value leaves the old file untouched
        lines = [format_line(app) for _, app in sorted(registry.all())]

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".data-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.writelines(lines)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved %d apps to %s", len(lines), self.path)

    @contextmanager
    def session(self) -> Iterator[Registry]:
        """Load the registry, and save it again on every exit path.

        If the body raises, the save is still attempted; a save failure is
        logged and never replaces the body's exception. A failed load
        raises before the body runs and nothing is saved.
        """
        registry = self.load()
        try:
            yield registry
        finally:
            try:
                self.save(registry)
            except (OSError, DataFileError) as e:
                logger.error("Failed to save data file %s: %s", self.path, e)
