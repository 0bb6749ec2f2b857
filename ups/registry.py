"""
Application Registry

In-memory mapping of application name to tracked state.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ups.errors import AppNotRegisteredError, InvalidNameError, ScriptPathError
from ups.runner import ScriptRunner

logger = logging.getLogger(__name__)


@dataclass
class TrackedApplication:
    """Tracked state for one application.

    ``None`` means no value recorded for ``latest_value`` or
    ``snapshot_value``; the on-disk ``NONE`` token only exists in the store.
    """
    name: str
    script_path: Path
    latest_value: Optional[str] = None
    snapshot_value: Optional[str] = None

    @property
    def up_to_date(self) -> bool:
        """True when the accepted snapshot matches the latest value exactly."""
        return self.snapshot_value == self.latest_value


def validate_name(name: str) -> str:
    """Reject names the data file can not hold."""
    if not name or any(ch in name for ch in "\t\n\r"):
        raise InvalidNameError(name)
    return name


def resolve_script_path(script_path: str | Path) -> Path:
    """Resolve a checker script to an absolute, canonical path.

    Raises ScriptPathError if the path does not exist or can not be read.
    """
    try:
        return Path(script_path).expanduser().resolve(strict=True)
    except OSError as e:
        raise ScriptPathError(str(script_path), e) from e


class Registry:
    """Registered applications keyed by name.

    Iteration order is not meaningful; callers that need a stable
    display order must sort.
    """

    def __init__(self, apps: Optional[dict[str, TrackedApplication]] = None):
        self._apps: dict[str, TrackedApplication] = dict(apps or {})

    def __len__(self) -> int:
        return len(self._apps)

    def __contains__(self, name: str) -> bool:
        return name in self._apps

    def __iter__(self) -> Iterator[TrackedApplication]:
        return iter(list(self._apps.values()))

    def insert(self, name: str, script_path: str | Path) -> TrackedApplication:
        """Register an application, replacing any previous entry with that name.

        The name is validated and the script path canonicalized first; on
        failure nothing changes.
        """
        validate_name(name)
        resolved = resolve_script_path(script_path)
        app = TrackedApplication(name=name, script_path=resolved)
        if name in self._apps:
            logger.info("Replacing registered app %s", name)
        self._apps[name] = app
        return app

    def add(self, app: TrackedApplication):
        """Add an application exactly as given (used by DataStore.load)."""
        self._apps[app.name] = app

    def remove(self, name: str) -> TrackedApplication:
        """Unregister an application and return its last state."""
        try:
            return self._apps.pop(name)
        except KeyError:
            raise AppNotRegisteredError(name) from None

    def get(self, name: str) -> TrackedApplication:
        """Look up an application or raise AppNotRegisteredError."""
        try:
            return self._apps[name]
        except KeyError:
            raise AppNotRegisteredError(name) from None

    def latest_value_of(self, name: str) -> Optional[str]:
        """Return the stored latest value without running the checker."""
        return self.get(name).latest_value

    def set_latest(self, name: str, value: Optional[str]):
        self.get(name).latest_value = value

    def snapshot(self, name: str, runner: ScriptRunner) -> TrackedApplication:
        """Re-measure an application and accept the result as its baseline.

        A failed check records None for both values; snapshotting
        "no value" is allowed.
        """
        app = self.get(name)
        result = runner.run(app.script_path, name=name)
        app.latest_value = result.value
        app.snapshot_value = result.value
        return app

    def all(self) -> list[tuple[str, TrackedApplication]]:
        """All (name, application) pairs, in no particular order."""
        return list(self._apps.items())
