"""
Script Runner

Runs a single checker script and normalizes its outcome into a value or None.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ups.errors import CheckFailedError

logger = logging.getLogger(__name__)


@dataclass
class ValueResult:
    """Outcome of one checker invocation."""
    value: Optional[str]
    returncode: Optional[int] = None
    stderr: str = ""
    error: Optional[str] = None  # spawn failure, timeout or worker exception

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def failed(cls, error: str) -> "ValueResult":
        """Result for a check that never produced an exit status."""
        return cls(value=None, error=error)

    def reason(self) -> Optional[str]:
        """Short description of why the check failed, if it did."""
        if self.ok:
            return None
        if self.error:
            return self.error
        if self.returncode:
            return f"exit status {self.returncode}"
        return "empty output"

    def raise_for_status(self, name: str) -> str:
        """Return the value, or raise CheckFailedError for strict callers."""
        if not self.ok:
            raise CheckFailedError(name, stderr=self.stderr, reason=self.reason())
        return self.value


class ScriptRunner:
    """Invokes checker scripts with no arguments and captures their output.

    A check succeeds when the process exits with status 0 and prints a
    non-empty value (after trimming whitespace). Every other outcome,
    including failing to start the process, yields ``ValueResult.value``
    of None instead of raising, so one broken checker never stops others.
    """

    def __init__(self, timeout: Optional[float] = None, console: Optional[Console] = None,
                 quiet: bool = False):
        self.timeout = timeout
        self.console = console or Console(stderr=True)
        self.quiet = quiet

    def run(self, script_path: str | Path, name: Optional[str] = None) -> ValueResult:
        """Run one checker script and return its normalized result."""
        label = name or str(script_path)
        result = self._execute(script_path)

        if result.ok:
            logger.debug("Checker for %s returned %r", label, result.value)
        else:
            logger.warning(
                "Checker for %s failed: %s%s",
                label,
                result.reason(),
                f" (stderr: {result.stderr.strip()[:200]})" if result.stderr.strip() else "",
            )
        self._notify(label, result)
        return result

    def _execute(self, script_path: str | Path) -> ValueResult:
        try:
            completed = subprocess.run(
                [str(script_path)],
                capture_output=True,
                text=True,
                errors="replace",
                stdin=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return ValueResult.failed(f"timed out after {self.timeout}s")
        except OSError as e:
            # Missing file, not executable, bad interpreter line
            return ValueResult.failed(f"can not run script: {e.strerror or e}")

        value = completed.stdout.strip()
        if completed.returncode != 0 or not value:
            return ValueResult(
                value=None,
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        if "\t" in value or "\n" in value or "\r" in value:
            return ValueResult(
                value=None,
                returncode=completed.returncode,
                stderr=completed.stderr,
                error="output is not a single line",
            )

        return ValueResult(
            value=value,
            returncode=completed.returncode,
            stderr=completed.stderr,
        )

    def _notify(self, label: str, result: ValueResult):
        """Print the one-line progress notice for a finished check."""
        if self.quiet:
            return
        if result.ok:
            self.console.print(f"[yellow]Checking `{escape(label)}`...[/yellow] [green]Ok[/green]", highlight=False)
        else:
            self.console.print(f"[yellow]Checking `{escape(label)}`...[/yellow] [red]Failed[/red]", highlight=False)
