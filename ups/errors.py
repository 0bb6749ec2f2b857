"""
ups Errors

Exception hierarchy shared by the registry, runner, store and CLI.
"""

from typing import Optional


class UpsError(Exception):
    """Base class for errors reported to the user."""
    pass


class ScriptPathError(UpsError):
    """Raised when a checker script path cannot be resolved at insert time."""

    def __init__(self, script_path: str, reason: OSError):
        self.script_path = script_path
        self.reason = reason
        super().__init__(f"Can not resolve script `{script_path}`: {reason.strerror or reason}")


class InvalidNameError(UpsError):
    """Raised when an application name can not be stored in the data file."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid app name {name!r}: names must be non-empty and free of tabs and newlines")


class AppNotRegisteredError(UpsError, KeyError):
    """Raised when an application name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"App `{self.name}` is not registered."


class CheckFailedError(UpsError):
    """Raised by strict callers when a checker script did not produce a value."""

    def __init__(self, name: str, stderr: str = "", reason: Optional[str] = None):
        self.name = name
        self.stderr = stderr
        self.reason = reason
        message = f"Checking `{name}` failed"
        if reason:
            message += f" ({reason})"
        if stderr.strip():
            message += f":\n{stderr.rstrip()}"
        super().__init__(message)


class DataFileError(UpsError):
    """Raised when the data file can not be parsed or written."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Error while parsing data file (line {line_number}): {message}"
        super().__init__(message)


class ConfigError(UpsError):
    """Raised when configuration values are invalid."""
    pass
