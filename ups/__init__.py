"""
ups

Track the values reported by checker scripts and flag what changed since
the last snapshot.
"""

from ups.errors import (
    AppNotRegisteredError,
    CheckFailedError,
    ConfigError,
    DataFileError,
    InvalidNameError,
    ScriptPathError,
    UpsError,
)
from ups.refresh import RefreshEngine, RefreshReport
from ups.registry import Registry, TrackedApplication
from ups.runner import ScriptRunner, ValueResult
from ups.store import DataStore

__all__ = [
    # Core
    'Registry',
    'TrackedApplication',
    'ScriptRunner',
    'ValueResult',
    'RefreshEngine',
    'RefreshReport',
    'DataStore',
    # Errors
    'UpsError',
    'ScriptPathError',
    'AppNotRegisteredError',
    'InvalidNameError',
    'CheckFailedError',
    'DataFileError',
    'ConfigError',
]
