"""Error kinds and load outcomes for the settings store."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class SettingsError(Exception):
    """Base class for settings store failures."""


class SettingsFileError(SettingsError):
    """The settings directory or file could not be created, read or written."""


class SettingsParseError(SettingsError):
    """The settings file exists but its contents could not be understood."""


class SettingsValueError(SettingsError):
    """A value passed to a setter cannot be stored in the settings file."""


class LoadStatus(Enum):
    """How the store came to be initialized."""

    CREATED = "created"  # first run, defaults written
    LOADED = "loaded"
    FAILED = "failed"  # running on defaults


@dataclass
class LoadResult:
    """Outcome of SettingsStore.load()."""

    status: LoadStatus
    path: Path
    error: Optional[SettingsError] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is not LoadStatus.FAILED
