"""Storage and persistence layer."""

from .errors import (
    LoadResult,
    LoadStatus,
    SettingsError,
    SettingsFileError,
    SettingsParseError,
    SettingsValueError,
)
from .models import FrameSettings, Point, ResponseButton, Size, WhisperNotifierStatus
from .settings import SettingsStore

__all__ = [
    "SettingsStore",
    "LoadResult",
    "LoadStatus",
    "SettingsError",
    "SettingsFileError",
    "SettingsParseError",
    "SettingsValueError",
    "FrameSettings",
    "Point",
    "ResponseButton",
    "Size",
    "WhisperNotifierStatus",
]
