"""MercuryTrade settings store."""

from .app import create_store
from .storage import SettingsStore

__version__ = "1.0.0"

__all__ = ["SettingsStore", "create_store"]
