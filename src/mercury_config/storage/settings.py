"""Persistent application settings backed by app-config.json."""

import json
import os
import threading
from pathlib import Path
from dataclasses import replace
from typing import Any, Callable, Optional, Union
import logging

from ..core.events import Event, EventBus, EventType
from .defaults import (
    DEFAULT_APP_SETTINGS,
    default_as_string,
    default_buttons,
    default_frame,
    default_frame_settings,
    minimum_frame_size,
)
from .errors import (
    LoadResult,
    LoadStatus,
    SettingsError,
    SettingsFileError,
    SettingsParseError,
    SettingsValueError,
)
from .models import FrameSettings, Point, ResponseButton, Size, WhisperNotifierStatus

logger = logging.getLogger(__name__)

APP_DIR_NAME = "MercuryTrade"
CONFIG_FILE_NAME = "app-config.json"
TEMP_DIR_NAME = "temp"
CONFIG_DIR_ENV = "MERCURY_TRADE_CONFIG_DIR"

_MISSING = object()


def _parse_bool(raw: Any) -> bool:
    # Only the string "true" (any case) counts as true
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.lower() == "true"
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_int(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"not an integer: {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        return int(raw.strip())
    raise ValueError(f"not an integer: {raw!r}")


def _parse_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValueError(f"not a string: {raw!r}")
    return raw


def _parse_notifier(raw: Any) -> WhisperNotifierStatus:
    if isinstance(raw, WhisperNotifierStatus):
        return raw
    try:
        return WhisperNotifierStatus[raw]
    except (KeyError, TypeError):
        raise ValueError(f"unknown notifier mode: {raw!r}") from None


_SCALAR_PARSERS: dict[str, Callable[[Any], Any]] = {
    "whisperNotifier": _parse_notifier,
    "decayTime": _parse_int,
    "minOpacity": _parse_int,
    "maxOpacity": _parse_int,
    "showOnStartUp": _parse_bool,
    "showPatchNotes": _parse_bool,
    "gamePath": _parse_str,
    "flowDirection": _parse_str,
    "tradeMode": _parse_str,
    "limitMsgCount": _parse_int,
    "expandedMsgCount": _parse_int,
    "itemsGridEnable": _parse_bool,
    "checkUpdateOnStartUp": _parse_bool,
    "dismissAfterKick": _parse_bool,
}


def _to_json(value: Any) -> Any:
    if isinstance(value, WhisperNotifierStatus):
        return value.name
    return value


class SettingsStore:
    """Cache of the user's preferences mirrored to a JSON document on disk.

    Every read is served from memory. Every write updates the cache and then
    rewrites the whole document, so the file always matches the cache. One
    instance is created at startup and handed to whoever needs it.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        event_bus: Optional[EventBus] = None,
        legacy_frame_size_fallback: bool = False,
    ):
        """Initialize the settings store.

        Args:
            config_dir: Directory holding app-config.json (platform default if None)
            event_bus: Bus to publish change notifications on
            legacy_frame_size_fallback: When saving the size of a window that has
                no stored layout, store the default layout instead of the
                requested size
        """
        self._settings_dir = self._get_settings_dir(config_dir)
        self._config_file = self._settings_dir / CONFIG_FILE_NAME
        self._event_bus = event_bus
        self._legacy_frame_size_fallback = legacy_frame_size_fallback
        self._lock = threading.RLock()
        self._loaded = False
        self.last_error: Optional[SettingsError] = None

        self._buttons: list[ResponseButton] = []
        self._frames: dict[str, FrameSettings] = {}
        self._values: dict[str, Any] = {}
        self._document: dict[str, Any] = {}
        self._reset_to_defaults()

    def _get_settings_dir(self, config_dir: Optional[Union[str, Path]]) -> Path:
        """Get the appropriate settings directory for the platform."""
        if config_dir is not None:
            return Path(config_dir)

        override = os.environ.get(CONFIG_DIR_ENV)
        if override:
            return Path(override)

        if os.name == "nt":  # Windows
            base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        else:  # Linux/Mac
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

        return base / APP_DIR_NAME

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> LoadResult:
        """Load settings from disk, creating the file with defaults on first run.

        Never raises. Whatever happens, every setting has a usable value
        afterwards.

        Returns:
            What happened, including any error and per-field warnings
        """
        with self._lock:
            if self._config_file.exists():
                result = self._load_config_file()
            else:
                result = self._create_default_config()
            self._loaded = True

        self._publish(EventType.SETTINGS_LOADED, result)
        return result

    def _create_default_config(self) -> LoadResult:
        try:
            self._settings_dir.mkdir(parents=True, exist_ok=True)
            (self._settings_dir / TEMP_DIR_NAME).mkdir(exist_ok=True)
        except OSError as e:
            return self._fail(SettingsFileError(f"Failed to create {self._settings_dir}: {e}"))

        self._reset_to_defaults()
        if not self._write_document():
            return LoadResult(LoadStatus.FAILED, self._config_file, error=self.last_error)

        logger.info(f"Created default settings at {self._config_file}")
        return LoadResult(LoadStatus.CREATED, self._config_file)

    def _load_config_file(self) -> LoadResult:
        try:
            with open(self._config_file, "r", encoding="utf-8") as f:
                root = json.load(f)
        except ValueError as e:
            return self._fail(SettingsParseError(f"{self._config_file} is not valid JSON: {e}"))
        except OSError as e:
            return self._fail(SettingsFileError(f"Failed to read {self._config_file}: {e}"))

        if not isinstance(root, dict):
            return self._fail(
                SettingsParseError(f"{self._config_file} does not contain a JSON object")
            )

        warnings: list[str] = []
        self._document = root

        buttons = self._read_buttons(root.get("buttons"))
        if buttons is None:
            warnings.append("Button list missing or malformed, restoring defaults")
            self.save_buttons_config(default_buttons(), notify=False)
        else:
            self._buttons = buttons

        self._frames = self._read_frames(root.get("framesSettings"), warnings)

        for key, parse in _SCALAR_PARSERS.items():
            raw = self.load_property(key)
            try:
                self._values[key] = parse(raw)
            except ValueError as e:
                warnings.append(f"Invalid value for '{key}', using default: {e}")
                self._values[key] = DEFAULT_APP_SETTINGS[key]
                self._document[key] = _to_json(self._values[key])

        for warning in warnings:
            logger.warning(warning)
        logger.info(f"Settings loaded from {self._config_file}")
        return LoadResult(LoadStatus.LOADED, self._config_file, warnings=warnings)

    def _fail(self, error: SettingsError) -> LoadResult:
        logger.error(f"Failed to load settings, using defaults: {error}")
        self.last_error = error
        self._reset_to_defaults()
        return LoadResult(LoadStatus.FAILED, self._config_file, error=error)

    def _reset_to_defaults(self) -> None:
        self._buttons = default_buttons()
        self._frames = default_frame_settings()
        self._values = dict(DEFAULT_APP_SETTINGS)
        self._document = {
            "buttons": self._buttons_to_json(self._buttons),
            "framesSettings": self._frames_to_json(),
        }
        for key, value in self._values.items():
            self._document[key] = _to_json(value)

    @staticmethod
    def _read_buttons(raw: Any) -> Optional[list[ResponseButton]]:
        """Parse the stored button list, or None if it cannot be trusted."""
        if not isinstance(raw, list):
            return None

        buttons = []
        for item in raw:
            if not isinstance(item, dict):
                return None
            button_id = item.get("id")
            title = item.get("title")
            text = item.get("value")
            if isinstance(button_id, bool) or not isinstance(button_id, int):
                return None
            if not isinstance(title, str) or not isinstance(text, str):
                return None

            # Records written before the kick/close flags existed have neither
            is_kick = is_close = False
            if item.get("isKick") is not None:
                try:
                    is_kick = _parse_bool(item["isKick"])
                    is_close = item.get("isClose") is not None and _parse_bool(item["isClose"])
                except ValueError:
                    return None

            buttons.append(ResponseButton(button_id, title, text, is_kick, is_close))
        return buttons

    @staticmethod
    def _read_frames(raw: Any, warnings: list[str]) -> dict[str, FrameSettings]:
        if not isinstance(raw, list):
            if raw is not None:
                warnings.append("Window layouts are not a list, ignoring them")
            return {}

        frames = {}
        for item in raw:
            try:
                frame_id = item["frameClassName"]
                location = item["location"]
                size = item["size"]
                settings = FrameSettings(
                    Point(_parse_int(location["frameX"]), _parse_int(location["frameY"])),
                    Size(_parse_int(size["width"]), _parse_int(size["height"])),
                )
            except (KeyError, TypeError, ValueError):
                warnings.append(f"Skipping malformed window layout: {item!r}")
                continue
            if not isinstance(frame_id, str):
                warnings.append(f"Skipping window layout without a name: {item!r}")
                continue
            frames[frame_id] = settings
        return frames

    # ------------------------------------------------------------------
    # Document persistence
    # ------------------------------------------------------------------

    def load_property(self, key: str) -> Any:
        """Get the stored value for a key, or the string form of its default."""
        with self._lock:
            value = self._document.get(key)
        if value is None:
            return default_as_string(key)
        return value

    def save_property(self, key: str, value: Any) -> bool:
        """Set one key in the document and write the whole document to disk.

        Returns:
            True if the file was written
        """
        with self._lock:
            previous = self._document.get(key, _MISSING)
            self._document[key] = value
            try:
                payload = json.dumps(self._document, indent=2)
            except (TypeError, ValueError) as e:
                # Keep the document writable for every other key
                if previous is _MISSING:
                    del self._document[key]
                else:
                    self._document[key] = previous
                self.last_error = SettingsValueError(f"Cannot store {value!r} as '{key}': {e}")
                logger.error(f"Failed to save setting '{key}': {e}")
                return False
            return self._write_payload(payload)

    def _write_document(self) -> bool:
        return self._write_payload(json.dumps(self._document, indent=2))

    def _write_payload(self, payload: str) -> bool:
        tmp_file = self._config_file.with_name(self._config_file.name + ".tmp")
        try:
            self._settings_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_file, self._config_file)
        except OSError as e:
            self.last_error = SettingsFileError(f"Failed to write {self._config_file}: {e}")
            logger.error(f"Failed to save settings: {e}")
            try:
                tmp_file.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.debug(f"Could not remove {tmp_file}: {cleanup_error}")
            return False

        self.last_error = None
        logger.debug(f"Settings saved to {self._config_file}")
        return True

    def _publish(self, event_type: EventType, data: Any) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(Event(event_type, data))

    # ------------------------------------------------------------------
    # Quick-reply buttons
    # ------------------------------------------------------------------

    def get_buttons_config(self) -> list[ResponseButton]:
        """Get the quick-reply buttons in display order."""
        with self._lock:
            return [replace(button) for button in self._buttons]

    def save_buttons_config(self, buttons: list[ResponseButton], notify: bool = True) -> None:
        """Replace the quick-reply buttons and save them.

        Args:
            buttons: New button list, in display order
            notify: Publish a BUTTONS_CHANGED event
        """
        with self._lock:
            self._buttons = [replace(button) for button in buttons]
            self.save_property("buttons", self._buttons_to_json(self._buttons))
            snapshot = [replace(button) for button in self._buttons]

        if notify:
            self._publish(EventType.BUTTONS_CHANGED, snapshot)

    @staticmethod
    def _buttons_to_json(buttons: list[ResponseButton]) -> list[dict]:
        return [
            {
                "id": button.id,
                "title": button.title,
                "value": button.response_text,
                "isKick": "true" if button.is_kick else "false",
                "isClose": "true" if button.is_close else "false",
            }
            for button in buttons
        ]

    # ------------------------------------------------------------------
    # Window layouts
    # ------------------------------------------------------------------

    def get_frame_settings(self, frame_id: str) -> Optional[FrameSettings]:
        """Get the saved layout of a window.

        A window seen for the first time gets its default layout, which is
        saved straight away.

        Args:
            frame_id: Window identifier, e.g. "TimerFrame"

        Returns:
            The layout, or None if the window has neither a saved nor a
            default layout
        """
        with self._lock:
            settings = self._frames.get(frame_id)
            if settings is not None:
                return settings.copy()

            settings = default_frame(frame_id)
            if settings is None:
                logger.warning(f"No layout known for window '{frame_id}'")
                return None

            self._frames[frame_id] = settings
            self._save_frame_settings()
            snapshot = settings.copy()

        self._publish(EventType.FRAME_SETTINGS_CHANGED, (frame_id, snapshot))
        return snapshot.copy()

    def save_frame_location(self, frame_id: str, point: Point) -> None:
        """Save where a window was moved to."""
        with self._lock:
            settings = self._frames.get(frame_id)
            if settings is None:
                settings = default_frame(frame_id) or FrameSettings(Point(), Size())
                self._frames[frame_id] = settings
            settings.location = Point(point.x, point.y)
            self._save_frame_settings()
            snapshot = settings.copy()

        self._publish(EventType.FRAME_SETTINGS_CHANGED, (frame_id, snapshot))

    def save_frame_size(self, frame_id: str, size: Size) -> None:
        """Save the size a window was resized to.

        If the window has no stored layout yet, a layout is created with the
        requested size at the default position. With the legacy fallback
        enabled, the default layout is stored instead and the requested size
        is dropped.
        """
        with self._lock:
            settings = self._frames.get(frame_id)
            if settings is not None:
                settings.size = Size(size.width, size.height)
            elif self._legacy_frame_size_fallback:
                settings = default_frame(frame_id)
                if settings is None:
                    logger.warning(f"No layout known for window '{frame_id}', size not saved")
                    return
                self._frames[frame_id] = settings
            else:
                default = default_frame(frame_id)
                location = default.location if default is not None else Point()
                settings = FrameSettings(location, Size(size.width, size.height))
                self._frames[frame_id] = settings
            self._save_frame_settings()
            snapshot = settings.copy()

        self._publish(EventType.FRAME_SETTINGS_CHANGED, (frame_id, snapshot))

    def _save_frame_settings(self) -> None:
        self.save_property("framesSettings", self._frames_to_json())

    def _frames_to_json(self) -> list[dict]:
        return [
            {
                "frameClassName": frame_id,
                "location": {"frameX": settings.location.x, "frameY": settings.location.y},
                "size": {"width": settings.size.width, "height": settings.size.height},
            }
            for frame_id, settings in self._frames.items()
        ]

    @staticmethod
    def default_frame_settings() -> dict[str, FrameSettings]:
        """Get the built-in layout of every known window."""
        return default_frame_settings()

    @staticmethod
    def get_minimum_frame_size(frame_id: str) -> Optional[Size]:
        """Get the smallest size a window may be shrunk to."""
        return minimum_frame_size(frame_id)

    @staticmethod
    def is_valid_game_path(game_path: Union[str, Path]) -> bool:
        """Check that a directory looks like a game install (has logs/Client.txt)."""
        if not game_path:
            return False
        return (Path(game_path) / "logs" / "Client.txt").exists()

    # ------------------------------------------------------------------
    # Scalar settings
    # ------------------------------------------------------------------

    def _set_scalar(self, key: str, value: Any) -> None:
        with self._lock:
            previous = self._values[key]
            self._values[key] = value
            if not self.save_property(key, _to_json(value)) and isinstance(
                self.last_error, SettingsValueError
            ):
                self._values[key] = previous
                return
        self._publish(EventType.SETTING_CHANGED, (key, value))

    @property
    def whisper_notifier(self) -> WhisperNotifierStatus:
        return self._values["whisperNotifier"]

    @whisper_notifier.setter
    def whisper_notifier(self, value: WhisperNotifierStatus) -> None:
        self._set_scalar("whisperNotifier", value)

    @property
    def decay_time(self) -> int:
        """Seconds before an unanswered message fades out (0 disables)."""
        return self._values["decayTime"]

    @decay_time.setter
    def decay_time(self, value: int) -> None:
        self._set_scalar("decayTime", value)

    @property
    def min_opacity(self) -> int:
        return self._values["minOpacity"]

    @min_opacity.setter
    def min_opacity(self, value: int) -> None:
        self._set_scalar("minOpacity", value)

    @property
    def max_opacity(self) -> int:
        return self._values["maxOpacity"]

    @max_opacity.setter
    def max_opacity(self, value: int) -> None:
        self._set_scalar("maxOpacity", value)

    @property
    def game_path(self) -> str:
        return self._values["gamePath"]

    @game_path.setter
    def game_path(self, value: str) -> None:
        self._set_scalar("gamePath", value)

    @property
    def show_on_startup(self) -> bool:
        return self._values["showOnStartUp"]

    @show_on_startup.setter
    def show_on_startup(self, value: bool) -> None:
        self._set_scalar("showOnStartUp", value)

    @property
    def show_patch_notes(self) -> bool:
        return self._values["showPatchNotes"]

    @show_patch_notes.setter
    def show_patch_notes(self, value: bool) -> None:
        self._set_scalar("showPatchNotes", value)

    @property
    def flow_direction(self) -> str:
        """Direction new messages stack in: "DOWNWARDS" or "UPWARDS"."""
        return self._values["flowDirection"]

    @flow_direction.setter
    def flow_direction(self, value: str) -> None:
        self._set_scalar("flowDirection", value)

    @property
    def trade_mode(self) -> str:
        return self._values["tradeMode"]

    @trade_mode.setter
    def trade_mode(self, value: str) -> None:
        self._set_scalar("tradeMode", value)

    @property
    def limit_msg_count(self) -> int:
        return self._values["limitMsgCount"]

    @limit_msg_count.setter
    def limit_msg_count(self, value: int) -> None:
        self._set_scalar("limitMsgCount", value)

    @property
    def expanded_msg_count(self) -> int:
        return self._values["expandedMsgCount"]

    @expanded_msg_count.setter
    def expanded_msg_count(self, value: int) -> None:
        self._set_scalar("expandedMsgCount", value)

    @property
    def items_grid_enable(self) -> bool:
        return self._values["itemsGridEnable"]

    @items_grid_enable.setter
    def items_grid_enable(self, value: bool) -> None:
        self._set_scalar("itemsGridEnable", value)

    @property
    def check_update_on_startup(self) -> bool:
        return self._values["checkUpdateOnStartUp"]

    @check_update_on_startup.setter
    def check_update_on_startup(self, value: bool) -> None:
        self._set_scalar("checkUpdateOnStartUp", value)

    @property
    def dismiss_after_kick(self) -> bool:
        return self._values["dismissAfterKick"]

    @dismiss_after_kick.setter
    def dismiss_after_kick(self, value: bool) -> None:
        self._set_scalar("dismissAfterKick", value)

    # ------------------------------------------------------------------

    @property
    def settings_dir(self) -> Path:
        """Get the settings directory path."""
        return self._settings_dir

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def temp_dir(self) -> Path:
        return self._settings_dir / TEMP_DIR_NAME

    @property
    def is_loaded(self) -> bool:
        return self._loaded
