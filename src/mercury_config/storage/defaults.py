"""Built-in fallback values for every setting the store knows about."""

from typing import Any, Optional

from .models import FrameSettings, Point, ResponseButton, Size, WhisperNotifierStatus

# Scalar settings, keyed by their name in app-config.json
DEFAULT_APP_SETTINGS: dict[str, Any] = {
    "decayTime": 0,
    "minOpacity": 100,
    "maxOpacity": 100,
    "showOnStartUp": True,
    "showPatchNotes": False,
    "whisperNotifier": WhisperNotifierStatus.ALWAYS,
    "gamePath": "",
    "flowDirection": "DOWNWARDS",
    "tradeMode": "DEFAULT",
    "limitMsgCount": 3,
    "expandedMsgCount": 0,
    "itemsGridEnable": True,
    "checkUpdateOnStartUp": True,
    "dismissAfterKick": False,
}

_DEFAULT_BUTTONS = (
    (0, "1m", "one minute", False, False),
    (1, "thx", "thanks", True, False),
    (2, "no thx", "no thanks", False, False),
    (3, "sold", "sold", False, False),
)

# (x, y, width, height)
_DEFAULT_FRAMES = {
    "TaskBarFrame": (400, 500, 109, 20),
    "IncMessageFrame": (700, 600, 315, 0),
    "OutMessageFrame": (200, 500, 280, 115),
    "TestCasesFrame": (1400, 500, 400, 100),
    "SettingsFrame": (600, 600, 540, 100),
    "HistoryFrame": (600, 500, 280, 400),
    "TimerFrame": (400, 600, 240, 102),
    "ChatScannerFrame": (400, 600, 500, 250),
    "ItemsGridFrame": (12, 79, 641, 718),
    "NotesFrame": (400, 600, 540, 100),
    "SetUpLocationFrame": (400, 600, 300, 30),
    "ChunkMessagesPicker": (400, 600, 240, 30),
    "GamePathChooser": (400, 600, 520, 30),
    "CurrencySearchFrame": (400, 600, 400, 300),
}

_MINIMUM_FRAME_SIZES = {
    "TaskBarFrame": (109, 20),
    "IncMessageFrame": (315, 10),
    "OutMessageFrame": (280, 115),
    "TestCasesFrame": (400, 100),
    "SettingsFrame": (540, 100),
    "HistoryFrame": (280, 400),
    "TimerFrame": (240, 102),
    "ChatScannerFrame": (200, 100),
    "ItemsGridFrame": (400, 400),
    "NotesFrame": (540, 100),
    "SetUpLocationFrame": (300, 30),
    "ChunkMessagesPicker": (240, 30),
    "GamePathChooser": (600, 30),
    "CurrencySearchFrame": (400, 300),
}


def default_buttons() -> list[ResponseButton]:
    """Get a fresh copy of the built-in quick-reply buttons."""
    return [ResponseButton(*row) for row in _DEFAULT_BUTTONS]


def default_frame_settings() -> dict[str, FrameSettings]:
    """Get a fresh copy of the built-in window layouts."""
    return {
        frame_id: FrameSettings(Point(x, y), Size(width, height))
        for frame_id, (x, y, width, height) in _DEFAULT_FRAMES.items()
    }


def default_frame(frame_id: str) -> Optional[FrameSettings]:
    row = _DEFAULT_FRAMES.get(frame_id)
    if row is None:
        return None
    x, y, width, height = row
    return FrameSettings(Point(x, y), Size(width, height))


def minimum_frame_size(frame_id: str) -> Optional[Size]:
    """Get the smallest size a window may be resized to, if one is defined."""
    row = _MINIMUM_FRAME_SIZES.get(frame_id)
    return Size(*row) if row is not None else None


def default_as_string(key: str) -> str:
    """String form of a default value, as the original config files stored it."""
    value = DEFAULT_APP_SETTINGS[key]
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, WhisperNotifierStatus):
        return value.name
    return str(value)
