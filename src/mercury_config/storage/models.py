"""Value types held by the settings store."""

from dataclasses import dataclass
from enum import Enum


class WhisperNotifierStatus(Enum):
    """When to play the incoming whisper notification."""

    ALWAYS = "Always"
    ALTAB = "When alt-tabbed"
    NONE = "Never"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class Point:
    """Screen position of a window's top-left corner."""

    x: int = 0
    y: int = 0


@dataclass
class Size:
    """Window dimensions in pixels."""

    width: int = 0
    height: int = 0


@dataclass
class FrameSettings:
    """Saved position and size of one window."""

    location: Point
    size: Size

    def copy(self) -> "FrameSettings":
        return FrameSettings(
            Point(self.location.x, self.location.y),
            Size(self.size.width, self.size.height),
        )


@dataclass
class ResponseButton:
    """A quick-reply button shown on incoming trade messages."""

    id: int
    title: str
    response_text: str
    is_kick: bool = False
    is_close: bool = False
