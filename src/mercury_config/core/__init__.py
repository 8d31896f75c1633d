"""Core modules for the MercuryTrade settings store."""

from .events import EventBus, Event, EventType

__all__ = ["EventBus", "Event", "EventType"]
