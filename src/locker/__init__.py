from .events import Event, EventEmitter, Subscription, UnknownEvent
from .locker import CountUnderflow, Locker, Release

__all__ = [
    "CountUnderflow",
    "Event",
    "EventEmitter",
    "Locker",
    "Release",
    "Subscription",
    "UnknownEvent",
]
