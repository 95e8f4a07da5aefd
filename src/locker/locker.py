"""
A lock that can only be unlocked with the token handed out when it was locked.

Think of a `Locker` as a door. The first lock "creates" the door, every lock after
that adds another lock to it, and removing the last lock "destroys" the door. The
door's lifecycle is observable through four events:

- `create`: the count went from 0 to 1. Emitted before the matching `up`.
- `up`: emitted on every lock.
- `destroy`: the count went from 1 to 0. Emitted before the matching `down`.
- `down`: emitted on every effective unlock.

The count is always updated before any event is emitted, so listeners observe the
new count and may themselves lock or unlock the same `Locker`. Such nested calls
emit their events immediately, inside the emission that triggered them.
"""

import contextlib
import itertools
import logging
import types
import typing

from .events import Event, EventEmitter, Listener, Subscription

logger = logging.getLogger(__name__)

_locker_ids = itertools.count(1)


class CountUnderflow(Exception):
    pass


class Release:
    """
    Single-use token returned by `Locker.acquire`. Calling it (or `release`) unlocks
    the lock it was created for; any further calls do nothing.
    """

    def __init__(self, *, locker: "Locker") -> None:
        self._locker = locker
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def release(self) -> None:
        if self._consumed:
            logger.debug("Ignoring repeated release of %r", self._locker)
            return
        self._consumed = True
        self._locker._release()

    def __call__(self) -> None:
        self.release()

    def __enter__(self) -> "Release":
        return self

    def __exit__(
        self,
        exception_type: type[BaseException] | None,
        exception_value: BaseException | None,
        exception_traceback: types.TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"Release(locker={self._locker!r}, consumed={self._consumed})"


class Locker:
    def __init__(self, *, name: str | None = None) -> None:
        self.name = name or f"locker-{next(_locker_ids)}"
        self._count = 0
        self._events = EventEmitter()

    def count(self) -> int:
        return self._count

    def is_locked(self) -> bool:
        return self._count != 0

    def subscribe(self, event: Event | str, listener: Listener) -> Subscription:
        return self._events.subscribe(event, listener)

    def unsubscribe(self, event: Event | str, listener: Listener) -> None:
        self._events.unsubscribe(event, listener)

    def acquire(self) -> Release:
        created = self._count == 0
        self._count += 1
        logger.debug("Acquired %r, count is now %d", self, self._count)

        if created:
            logger.debug("Created %r", self)
            self._events.emit(Event.CREATE)
        self._events.emit(Event.UP)

        return Release(locker=self)

    @contextlib.contextmanager
    def hold(self) -> typing.Generator[Release, None, None]:
        release = self.acquire()
        try:
            yield release
        finally:
            release()

    def _release(self) -> None:
        if self._count <= 0:
            logger.error(
                "%r was released more times than it was acquired; "
                "keeping the count at 0",
                self,
            )
            self._count = 0
            if __debug__:
                raise CountUnderflow(
                    f"{self!r} was released more times than it was acquired. Only "
                    "release tokens returned by `acquire` should unlock a Locker."
                )
            return

        self._count -= 1
        logger.debug("Released %r, count is now %d", self, self._count)

        if self._count == 0:
            logger.debug("Destroyed %r", self)
            self._events.emit(Event.DESTROY)
        self._events.emit(Event.DOWN)

    def __repr__(self) -> str:
        return f"Locker(name={self.name!r}, count={self._count})"
