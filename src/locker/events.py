import enum
import logging
import typing

logger = logging.getLogger(__name__)

Listener = typing.Callable[[], object]


class Event(enum.StrEnum):
    CREATE = "create"
    UP = "up"
    DESTROY = "destroy"
    DOWN = "down"


class UnknownEvent(ValueError):
    pass


def _to_event(event: Event | str) -> Event:
    try:
        return Event(event)
    except ValueError:
        known_events = ", ".join(repr(known.value) for known in Event)
        raise UnknownEvent(
            f"{event!r} is not an event that can be subscribed to. "
            f"Known events are: {known_events}."
        ) from None


class Subscription:
    """
    Handle for a single listener registration. Subscribing the same listener twice
    gives two independent subscriptions, each of which can be cancelled on its own.
    """

    def __init__(
        self,
        *,
        emitter: "EventEmitter",
        event: Event,
        listener: Listener,
    ) -> None:
        self._emitter = emitter
        self.event = event
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._emitter._is_registered(self)

    def unsubscribe(self) -> None:
        self._emitter._remove(self)

    def __repr__(self) -> str:
        return f"Subscription(event={self.event.value!r}, listener={self.listener!r})"


class EventEmitter:
    """
    Synchronous publish/subscribe table for the closed set of `Event`s.

    `emit` works from a snapshot of the listeners taken when it starts: listeners
    added while an event is being emitted only run from the next emission onwards,
    and listeners removed while it is being emitted still run in the current one.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[Event, list[Subscription]] = {
            event: [] for event in Event
        }

    def subscribe(self, event: Event | str, listener: Listener) -> Subscription:
        event = _to_event(event)
        subscription = Subscription(emitter=self, event=event, listener=listener)
        self._subscriptions[event].append(subscription)
        logger.debug("Subscribed %r to %r", listener, event.value)
        return subscription

    def unsubscribe(self, event: Event | str, listener: Listener) -> None:
        event = _to_event(event)
        for subscription in self._subscriptions[event]:
            if subscription.listener == listener:
                self._remove(subscription)
                return

    def listeners(self, event: Event | str) -> list[Listener]:
        event = _to_event(event)
        return [subscription.listener for subscription in self._subscriptions[event]]

    def emit(self, event: Event | str) -> None:
        event = _to_event(event)
        for subscription in list(self._subscriptions[event]):
            subscription.listener()

    def _is_registered(self, subscription: Subscription) -> bool:
        return any(
            registered is subscription
            for registered in self._subscriptions[subscription.event]
        )

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions[subscription.event]
        for index, registered in enumerate(subscriptions):
            if registered is subscription:
                del subscriptions[index]
                logger.debug(
                    "Unsubscribed %r from %r",
                    subscription.listener,
                    subscription.event.value,
                )
                return
