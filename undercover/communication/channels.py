"""Snapshot channel: fans new session states out to subscribers."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ..engine.phases import SessionState


Subscriber = Callable[["SessionState"], None]


@dataclass
class SessionChannel:
    """Delivers every published session snapshot to its subscribers."""

    subscribers: list[Subscriber] = field(default_factory=list)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber.

        Args:
            callback: Called with each new snapshot, in subscription order.

        Returns:
            A function that removes the subscriber again.
        """
        self.subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self.subscribers:
                self.subscribers.remove(callback)

        return unsubscribe

    def publish(self, state: "SessionState") -> None:
        """Send a snapshot to everyone subscribed."""
        for callback in list(self.subscribers):
            callback(state)
