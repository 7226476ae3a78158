"""Cancellable single-shot timer used to auto-hide a revealed card."""

from typing import Any, Callable, Optional, Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later; an asyncio loop qualifies."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Handle: ...

    def time(self) -> float: ...


class RevealTimer:
    """Runs one callback after a delay unless cancelled first."""

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self._handle: Optional[Handle] = None
        self._started_at = 0.0
        self._duration = 0.0

    @property
    def active(self) -> bool:
        """Whether a callback is still pending."""
        return self._handle is not None

    def start(self, duration: float, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` to run after ``duration`` seconds."""
        if self._handle is not None:
            raise RuntimeError("RevealTimer is already running")

        def fire() -> None:
            self._handle = None
            callback()

        self._started_at = self.scheduler.time()
        self._duration = duration
        self._handle = self.scheduler.call_later(duration, fire)

    def cancel(self) -> None:
        """Drop the pending callback. Safe to call at any time."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def fraction_remaining(self) -> float:
        """Countdown value, 1.0 at start decaying linearly to 0.0."""
        if self._handle is None or self._duration <= 0:
            return 0.0
        elapsed = self.scheduler.time() - self._started_at
        return min(1.0, max(0.0, 1.0 - elapsed / self._duration))
