"""Per-player card reveal: Hidden -> Revealed -> Locked."""

from enum import Enum
from typing import Callable, Optional

from .phases import Player
from .timer import Handle, RevealTimer, Scheduler


REVEAL_DURATION = 5.0  # seconds a card stays face up when timed
LOCK_DELAY = 0.4       # seconds between flipping back and locking


class RevealState(Enum):
    """Where a single card is in its one-shot lifecycle."""
    HIDDEN = "hidden"
    REVEALED = "revealed"
    LOCKED = "locked"


class CardRevealController:
    """Lets one player look at their card exactly once per round.

    The first interaction turns the card face up and reports the role as
    seen. The card flips back either on a second interaction or when the
    reveal timer runs out, and locks for the rest of the round shortly
    after. Nothing happens once locked or disposed.
    """

    def __init__(
        self,
        player: Player,
        card_text: str,
        scheduler: Scheduler,
        on_seen: Callable[[], None],
        timed: bool = False,
        reveal_duration: float = REVEAL_DURATION,
        lock_delay: float = LOCK_DELAY,
        on_change: Optional[Callable[["CardRevealController"], None]] = None,
    ):
        """Initialize the controller.

        Args:
            player: Snapshot of the player this card belongs to.
            card_text: What the face of the card shows.
            scheduler: Event loop used for the timer and the lock delay.
            on_seen: Called once, on the first reveal.
            timed: Whether the card hides itself after ``reveal_duration``.
            reveal_duration: Seconds before an automatic hide.
            lock_delay: Seconds between the flip back and the lock.
            on_change: Called after every state or face change.
        """
        self.player = player
        self.card_text = card_text
        self.scheduler = scheduler
        self.on_seen = on_seen
        self.timed = timed
        self.reveal_duration = reveal_duration
        self.lock_delay = lock_delay
        self.on_change = on_change

        self.state = RevealState.HIDDEN
        self.face_up = False
        self.lock_count = 0
        self.disposed = False
        self.timer = RevealTimer(scheduler)
        self._lock_handle: Optional[Handle] = None

    @property
    def concealing(self) -> bool:
        """Card already flipped back, waiting for the lock to apply."""
        return self._lock_handle is not None

    @property
    def countdown(self) -> float:
        """Visual countdown, 1.0 unless a timed reveal is running."""
        if self.state == RevealState.REVEALED and self.timer.active:
            return self.timer.fraction_remaining()
        return 1.0

    def interact(self) -> None:
        """Handle a tap on the card."""
        if self.disposed:
            return

        if self.state == RevealState.HIDDEN:
            self.state = RevealState.REVEALED
            self.face_up = True
            self.on_seen()
            if self.timed:
                self.timer.start(self.reveal_duration, self._on_timeout)
            self._notify()

        elif self.state == RevealState.REVEALED and not self.concealing:
            self.timer.cancel()
            self._conceal()

        # Locked, or a conceal already pending: ignore

    def dispose(self) -> None:
        """Stop all pending callbacks; the controller is dead afterwards."""
        self.timer.cancel()
        if self._lock_handle is not None:
            self._lock_handle.cancel()
            self._lock_handle = None
        self.disposed = True
        self.on_change = None

    def _on_timeout(self) -> None:
        if self.disposed or self.state != RevealState.REVEALED or self.concealing:
            return
        self._conceal()

    def _conceal(self) -> None:
        self.face_up = False
        self._lock_handle = self.scheduler.call_later(self.lock_delay, self._lock)
        self._notify()

    def _lock(self) -> None:
        self._lock_handle = None
        if self.disposed or self.state == RevealState.LOCKED:
            return
        self.state = RevealState.LOCKED
        self.lock_count += 1
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
