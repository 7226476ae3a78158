"""Main game engine for Undercover."""

import random
import uuid
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from ..catalog.topics import TopicCatalog
from ..communication.channels import SessionChannel
from ..storage.stores import NameStore, SettingsStore
from .assigner import RoundAssigner
from .phases import (
    BeginDiscussion,
    ConfirmNames,
    Event,
    GameMode,
    NextRound,
    Player,
    ResetNames,
    ResetToSetup,
    ResetWins,
    RoleSeen,
    SessionState,
    StartRound,
    Tally,
    reduce,
    sanitize_names,
)
from .reveal import LOCK_DELAY, REVEAL_DURATION, CardRevealController
from .timer import Scheduler

if TYPE_CHECKING:
    from ..communication.markdown_logger import MarkdownLogger


IMPOSTER_CARD = "???"


class GameEngine:
    """The session state machine for a pass-the-device game.

    State only moves through ``reduce``; the engine draws the random parts
    (roles, topic, first speaker, player ids), talks to the stores and the
    logger, and publishes each new snapshot.
    """

    def __init__(
        self,
        name_store: NameStore,
        settings_store: SettingsStore,
        catalog: TopicCatalog,
        rng: Optional[random.Random] = None,
        logger: Optional["MarkdownLogger"] = None,
    ):
        """Initialize the engine.

        Args:
            name_store: Where player names are remembered between sessions.
            settings_store: Where the hint/timer/name flags live.
            catalog: Topics to draw from.
            rng: Random source shared by assignment and speaker choice.
            logger: Optional markdown logger.
        """
        self.name_store = name_store
        self.settings_store = settings_store
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.assigner = RoundAssigner(catalog, self.rng)
        self.logger = logger
        self.channel = SessionChannel()
        self.state = SessionState()

    # --- State plumbing ---

    def _dispatch(self, event: Event) -> bool:
        new_state = reduce(self.state, event)
        if new_state is self.state:
            return False
        self.state = new_state
        self.channel.publish(new_state)
        return True

    def subscribe(self, callback: Callable[[SessionState], None]) -> Callable[[], None]:
        """Receive every new session snapshot. Returns an unsubscribe function."""
        return self.channel.subscribe(callback)

    def _log(self) -> Optional["MarkdownLogger"]:
        if self.logger is None:
            return None
        if self.logger.session_dir is None:
            self.logger.start_session()
        return self.logger

    # --- Queries ---

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    @property
    def players(self) -> tuple[Player, ...]:
        return self.state.players

    def player(self, player_id: str) -> Optional[Player]:
        return self.state.player(player_id)

    def imposter(self) -> Optional[Player]:
        return self.state.imposter

    def first_speaker(self) -> Optional[Player]:
        return self.state.first_speaker

    def all_revealed(self) -> bool:
        """True once every player has looked at their card."""
        return self.state.all_revealed

    def standings(self) -> list[Player]:
        """Players ordered by wins, best first, seat order breaking ties."""
        return sorted(self.state.players, key=lambda p: (-p.wins, p.index))

    def card_text(self, player: Player) -> str:
        """What a player's card shows when turned face up."""
        if not player.is_imposter:
            return self.state.topic
        if self.settings_store.get_settings().hints_enabled and self.state.hint:
            return self.state.hint
        return IMPOSTER_CARD

    # --- Round flow ---

    def start_round(self, player_count: int, requires_name_entry: bool) -> None:
        """Seat ``player_count`` players and deal roles.

        Same count as the current table keeps names and wins by seat;
        any other count seats fresh players. Stored names pre-fill fresh
        seats when the names are going to be entered.
        """
        stored_names = None
        if requires_name_entry:
            names = self.name_store.get_names()
            stored_names = tuple(names) if names else None

        self._dispatch(StartRound(
            player_count=player_count,
            requires_name_entry=requires_name_entry,
            assignment=self.assigner.assign(player_count),
            first_speaker_index=self.rng.randrange(player_count),
            new_ids=tuple(uuid.uuid4().hex for _ in range(player_count)),
            stored_names=stored_names,
        ))

        logger = self._log()
        if logger:
            logger.log_round_start(
                self.state.round_number, self.state.players, self.state.topic, self.state.hint
            )

    def confirm_names(self, names: Sequence[str]) -> None:
        """Accept the entered names and move on to distribution."""
        if self.state.mode != GameMode.NAME_ENTRY or not self.state.players:
            return
        count = len(self.state.players)
        cleaned = sanitize_names(list(names), count)
        self.name_store.set_names(cleaned)
        self._dispatch(ConfirmNames(
            names=tuple(cleaned),
            first_speaker_index=self.rng.randrange(count),
        ))

    def reset_names(self) -> None:
        """Forget stored names and put every seat back to its default name."""
        self.name_store.clear_names()
        self._dispatch(ResetNames())
        logger = self._log()
        if logger:
            logger.log_reset("names")

    def mark_role_seen(self, player_id: str, round_number: int) -> None:
        """Record that a player has revealed their card this round."""
        if self._dispatch(RoleSeen(player_id=player_id, round_number=round_number)):
            logger = self._log()
            if logger:
                logger.log_role_seen(self.state.player(player_id))

    def begin_discussion(self) -> None:
        """Move to discussion once everyone has revealed; otherwise nothing."""
        if self._dispatch(BeginDiscussion()):
            logger = self._log()
            if logger:
                logger.log_discussion(self.state.first_speaker)

    def tally(self, imposter_won: bool) -> None:
        """Credit the round's winners and celebrate."""
        if self._dispatch(Tally(imposter_won=imposter_won)):
            logger = self._log()
            if logger:
                logger.log_tally(imposter_won, self.state.recent_winners, self.state.players)

    def prepare_next_round(self) -> None:
        """Deal a new round to the same players, keeping names and wins."""
        if not self.state.players:
            self._dispatch(NextRound(assignment=None, first_speaker_index=0))
            return

        count = len(self.state.players)
        self._dispatch(NextRound(
            assignment=self.assigner.assign(count),
            first_speaker_index=self.rng.randrange(count),
        ))

        logger = self._log()
        if logger:
            logger.log_round_start(
                self.state.round_number, self.state.players, self.state.topic, self.state.hint
            )

    def reset_wins(self) -> None:
        """Zero every player's wins."""
        self._dispatch(ResetWins())
        logger = self._log()
        if logger:
            logger.log_reset("wins")

    def reset_to_setup(self) -> None:
        """Drop all players and go back to setup."""
        self._dispatch(ResetToSetup())
        logger = self._log()
        if logger:
            logger.log_reset("back to setup")

    # --- Reveal controllers ---

    def new_reveal_controller(
        self,
        player_id: str,
        scheduler: Scheduler,
        timed: Optional[bool] = None,
        reveal_duration: float = REVEAL_DURATION,
        lock_delay: float = LOCK_DELAY,
    ) -> CardRevealController:
        """Build a fresh card controller for a player in the current round.

        Args:
            player_id: Which player the card belongs to.
            scheduler: Event loop for the reveal timer.
            timed: Auto-hide the card; defaults to the stored setting.
            reveal_duration: Seconds before an automatic hide.
            lock_delay: Seconds between flip back and lock.
        """
        player = self.state.player(player_id)
        if player is None:
            raise ValueError(f"Unknown player: {player_id}")
        if timed is None:
            timed = self.settings_store.get_settings().timed_flip_enabled

        round_number = self.state.round_number
        return CardRevealController(
            player=player,
            card_text=self.card_text(player),
            scheduler=scheduler,
            on_seen=lambda: self.mark_role_seen(player_id, round_number),
            timed=timed,
            reveal_duration=reveal_duration,
            lock_delay=lock_delay,
        )
