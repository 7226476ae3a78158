"""Session modes, player records and the session reducer."""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Sequence, Union

from .assigner import Assignment


class GameMode(Enum):
    """Modes of a pass-the-device session."""
    SETUP = auto()         # Choosing player count
    NAME_ENTRY = auto()    # Players type their names
    DISTRIBUTION = auto()  # Device passed around, each player reveals once
    DISCUSSION = auto()    # Players describe the topic
    CELEBRATION = auto()   # Outcome tallied, winners shown


def default_name(index: int) -> str:
    """Positional default name for a 1-based player slot."""
    return f"Player {index}"


def sanitize_names(names: Sequence[str], player_count: int) -> list[str]:
    """Trim names and fill blanks with positional defaults.

    Entries beyond ``player_count`` are dropped; missing trailing entries
    become defaults.
    """
    result = []
    for i in range(player_count):
        raw = names[i] if i < len(names) else ""
        cleaned = (raw or "").strip()
        result.append(cleaned or default_name(i + 1))
    return result


@dataclass(frozen=True)
class Player:
    """A player seat at the table."""

    id: str
    index: int
    name: str
    is_imposter: bool = False
    has_seen_role: bool = False
    wins: int = 0


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of the whole session."""

    players: tuple[Player, ...] = ()
    topic: str = ""
    hint: Optional[str] = None
    mode: GameMode = GameMode.SETUP
    first_speaker_id: Optional[str] = None
    recent_winners: tuple[Player, ...] = ()
    round_number: int = 0

    @property
    def imposter(self) -> Optional[Player]:
        return next((p for p in self.players if p.is_imposter), None)

    @property
    def first_speaker(self) -> Optional[Player]:
        if self.first_speaker_id is None:
            return None
        return self.player(self.first_speaker_id)

    @property
    def all_revealed(self) -> bool:
        return all(p.has_seen_role for p in self.players)

    @property
    def imposter_won(self) -> Optional[bool]:
        """Outcome of the last tally; None when nothing has been tallied."""
        if not self.recent_winners:
            return None
        return any(p.is_imposter for p in self.recent_winners)

    def player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)


# --- Events ---

@dataclass(frozen=True)
class StartRound:
    player_count: int
    requires_name_entry: bool
    assignment: Assignment
    first_speaker_index: int
    new_ids: tuple[str, ...]
    stored_names: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class ConfirmNames:
    names: tuple[str, ...]
    first_speaker_index: int


@dataclass(frozen=True)
class ResetNames:
    pass


@dataclass(frozen=True)
class RoleSeen:
    player_id: str
    round_number: int


@dataclass(frozen=True)
class BeginDiscussion:
    pass


@dataclass(frozen=True)
class Tally:
    imposter_won: bool


@dataclass(frozen=True)
class NextRound:
    assignment: Optional[Assignment]
    first_speaker_index: int


@dataclass(frozen=True)
class ResetWins:
    pass


@dataclass(frozen=True)
class ResetToSetup:
    pass


Event = Union[
    StartRound, ConfirmNames, ResetNames, RoleSeen, BeginDiscussion,
    Tally, NextRound, ResetWins, ResetToSetup,
]


def _deal(players: Sequence[Player], assignment: Assignment) -> tuple[Player, ...]:
    """Hand out fresh roles, clearing every reveal flag."""
    return tuple(
        replace(p, is_imposter=(i == assignment.imposter_index), has_seen_role=False)
        for i, p in enumerate(players)
    )


def _seat_players(state: SessionState, event: StartRound) -> list[Player]:
    previous = state.players
    if previous and len(previous) == event.player_count:
        # Same table size: carry id, name and wins over by position
        return list(previous)

    names = [default_name(i + 1) for i in range(event.player_count)]
    if event.stored_names:
        names = sanitize_names(event.stored_names, event.player_count)
    return [
        Player(id=event.new_ids[i], index=i + 1, name=names[i])
        for i in range(event.player_count)
    ]


def reduce(state: SessionState, event: Event) -> SessionState:
    """Apply an event to a session snapshot.

    Returns the same object when the event does not apply in the current
    state, so callers can detect no-ops by identity.
    """
    if isinstance(event, StartRound):
        players = _deal(_seat_players(state, event), event.assignment)
        if event.requires_name_entry:
            mode = GameMode.NAME_ENTRY
            first_speaker_id = None
        else:
            mode = GameMode.DISTRIBUTION
            first_speaker_id = players[event.first_speaker_index].id
        return SessionState(
            players=players,
            topic=event.assignment.topic,
            hint=event.assignment.hint,
            mode=mode,
            first_speaker_id=first_speaker_id,
            round_number=state.round_number + 1,
        )

    elif isinstance(event, ConfirmNames):
        if state.mode != GameMode.NAME_ENTRY or not state.players:
            return state
        names = sanitize_names(event.names, len(state.players))
        players = tuple(replace(p, name=names[i]) for i, p in enumerate(state.players))
        return replace(
            state,
            players=players,
            mode=GameMode.DISTRIBUTION,
            first_speaker_id=players[event.first_speaker_index].id,
        )

    elif isinstance(event, ResetNames):
        return replace(
            state,
            players=tuple(replace(p, name=default_name(p.index)) for p in state.players),
        )

    elif isinstance(event, RoleSeen):
        # Late reports from an earlier round are dropped
        if event.round_number != state.round_number:
            return state
        target = state.player(event.player_id)
        if target is None or target.has_seen_role:
            return state
        return replace(
            state,
            players=tuple(
                replace(p, has_seen_role=True) if p.id == event.player_id else p
                for p in state.players
            ),
        )

    elif isinstance(event, BeginDiscussion):
        if state.mode != GameMode.DISTRIBUTION or not state.all_revealed:
            return state
        return replace(state, mode=GameMode.DISCUSSION)

    elif isinstance(event, Tally):
        if state.mode != GameMode.DISCUSSION or not state.players:
            return state
        players = tuple(
            replace(p, wins=p.wins + 1) if p.is_imposter == event.imposter_won else p
            for p in state.players
        )
        winners = tuple(p for p in players if p.is_imposter == event.imposter_won)
        return replace(
            state,
            players=players,
            mode=GameMode.CELEBRATION,
            recent_winners=winners,
        )

    elif isinstance(event, NextRound):
        if not state.players:
            return SessionState(round_number=state.round_number)
        players = _deal(state.players, event.assignment)
        return replace(
            state,
            players=players,
            topic=event.assignment.topic,
            hint=event.assignment.hint,
            mode=GameMode.DISTRIBUTION,
            first_speaker_id=players[event.first_speaker_index].id,
            recent_winners=(),
            round_number=state.round_number + 1,
        )

    elif isinstance(event, ResetWins):
        return replace(state, players=tuple(replace(p, wins=0) for p in state.players))

    elif isinstance(event, ResetToSetup):
        # Round counter keeps counting so stale reports stay stale
        return SessionState(round_number=state.round_number)

    raise TypeError(f"Unknown event: {event!r}")
