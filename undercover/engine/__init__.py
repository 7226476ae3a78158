"""Game engine - session state machine, role assignment and card reveals."""

from .assigner import Assignment, RoundAssigner
from .game import GameEngine
from .phases import GameMode, Player, SessionState, reduce
from .reveal import CardRevealController, RevealState
from .timer import RevealTimer

__all__ = [
    "Assignment",
    "RoundAssigner",
    "GameEngine",
    "GameMode",
    "Player",
    "SessionState",
    "reduce",
    "CardRevealController",
    "RevealState",
    "RevealTimer",
]
