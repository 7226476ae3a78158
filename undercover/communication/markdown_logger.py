"""Markdown logger for sessions and rounds."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from ..engine.phases import Player


class MarkdownLogger:
    """Writes session events to a markdown file for later review."""

    def __init__(self, base_dir: str = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for session logs.
        """
        self.base_dir = Path(base_dir)
        self.session_dir: Optional[Path] = None
        self.session_id: Optional[str] = None

    @property
    def session_file(self) -> Path:
        return self.session_dir / "session.md"

    def start_session(self, session_id: Optional[str] = None) -> Path:
        """Start logging a new session.

        Args:
            session_id: Optional session identifier. If not provided, uses timestamp.

        Returns:
            Path to the session directory.
        """
        if session_id is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
            session_id = f"session_{timestamp}"

        self.session_id = session_id
        self.session_dir = self.base_dir / session_id
        self.session_dir.mkdir(parents=True, exist_ok=True)

        with open(self.session_file, "w") as f:
            f.write(f"# Undercover Session - {self.session_id}\n\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write("---\n\n")

        return self.session_dir

    def _append(self, text: str) -> None:
        with open(self.session_file, "a") as f:
            f.write(text)

    def log_round_start(
        self,
        round_number: int,
        players: Sequence["Player"],
        topic: str,
        hint: Optional[str] = None,
    ) -> None:
        """Log role assignment for a round.

        Args:
            round_number: Round counter within the session.
            players: Seated players with their (hidden) roles.
            topic: The secret topic.
            hint: Hint available to the imposter, if any.
        """
        lines = [f"## Round {round_number}\n\n"]
        lines.append(f"Topic: **{topic}**")
        if hint:
            lines.append(f" (hint: *{hint}*)")
        lines.append("\n\n")
        lines.append("| Seat | Player | Role (Hidden) | Wins |\n")
        lines.append("|------|--------|---------------|------|\n")
        for p in players:
            role = "Imposter" if p.is_imposter else "Crew"
            lines.append(f"| {p.index} | {p.name} | {role} | {p.wins} |\n")
        lines.append("\n")
        self._append("".join(lines))

    def log_role_seen(self, player: "Player") -> None:
        """Log that a player looked at their card."""
        self._append(f"- {player.name} saw their card\n")

    def log_discussion(self, first_speaker: Optional["Player"]) -> None:
        """Log the start of discussion and who opens it."""
        self._append("\n### Discussion\n\n")
        if first_speaker:
            self._append(f"{first_speaker.name} speaks first.\n\n")

    def log_tally(
        self,
        imposter_won: bool,
        winners: Sequence["Player"],
        players: Sequence["Player"],
    ) -> None:
        """Log a round outcome and the scoreboard after it.

        Args:
            imposter_won: Whether the imposter got away with it.
            winners: Players credited with the win.
            players: All players, wins already updated.
        """
        lines = ["### Result\n\n"]
        if imposter_won:
            lines.append("The **imposter** wins")
        else:
            lines.append("The **crew** wins")
        lines.append(f": {', '.join(p.name for p in winners)}\n\n")
        lines.append("| Player | Wins |\n")
        lines.append("|--------|------|\n")
        for p in sorted(players, key=lambda p: -p.wins):
            lines.append(f"| {p.name} | {p.wins} |\n")
        lines.append("\n---\n\n")
        self._append("".join(lines))

    def log_reset(self, what: str) -> None:
        """Log a reset (names, wins, or back to setup)."""
        self._append(f"*Reset: {what}*\n\n")
