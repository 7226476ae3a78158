"""Random role and topic assignment for a round."""

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..catalog.topics import TopicCatalog


FALLBACK_TOPIC = "Barbarians"


@dataclass(frozen=True)
class Assignment:
    """Who the imposter is and what everybody else sees."""

    imposter_index: int
    topic: str
    hint: Optional[str] = None


class RoundAssigner:
    """Draws a fresh imposter and topic every time it is asked."""

    def __init__(self, catalog: "TopicCatalog", rng: Optional[random.Random] = None):
        """Initialize the assigner.

        Args:
            catalog: Topic names and hints to draw from.
            rng: Random source. Defaults to a new unseeded ``random.Random``.
        """
        self.catalog = catalog
        self.rng = rng or random.Random()

    def assign(self, player_count: int) -> Assignment:
        """Pick the imposter seat and the topic for one round.

        Args:
            player_count: Number of seats at the table.

        Returns:
            The assignment; the topic falls back to ``FALLBACK_TOPIC`` when
            the catalog has nothing to offer.
        """
        if player_count < 1:
            raise ValueError(f"Player count must be positive, got {player_count}")

        imposter_index = self.rng.randrange(player_count)
        names = sorted(self.catalog.names())
        topic = self.rng.choice(names) if names else FALLBACK_TOPIC
        return Assignment(
            imposter_index=imposter_index,
            topic=topic,
            hint=self.catalog.hint(topic),
        )
