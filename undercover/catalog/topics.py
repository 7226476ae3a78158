"""Topic catalog: the secret words and the hints offered to the imposter."""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel


DEFAULT_TOPIC = "Barbarians"


class Topic(BaseModel):
    """A secret topic and an optional one-word hint."""
    name: str
    hint: Optional[str] = None


# Card pool with one-word hints; cards without a hint give the imposter "???"
CARD_POOL = {
    "Archer Queen": "Royalty", "Archers": "Pair", "Arrows": "Volley",
    "Baby Dragon": "Splash", "Balloon": "Sky", "Bandit": "Dash",
    "Barbarian Barrel": "Roll", "Barbarian Hut": "Spawner", "Barbarians": "Horde",
    "Bats": "Swarm", "Battle Healer": "Support", "Battle Ram": "Charge",
    "Berserker": "Rage", "Bomb Tower": "Defense", "Bomber": "Explosive",
    "Boss Bandit": "Leader", "Bowler": "Boulder", "Cannon": "Building",
    "Cannon Cart": "Wheels", "Clone": "Copy", "Dark Prince": "Shield",
    "Dart Goblin": "Range", "Earthquake": "Ground", "Electro Dragon": "Chain",
    "Electro Giant": "Reflect", "Electro Spirit": "Zap", "Electro Wizard": "Stun",
    "Elite Barbarians": "Fast", "Elixir Collector": "Pump", "Elixir Golem": "Split",
    "Executioner": "Axe", "Fire Spirit": "Burst", "Fireball": "Spell",
    "Firecracker": "Recoil", "Fisherman": "Hook", "Flying Machine": "Air",
    "Freeze": "Cold", "Furnace": "Heat", "Giant": "Tank",
    "Giant Skeleton": "Bomb", "Giant Snowball": "Knockback", "Goblin Barrel": "Surprise",
    "Goblin Cage": "Trap", "Goblin Curse": "Hex", "Goblin Demolisher": "Wrecker",
    "Goblin Drill": "Tunnel", "Goblin Gang": "Crew", "Goblin Giant": "Backpack",
    "Goblin Hut": "Spawner", "Goblin Machine": "Mech", "Goblins": "Green",
    "Goblinstein": "Monster", "Golden Knight": "Gold", "Golem": "Rock",
    "Graveyard": "Spooky", "Guards": "Shields", "Heal Spirit": "Healing",
    "Hog Rider": "Hog", "Hunter": "Shotgun", "Ice Golem": "Slow",
    "Ice Spirit": "Chill", "Ice Wizard": "Frost", "Inferno Dragon": "Beam",
    "Inferno Tower": "Melt", "Knight": "Armor", "Lava Hound": "Pups",
    "Lightning": "Strike", "Little Prince": "Squire", "Lumberjack": "Wood",
    "Magic Archer": "Pierce", "Mega Knight": "Jump", "Mega Minion": "Flyer",
    "Mighty Miner": "Drill", "Miner": "Underground", "Mini P.E.K.K.A": "Pancakes",
    "Minion Horde": "Flock", "Minions": "Wings", "Mirror": "Repeat",
    "Monk": "Deflect", "Mortar": "Siege", "Mother Witch": "Pigs",
    "Musketeer": "Rifle", "Night Witch": "Dark", "P.E.K.K.A": "Robot",
    "Phoenix": "Rebirth", "Poison": "Cloud", "Prince": "Lance",
    "Princess": "Distance", "Rage": "Purple", "Ram Rider": "Snare",
    "Rascals": "Slingshot", "Rocket": "Heavy", "Royal Delivery": "Package",
    "Royal Ghost": "Invisible", "Royal Giant": "Cannon", "Royal Hogs": "Pack",
    "Royal Recruits": "Army", "Rune Giant": "Runes", "Skeleton Army": "Bones",
    "Skeleton Barrel": "Drop", "Skeleton Dragons": "Duo", "Skeleton King": "Crown",
    "Skeletons": "Cheap", "Sparky": "Charge", "Spear Goblins": "Throw",
    "Spirit Empress": "Spirits", "Suspicious Bush": "Hide", "Tesla": "Hidden",
    "The Log": "Roll", "Three Musketeers": "Trio", "Tombstone": "Grave",
    "Tornado": "Pull", "Valkyrie": "Spin", "Vines": "Grab",
    "Void": "Vortex", "Wall Breakers": "Runners", "Witch": "Summoner",
    "Wizard": "Fire", "X-Bow": "Crossbow", "Zap": "Reset",
    "Zappies": None,
}


class TopicCatalog:
    """A fixed set of topics, looked up by name."""

    def __init__(self, topics: list[Topic]):
        self._topics = {topic.name: topic for topic in topics}

    @classmethod
    def default(cls) -> "TopicCatalog":
        """Catalog built from the bundled card pool."""
        return cls([Topic(name=name, hint=hint) for name, hint in CARD_POOL.items()])

    def names(self) -> set[str]:
        """All topic names; never empty."""
        if not self._topics:
            return {DEFAULT_TOPIC}
        return set(self._topics)

    def hint(self, topic: str) -> Optional[str]:
        """The hint for a topic, if it has one."""
        entry = self._topics.get(topic)
        return entry.hint if entry else None

    def __len__(self) -> int:
        return len(self._topics)


def load_catalog(path: Union[str, Path]) -> TopicCatalog:
    """Load topics from a YAML list.

    Each entry is either a plain name or a mapping with ``name`` and
    ``hint`` keys.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("topics") or []

    topics = []
    for entry in data:
        if isinstance(entry, str):
            topics.append(Topic(name=entry))
        else:
            topics.append(Topic.model_validate(entry))
    return TopicCatalog(topics)
