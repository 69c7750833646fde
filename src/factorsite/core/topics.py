"""Ordered topic index.

The topic sequence is fixed at startup. Order defines navigation adjacency,
so the index is a tuple with a dictionary of positions for O(1) lookups.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from factorsite.core.types import TopicId

DEFAULT_TOPICS: tuple[str, ...] = (
    "codebase",
    "dependencies",
    "config",
    "backing-services",
    "build-release-run",
    "processes",
    "port-binding",
    "concurrency",
    "disposability",
    "dev-prod-parity",
    "logs",
    "admin-processes",
)

_ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


@dataclass(frozen=True)
class Topic:
    """Topic entry with its position in the sequence."""

    id: TopicId
    position: int

    @property
    def title(self) -> str:
        """Display title derived from the identifier."""
        words = self.id.replace("-", " ").replace("_", " ")
        return words[:1].upper() + words[1:]

    @property
    def ordinal(self) -> str:
        """Roman numeral label, starting at I."""
        return _to_roman(self.position + 1)


class TopicIndex:
    """Immutable ordered set of topics with neighbor queries."""

    __slots__ = ("_positions", "_topics")

    def __init__(self, ids: Iterable[str]) -> None:
        """Initialize topic index.

        Args:
            ids: Topic identifiers in navigation order

        Raises:
            ValueError: If an identifier is empty, contains a slash, or repeats
        """
        topics: list[Topic] = []
        positions: dict[str, int] = {}
        for position, topic_id in enumerate(ids):
            if not topic_id or "/" in topic_id:
                raise ValueError(f"Invalid topic identifier: {topic_id!r}")
            if topic_id in positions:
                raise ValueError(f"Duplicate topic identifier: {topic_id!r}")
            positions[topic_id] = position
            topics.append(Topic(id=TopicId(topic_id), position=position))

        self._topics = tuple(topics)
        self._positions = positions

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._positions

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._topics)

    def __len__(self) -> int:
        return len(self._topics)

    def get(self, topic_id: str) -> Topic | None:
        """Get topic by identifier.

        Args:
            topic_id: Topic identifier (e.g., "config")

        Returns:
            Topic if known, None otherwise
        """
        position = self._positions.get(topic_id)
        if position is None:
            return None
        return self._topics[position]

    def previous(self, topic: Topic) -> Topic | None:
        """Return the topic before ``topic``, or None if it is the first."""
        if topic.position == 0:
            return None
        return self._topics[topic.position - 1]

    def next(self, topic: Topic) -> Topic | None:
        """Return the topic after ``topic``, or None if it is the last."""
        if topic.position + 1 >= len(self._topics):
            return None
        return self._topics[topic.position + 1]


def _to_roman(number: int) -> str:
    result = []
    for value, numeral in _ROMAN_NUMERALS:
        count, number = divmod(number, value)
        result.append(numeral * count)
    return "".join(result)
