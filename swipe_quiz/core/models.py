"""Domain models for the language matching quiz."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class Language:
    """A programming language profile with per-trait affinity scores."""

    id: str
    name: str
    description: str
    url: str
    traits: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Freeze the trait mapping so catalog entries cannot drift at runtime.
        object.__setattr__(self, "traits", MappingProxyType(dict(self.traits)))

    def trait_score(self, trait: str) -> int:
        return self.traits.get(trait, 0)


@dataclass(frozen=True, slots=True)
class Question:
    """A yes/no card tied to exactly one trait."""

    id: int
    text: str
    trait: str
    icon_name: str = ""


class SwipeDirection(Enum):
    ACCEPT = auto()
    REJECT = auto()
    STAR = auto()

    @classmethod
    def parse(cls, value: str | SwipeDirection) -> SwipeDirection:
        """Resolve a wire value such as ``"accept"`` or ``"right"``."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        direction = _DIRECTION_ALIASES.get(key)
        if direction is None:
            raise ValueError(f"Unknown swipe direction: {value!r}")
        return direction


_DIRECTION_ALIASES: dict[str, SwipeDirection] = {
    "accept": SwipeDirection.ACCEPT,
    "yes": SwipeDirection.ACCEPT,
    "right": SwipeDirection.ACCEPT,
    "reject": SwipeDirection.REJECT,
    "no": SwipeDirection.REJECT,
    "left": SwipeDirection.REJECT,
    "star": SwipeDirection.STAR,
    "top": SwipeDirection.STAR,
    "up": SwipeDirection.STAR,
}


class SessionState(Enum):
    IDLE = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


@dataclass(slots=True)
class SessionRecord:
    """Traits collected per swipe direction, in swipe order."""

    accepted: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)
    starred: list[str] = field(default_factory=list)

    def swipe_count(self) -> int:
        return len(self.accepted) + len(self.rejected) + len(self.starred)


@dataclass(frozen=True, slots=True)
class RankedMatch:
    """Immutable scoring result handed to the display layer."""

    language_id: str
    percentage: int
