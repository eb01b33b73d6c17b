"""Card, Color and CardType for UNO."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors. WILD marks a wild card whose color is not chosen yet."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


PLAYABLE_COLORS = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)


class CardType(str, Enum):
    """Card faces."""

    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


WILD_TYPES = frozenset({CardType.WILD, CardType.WILD_DRAW_FOUR})
ACTION_TYPES = (CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Number cards carry a value 0-9; no other type does.
    Colored cards use one of PLAYABLE_COLORS. Wild cards start as Color.WILD
    and are rebound to a playable color once played (see with_color).
    """

    color: Color
    type: CardType
    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type is CardType.NUMBER:
            if not isinstance(self.value, int) or isinstance(self.value, bool) or not 0 <= self.value <= 9:
                raise ValueError(f"Number card needs a value 0-9, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"Only number cards carry a value, got {self.type.value}={self.value}")
        if self.type not in WILD_TYPES and self.color is Color.WILD:
            raise ValueError(f"{self.type.value} card must have a playable color")

    @property
    def is_wild(self) -> bool:
        return self.type in WILD_TYPES

    @property
    def is_resolved(self) -> bool:
        """True for wild cards that have been bound to a color."""
        return self.is_wild and self.color is not Color.WILD

    def with_color(self, color: Color) -> "Card":
        """Return this wild card bound to a playable color."""
        if not self.is_wild:
            raise ValueError(f"Cannot recolor {self}")
        if color not in PLAYABLE_COLORS:
            raise ValueError(f"Not a playable color: {color!r}")
        return replace(self, color=color)

    def unresolved(self) -> "Card":
        """Return the card as it sits in the deck (wild cards lose their color)."""
        if self.is_resolved:
            return replace(self, color=Color.WILD)
        return self

    def __str__(self) -> str:
        if self.is_wild:
            if self.is_resolved:
                return f"{self.type.value}({self.color.value})"
            return self.type.value
        if self.type is CardType.NUMBER:
            return f"{self.color.value}_{self.value}"
        return f"{self.color.value}_{self.type.value}"
