"""UNO rules: card matching, commands and house rules."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from unoarena.engine.card import Card, CardType, Color


@dataclass(frozen=True)
class HouseRules:
    """Rule switches fixed for the lifetime of an engine.

    draw_cards_skip_turn: when True, the player hit by Draw Two / Wild Draw
    Four also loses their turn. When False they draw and then play normally.
    """

    hand_size: int = 7
    draw_cards_skip_turn: bool = False
    penalty_cards: int = 2

    def __post_init__(self) -> None:
        if self.hand_size < 1:
            raise ValueError(f"hand_size must be positive, got {self.hand_size}")
        if self.penalty_cards < 0:
            raise ValueError(f"penalty_cards must not be negative, got {self.penalty_cards}")


@dataclass(frozen=True)
class PlayCard:
    """Command: play the card at hand_index.

    For wilds, chosen_color is applied once the engine asks for a color.
    shout declares UNO right after the play (used by move proposers).
    """

    hand_index: int
    chosen_color: Optional[Color] = None
    shout: bool = False


@dataclass(frozen=True)
class DrawCard:
    """Command: draw one card and pass the turn."""

    pass


@dataclass(frozen=True)
class ChooseColor:
    """Command: pick the color for the wild card just played."""

    color: Color


@dataclass(frozen=True)
class ShoutSingleCard:
    """Command: a player declares they hold a single card."""

    player_index: int


@dataclass(frozen=True)
class CallOut:
    """Command: accuse a player of holding one card without shouting."""

    player_index: int


Move = Union[PlayCard, DrawCard]
Command = Union[PlayCard, DrawCard, ChooseColor, ShoutSingleCard, CallOut]


def is_playable(card: Card, top: Optional[Card]) -> bool:
    """Check if a card can be played on the active top card.

    A resolved wild top carries its chosen color, so plain color equality
    covers it.
    """
    if top is None:
        return False
    if card.is_wild:
        return True
    if card.color == top.color:
        return True
    if card.type is not CardType.NUMBER and card.type == top.type:
        return True
    if card.type is CardType.NUMBER and top.type is CardType.NUMBER:
        return card.value == top.value
    return False


def playable_indices(hand: Sequence[Card], top: Optional[Card]) -> List[int]:
    """Indices of the cards in hand that may be played on top."""
    return [i for i, card in enumerate(hand) if is_playable(card, top)]
