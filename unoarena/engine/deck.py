"""Deck creation and shuffling."""

import random
from collections import Counter
from typing import Iterable, List, Optional

from unoarena.engine.card import ACTION_TYPES, PLAYABLE_COLORS, Card, CardType, Color

DECK_SIZE = 108
WILD_COUNT = 8


def build_deck() -> List[Card]:
    """Create a standard 108-card UNO deck in a fixed order.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in PLAYABLE_COLORS:
        cards.append(Card(color, CardType.NUMBER, 0))
        for value in range(1, 10):
            cards.append(Card(color, CardType.NUMBER, value))
            cards.append(Card(color, CardType.NUMBER, value))
        for card_type in ACTION_TYPES:
            cards.append(Card(color, card_type))
            cards.append(Card(color, card_type))

    for _ in range(WILD_COUNT // 2):
        cards.append(Card(Color.WILD, CardType.WILD))
        cards.append(Card(Color.WILD, CardType.WILD_DRAW_FOUR))

    return cards


def deck_counts(cards: Iterable[Card]) -> Counter:
    """Multiset of cards with wild colors stripped."""
    return Counter(card.unresolved() for card in cards)


def verify_deck(cards: Iterable[Card]) -> None:
    """Raise ValueError unless the cards are exactly one standard deck."""
    counts = deck_counts(cards)
    expected = deck_counts(build_deck())
    if counts != expected:
        missing = expected - counts
        extra = counts - expected
        raise ValueError(
            f"Deck composition mismatch: missing={dict(missing)} extra={dict(extra)}"
        )


def create_deck(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Card]:
    """Return a verified, shuffled deck.

    Pass either a seed or an existing Random instance; neither uses the
    module-level generator.
    """
    cards = build_deck()
    verify_deck(cards)
    if rng is None:
        rng = random.Random(seed)
    rng.shuffle(cards)
    return cards
