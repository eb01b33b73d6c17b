"""Pytest fixtures: arranged tables that still hold exactly one deck."""

from typing import Callable, List, Optional, Sequence

import pytest

from unoarena.engine import Card, CardType, Color, GameEngine, build_deck, deck_counts


def num(color: Color, value: int) -> Card:
    return Card(color, CardType.NUMBER, value)


def act(color: Color, card_type: CardType) -> Card:
    return Card(color, card_type)


WILD = Card(Color.WILD, CardType.WILD)
WILD_DRAW_FOUR = Card(Color.WILD, CardType.WILD_DRAW_FOUR)


def _rest_of_deck(*used: Card) -> List[Card]:
    remaining = deck_counts(build_deck()) - deck_counts(used)
    return list(remaining.elements())


@pytest.fixture
def rest_of_deck() -> Callable[..., List[Card]]:
    """Cards of a full deck not among the given ones."""
    return _rest_of_deck


@pytest.fixture
def table() -> Callable[..., GameEngine]:
    """Arrange an engine; unless a draw pile is given, it gets every unused card."""

    def _arrange(
        hands: Sequence[Sequence[Card]],
        discard: Sequence[Card],
        draw: Optional[Sequence[Card]] = None,
        names: Optional[Sequence[str]] = None,
        **kwargs,
    ) -> GameEngine:
        if names is None:
            names = [f"p{i}" for i in range(len(hands))]
        if draw is None:
            used = [card for hand in hands for card in hand] + list(discard)
            draw = _rest_of_deck(*used)
        return GameEngine.arrange(names, hands, discard, draw, **kwargs)

    return _arrange


@pytest.fixture
def recorder():
    """Observer that keeps every snapshot it receives."""

    class Recorder:
        def __init__(self):
            self.snapshots = []

        def __call__(self, snapshot):
            self.snapshots.append(snapshot)

    return Recorder()
