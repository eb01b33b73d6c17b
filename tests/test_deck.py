"""Unit tests for cards and deck construction."""

from collections import Counter

import pytest

from unoarena.engine import (
    DECK_SIZE,
    PLAYABLE_COLORS,
    Card,
    CardType,
    Color,
    build_deck,
    create_deck,
    verify_deck,
)


def test_create_deck_size() -> None:
    deck = create_deck(seed=42)
    assert len(deck) == DECK_SIZE == 108


def test_create_deck_reproducible() -> None:
    d1 = create_deck(seed=123)
    d2 = create_deck(seed=123)
    assert d1 == d2
    assert d1 != build_deck()


def test_deck_shape() -> None:
    counts = Counter(build_deck())
    for color in PLAYABLE_COLORS:
        assert counts[Card(color, CardType.NUMBER, 0)] == 1
        for value in range(1, 10):
            assert counts[Card(color, CardType.NUMBER, value)] == 2
        for card_type in (CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO):
            assert counts[Card(color, card_type)] == 2
        assert sum(n for card, n in counts.items() if card.color is color) == 25
    assert counts[Card(Color.WILD, CardType.WILD)] == 4
    assert counts[Card(Color.WILD, CardType.WILD_DRAW_FOUR)] == 4
    assert len(counts) == 4 * (10 + 3) + 2


def test_verify_deck_rejects_missing_card() -> None:
    deck = build_deck()
    deck.pop()
    with pytest.raises(ValueError, match="composition"):
        verify_deck(deck)


def test_verify_deck_accepts_resolved_wilds() -> None:
    deck = build_deck()
    i = next(i for i, card in enumerate(deck) if card.is_wild)
    deck[i] = deck[i].with_color(Color.GREEN)
    verify_deck(deck)


def test_number_card_requires_value() -> None:
    with pytest.raises(ValueError):
        Card(Color.RED, CardType.NUMBER)
    with pytest.raises(ValueError):
        Card(Color.RED, CardType.NUMBER, 10)
    with pytest.raises(ValueError):
        Card(Color.RED, CardType.NUMBER, True)
    with pytest.raises(ValueError):
        Card(Color.RED, CardType.NUMBER, "5")


def test_action_card_rejects_value() -> None:
    with pytest.raises(ValueError):
        Card(Color.RED, CardType.SKIP, 3)


def test_colored_card_needs_playable_color() -> None:
    with pytest.raises(ValueError):
        Card(Color.WILD, CardType.REVERSE)


def test_wild_color_binding() -> None:
    wild = Card(Color.WILD, CardType.WILD_DRAW_FOUR)
    assert wild.is_wild and not wild.is_resolved

    bound = wild.with_color(Color.BLUE)
    assert bound.color is Color.BLUE
    assert bound.is_resolved
    assert bound.unresolved() == wild
    assert str(bound) == "wild_draw_four(blue)"

    with pytest.raises(ValueError):
        wild.with_color(Color.WILD)
    with pytest.raises(ValueError):
        Card(Color.RED, CardType.SKIP).with_color(Color.BLUE)


def test_card_str() -> None:
    assert str(Card(Color.RED, CardType.NUMBER, 5)) == "red_5"
    assert str(Card(Color.YELLOW, CardType.DRAW_TWO)) == "yellow_draw_two"
    assert str(Card(Color.WILD, CardType.WILD)) == "wild"
