"""Playability rule tests."""

import pytest

from conftest import WILD, WILD_DRAW_FOUR, act, num
from unoarena.engine import PLAYABLE_COLORS, CardType, Color, build_deck, is_playable, playable_indices


@pytest.mark.parametrize(
    "card, top, expected",
    [
        (num(Color.RED, 5), num(Color.RED, 7), True),
        (num(Color.BLUE, 7), num(Color.RED, 7), True),
        (num(Color.BLUE, 5), num(Color.RED, 7), False),
        (act(Color.BLUE, CardType.SKIP), act(Color.RED, CardType.SKIP), True),
        (act(Color.BLUE, CardType.SKIP), act(Color.RED, CardType.REVERSE), False),
        (act(Color.RED, CardType.DRAW_TWO), num(Color.RED, 2), True),
        (num(Color.GREEN, 2), act(Color.RED, CardType.DRAW_TWO), False),
        (WILD, num(Color.RED, 7), True),
        (WILD_DRAW_FOUR, act(Color.GREEN, CardType.SKIP), True),
        (act(Color.GREEN, CardType.SKIP), WILD.with_color(Color.BLUE), False),
        (num(Color.BLUE, 3), WILD.with_color(Color.BLUE), True),
        (num(Color.YELLOW, 0), WILD_DRAW_FOUR.with_color(Color.YELLOW), True),
        (num(Color.RED, 0), WILD_DRAW_FOUR.with_color(Color.YELLOW), False),
    ],
)
def test_is_playable_table(card, top, expected) -> None:
    assert is_playable(card, top) is expected


def test_is_playable_exhaustive() -> None:
    faces = sorted(set(build_deck()), key=str)
    tops = [c for c in faces if not c.is_wild]
    tops += [w.with_color(color) for w in (WILD, WILD_DRAW_FOUR) for color in PLAYABLE_COLORS]
    for top in tops:
        for card in faces:
            same_face = card.type == top.type and (
                card.type is not CardType.NUMBER or card.value == top.value
            )
            expected = card.is_wild or card.color == top.color or same_face
            assert is_playable(card, top) is expected, (card, top)


def test_nothing_plays_on_empty_pile() -> None:
    assert not is_playable(WILD, None)


def test_playable_indices() -> None:
    hand = [num(Color.GREEN, 3), WILD, num(Color.RED, 5), num(Color.BLUE, 7)]
    assert playable_indices(hand, num(Color.RED, 7)) == [1, 2, 3]
    assert playable_indices([], num(Color.RED, 7)) == []
