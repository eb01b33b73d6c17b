"""Turn untrusted move proposals into moves the engine will accept."""

import logging
from collections import Counter
from typing import Optional, Sequence

from unoarena.engine import PLAYABLE_COLORS, Card, Color, DrawCard, Move, PlayCard, Snapshot

logger = logging.getLogger(__name__)


def best_color(hand: Sequence[Card], skip_index: Optional[int] = None) -> Color:
    """Most common color among the non-wild cards in hand.

    Ties go to the earlier color in PLAYABLE_COLORS; a hand with no colored
    cards gets red.
    """
    counts = Counter(
        card.color for i, card in enumerate(hand) if i != skip_index and not card.is_wild
    )
    return max(PLAYABLE_COLORS, key=lambda color: counts[color])


def fallback_move(snapshot: Snapshot, legal_indices: Sequence[int]) -> Move:
    """Deterministic safe move: first legal play, else draw."""
    if not legal_indices:
        return DrawCard()
    index = legal_indices[0]
    card = snapshot.hand[index]
    color = best_color(snapshot.hand, skip_index=index) if card.is_wild else None
    return PlayCard(hand_index=index, chosen_color=color, shout=len(snapshot.hand) == 2)


def sanitize_move(
    move: Optional[Move],
    snapshot: Snapshot,
    legal_indices: Sequence[int],
) -> Move:
    """Return move if the engine would accept it, otherwise the fallback."""
    if isinstance(move, DrawCard):
        return move
    if not isinstance(move, PlayCard):
        if move is not None:
            logger.warning("Unknown move %r from proposer; using fallback", move)
        return fallback_move(snapshot, legal_indices)
    if move.hand_index not in legal_indices:
        logger.warning(
            "Proposed index %s is not playable (legal: %s); using fallback",
            move.hand_index,
            list(legal_indices),
        )
        return fallback_move(snapshot, legal_indices)
    card = snapshot.hand[move.hand_index]
    if card.is_wild and move.chosen_color not in PLAYABLE_COLORS:
        logger.warning("Wild card %s proposed without a valid color; using fallback", card)
        return fallback_move(snapshot, legal_indices)
    return move
