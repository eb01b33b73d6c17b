"""Game engine for UNO."""

from unoarena.engine.card import PLAYABLE_COLORS, Card, CardType, Color
from unoarena.engine.deck import DECK_SIZE, build_deck, create_deck, deck_counts, verify_deck
from unoarena.engine.engine import GameEngine, Observer
from unoarena.engine.game_state import Phase, Player, PlayerSummary, Snapshot
from unoarena.engine.rules import (
    CallOut,
    ChooseColor,
    Command,
    DrawCard,
    HouseRules,
    Move,
    PlayCard,
    ShoutSingleCard,
    is_playable,
    playable_indices,
)

__all__ = [
    "Card",
    "CardType",
    "Color",
    "PLAYABLE_COLORS",
    "DECK_SIZE",
    "build_deck",
    "create_deck",
    "deck_counts",
    "verify_deck",
    "GameEngine",
    "Observer",
    "Phase",
    "Player",
    "PlayerSummary",
    "Snapshot",
    "Command",
    "Move",
    "PlayCard",
    "DrawCard",
    "ChooseColor",
    "ShoutSingleCard",
    "CallOut",
    "HouseRules",
    "is_playable",
    "playable_indices",
]
