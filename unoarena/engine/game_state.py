"""Players, phases and the read-only snapshot handed to consumers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from unoarena.engine.card import Card
from unoarena.engine.rules import playable_indices

HISTORY_WINDOW = 10


class Phase(str, Enum):
    """Engine state machine."""

    AWAITING_MOVE = "awaiting_move"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    ROUND_OVER = "round_over"


@dataclass(frozen=True)
class Player:
    """A seat at the table."""

    name: str
    is_automated: bool


@dataclass(frozen=True)
class PlayerSummary:
    """Public information about one player."""

    name: str
    is_automated: bool
    card_count: int
    has_shouted: bool


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the table from one seat.

    Contains the viewer's own hand and public info only. Other players are
    reduced to card counts.
    """

    players: Tuple[PlayerSummary, ...]
    viewer_index: int
    hand: Tuple[Card, ...]
    top_card: Optional[Card]
    draw_pile_count: int
    current_player_index: int
    current_player_is_automated: bool
    direction: int
    phase: Phase
    winner: Optional[str] = None
    history: Tuple[str, ...] = field(default_factory=tuple)
    event_count: int = 0  # total events so far; history keeps the last few

    @property
    def is_game_over(self) -> bool:
        return self.phase is Phase.ROUND_OVER

    @property
    def pending_color_choice(self) -> bool:
        return self.phase is Phase.AWAITING_COLOR_CHOICE

    @property
    def is_viewer_turn(self) -> bool:
        return self.viewer_index == self.current_player_index

    @property
    def current_player_name(self) -> str:
        return self.players[self.current_player_index].name

    def legal_indices(self) -> List[int]:
        """Playable hand indices for the viewer (empty when not their move)."""
        if self.phase is not Phase.AWAITING_MOVE or not self.is_viewer_turn:
            return []
        return playable_indices(self.hand, self.top_card)
