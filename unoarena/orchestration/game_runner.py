"""Single game runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unoarena.engine import (
    Color,
    DrawCard,
    GameEngine,
    HouseRules,
    Move,
    Observer,
    Snapshot,
)
from unoarena.orchestration.fallback import sanitize_move

if TYPE_CHECKING:
    from unoarena.agent.protocol import MoveProposer

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    player_names: tuple[str, ...]
    penalties: int = 0


class GameRunner:
    """Runs a single UNO game to completion.

    Agents are seated in dict order; keys are the player names.
    """

    def __init__(
        self,
        agents: dict[str, "MoveProposer"],
        seed: Optional[int] = None,
        rules: Optional[HouseRules] = None,
        max_turns: int = 1000,
        enforce_shout: bool = True,
        commentary: bool = False,
        observer: Optional[Observer] = None,
    ):
        self._agents = agents
        self._seed = seed
        self._rules = rules
        self._max_turns = max_turns
        self._enforce_shout = enforce_shout
        self._commentary = commentary
        self._observer = observer
        self.engine: Optional[GameEngine] = None

    def run(self) -> GameResult:
        """Run the game and return the result."""
        names = list(self._agents.keys())
        engine = GameEngine(rules=self._rules, seed=self._seed)
        self.engine = engine
        engine.subscribe(self._observer)
        engine.initialize(names, automated=[self._agents[n].is_automated for n in names])

        num_turns = 0
        penalties = 0
        while not engine.is_game_over and num_turns < self._max_turns:
            snapshot = engine.current_snapshot()
            seat = snapshot.current_player_index
            agent = self._agents[names[seat]]
            legal = snapshot.legal_indices()

            proposed = agent.get_move(snapshot, legal)
            move = sanitize_move(proposed, snapshot, legal)
            apply_move(engine, move)
            num_turns += 1

            if self._commentary:
                self._comment(agent, move, snapshot, engine.snapshot(seat))
            if self._enforce_shout:
                penalties += call_out_silent_players(engine)

        if not engine.is_game_over:
            logger.info("Game stopped after %d turns without a winner", num_turns)
        return GameResult(
            winner=engine.winner,
            num_turns=num_turns,
            player_names=tuple(names),
            penalties=penalties,
        )

    def _comment(self, agent, move: Move, before: Snapshot, after: Snapshot) -> None:
        get_comment = getattr(agent, "get_comment", None)
        if get_comment is None:
            return
        line = get_comment(describe_move(move, before), after)
        if line:
            logger.info("[%s] %s", agent.name, line)


def apply_move(engine: GameEngine, move: Move) -> None:
    """Issue the engine commands for a sanitized move."""
    engine.execute(move)


def call_out_silent_players(engine: GameEngine) -> int:
    """Close the shout window: penalize everyone holding one card unannounced."""
    if engine.is_game_over:
        return 0
    called = 0
    for seat, player in enumerate(engine.snapshot().players):
        if player.card_count == 1 and not player.has_shouted:
            engine.call_out_and_penalize(seat)
            if engine.hand_size(seat) == 1:
                continue
            logger.info("%s forgot to shout UNO and draws %d", player.name, engine.hand_size(seat) - 1)
            called += 1
    return called


def describe_move(move: Move, snapshot: Snapshot) -> str:
    """Short past-tense description of a move, for commentary prompts."""
    if isinstance(move, DrawCard):
        return "drew a card"
    card = snapshot.hand[move.hand_index]
    text = f"played {card}"
    if move.chosen_color is not None and card.is_wild:
        text += f" and chose {Color(move.chosen_color).value}"
    return text
