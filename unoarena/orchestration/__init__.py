"""Game orchestration."""

from unoarena.orchestration.fallback import best_color, fallback_move, sanitize_move
from unoarena.orchestration.game_runner import GameResult, GameRunner, apply_move, call_out_silent_players
from unoarena.orchestration.tournament import run_tournament

__all__ = [
    "GameRunner",
    "GameResult",
    "apply_move",
    "call_out_silent_players",
    "run_tournament",
    "best_color",
    "fallback_move",
    "sanitize_move",
]
