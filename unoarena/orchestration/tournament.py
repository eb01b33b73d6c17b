"""Tournament - run many games and aggregate results."""

import logging
import random
from collections import defaultdict
from typing import Any, Optional

from unoarena.engine import HouseRules
from unoarena.orchestration.game_runner import GameRunner

logger = logging.getLogger(__name__)


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: int | None = None,
    rules: Optional[HouseRules] = None,
) -> dict[str, int]:
    """Run a tournament between automated agents.

    Every game seats all agents; the seating order is reversed on odd games
    so nobody always leads.

    Returns:
        Dict mapping player name to number of wins. Agents that never won
        are listed with zero.
    """
    names = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)
    for name in names:
        wins[name] = 0

    rng = random.Random(seed)
    for g in range(num_games):
        order = names if g % 2 == 0 else list(reversed(names))
        ordered_agents = {name: agents[name] for name in order}
        runner = GameRunner(ordered_agents, seed=rng.randint(0, 2**31 - 1), rules=rules)
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1
        logger.info("Game %d/%d: winner=%s turns=%d", g + 1, num_games, result.winner, result.num_turns)

    return dict(wins)
