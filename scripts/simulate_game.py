"""Simulate a game with random agents."""

import logging

from unoarena.agents.random_agent import RandomAgent
from unoarena.engine import Snapshot
from unoarena.orchestration.game_runner import GameRunner


def print_latest(snapshot: Snapshot) -> None:
    # Log the last event to see the game progress
    if snapshot.history:
        print(f"> {snapshot.history[-1]}")


def main():
    logging.basicConfig(level=logging.INFO)
    agents = {
        f"Bot{i}": RandomAgent(f"Bot{i}", seed=i)
        for i in range(1, 5)
    }

    runner = GameRunner(agents, seed=42, observer=print_latest)
    result = runner.run()

    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    print(f"Shout penalties: {result.penalties}")

    # The finished table is still available for inspection
    print(f"Cards left in draw pile: {runner.engine.draw_pile_count}")


if __name__ == "__main__":
    main()
