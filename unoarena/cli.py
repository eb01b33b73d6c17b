"""CLI entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import typer
from dotenv import load_dotenv

if TYPE_CHECKING:
    from unoarena.agent.protocol import MoveProposer
    from unoarena.engine import Snapshot

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO arena: play against LLM and random bots")


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int] = None,
) -> dict[str, "MoveProposer"]:
    """Build agents from a spec like "human,llm,random,llm:model"; keys are seat names."""
    from unoarena.agents.human_agent import HumanAgent
    from unoarena.agents.llm_agent import LLMAgent
    from unoarena.agents.random_agent import RandomAgent

    parts = [s.strip() for s in agent_specs.split(",") if s.strip()]
    if not parts:
        raise typer.BadParameter("Need at least one agent.")
    agents: dict[str, MoveProposer] = {}
    for i, part in enumerate(parts):
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model
        kind = kind.lower()

        if kind == "llm":
            name = f"Bot {i}"
            agents[name] = LLMAgent(provider=llm_provider, model=model, name=name)
        elif kind == "random":
            name = f"Bot {i}"
            agents[name] = RandomAgent(name=name, seed=None if seed is None else seed + i)
        elif kind == "human":
            name = "You" if i == 0 else f"Human {i}"
            agents[name] = HumanAgent(name=name)
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'llm', 'random' or 'human'.")
    return agents


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class _EventPrinter:
    """Observer that echoes each new table event once."""

    def __init__(self) -> None:
        self._seen = 0

    def __call__(self, snapshot: "Snapshot") -> None:
        if snapshot.event_count < self._seen:  # new game
            self._seen = 0
        fresh = snapshot.event_count - self._seen
        if fresh > 0:
            for event in snapshot.history[-fresh:]:
                typer.echo(f"> {event}")
        self._seen = snapshot.event_count


@app.command()
def play(
    agents: str = typer.Option(
        "human,llm,llm",
        "--agents",
        "-a",
        help="Comma-separated: human, llm, random, or llm:model_name (e.g. human,llm:gpt-4o,random)",
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama, or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    draw_skips: bool = typer.Option(
        False, "--draw-skips", help="Draw Two / Wild Draw Four also skip the victim's turn"
    ),
    shout_penalty: bool = typer.Option(
        True, "--shout-penalty/--no-shout-penalty", help="Penalize players who forget to shout UNO"
    ),
    chatter: bool = typer.Option(False, "--chatter", help="Let LLM bots comment on their moves"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a single UNO game."""
    from unoarena.engine import HouseRules
    from unoarena.orchestration.game_runner import GameRunner

    _setup_logging(verbose)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed=seed)
    runner = GameRunner(
        agent_map,
        seed=seed,
        rules=HouseRules(draw_cards_skip_turn=draw_skips),
        enforce_shout=shout_penalty,
        commentary=chatter,
        observer=_EventPrinter(),
    )
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None (draw)'}")
    typer.echo(f"Turns: {result.num_turns}")
    typer.echo(f"Shout penalties: {result.penalties}")


@app.command()
def tournament(
    agents: str = typer.Option(
        "random,random",
        "--agents",
        "-a",
        help="Comma-separated automated agents: random, llm, or llm:model_name",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama, or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a tournament between automated agents."""
    from unoarena.orchestration.tournament import run_tournament

    _setup_logging(verbose)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed=seed)
    if any(not agent.is_automated for agent in agent_map.values()):
        raise typer.BadParameter("Tournaments only take automated agents.")
    wins = run_tournament(agent_map, num_games=games, seed=seed)
    typer.echo("Tournament results:")
    for name, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {w} wins")


if __name__ == "__main__":
    app()
