"""CLI smoke tests with random agents."""

import pytest
import typer
from typer.testing import CliRunner

from unoarena.agents import HumanAgent, RandomAgent
from unoarena.cli import _parse_agents, app

runner = CliRunner()


def test_parse_agents_names_seats() -> None:
    agents = _parse_agents("human, random,RANDOM", "openrouter", "openai/gpt-4o-mini", seed=1)
    assert list(agents) == ["You", "Bot 1", "Bot 2"]
    assert isinstance(agents["You"], HumanAgent)
    assert isinstance(agents["Bot 2"], RandomAgent)
    assert not agents["You"].is_automated


def test_parse_agents_rejects_unknown_kind() -> None:
    with pytest.raises(typer.BadParameter):
        _parse_agents("random,robot", "openrouter", "openai/gpt-4o-mini")
    with pytest.raises(typer.BadParameter):
        _parse_agents(" , ", "openrouter", "openai/gpt-4o-mini")


def test_play_command() -> None:
    result = runner.invoke(app, ["play", "--agents", "random,random,random", "--seed", "3"])
    assert result.exit_code == 0, result.output
    assert "Winner:" in result.output
    assert "> " in result.output


def test_tournament_command() -> None:
    result = runner.invoke(app, ["tournament", "--agents", "random,random", "--games", "2", "--seed", "1"])
    assert result.exit_code == 0, result.output
    assert "Tournament results:" in result.output


def test_tournament_refuses_humans() -> None:
    result = runner.invoke(app, ["tournament", "--agents", "human,random", "--games", "1"])
    assert result.exit_code != 0
