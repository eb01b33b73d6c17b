"""LLM agent: reply parsing and retries, with a stubbed client."""

from types import SimpleNamespace

import pytest

from conftest import WILD, num
from unoarena.agents.llm_agent import LLMAgent, _format_snapshot, _parse_move_response
from unoarena.engine import Color, DrawCard, PlayCard


class FakeCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def view(table):
    engine = table(
        [[num(Color.RED, 5), WILD, num(Color.GREEN, 2)], [num(Color.BLUE, 1)]],
        [num(Color.RED, 7)],
        names=["Bot 0", "You"],
    )
    return engine.current_snapshot()


def _agent(replies, **kwargs):
    kwargs.setdefault("provider", "ollama")
    kwargs.setdefault("model", "llama3")
    agent = LLMAgent(**kwargs)
    fake = FakeCompletions(replies)
    agent._client = SimpleNamespace(chat=SimpleNamespace(completions=fake))
    return agent, fake


@pytest.mark.parametrize(
    "response, expected",
    [
        ('{"type": "play", "card_index": 1, "chosen_color": "blue", "shout": true}', PlayCard(1, Color.BLUE, True)),
        ("Sure! {'type': 'play', 'card_index': 0}", PlayCard(0)),
        ('{"type": "play", "cardIndex": 2, "chosenColor": "Red"}', PlayCard(2, Color.RED)),
        ('{"type": "draw"}', DrawCard()),
        ('I pick "card_index": 2 with "chosen_color": "Yellow"', PlayCard(2, Color.YELLOW)),
        ('{"type": "play", "card_index": 1, "chosen_color": "wild"}', PlayCard(1)),
        ("I will DRAW this turn", DrawCard()),
        ('{"type": "play", "card_index": 9}', None),
        ("no idea", None),
    ],
)
def test_parse_move_response(view, response, expected) -> None:
    assert _parse_move_response(response, view) == expected


def test_prompt_shows_only_own_hand(view) -> None:
    text = _format_snapshot(view)
    assert "Index 1: wild" in text
    assert "You (Player 1): 1 cards" in text
    assert "blue_1" not in text


def test_get_move_retries_until_parsed(view) -> None:
    agent, fake = _agent([RuntimeError("boom"), "garbage", '{"type": "draw"}'])
    assert agent.get_move(view, [0, 1]) == DrawCard()
    assert len(fake.calls) == 3
    assert "response_format" not in fake.calls[0]


def test_get_move_gives_up_after_three_attempts(view) -> None:
    agent, fake = _agent([RuntimeError("boom")] * 3)
    assert agent.get_move(view, [0, 1]) is None
    assert len(fake.calls) == 3


def test_json_mode_for_groq(view) -> None:
    agent, fake = _agent(['{"type": "play", "card_index": 0}'], provider="groq", api_key="test-key")
    assert agent.get_move(view, [0, 1]) == PlayCard(0)
    assert fake.calls[0]["response_format"] == {"type": "json_object"}


def test_get_comment(view) -> None:
    agent, _ = _agent(['"Take that!"\n'])
    assert agent.get_comment("played red_5", view) == "Take that!"

    agent, _ = _agent([RuntimeError("down")])
    assert agent.get_comment("played red_5", view) == ""


def test_missing_api_key(monkeypatch) -> None:
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    with pytest.raises(ValueError, match="API key"):
        LLMAgent(provider="openrouter")


def test_unknown_provider() -> None:
    with pytest.raises(ValueError, match="Unknown provider"):
        LLMAgent(provider="carrier-pigeon")


def test_agent_identity() -> None:
    agent, _ = _agent([], name="Bot 2")
    assert agent.name == "Bot 2"
    assert agent.is_automated
    agent, _ = _agent([])
    assert agent.name == "llm-llama3"
