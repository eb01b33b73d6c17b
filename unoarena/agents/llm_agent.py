"""LLM agent using the OpenAI library against OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import Any, Optional

from openai import OpenAI

from unoarena.engine import PLAYABLE_COLORS, Color, DrawCard, Move, PlayCard, Snapshot

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"

MAX_ATTEMPTS = 3


def _format_snapshot(snapshot: Snapshot) -> str:
    """Format the agent's view of the table as text for the LLM."""
    me = snapshot.players[snapshot.viewer_index]
    lines = [
        "=== Your hand ===",
    ]
    lines.extend(f"- Index {i}: {card}" for i, card in enumerate(snapshot.hand))
    lines.extend([
        "",
        "=== Top card on discard ===",
        str(snapshot.top_card) if snapshot.top_card else "None",
        "(For wild cards the color chosen by the previous player is shown in brackets.)",
        "",
        "=== Player card counts ===",
    ])
    for i, p in enumerate(snapshot.players):
        you = " (you)" if p.name == me.name else ""
        shouted = ", shouted UNO" if p.has_shouted else ""
        lines.append(f"  {p.name} (Player {i}){you}: {p.card_count} cards{shouted}")
    lines.extend([
        "",
        "=== Direction ===",
        "clockwise" if snapshot.direction == 1 else "counter-clockwise",
        "",
        "=== Game History (last 10 events) ===",
    ])
    if snapshot.history:
        lines.extend(f"- {h}" for h in snapshot.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _coerce_move(data: Any, snapshot: Snapshot) -> Optional[Move]:
    """Turn a decoded JSON object into a Move, or None if it is not one."""
    if not isinstance(data, dict):
        return None
    kind = str(data.get("type", "")).lower()
    if kind == "draw":
        return DrawCard()
    if kind != "play":
        return None
    idx = data.get("card_index", data.get("cardIndex"))
    if isinstance(idx, str) and idx.isdigit():
        idx = int(idx)
    if not isinstance(idx, int) or isinstance(idx, bool) or not 0 <= idx < len(snapshot.hand):
        logger.warning("Card index %r out of range (0-%d)", idx, len(snapshot.hand) - 1)
        return None
    color = None
    raw_color = data.get("chosen_color", data.get("chosenColor"))
    if isinstance(raw_color, str):
        try:
            color = Color(raw_color.strip().lower())
        except ValueError:
            color = None
    if color not in PLAYABLE_COLORS:
        color = None
    shout = bool(data.get("shout", False))
    return PlayCard(hand_index=idx, chosen_color=color, shout=shout)


def _parse_move_response(response: str, snapshot: Snapshot) -> Optional[Move]:
    """Parse an LLM response into a Move."""
    # 1. A JSON object somewhere in the response
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except (json.JSONDecodeError, ValueError):
                continue
            move = _coerce_move(data, snapshot)
            if move is not None:
                return move
            break

    # 2. Targeted regex for card_index: N (quoted or bare keys)
    match = re.search(r'["\']?card_?index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        color_match = re.search(
            r'["\']?chosen_?color["\']?\s*:\s*["\']?(red|blue|green|yellow)', response, re.IGNORECASE
        )
        data = {
            "type": "play",
            "card_index": int(match.group(1)),
            "chosen_color": color_match.group(1) if color_match else None,
            "shout": bool(re.search(r'["\']?shout["\']?\s*:\s*true', response, re.IGNORECASE)),
        }
        return _coerce_move(data, snapshot)

    # 3. Fallback: look for "DRAW" literally
    if "DRAW" in response.upper():
        return DrawCard()

    return None


class LLMAgent:
    """Agent that asks an LLM for its moves."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        name: Optional[str] = None,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._request_history: list[float] = []
        self._name = name or f"llm-{model}"

        logger.info(
            "[%s] Initialized with provider=%s, base_url=%s, timeout=%ss, rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_automated(self) -> bool:
        return True

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            # Wait until the oldest request in the window expires
            oldest = self._request_history[0]
            wait_time = 60.0 - (now - oldest)
            if wait_time > 0:
                logger.info(
                    "[%s] Rate limit reached (%d/%s rpm). Waiting %.2fs...",
                    self.name, len(self._request_history), self._rate_limit, wait_time,
                )
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _complete(self, prompt: str, json_mode: bool) -> str:
        self._wait_for_rate_limit()
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "timeout": self._timeout,
        }
        # Only pass response_format where the provider is known to support JSON mode
        if json_mode and ("gpt-4" in self._model or "gpt-3.5" in self._model or self._provider == "groq"):
            kwargs["response_format"] = {"type": "json_object"}
        resp = self._client.chat.completions.create(**kwargs)
        return resp.choices[0].message.content or ""

    def get_move(self, snapshot: Snapshot, legal_indices: list[int]) -> Optional[Move]:
        colors = ", ".join(f"'{c.value}'" for c in PLAYABLE_COLORS)
        prompt = f"""You are a world-class UNO champion playing a strategic game. It's your turn.
Match the top discard card by color or by face (number, Skip, Reverse, Draw Two). Wild cards can be played on anything.

{_format_snapshot(snapshot)}

=== Your legal moves ===
Playable card indices: [{", ".join(str(i) for i in legal_indices)}]
If the list is empty, you MUST draw a card.

Strategy:
1. Win by emptying your hand.
2. If you play a Wild card, choose the color you hold the most of.
3. Use Skip, Reverse and Draw cards against opponents with few cards.
4. Prefer playing a card over drawing.
5. If your play leaves you with exactly one card, set "shout" to true or you will be penalized.

Respond with ONLY a JSON object:
- Play a card: {{"type": "play", "card_index": <index>, "shout": <true|false>}}
- Play a Wild card: {{"type": "play", "card_index": <index>, "chosen_color": "<color>", "shout": <true|false>}} (color must be one of {colors})
- Draw a card: {{"type": "draw"}}
"""

        for attempt in range(1, MAX_ATTEMPTS + 1):
            start_time = time.time()
            try:
                logger.debug("[%s] Attempt %d: sending request to %s", self.name, attempt, self._provider)
                content = self._complete(prompt, json_mode=True)
                logger.debug("[%s] Received response in %.2fs", self.name, time.time() - start_time)

                move = _parse_move_response(content, snapshot)
                if move is not None:
                    return move
                logger.warning("[%s] Failed to parse move from response: %r", self.name, content)
            except Exception as e:
                logger.warning(
                    "[%s] Error on attempt %d after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )

        logger.warning("[%s] All retries failed. Leaving the move to the runner.", self.name)
        return None

    def get_comment(self, move_description: str, snapshot: Snapshot) -> str:
        """Short chat line reacting to the move just made. Empty on failure."""
        me = snapshot.players[snapshot.viewer_index]
        top = snapshot.top_card
        prompt = f"""You are an online UNO player named "{me.name}".
The game is in progress. You just {move_description}.
The top card is now {top}.
You have {me.card_count} cards left.
Write a very short, casual chat message (5-10 words) reacting to your move or the game state. Your personality is a bit cheeky and competitive. Don't use emojis or hashtags.

Respond with ONLY the chat message text."""
        try:
            text = self._complete(prompt, json_mode=False)
        except Exception as e:
            logger.warning("[%s] Chat request failed: %s: %s", self.name, type(e).__name__, e)
            return ""
        return text.strip().strip('"')
