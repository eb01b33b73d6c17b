"""Human agent - reads moves from the terminal."""

from typing import Callable, Optional

from unoarena.engine import PLAYABLE_COLORS, Color, DrawCard, Move, PlayCard, Snapshot


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human", input_fn: Callable[[str], str] = input):
        self._name = name
        self._input = input_fn

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_automated(self) -> bool:
        return False

    def get_move(self, snapshot: Snapshot, legal_indices: list[int]) -> Optional[Move]:
        print("\n--- Your turn ---")
        print("Top discard:", snapshot.top_card)
        print("Your hand:")
        for i, card in enumerate(snapshot.hand):
            marker = "*" if i in legal_indices else " "
            print(f" {marker}{i}: {card}")
        for p in snapshot.players:
            if p.name != self._name:
                print(f"  {p.name}: {p.card_count} cards")

        while True:
            try:
                raw = self._input("Card number, or d to draw: ").strip().lower()
            except EOFError:
                return DrawCard()
            if raw in ("d", "draw"):
                return DrawCard()
            try:
                idx = int(raw)
            except ValueError:
                idx = -1
            if idx in legal_indices:
                break
            print("Invalid. Try again.")

        card = snapshot.hand[idx]
        color = self._ask_color() if card.is_wild else None
        shout = False
        if len(snapshot.hand) == 2:
            shout = self._ask("Shout UNO? [y/N] ").startswith("y")
        return PlayCard(hand_index=idx, chosen_color=color, shout=shout)

    def _ask_color(self) -> Color:
        names = ", ".join(c.value for c in PLAYABLE_COLORS)
        while True:
            raw = self._ask(f"Choose a color ({names}) [red]: ")
            if not raw:
                return Color.RED
            for color in PLAYABLE_COLORS:
                if color.value.startswith(raw):
                    return color
            print("Invalid. Try again.")

    def _ask(self, prompt: str) -> str:
        try:
            return self._input(prompt).strip().lower()
        except EOFError:
            return ""
