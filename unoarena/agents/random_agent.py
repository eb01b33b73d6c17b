"""Random agent - plays a random legal card, draws only when stuck."""

import random
from typing import Optional

from unoarena.engine import DrawCard, Move, PlayCard, Snapshot
from unoarena.orchestration.fallback import best_color


class RandomAgent:
    """Automated agent for simulations and tests."""

    def __init__(self, name: str = "random", seed: Optional[int] = None, shout: bool = True):
        self._name = name
        self._rng = random.Random(seed)
        self._shout = shout

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_automated(self) -> bool:
        return True

    def get_move(self, snapshot: Snapshot, legal_indices: list[int]) -> Optional[Move]:
        # Prefer playing over drawing to make game progress
        if not legal_indices:
            return DrawCard()
        index = self._rng.choice(legal_indices)
        card = snapshot.hand[index]
        color = best_color(snapshot.hand, skip_index=index) if card.is_wild else None
        return PlayCard(
            hand_index=index,
            chosen_color=color,
            shout=self._shout and len(snapshot.hand) == 2,
        )
