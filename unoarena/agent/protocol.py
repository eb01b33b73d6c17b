"""Move proposer protocol - interface that LLM, random and human agents implement."""

from typing import Optional, Protocol

from unoarena.engine import Move, Snapshot


class MoveProposer(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    @property
    def is_automated(self) -> bool:
        """False only for agents driven by a person."""
        ...

    def get_move(
        self,
        snapshot: Snapshot,
        legal_indices: list[int],
    ) -> Optional[Move]:
        """Propose a move for the acting player.

        Args:
            snapshot: View from this agent's seat (own hand, public info).
            legal_indices: Hand indices that may be played right now.

        Returns:
            PlayCard (with chosen_color for wilds, shout when the play leaves
            a single card) or DrawCard. None lets the runner pick a safe move.
        """
        ...
