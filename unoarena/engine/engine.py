"""The UNO game engine: one authoritative, mutable table.

All mutation goes through the command methods. Commands whose preconditions
fail are ignored: state stays as it was and the observer is not called.
"""

import logging
import random
from typing import Callable, List, Optional, Sequence, Union

from unoarena.engine.card import PLAYABLE_COLORS, Card, CardType, Color
from unoarena.engine.deck import DECK_SIZE, WILD_COUNT, create_deck
from unoarena.engine.game_state import (
    HISTORY_WINDOW,
    Phase,
    Player,
    PlayerSummary,
    Snapshot,
)
from unoarena.engine.rules import (
    CallOut,
    ChooseColor,
    Command,
    DrawCard,
    HouseRules,
    PlayCard,
    ShoutSingleCard,
    is_playable,
)

logger = logging.getLogger(__name__)

Observer = Callable[[Snapshot], None]

DRAW_PENALTIES = {CardType.DRAW_TWO: 2, CardType.WILD_DRAW_FOUR: 4}


class GameEngine:
    """Single-table UNO state machine with a single observer."""

    def __init__(self, rules: Optional[HouseRules] = None, seed: Optional[int] = None):
        self._rules = rules or HouseRules()
        self._rng = random.Random(seed)
        self._observer: Optional[Observer] = None

        self._players: List[Player] = []
        self._hands: List[List[Card]] = []
        self._draw_pile: List[Card] = []
        self._discard_pile: List[Card] = []  # top is last
        self._shouted: List[bool] = []
        self._current = 0
        self._direction = 1
        self._phase = Phase.AWAITING_MOVE
        self._winner: Optional[str] = None
        self._history: List[str] = []

    @classmethod
    def arrange(
        cls,
        player_names: Sequence[str],
        hands: Sequence[Sequence[Card]],
        discard_pile: Sequence[Card],
        draw_pile: Sequence[Card] = (),
        current_player_index: int = 0,
        direction: int = 1,
        automated: Optional[Sequence[bool]] = None,
        rules: Optional[HouseRules] = None,
        seed: Optional[int] = None,
    ) -> "GameEngine":
        """Build an engine on a prepared table (replays, puzzles, tests).

        The table is taken as given: no deck verification and no deal.
        """
        if len(hands) != len(player_names):
            raise ValueError("Need exactly one hand per player")
        if not discard_pile:
            raise ValueError("Discard pile needs an active card")
        if direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {direction}")
        engine = cls(rules=rules, seed=seed)
        engine._players = _make_players(player_names, automated)
        engine._hands = [list(hand) for hand in hands]
        engine._discard_pile = list(discard_pile)
        engine._draw_pile = list(draw_pile)
        engine._shouted = [False] * len(player_names)
        engine._current = current_player_index % len(player_names)
        engine._direction = direction
        if engine._discard_pile[-1].color is Color.WILD:
            engine._phase = Phase.AWAITING_COLOR_CHOICE
        return engine

    # ------------------------------------------------------------------
    # Read side

    @property
    def rules(self) -> HouseRules:
        return self._rules

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_game_over(self) -> bool:
        return self._phase is Phase.ROUND_OVER

    @property
    def winner(self) -> Optional[str]:
        return self._winner

    @property
    def players(self) -> tuple:
        return tuple(self._players)

    @property
    def current_player_index(self) -> int:
        return self._current

    @property
    def direction(self) -> int:
        return self._direction

    @property
    def top_card(self) -> Optional[Card]:
        return self._discard_pile[-1] if self._discard_pile else None

    @property
    def draw_pile_count(self) -> int:
        return len(self._draw_pile)

    @property
    def discard_pile_count(self) -> int:
        return len(self._discard_pile)

    def hand_size(self, player_index: int) -> int:
        return len(self._hands[player_index])

    def all_cards(self) -> List[Card]:
        """Every card on the table (piles and hands), for conservation checks."""
        cards = list(self._draw_pile) + list(self._discard_pile)
        for hand in self._hands:
            cards.extend(hand)
        return cards

    def snapshot(self, viewer_index: Optional[int] = None) -> Snapshot:
        """Snapshot from one seat; defaults to the acting player."""
        if viewer_index is None:
            viewer_index = self._current
        elif not self._valid_seat(viewer_index):
            raise ValueError(f"No seat {viewer_index!r} at a table of {len(self._players)}")
        players = tuple(
            PlayerSummary(
                name=p.name,
                is_automated=p.is_automated,
                card_count=len(self._hands[i]),
                has_shouted=self._shouted[i],
            )
            for i, p in enumerate(self._players)
        )
        if self._players:
            hand = tuple(self._hands[viewer_index])
            current_automated = self._players[self._current].is_automated
        else:
            hand = ()
            current_automated = False
        return Snapshot(
            players=players,
            viewer_index=viewer_index,
            hand=hand,
            top_card=self.top_card,
            draw_pile_count=len(self._draw_pile),
            current_player_index=self._current,
            current_player_is_automated=current_automated,
            direction=self._direction,
            phase=self._phase,
            winner=self._winner,
            history=tuple(self._history[-HISTORY_WINDOW:]),
            event_count=len(self._history),
        )

    def current_snapshot(self) -> Snapshot:
        return self.snapshot()

    def subscribe(self, observer: Optional[Observer]) -> None:
        """Register the observer, replacing any previous one."""
        self._observer = observer

    # ------------------------------------------------------------------
    # Commands

    def initialize(
        self,
        player_names: Sequence[str],
        automated: Optional[Sequence[bool]] = None,
    ) -> None:
        """Start a new game: shuffle, deal, flip a non-wild opening card."""
        if not player_names:
            logger.debug("initialize ignored: no players")
            return
        players = _make_players(player_names, automated)
        # Leave more cards than there are wilds so a colored opener exists.
        if len(players) * self._rules.hand_size > DECK_SIZE - WILD_COUNT - 1:
            raise ValueError(
                f"Cannot deal {self._rules.hand_size} cards to {len(players)} players"
            )

        deck = create_deck(rng=self._rng)
        hands: List[List[Card]] = [[] for _ in players]
        for _ in range(self._rules.hand_size):
            for hand in hands:
                if deck:
                    hand.append(deck.pop())

        top = deck.pop()
        while top.is_wild:
            deck.append(top)
            self._rng.shuffle(deck)
            top = deck.pop()

        self._players = players
        self._hands = hands
        self._draw_pile = deck
        self._discard_pile = [top]
        self._shouted = [False] * len(players)
        self._current = 0
        self._direction = 1
        self._phase = Phase.AWAITING_MOVE
        self._winner = None
        self._history = []
        logger.debug("New game for %s, opening card %s", [p.name for p in players], top)
        self._emit()

    def play_card(self, hand_index: int) -> None:
        """Play a card from the current player's hand."""
        if not self._awaiting_move("play_card"):
            return
        hand = self._hands[self._current]
        if not isinstance(hand_index, int) or isinstance(hand_index, bool):
            logger.debug("play_card ignored: index %r is not an integer", hand_index)
            return
        if not 0 <= hand_index < len(hand):
            logger.debug("play_card ignored: index %s out of range", hand_index)
            return
        card = hand[hand_index]
        if not is_playable(card, self.top_card):
            logger.debug("play_card ignored: %s does not match %s", card, self.top_card)
            return

        hand.pop(hand_index)
        self._discard_pile.append(card)
        name = self._players[self._current].name

        if not hand:
            self._phase = Phase.ROUND_OVER
            self._winner = name
            self._history.append(f"{name} played {card} and WON!")
            self._emit()
            return

        self._history.append(f"{name} played {card}")
        if card.is_wild:
            self._phase = Phase.AWAITING_COLOR_CHOICE
        else:
            self._resolve(card)
        self._emit()

    def choose_color(self, color: Union[Color, str]) -> None:
        """Bind a color to the wild card just played and resolve it."""
        if self._phase is not Phase.AWAITING_COLOR_CHOICE:
            logger.debug("choose_color ignored in phase %s", self._phase.value)
            return
        try:
            color = Color(color)
        except ValueError:
            logger.debug("choose_color ignored: unknown color %r", color)
            return
        if color not in PLAYABLE_COLORS:
            logger.debug("choose_color ignored: %s is not playable", color.value)
            return

        card = self._discard_pile[-1].with_color(color)
        self._discard_pile[-1] = card
        self._phase = Phase.AWAITING_MOVE
        self._history.append(f"{self._players[self._current].name} chose {color.value}")
        self._resolve(card)
        self._emit()

    def draw_card(self) -> None:
        """Draw one card for the current player and pass the turn."""
        if not self._awaiting_move("draw_card"):
            return
        drawn = self._take(1)
        self._hands[self._current].extend(drawn)
        self._shouted[self._current] = False
        name = self._players[self._current].name
        if drawn:
            self._history.append(f"{name} drew a card")
        else:
            self._history.append(f"{name} could not draw and passed")
        self._advance()
        self._emit()

    def shout_single_card(self, player_index: int) -> None:
        """Record that a player holding one card has shouted UNO."""
        if not self._valid_seat(player_index) or self.is_game_over:
            return
        if len(self._hands[player_index]) != 1 or self._shouted[player_index]:
            return
        self._shouted[player_index] = True
        self._history.append(f"{self._players[player_index].name} shouted UNO")
        self._emit()

    def call_out_and_penalize(self, player_index: int) -> None:
        """Penalize a player holding one card who has not shouted."""
        if not self._valid_seat(player_index) or self.is_game_over:
            return
        if len(self._hands[player_index]) != 1 or self._shouted[player_index]:
            return
        drawn = self._take(self._rules.penalty_cards)
        if not drawn:
            logger.debug("call_out_and_penalize ignored: no cards left to draw")
            return
        self._hands[player_index].extend(drawn)
        self._shouted[player_index] = False
        self._history.append(
            f"{self._players[player_index].name} was called out and drew {len(drawn)} cards (penalty)"
        )
        self._emit()

    def execute(self, command: Command) -> None:
        """Apply a tagged command."""
        if isinstance(command, PlayCard):
            seat = self._current
            before = len(self._discard_pile)
            self.play_card(command.hand_index)
            if len(self._discard_pile) <= before:
                return
            if self._phase is Phase.AWAITING_COLOR_CHOICE and command.chosen_color is not None:
                self.choose_color(command.chosen_color)
            if command.shout:
                self.shout_single_card(seat)
        elif isinstance(command, DrawCard):
            self.draw_card()
        elif isinstance(command, ChooseColor):
            self.choose_color(command.color)
        elif isinstance(command, ShoutSingleCard):
            self.shout_single_card(command.player_index)
        elif isinstance(command, CallOut):
            self.call_out_and_penalize(command.player_index)
        else:
            raise TypeError(f"Unknown command: {command!r}")

    # ------------------------------------------------------------------
    # Internals

    def _awaiting_move(self, command: str) -> bool:
        if not self._players:
            logger.debug("%s ignored: game not initialized", command)
            return False
        if self._phase is not Phase.AWAITING_MOVE:
            logger.debug("%s ignored in phase %s", command, self._phase.value)
            return False
        return True

    def _valid_seat(self, player_index: int) -> bool:
        if not isinstance(player_index, int) or isinstance(player_index, bool):
            return False
        return 0 <= player_index < len(self._players)

    def _next_index(self) -> int:
        n = len(self._players)
        return (self._current + self._direction + n) % n

    def _advance(self, steps: int = 1) -> None:
        for _ in range(steps):
            self._current = self._next_index()

    def _resolve(self, card: Card) -> None:
        """Apply the played card's turn effect and move the turn on."""
        if card.type is CardType.REVERSE:
            self._direction = -self._direction
            self._advance()
        elif card.type is CardType.SKIP:
            self._advance(2)
        elif card.type in DRAW_PENALTIES:
            victim = self._next_index()
            drawn = self._take(DRAW_PENALTIES[card.type])
            self._hands[victim].extend(drawn)
            self._shouted[victim] = False
            self._history.append(f"{self._players[victim].name} drew {len(drawn)} cards")
            self._advance(2 if self._rules.draw_cards_skip_turn else 1)
        else:
            self._advance()

    def _take(self, count: int) -> List[Card]:
        """Pop up to count cards off the draw pile, reshuffling when it runs out."""
        out: List[Card] = []
        for _ in range(count):
            if not self._draw_pile:
                self._reshuffle_discard()
            if not self._draw_pile:
                break
            out.append(self._draw_pile.pop())
        return out

    def _reshuffle_discard(self) -> None:
        """Turn the discard pile, minus its top, into a fresh draw pile."""
        if len(self._discard_pile) < 2:
            return
        top = self._discard_pile.pop()
        recycled = [card.unresolved() for card in self._discard_pile]
        self._rng.shuffle(recycled)
        self._draw_pile = recycled
        self._discard_pile = [top]
        logger.debug("Reshuffled %d cards into the draw pile", len(recycled))

    def _emit(self) -> None:
        if self._observer is not None:
            self._observer(self.current_snapshot())


def _make_players(
    player_names: Sequence[str],
    automated: Optional[Sequence[bool]],
) -> List[Player]:
    """Seat players; by default the first is human and the rest automated."""
    if len(set(player_names)) != len(player_names):
        raise ValueError(f"Player names must be unique: {list(player_names)}")
    if automated is None:
        automated = [i != 0 for i in range(len(player_names))]
    elif len(automated) != len(player_names):
        raise ValueError("Need exactly one automated flag per player")
    return [Player(name=name, is_automated=bool(flag)) for name, flag in zip(player_names, automated)]
