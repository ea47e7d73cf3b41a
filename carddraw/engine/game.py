"""
Game session and round state machine for the card draw game.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from enum import Enum, auto
from typing import Optional

from .deck import Deck, Card, Suit, Colour
from .choice import Bet, Choice, MultiplierTable, make_choice, multiplier_for, parse_bet_amount
from .outcome import HIT_WINDOW, RoundOutcome, resolve_round_outcome, payout
from .probability import ProbabilityBreakdown, probability_breakdown
from .history import DrawHistory, SessionLog
from .notify import Notifier, RoundResolved
from .errors import InvalidPhaseError, ValidationError
from ..logging_utils import get_logger

logger = get_logger(__name__)


class Phase(Enum):
    SETUP = auto()
    PLAY = auto()
    RESULT = auto()


def _seed_from_env() -> Optional[int]:
    raw = os.getenv("CARDDRAW_SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer CARDDRAW_SEED=%r", raw)
        return None


def _to_card(card) -> Card:
    return card if isinstance(card, Card) else Card.parse(card)


# Session methods a preset may call, with the parser for their argument
PRESET_EDITS = {
    "remove_suit": Suit.parse,
    "add_suit": Suit.parse,
    "remove_colour": Colour.parse,
    "add_colour": Colour.parse,
    "remove_card": _to_card,
    "add_card": _to_card,
    "remove_faces": None,
    "add_faces": None,
    "remove_odd": None,
    "add_odd": None,
    "remove_even": None,
    "add_even": None,
    "clear_deck": None,
    "shuffle": None,
}


@dataclass
class GameConfig:
    """Configuration for a game session."""
    hit_window: int = HIT_WINDOW
    multipliers: MultiplierTable = field(default_factory=MultiplierTable.load_default)
    seed: Optional[int] = field(default_factory=_seed_from_env)
    sound_dir: Path = Path("res")


@dataclass
class RoundResult:
    """Result of an ended round."""
    round_number: int
    bet: Bet
    multiplier: float
    outcome: RoundOutcome
    net: int

    @property
    def won(self) -> bool:
        return self.outcome.won

    @property
    def potential_payout(self) -> float:
        return self.bet.amount * self.multiplier

    def __str__(self):
        title = "YOU WON!" if self.won else "YOU LOST"
        shown = self.outcome.display_card
        lines = [
            f"{'='*50}",
            f"  {title}",
            f"{'='*50}",
            f"  Your bet: {self.bet}",
            f"  Potential payout: ${self.potential_payout:.2f} (bet x {self.multiplier:.2f})",
            f"  {'Return' if self.net >= 0 else 'Lost'}: ${abs(self.net)}",
            f"  Displayed card: {shown if shown else 'None'}",
            f"  {self.outcome.describe_window()}",
        ]
        if self.outcome.hits:
            lines.append(f"  Hit(s) among last {len(self.outcome.window)}: "
                         f"{', '.join(str(c) for c in self.outcome.hits)}")
        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "round": self.round_number,
            "bet": self.bet.amount,
            "choice": self.bet.choice.summary(),
            "multiplier": self.multiplier,
            "won": self.won,
            "net": self.net,
            "display_card": str(self.outcome.display_card) if self.outcome.display_card else None,
            "window": [str(c) for c in self.outcome.window],
            "hits": [str(c) for c in self.outcome.hits],
        }


class GameSession:
    """
    One player's game: deck, bet, draw history and multipliers.

    Usage:
        session = GameSession()
        session.configure_round(10, make_choice("suit", "hearts"))
        session.draw()
        result = session.end_round()
        print(result)
    """

    def __init__(self, config: GameConfig = None, notifier: Notifier = None):
        self.config = config or GameConfig()
        self.notifier = notifier or Notifier()

        self.deck = Deck.standard_52(seed=self.config.seed)
        self.history = DrawHistory()
        self.log = SessionLog()
        self.multipliers = self.config.multipliers

        self.phase = Phase.SETUP
        self.bet: Optional[Bet] = None
        self.round_number = 0
        self.last_drawn: Optional[Card] = None
        self.last_result: Optional[RoundResult] = None

    def _require(self, *phases: Phase) -> None:
        if self.phase not in phases:
            allowed = "/".join(p.name for p in phases)
            raise InvalidPhaseError(f"Not allowed during {self.phase.name} (needs {allowed})")

    # Setup

    def configure_round(self, bet_amount, choice, value=None) -> Bet:
        """
        Validate and store the bet, then move to PLAY.

        Args:
            bet_amount: Positive integer, or text that parses as one
            choice: A Choice, or a category name when `value` is given
            value: Category-specific value for a category name

        Raises:
            ValidationError: Nothing is stored and the phase stays SETUP
        """
        self._require(Phase.SETUP)
        amount = parse_bet_amount(bet_amount)
        if value is not None:
            choice = make_choice(choice, value)
        bet = Bet(amount=amount, choice=choice)

        self.bet = bet
        self.round_number += 1
        self.phase = Phase.PLAY
        multiplier = multiplier_for(choice, self.multipliers)
        self.log.add_round_start(self.round_number, amount, choice.summary(), multiplier)
        logger.info("Round %d: bet %s (x%.2f)", self.round_number, bet, multiplier)
        return bet

    # Play

    def draw(self) -> Optional[Card]:
        """Draw one card at random. None means the deck is empty."""
        self._require(Phase.PLAY)
        card = self.deck.draw_random()
        self.last_drawn = card
        if card is not None:
            self.history.append(card)
            logger.debug("Drew %s, %d left", card, self.deck.size())
        else:
            logger.info("Draw on empty deck")
        self.log.add_draw(self.round_number, card, self.deck.size())
        return card

    def can_draw(self) -> bool:
        return self.phase == Phase.PLAY and self.deck.size() > 0

    def end_round(self) -> RoundResult:
        """Resolve the round from the hit window and move to RESULT."""
        self._require(Phase.PLAY)
        outcome = resolve_round_outcome(self.history.cards, self.bet.choice, self.config.hit_window)
        multiplier = multiplier_for(self.bet.choice, self.multipliers)
        net = payout(self.bet.amount, multiplier, outcome.won)

        result = RoundResult(
            round_number=self.round_number,
            bet=self.bet,
            multiplier=multiplier,
            outcome=outcome,
            net=net,
        )
        self.last_result = result
        self.phase = Phase.RESULT
        self.log.add_round_result(self.round_number, outcome.won, net,
                                  outcome.display_card, outcome.window, outcome.hits)
        logger.info("Round %d %s: net %+d", self.round_number, "won" if outcome.won else "lost", net)

        self.notifier.publish(RoundResolved(
            round_number=self.round_number,
            won=outcome.won,
            net=net,
            display_card=outcome.display_card,
        ))
        return result

    def play_again(self) -> Bet:
        """Start another round with the same bet, deck and history."""
        self._require(Phase.RESULT)
        self.round_number += 1
        self.phase = Phase.PLAY
        self.log.add_round_start(self.round_number, self.bet.amount, self.bet.choice.summary(),
                                 multiplier_for(self.bet.choice, self.multipliers))
        logger.info("Round %d: playing again with %s", self.round_number, self.bet)
        return self.bet

    def restart(self) -> None:
        """Full restart: full deck, empty history, back to SETUP."""
        self.deck.reset_to_full()
        self.history.clear()
        self.bet = None
        self.last_drawn = None
        self.phase = Phase.SETUP
        self.log.add_restart(self.round_number)
        logger.info("Session restarted")

    # Deck edits

    def _edit(self, action: str, changed: bool) -> bool:
        self.log.add_deck_edit(self.round_number, action, changed, self.deck.size())
        logger.debug("Deck edit %s: %s, %d cards", action, "changed" if changed else "no change",
                     self.deck.size())
        return changed

    def remove_suit(self, suit) -> bool:
        suit = Suit.parse(suit)
        return self._edit(f"remove_suit {suit.name}", self.deck.remove_suit(suit))

    def add_suit(self, suit) -> bool:
        suit = Suit.parse(suit)
        return self._edit(f"add_suit {suit.name}", self.deck.add_suit(suit))

    def remove_colour(self, colour) -> bool:
        colour = Colour.parse(colour)
        return self._edit(f"remove_colour {colour.name}", self.deck.remove_colour(colour))

    def add_colour(self, colour) -> bool:
        colour = Colour.parse(colour)
        return self._edit(f"add_colour {colour.name}", self.deck.add_colour(colour))

    def remove_faces(self) -> bool:
        return self._edit("remove_faces", self.deck.remove_faces())

    def add_faces(self) -> bool:
        return self._edit("add_faces", self.deck.add_faces())

    def remove_odd(self) -> bool:
        return self._edit("remove_odd", self.deck.remove_odd())

    def add_odd(self) -> bool:
        return self._edit("add_odd", self.deck.add_odd())

    def remove_even(self) -> bool:
        return self._edit("remove_even", self.deck.remove_even())

    def add_even(self) -> bool:
        return self._edit("add_even", self.deck.add_even())

    def remove_card(self, card) -> bool:
        card = _to_card(card)
        return self._edit(f"remove_card {card}", self.deck.remove_card(card))

    def add_card(self, card) -> bool:
        card = _to_card(card)
        return self._edit(f"add_card {card}", self.deck.add_card(card))

    def clear_deck(self) -> bool:
        return self._edit("clear", self.deck.clear())

    def shuffle(self) -> bool:
        return self._edit("shuffle", self.deck.shuffle())

    def reset_deck(self) -> bool:
        """Back to 52 cards; the draw history goes with it."""
        changed = self.deck.reset_to_full() or len(self.history) > 0
        self.history.clear()
        self.last_drawn = None
        return self._edit("reset", changed)

    def apply_preset(self, preset) -> None:
        """
        Rebuild the deck from a full deck using a preset's edits, and merge
        its multiplier overrides.

        Every edit and override is checked first; a bad preset raises
        ValidationError and leaves the session untouched.
        """
        table = self.multipliers.to_dict()
        unknown = set(preset.multipliers) - set(table)
        if unknown:
            raise ValidationError(f"Unknown multiplier(s) {sorted(unknown)}. Available: {list(table)}")
        table.update(preset.multipliers)
        multipliers = MultiplierTable.from_values(**table)

        edits = []
        for action, arg in preset.deck_edits:
            if action not in PRESET_EDITS:
                raise ValidationError(f"Not a deck edit: {action!r}. Available: {list(PRESET_EDITS)}")
            parse = PRESET_EDITS[action]
            if (parse is None) != (arg is None):
                raise ValidationError(f"Bad argument for {action}: {arg!r}")
            edits.append((action, None if parse is None else parse(arg)))

        self.deck.reset_to_full()
        self.history.clear()
        self.last_drawn = None
        for action, arg in edits:
            method = getattr(self, action)
            if arg is None:
                method()
            else:
                method(arg)
        self.multipliers = multipliers
        self.log.add_multipliers(self.round_number, multipliers.to_dict())
        logger.info("Applied preset %s: %d cards", preset.name, self.deck.size())

    # Settings

    def set_multipliers(self, individual, suit, colour, number_odd, number_even) -> MultiplierTable:
        """Replace all five multipliers, or none of them if any is invalid."""
        table = MultiplierTable.from_values(individual, suit, colour, number_odd, number_even)
        self.multipliers = table
        self.log.add_multipliers(self.round_number, table.to_dict())
        logger.info("Multipliers updated: %s", table.to_dict())
        return table

    # Queries

    def deck_size(self) -> int:
        return self.deck.size()

    def deck_contents(self) -> list[Card]:
        return list(self.deck.cards)

    def current_multiplier(self) -> float:
        if self.bet is None:
            raise InvalidPhaseError("No bet placed yet")
        return multiplier_for(self.bet.choice, self.multipliers)

    def probability_breakdown(self, choice: Choice = None) -> ProbabilityBreakdown:
        """Breakdown for `choice`, or for the current bet's choice."""
        if choice is None:
            if self.bet is None:
                raise InvalidPhaseError("No bet placed yet")
            choice = self.bet.choice
        bet_amount = self.bet.amount if self.bet else 0
        return probability_breakdown(self.deck.cards, choice, bet_amount, self.multipliers)

    def current_outcome(self) -> RoundOutcome:
        """Outcome if the round ended now."""
        if self.bet is None:
            raise InvalidPhaseError("No bet placed yet")
        return resolve_round_outcome(self.history.cards, self.bet.choice, self.config.hit_window)

    def summary(self) -> dict:
        return {
            "phase": self.phase.name,
            "round": self.round_number,
            "bet": str(self.bet) if self.bet else None,
            "deck_size": self.deck.size(),
            "drawn": [str(c) for c in self.history],
            "multipliers": self.multipliers.to_dict(),
            **self.log.to_dict()["summary"],
        }
