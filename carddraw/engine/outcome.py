"""
Win evaluation for a round.

A round is won if any card in the hit window (the last few draws) matches
the player's choice. The most recent match is the one shown.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .deck import Card
from .choice import Choice, IndividualChoice, SuitChoice, ColourChoice, NumberChoice

HIT_WINDOW = 3


def evaluate(card: Optional[Card], choice: Choice) -> bool:
    """Does this single card match the choice?"""
    if card is None:
        return False
    if isinstance(choice, IndividualChoice):
        return card.rank == choice.rank and card.suit == choice.suit
    if isinstance(choice, SuitChoice):
        return card.suit == choice.suit
    if isinstance(choice, ColourChoice):
        return card.colour == choice.colour
    if isinstance(choice, NumberChoice):
        return card.rank == choice.rank
    raise TypeError(f"Not a choice: {choice!r}")


@dataclass
class RoundOutcome:
    """Result of scanning the hit window."""
    won: bool
    matching_card: Optional[Card]
    window: list[Card] = field(default_factory=list)  # oldest -> newest
    hits: list[Card] = field(default_factory=list)    # oldest -> newest

    @property
    def last_drawn(self) -> Optional[Card]:
        return self.window[-1] if self.window else None

    @property
    def display_card(self) -> Optional[Card]:
        """Most recent hit, else the last card drawn."""
        return self.matching_card if self.matching_card is not None else self.last_drawn

    def describe_window(self) -> str:
        if not self.window:
            return "No cards were drawn."
        return f"Last {len(self.window)} draw(s): " + ", ".join(str(c) for c in self.window)


def resolve_round_outcome(history: Sequence[Card], choice: Choice,
                          window: int = HIT_WINDOW) -> RoundOutcome:
    """
    Scan the last `window` draws from newest to oldest.

    Args:
        history: Drawn cards, oldest first
        choice: The player's choice
        window: Number of recent draws that count

    Returns:
        RoundOutcome; matching_card is the most recent match
    """
    recent = list(history[-window:]) if window > 0 else []
    matching = None
    for card in reversed(recent):
        if evaluate(card, choice):
            matching = card
            break
    hits = [c for c in recent if evaluate(c, choice)]
    return RoundOutcome(won=matching is not None, matching_card=matching,
                        window=recent, hits=hits)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def payout(bet_amount: int, multiplier: float, won: bool) -> int:
    """Signed result of a round: the rounded return on a win, minus the bet on a loss."""
    if won:
        return round_half_up(bet_amount * multiplier)
    return -bet_amount
