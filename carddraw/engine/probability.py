"""
Probability breakdown for the current deck and choice.
Display only; nothing here touches the deck.
"""

import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Iterable, Optional

from .deck import Card
from .choice import Choice, Category, MultiplierTable, multiplier_for
from .outcome import evaluate


def gcd(a: int, b: int) -> int:
    """Euclid's algorithm on absolute values; gcd(0, 0) == 0."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


FAVORABLE_LABELS = {
    Category.INDIVIDUAL: "the chosen card",
    Category.SUIT: "cards of that suit",
    Category.COLOUR: "cards of that colour",
    Category.NUMBER: "cards of that rank",
}

NOTES = {
    Category.INDIVIDUAL: "The probability of drawing the exact card equals how many copies of it "
                         "are in the deck divided by the cards left.",
    Category.SUIT: "For suits, favorable outcomes are all cards that share the suit (e.g. all Hearts).",
    Category.COLOUR: "Colours group suits into two: Hearts & Diamonds are RED, Clubs & Spades are BLACK.",
    Category.NUMBER: "Number bets match the rank regardless of suit (betting '7' wins on any 7).",
}


@dataclass
class ProbabilityBreakdown:
    """Single-draw probability of a hit, with the numbers a front-end shows."""
    choice: Choice
    total: int
    favorable: int = 0
    undefined: bool = False
    probability: Fraction = Fraction(0)
    divisor: int = 1
    bet_amount: int = 0
    multiplier: float = 0.0
    details: list[str] = field(default_factory=list)

    @property
    def reduced(self) -> tuple[int, int]:
        """(numerator, denominator) after dividing by the gcd."""
        return self.probability.numerator, self.probability.denominator

    @property
    def percentage(self) -> Optional[float]:
        if self.undefined:
            return None
        return float(self.probability * 100)

    @property
    def odds(self) -> Optional[float]:
        """X in "1 in X"; inf when nothing in the deck matches."""
        if self.undefined:
            return None
        if self.favorable == 0:
            return float("inf")
        return self.total / self.favorable

    @property
    def quick_expected_payout(self) -> Optional[float]:
        """p * payout. Not net: a loss counts as 0 here."""
        if self.undefined:
            return None
        p = float(self.probability)
        return p * (self.bet_amount * self.multiplier) + (1 - p) * 0

    @property
    def expected_net(self) -> Optional[float]:
        """p * payout - (1 - p) * bet."""
        if self.undefined:
            return None
        p = float(self.probability)
        return p * (self.bet_amount * self.multiplier) - (1 - p) * self.bet_amount

    def odds_text(self) -> str:
        odds = self.odds
        if odds is None:
            return "undefined"
        if odds == float("inf"):
            return "never (no matching cards)"
        return f"1 in {odds:.2f}"

    def steps(self) -> list[str]:
        """Numbered explanation of how the figures are reached."""
        if self.undefined:
            return ["Deck is empty. No probability available; add or reset cards."]
        fav, total = self.favorable, self.total
        label = FAVORABLE_LABELS[self.choice.category]
        lines = [
            f"Count favorable outcomes ({label}) = {fav}.",
            f"Total possible outcomes (cards in deck) = {total}.",
            f"Probability = favorable / total = {fav} / {total}.",
        ]
        if fav == 0:
            lines.append("Nothing in the deck matches. Probability is 0.")
            return lines
        num, den = self.reduced
        lines.append(f"Reduced fraction: {num}/{den} (dividing numerator and denominator by {self.divisor}).")
        lines.append(f"Percentage: {self.percentage:.3f}%.")
        lines.append(f"Odds: roughly {self.odds_text()} chance.")
        return lines

    def note(self) -> str:
        return NOTES[self.choice.category]

    def to_dict(self) -> dict:
        num, den = self.reduced
        return {
            "choice": self.choice.summary(),
            "total": self.total,
            "favorable": self.favorable,
            "undefined": self.undefined,
            "fraction": None if self.undefined else f"{num}/{den}",
            "percentage": self.percentage,
            "odds": self.odds_text(),
            "quick_expected_payout": self.quick_expected_payout,
            "expected_net": self.expected_net,
        }


def probability_breakdown(cards: Iterable[Card], choice: Choice, bet_amount: int = 0,
                          table: MultiplierTable = None) -> ProbabilityBreakdown:
    """
    Compute favorable/total for a single draw from `cards`.

    An empty deck gives an `undefined` breakdown rather than dividing by zero.
    """
    cards = list(cards)
    table = table or MultiplierTable()
    total = len(cards)
    breakdown = ProbabilityBreakdown(
        choice=choice,
        total=total,
        bet_amount=bet_amount,
        multiplier=multiplier_for(choice, table),
    )
    if total == 0:
        breakdown.undefined = True
        breakdown.details = breakdown.steps()
        return breakdown

    favorable = sum(1 for c in cards if evaluate(c, choice))
    breakdown.favorable = favorable
    if favorable == 0:
        breakdown.probability = Fraction(0)
        breakdown.divisor = 1
    else:
        divisor = gcd(favorable, total)
        breakdown.divisor = divisor
        breakdown.probability = Fraction(favorable // divisor, total // divisor)
    breakdown.details = breakdown.steps()
    return breakdown


def window_hit_probability(total: int, favorable: int, draws: int, window: int = 3) -> float:
    """
    Chance that at least one of the last `window` of `draws` draws (without
    replacement) matches, given `favorable` matching cards out of `total`.

    Draws are exchangeable, so only the number of cards in the window matters.
    """
    seen = min(draws, window, total)
    if total <= 0 or seen <= 0:
        return 0.0
    return 1 - math.comb(total - favorable, seen) / math.comb(total, seen)
