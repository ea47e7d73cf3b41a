"""
Bets, player choices and the payout multiplier table.
"""

import json
import math
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from enum import Enum
from typing import Union

from .deck import Card, Colour, Suit, RANKS, parse_rank, rank_value
from .errors import ValidationError


class Category(Enum):
    INDIVIDUAL = "individual"
    SUIT = "suit"
    COLOUR = "colour"
    NUMBER = "number"

    @classmethod
    def parse(cls, text) -> "Category":
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower()
        if key == "color":
            key = "colour"
        for category in cls:
            if category.value == key:
                return category
        raise ValidationError(f"Unknown category: {text!r}. Available: {[c.value for c in cls]}")


@dataclass(frozen=True)
class IndividualChoice:
    """Bet on one exact card."""
    rank: str
    suit: Suit

    category = Category.INDIVIDUAL

    def summary(self) -> str:
        return f"{self.rank} of {self.suit.name} (Individual)"


@dataclass(frozen=True)
class SuitChoice:
    suit: Suit

    category = Category.SUIT

    def summary(self) -> str:
        return f"Suit {self.suit.name}"


@dataclass(frozen=True)
class ColourChoice:
    colour: Colour

    category = Category.COLOUR

    def summary(self) -> str:
        return f"Colour {self.colour.name}"


@dataclass(frozen=True)
class NumberChoice:
    """Bet on a rank regardless of suit."""
    rank: str

    category = Category.NUMBER

    def summary(self) -> str:
        return f"Rank {self.rank} (Number)"


Choice = Union[IndividualChoice, SuitChoice, ColourChoice, NumberChoice]
CHOICE_TYPES = (IndividualChoice, SuitChoice, ColourChoice, NumberChoice)


def make_choice(category, value) -> Choice:
    """
    Build a choice from a category and its category-specific value.

    Args:
        category: Category or its name ("suit", "number", ...)
        value: Card or "QH" style text for INDIVIDUAL, suit for SUIT,
            colour for COLOUR, rank symbol for NUMBER
    """
    category = Category.parse(category)
    if category == Category.INDIVIDUAL:
        card = value if isinstance(value, Card) else Card.parse(value)
        return IndividualChoice(rank=card.rank, suit=card.suit)
    if category == Category.SUIT:
        return SuitChoice(suit=Suit.parse(value))
    if category == Category.COLOUR:
        return ColourChoice(colour=Colour.parse(value))
    return NumberChoice(rank=parse_rank(value))


def parse_bet_amount(value) -> int:
    """A bet must be a positive whole number ("10" and 10 are fine, 0, -5, 2.5 are not)."""
    if isinstance(value, bool):
        raise ValidationError("Please enter a valid positive integer bet.")
    if isinstance(value, int):
        amount = value
    else:
        try:
            amount = int(str(value).strip())
        except ValueError:
            raise ValidationError("Please enter a valid positive integer bet.") from None
    if amount <= 0:
        raise ValidationError("Please enter a valid positive integer bet.")
    return amount


@dataclass(frozen=True)
class Bet:
    amount: int
    choice: Choice

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount <= 0:
            raise ValidationError("Please enter a valid positive integer bet.")
        if not isinstance(self.choice, CHOICE_TYPES):
            raise ValidationError(f"Not a choice: {self.choice!r}")

    def __str__(self) -> str:
        return f"${self.amount} on {self.choice.summary()}"


@dataclass(frozen=True)
class MultiplierTable:
    individual: float = 17.4
    suit: float = 2.17
    colour: float = 1.46
    number_odd: float = 4.61
    number_even: float = 4.34

    @classmethod
    def from_values(cls, individual, suit, colour, number_odd, number_even) -> "MultiplierTable":
        """
        Validate all five inputs before building the table.

        Numbers or numeric strings are accepted; any bad value rejects the
        whole update.
        """
        raw = {
            "individual": individual,
            "suit": suit,
            "colour": colour,
            "number_odd": number_odd,
            "number_even": number_even,
        }
        parsed = {}
        for name, value in raw.items():
            if isinstance(value, bool):
                raise ValidationError(f"Enter valid numeric multiplier values ({name}={value!r}).")
            try:
                number = float(str(value).strip()) if isinstance(value, str) else float(value)
            except (TypeError, ValueError):
                raise ValidationError(f"Enter valid numeric multiplier values ({name}={value!r}).") from None
            if not math.isfinite(number) or number <= 0:
                raise ValidationError(f"Multipliers must be positive numbers ({name}={value!r}).")
            parsed[name] = number
        return cls(**parsed)

    @classmethod
    def load_default(cls, path: Path = None) -> "MultiplierTable":
        """Load default multipliers from JSON."""
        if path is None:
            path = Path(__file__).parent.parent / "data" / "default_multipliers.json"
        try:
            with open(path) as f:
                data = json.load(f)
        except FileNotFoundError:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls.from_values(**{**asdict(cls()), **{k: v for k, v in data.items() if k in known}})

    def to_dict(self) -> dict:
        return asdict(self)


def multiplier_for(choice: Choice, table: MultiplierTable) -> float:
    """Return the multiplier that applies to a choice."""
    if isinstance(choice, IndividualChoice):
        return table.individual
    if isinstance(choice, SuitChoice):
        return table.suit
    if isinstance(choice, ColourChoice):
        return table.colour
    if isinstance(choice, NumberChoice):
        value = rank_value(choice.rank)
        # unresolvable rank falls back to the odd multiplier
        if value is None or value <= 0:
            return table.number_odd
        return table.number_odd if value % 2 == 1 else table.number_even
    raise TypeError(f"Not a choice: {choice!r}")


def choice_options(category: Category) -> list:
    """Values a front-end can offer for a category."""
    if category == Category.INDIVIDUAL:
        return [Card(rank, suit) for suit in Suit for rank in RANKS]
    if category == Category.SUIT:
        return list(Suit)
    if category == Category.COLOUR:
        return list(Colour)
    return list(RANKS)
