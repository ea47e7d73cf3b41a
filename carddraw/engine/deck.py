"""
Deck management for the card draw game.
Handles card creation, random draws, shuffling, and deck edits.
"""

import random
from dataclasses import dataclass, field
from typing import Optional
from enum import Enum

from .errors import ValidationError


class Suit(Enum):
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"

    @property
    def glyph(self) -> str:
        return self.value

    @property
    def colour(self) -> "Colour":
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return Colour.RED
        return Colour.BLACK

    @classmethod
    def parse(cls, text) -> "Suit":
        """Accept a Suit, a name ("hearts"), an initial ("H") or a glyph."""
        if isinstance(text, cls):
            return text
        key = str(text).strip().upper()
        for suit in cls:
            if key in (suit.name, suit.name[0], suit.value):
                return suit
        raise ValidationError(f"Unknown suit: {text!r}. Available: {[s.name for s in cls]}")


class Colour(Enum):
    RED = "Red"
    BLACK = "Black"

    @property
    def suits(self) -> list[Suit]:
        return [s for s in Suit if s.colour == self]

    @classmethod
    def parse(cls, text) -> "Colour":
        if isinstance(text, cls):
            return text
        key = str(text).strip().upper()
        if key in cls.__members__:
            return cls[key]
        raise ValidationError(f"Unknown colour: {text!r}. Available: {list(cls.__members__)}")


RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
# Q sorts after K here, and odd/even edits and number multipliers depend on it
RANK_VALUES = {
    "A": 1, "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9, "10": 10,
    "J": 11, "K": 12, "Q": 13
}
FACE_RANKS = ["J", "Q", "K"]


def rank_value(rank) -> Optional[int]:
    """Numeric value of a rank symbol, or None if it is not one."""
    return RANK_VALUES.get(rank)


def is_odd_rank(rank: str) -> bool:
    value = rank_value(rank)
    return value is not None and value % 2 == 1


def is_even_rank(rank: str) -> bool:
    value = rank_value(rank)
    return value is not None and value % 2 == 0


def parse_rank(text) -> str:
    rank = str(text).strip().upper()
    if rank == "T":
        rank = "10"
    if rank not in RANK_VALUES:
        raise ValidationError(f"Unknown rank: {text!r}. Available: {RANKS}")
    return rank


@dataclass(frozen=True)
class Card:
    rank: str
    suit: Suit

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise ValidationError(f"Not a suit: {self.suit!r}. Available: {[s.name for s in Suit]}")
        if self.rank not in RANK_VALUES:
            raise ValidationError(f"Unknown rank: {self.rank!r}. Available: {RANKS}")

    @property
    def value(self) -> int:
        """Numeric rank value (A=1, J=11, K=12, Q=13)."""
        return RANK_VALUES[self.rank]

    @property
    def colour(self) -> Colour:
        return self.suit.colour

    @property
    def is_face_card(self) -> bool:
        return self.rank in FACE_RANKS

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse "7D", "10h", "Q♠" style notation."""
        text = str(text).strip()
        if len(text) < 2:
            raise ValidationError(f"Not a card: {text!r}")
        return cls(rank=parse_rank(text[:-1]), suit=Suit.parse(text[-1]))

    def __str__(self) -> str:
        return f"{self.rank}{self.suit.glyph}"

    def __repr__(self) -> str:
        return self.__str__()


def all_cards() -> list[Card]:
    """The 52 distinct cards, suit by suit."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in RANKS]


@dataclass
class Deck:
    """
    A set of at most 52 distinct cards.

    Every edit keeps the deck free of duplicate (rank, suit) pairs. Edits
    return True when the contents changed.
    """
    cards: list[Card] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def standard_52(cls, seed: Optional[int] = None) -> "Deck":
        """Create a full 52-card deck."""
        return cls(cards=all_cards(), rng=random.Random(seed))

    def reset_to_full(self) -> bool:
        before = list(self.cards)
        self.cards = all_cards()
        return before != self.cards

    def clear(self) -> bool:
        changed = bool(self.cards)
        self.cards = []
        return changed

    def shuffle(self) -> bool:
        """Reorder the cards. Membership and counts are unchanged."""
        before = list(self.cards)
        self.rng.shuffle(self.cards)
        return before != self.cards

    def draw_random(self) -> Optional[Card]:
        """Remove and return a uniformly chosen card, or None if empty."""
        if not self.cards:
            return None
        index = self.rng.randrange(len(self.cards))
        return self.cards.pop(index)

    def contains(self, card: Card) -> bool:
        return card in self.cards

    def add_card(self, card: Card) -> bool:
        """Add a card unless already present. Returns True if added."""
        if card in self.cards:
            return False
        self.cards.append(card)
        return True

    def remove_card(self, card: Card) -> bool:
        """Remove a specific card. Returns True if found."""
        if card in self.cards:
            self.cards.remove(card)
            return True
        return False

    def _remove_where(self, predicate) -> bool:
        kept = [c for c in self.cards if not predicate(c)]
        changed = len(kept) != len(self.cards)
        self.cards = kept
        return changed

    def _add_where(self, predicate) -> bool:
        added = [self.add_card(c) for c in all_cards() if predicate(c)]
        return any(added)

    def remove_suit(self, suit: Suit) -> bool:
        return self._remove_where(lambda c: c.suit == suit)

    def add_suit(self, suit: Suit) -> bool:
        return self._add_where(lambda c: c.suit == suit)

    def remove_colour(self, colour: Colour) -> bool:
        return self._remove_where(lambda c: c.colour == colour)

    def add_colour(self, colour: Colour) -> bool:
        return self._add_where(lambda c: c.colour == colour)

    def remove_faces(self) -> bool:
        return self._remove_where(lambda c: c.is_face_card)

    def add_faces(self) -> bool:
        return self._add_where(lambda c: c.is_face_card)

    def remove_odd(self) -> bool:
        return self._remove_where(lambda c: is_odd_rank(c.rank))

    def add_odd(self) -> bool:
        return self._add_where(lambda c: is_odd_rank(c.rank))

    def remove_even(self) -> bool:
        return self._remove_where(lambda c: is_even_rank(c.rank))

    def add_even(self) -> bool:
        return self._add_where(lambda c: is_even_rank(c.rank))

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def count_by_suit(self, suit: Suit) -> int:
        return sum(1 for c in self.cards if c.suit == suit)

    def count_by_colour(self, colour: Colour) -> int:
        return sum(1 for c in self.cards if c.colour == colour)

    def count_by_rank(self, rank: str) -> int:
        return sum(1 for c in self.cards if c.rank == rank)

    def count_card(self, rank: str, suit: Suit) -> int:
        return sum(1 for c in self.cards if c.rank == rank and c.suit == suit)

    def count_faces(self) -> int:
        return sum(1 for c in self.cards if c.is_face_card)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)
