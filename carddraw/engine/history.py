"""
Draw history and session event log.
The log captures key events of a session for the result and timeline views.
"""

from dataclasses import dataclass, asdict, field
from typing import Optional

from .deck import Card


class DrawHistory:
    """Cards drawn this round, oldest first. Append-only until cleared."""

    def __init__(self):
        self._cards: list[Card] = []

    def append(self, card: Card) -> None:
        self._cards.append(card)

    def last(self, n: int) -> list[Card]:
        if n <= 0:
            return []
        return self._cards[-n:]

    def clear(self) -> None:
        self._cards = []

    @property
    def cards(self) -> list[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(list(self._cards))

    def __getitem__(self, index):
        return self._cards[index]

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self._cards)


@dataclass
class SessionEvent:
    """Single event in a session."""
    round_number: int
    event_type: str  # "round_start", "draw", "deck_edit", "round_result", ...
    data: dict
    timestamp: int = 0  # event sequence number


class SessionLog:
    """Captures what happened during a session."""

    def __init__(self):
        self.events: list[SessionEvent] = []
        self._event_counter = 0

    def add_event(self, round_number: int, event_type: str, data: dict):
        """Add an event to the log."""
        self.events.append(SessionEvent(
            round_number=round_number,
            event_type=event_type,
            data=data,
            timestamp=self._event_counter
        ))
        self._event_counter += 1

    def add_round_start(self, round_number: int, bet_amount: int, choice: str, multiplier: float):
        self.add_event(
            round_number=round_number,
            event_type="round_start",
            data={
                "bet": bet_amount,
                "choice": choice,
                "multiplier": multiplier
            }
        )

    def add_draw(self, round_number: int, card: Optional[Card], deck_size: int):
        """Log a draw; card is None when the deck was empty."""
        self.add_event(
            round_number=round_number,
            event_type="draw",
            data={
                "card": str(card) if card else None,
                "deck_size": deck_size
            }
        )

    def add_deck_edit(self, round_number: int, action: str, changed: bool, deck_size: int):
        self.add_event(
            round_number=round_number,
            event_type="deck_edit",
            data={
                "action": action,
                "changed": changed,
                "deck_size": deck_size
            }
        )

    def add_multipliers(self, round_number: int, multipliers: dict):
        self.add_event(
            round_number=round_number,
            event_type="multipliers",
            data=dict(multipliers)
        )

    def add_round_result(self, round_number: int, won: bool, net: int,
                         display_card: Optional[Card], window: list, hits: list):
        """Log a resolved round."""
        self.add_event(
            round_number=round_number,
            event_type="round_result",
            data={
                "won": won,
                "net": net,
                "display_card": str(display_card) if display_card else None,
                "window": [str(c) for c in window],
                "hits": [str(c) for c in hits]
            }
        )

    def add_restart(self, round_number: int):
        self.add_event(round_number=round_number, event_type="restart", data={})

    def get_results(self) -> list[SessionEvent]:
        """All resolved rounds, in order."""
        return [e for e in self.events if e.event_type == "round_result"]

    def to_dict(self) -> dict:
        return {
            "events": [asdict(e) for e in self.events],
            "summary": self._generate_summary()
        }

    def _generate_summary(self) -> dict:
        """Generate a quick summary of the session."""
        results = self.get_results()
        draws = [e for e in self.events if e.event_type == "draw" and e.data.get("card")]
        edits = [e for e in self.events if e.event_type == "deck_edit" and e.data.get("changed")]

        return {
            "rounds_played": len(results),
            "rounds_won": sum(1 for e in results if e.data.get("won")),
            "net_total": sum(e.data.get("net", 0) for e in results),
            "cards_drawn": len(draws),
            "deck_edits": len(edits),
        }
