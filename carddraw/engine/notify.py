"""
Round-resolved notifications.

Listeners (sound cues, terminal bells) run on their own daemon threads so a
slow or broken listener can never stall or fail the round. Their errors are
logged and dropped.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .deck import Card
from ..logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RoundResolved:
    round_number: int
    won: bool
    net: int
    display_card: Optional[Card]


Listener = Callable[[RoundResolved], None]


class Notifier:
    """Fire-and-forget fan-out of RoundResolved events."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: RoundResolved) -> list[threading.Thread]:
        """Start one thread per listener and return without waiting."""
        threads = []
        for listener in list(self._listeners):
            thread = threading.Thread(
                target=self._deliver,
                args=(listener, event),
                name="RoundResolvedListener",
                daemon=True,
            )
            thread.start()
            threads.append(thread)
        return threads

    @staticmethod
    def _deliver(listener: Listener, event: RoundResolved) -> None:
        try:
            listener(event)
        except Exception:
            logger.warning("Round listener %r failed", listener, exc_info=True)


class ResultSound:
    """
    Finds the win or lose sound file for a round.

    Tries each candidate name in `sound_dir`; no file means no sound.
    """

    WIN_FILES = ("win.wav", "win.mp3", "win.ogg")
    LOSE_FILES = ("lose.wav", "lose.mp3", "lose.ogg")

    def __init__(self, sound_dir: Path):
        self.sound_dir = Path(sound_dir)

    def path_for(self, won: bool) -> Optional[Path]:
        for name in (self.WIN_FILES if won else self.LOSE_FILES):
            path = self.sound_dir / name
            if path.is_file():
                return path
        return None


def terminal_bell(event: RoundResolved) -> None:
    """Ring the terminal bell once on a win."""
    if event.won:
        print("\a", end="", flush=True)
