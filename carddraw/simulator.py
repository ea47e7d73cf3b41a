"""
Monte Carlo rounds for the card draw game.
Plays many rounds on fresh decks to check the displayed odds against reality.
"""

import random
from dataclasses import dataclass
from typing import Optional, Union

from .engine.choice import Choice, MultiplierTable
from .engine.game import GameConfig, GameSession, RoundResult
from .engine.probability import window_hit_probability
from .presets import Preset, get_preset, list_presets
from .engine.errors import ValidationError


@dataclass
class BatchResult:
    """Results from many simulated rounds."""
    rounds: int
    wins: int
    win_rate: float
    expected_win_rate: float
    draws_per_round: int
    bet: int
    total_net: int
    avg_net: float
    hit_distribution: dict[int, int]  # hits in window -> rounds
    choice: str
    preset_used: str

    def __str__(self):
        lines = [
            f"{'='*50}",
            f"  BATCH RESULTS ({self.rounds} rounds)",
            f"  Preset: {self.preset_used}",
            f"  Bet: ${self.bet} on {self.choice}, {self.draws_per_round} draw(s) per round",
            f"{'='*50}",
            f"  Win rate: {self.wins}/{self.rounds} ({self.win_rate:.1f}%)",
            f"  Expected win rate: {self.expected_win_rate:.1f}%",
            f"  Total net: ${self.total_net:+,}",
            f"  Avg net per round: ${self.avg_net:+.2f}",
            "",
            "  Hits in window:",
        ]

        for hits in sorted(self.hit_distribution.keys()):
            count = self.hit_distribution[hits]
            pct = count / self.rounds * 100
            bar = "█" * int(pct / 2)
            lines.append(f"    {hits} hit(s): {count:>5} ({pct:>5.1f}%) {bar}")

        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "rounds": self.rounds,
            "wins": self.wins,
            "win_rate": self.win_rate,
            "expected_win_rate": self.expected_win_rate,
            "draws_per_round": self.draws_per_round,
            "bet": self.bet,
            "total_net": self.total_net,
            "avg_net": self.avg_net,
            "hit_distribution": self.hit_distribution,
            "choice": self.choice,
            "preset_used": self.preset_used,
        }


class Simulator:
    """
    Plays rounds without a front-end.

    Usage:
        sim = Simulator(seed=7)
        result = sim.run(make_choice("suit", "hearts"), bet=10, draws=3)
        print(result)

        batch = sim.run_batch(make_choice("colour", "red"), rounds=1000)
        print(batch)
    """

    def __init__(self, multipliers: MultiplierTable = None, seed: Optional[int] = None):
        self.multipliers = multipliers or MultiplierTable.load_default()
        self.rng = random.Random(seed)

    def _get_preset(self, preset: Union[str, Preset]) -> Preset:
        if isinstance(preset, Preset):
            return preset
        p = get_preset(preset)
        if p is None:
            raise ValidationError(f"Unknown preset: {preset}. Available: {list_presets()}")
        return p

    def new_session(self, preset: Union[str, Preset] = "standard") -> GameSession:
        """Fresh session with its own seeded deck and the preset applied."""
        config = GameConfig(multipliers=self.multipliers, seed=self.rng.randrange(2**32))
        session = GameSession(config=config)
        session.apply_preset(self._get_preset(preset))
        return session

    def run(self, choice: Choice, bet: int = 10, draws: int = 1,
            preset: Union[str, Preset] = "standard") -> RoundResult:
        """
        Play one round.

        Args:
            choice: What the bet is on
            bet: Bet amount
            draws: Cards drawn before ending the round (stops early on an empty deck)
            preset: Preset name or Preset object

        Returns:
            RoundResult of the round
        """
        session = self.new_session(preset)
        session.configure_round(bet, choice)
        for _ in range(draws):
            if session.draw() is None:
                break
        return session.end_round()

    def run_batch(self, choice: Choice, bet: int = 10, draws: int = 1, rounds: int = 1000,
                  preset: Union[str, Preset] = "standard", verbose: bool = False) -> BatchResult:
        """
        Play many rounds and aggregate the results.

        Returns:
            BatchResult with observed and expected win rates
        """
        p = self._get_preset(preset)
        probe = self.new_session(p)
        breakdown = probe.probability_breakdown(choice)
        expected = window_hit_probability(breakdown.total, breakdown.favorable, draws,
                                          probe.config.hit_window) * 100

        wins = 0
        total_net = 0
        hit_distribution = {}

        for i in range(rounds):
            if verbose and (i + 1) % 100 == 0:
                print(f"  Round {i + 1}/{rounds}...")

            result = self.run(choice, bet=bet, draws=draws, preset=p)
            if result.won:
                wins += 1
            total_net += result.net
            hits = len(result.outcome.hits)
            hit_distribution[hits] = hit_distribution.get(hits, 0) + 1

        return BatchResult(
            rounds=rounds,
            wins=wins,
            win_rate=wins / rounds * 100 if rounds else 0.0,
            expected_win_rate=expected,
            draws_per_round=draws,
            bet=bet,
            total_net=total_net,
            avg_net=total_net / rounds if rounds else 0.0,
            hit_distribution=hit_distribution,
            choice=choice.summary(),
            preset_used=p.name,
        )
