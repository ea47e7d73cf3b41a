#!/usr/bin/env python3
"""
Console front-end for the card draw game.

Plays one scripted round, or a batch of simulated rounds with --simulate.

    python -m carddraw.cli --bet 10 --category suit --value hearts --draws 3
    python -m carddraw.cli --category number --value Q --preset odd_only --simulate 2000
"""

import argparse
import sys

from .engine.choice import Category, make_choice, parse_bet_amount
from .engine.errors import CardDrawError
from .engine.game import GameConfig, GameSession
from .engine.notify import terminal_bell
from .logging_utils import setup_logging, LOG_LEVEL
from .presets import get_preset, list_presets, get_preset_info
from .simulator import Simulator


def print_probability(session: GameSession):
    breakdown = session.probability_breakdown()
    print("Probability breakdown:")
    for i, line in enumerate(breakdown.steps(), start=1):
        print(f"  {i}. {line}")
    if not breakdown.undefined:
        print(f"  Quick payout expectation: {breakdown.quick_expected_payout:.2f} (not net)")
        print(f"  Expected net value: {breakdown.expected_net:+.2f}")
    print()


def play_round(args) -> int:
    config = GameConfig()
    if args.seed is not None:
        config.seed = args.seed
    session = GameSession(config=config)
    session.notifier.subscribe(terminal_bell)

    preset = get_preset(args.preset)
    if preset is None:
        print(f"Unknown preset: {args.preset}. Available: {list_presets()}", file=sys.stderr)
        return 2
    session.apply_preset(preset)

    bet = session.configure_round(args.bet, args.category, args.value)
    print(f"Bet: {bet} | Deck size: {session.deck_size()}")
    if args.show_probability:
        print_probability(session)

    for _ in range(args.draws):
        card = session.draw()
        if card is None:
            print("Deck is empty. Reset or add cards.")
            break
        print(f"  Drew {card}  ({session.deck_size()} left)")

    result = session.end_round()
    print()
    print(result)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Card draw betting game")
    parser.add_argument("--bet", default="10", help="Bet amount (positive integer)")
    parser.add_argument("--category", default="suit",
                        choices=[c.value for c in Category] + ["color"],
                        help="What to bet on")
    parser.add_argument("--value", default="HEARTS",
                        help="Card (QH), suit (hearts), colour (red) or rank (7)")
    parser.add_argument("--draws", type=int, default=1, help="Cards to draw this round")
    parser.add_argument("--preset", default="standard", help=f"Deck preset: {', '.join(list_presets())}")
    parser.add_argument("--seed", type=int, help="Seed for reproducible draws")
    parser.add_argument("--show-probability", action="store_true", help="Print odds before drawing")
    parser.add_argument("--simulate", type=int, metavar="ROUNDS", help="Simulate many rounds instead")
    parser.add_argument("--list-presets", action="store_true", help="Show presets and exit")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")

    args = parser.parse_args(argv)
    # per-round INFO lines would drown a batch
    setup_logging(args.log_level or ("WARNING" if args.simulate else LOG_LEVEL))

    if args.list_presets:
        for name in list_presets():
            info = get_preset_info(name)
            print(f"{name:<20} {info['description']}")
        return 0

    try:
        if args.simulate:
            choice = make_choice(args.category, args.value)
            sim = Simulator(seed=args.seed)
            batch = sim.run_batch(choice, bet=parse_bet_amount(args.bet), draws=args.draws,
                                  rounds=args.simulate, preset=args.preset, verbose=True)
            print(batch)
            return 0
        return play_round(args)
    except CardDrawError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
