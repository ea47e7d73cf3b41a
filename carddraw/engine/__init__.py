"""
Card draw engine components.
"""

from .deck import Card, Deck, Suit, Colour, RANKS, RANK_VALUES, rank_value
from .choice import (Category, Choice, IndividualChoice, SuitChoice, ColourChoice, NumberChoice,
                     Bet, MultiplierTable, make_choice, multiplier_for, parse_bet_amount)
from .outcome import RoundOutcome, evaluate, resolve_round_outcome, payout
from .probability import ProbabilityBreakdown, probability_breakdown
from .history import DrawHistory, SessionLog
from .notify import Notifier, RoundResolved, ResultSound
from .game import GameConfig, GameSession, Phase, RoundResult
from .errors import CardDrawError, ValidationError, InvalidPhaseError
