"""
Card Draw betting game
"""

from .engine.deck import Card, Deck, Suit, Colour
from .engine.choice import Category, Bet, MultiplierTable, make_choice
from .engine.game import GameConfig, GameSession, Phase, RoundResult
from .engine.errors import CardDrawError, ValidationError, InvalidPhaseError

__version__ = "0.1.0"
