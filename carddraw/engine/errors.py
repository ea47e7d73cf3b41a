"""
Exceptions raised by the card draw engine.
"""


class CardDrawError(Exception):
    """Base class for engine errors."""


class ValidationError(CardDrawError):
    """Rejected player input. No state was changed."""


class InvalidPhaseError(CardDrawError):
    """Operation not allowed in the current round phase."""
