"""
Preset decks and multiplier tables.
Allows quick setup of common deck edits before placing a bet.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Preset:
    """A deck layout plus optional multiplier overrides."""
    name: str
    description: str
    # (GameSession method, argument or None), applied to a full deck in order
    deck_edits: list[tuple[str, Optional[str]]] = field(default_factory=list)
    multipliers: dict = field(default_factory=dict)  # MultiplierTable field -> value


# Built-in presets
PRESETS = {
    "standard": Preset(
        name="Standard",
        description="Full 52-card deck, default multipliers",
    ),

    "no_faces": Preset(
        name="No Faces",
        description="Jacks, Queens and Kings removed (40 cards)",
        deck_edits=[("remove_faces", None)],
    ),

    "reds_only": Preset(
        name="Reds Only",
        description="Hearts and Diamonds only; colour bets become a sure thing",
        deck_edits=[("remove_colour", "BLACK")],
        multipliers={"colour": 1.0},
    ),

    "hearts_and_spades": Preset(
        name="Hearts & Spades",
        description="Two suits, one of each colour (26 cards)",
        deck_edits=[("remove_suit", "DIAMONDS"), ("remove_suit", "CLUBS")],
        multipliers={"suit": 1.9, "individual": 24.0},
    ),

    "odd_only": Preset(
        name="Odd Ranks",
        description="A, 3, 5, 7, 9, J, Q only (Q counts as 13)",
        deck_edits=[("remove_even", None)],
    ),

    "even_only": Preset(
        name="Even Ranks",
        description="2, 4, 6, 8, 10, K only (K counts as 12)",
        deck_edits=[("remove_odd", None)],
    ),

    "high_roller": Preset(
        name="High Roller",
        description="Full deck with boosted exact-card and number payouts",
        multipliers={"individual": 40.0, "number_odd": 10.0, "number_even": 10.0},
    ),
}


def get_preset(name: str) -> Optional[Preset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def get_preset_info(name: str) -> Optional[dict]:
    """Get info about a preset."""
    preset = get_preset(name)
    if preset:
        return {
            "name": preset.name,
            "description": preset.description,
            "deck_edits": [f"{action} {arg}" if arg else action for action, arg in preset.deck_edits],
            "multipliers": preset.multipliers,
        }
    return None
