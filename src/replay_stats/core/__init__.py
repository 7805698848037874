"""
Core module - fundamental types, constants, and action-state tables.

This module provides the building blocks used throughout the stats pipeline.
"""

from replay_stats.core.types import (
    Conversion,
    InputTally,
    MoveLanded,
    OpeningType,
    PlayerIndices,
    FIRST_FRAME,
    FIRST_PLAYABLE_FRAME,
    PUNISH_RESET_FRAMES,
)
from replay_stats.core.states import (
    is_damaged,
    is_grabbed,
    is_in_control,
    is_dead,
    calc_damage_taken,
    did_lose_stock,
)

__all__ = [
    # Types
    "Conversion",
    "InputTally",
    "MoveLanded",
    "OpeningType",
    "PlayerIndices",
    # Constants
    "FIRST_FRAME",
    "FIRST_PLAYABLE_FRAME",
    "PUNISH_RESET_FRAMES",
    # Functions
    "is_damaged",
    "is_grabbed",
    "is_in_control",
    "is_dead",
    "calc_damage_taken",
    "did_lose_stock",
]
