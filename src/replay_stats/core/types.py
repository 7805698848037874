"""
Core types, constants, and data structures.

This module contains the fundamental types shared by the stats pipeline:
- Frame and timer constants
- PlayerIndices: a directional (attacker, opponent) pair
- Conversion / MoveLanded: punish sequences and the moves inside them
- InputTally: controller activity counters
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional


# ╔═════════════════════════════════════════════════════════════════════════════╗
# ║                           FRAME CONSTANTS                                   ║
# ║                                                                             ║
# ║  Replays start counting at -123. The word "GO" appears at frame 0, but      ║
# ║  players get control of their characters at -39.                            ║
# ╚═════════════════════════════════════════════════════════════════════════════╝

FIRST_FRAME = -123
FIRST_PLAYABLE_FRAME = -39

# ─── Timers ───────────────────────────────────────────────────────────────────

# Frames an opponent must stay actionable before a punish is considered over
PUNISH_RESET_FRAMES = 45

# Player slot type for an empty port in match metadata
EMPTY_PLAYER_TYPE = 3

# ──────────────────────────────────────────────────────────────────────────────


class OpeningType(str, Enum):
    """How a conversion began."""

    UNKNOWN = "unknown"
    NEUTRAL_WIN = "neutral-win"
    COUNTER_ATTACK = "counter-attack"
    TRADE = "trade"


class PlayerIndices(NamedTuple):
    """Directional (attacker, opponent) relationship."""

    player_index: int
    opponent_index: int


@dataclass
class MoveLanded:
    """A single move inside a conversion. Multi-hit moves share one entry."""
    frame: int
    move_id: int
    hit_count: int = 0
    damage: float = 0.0


@dataclass
class Conversion:
    """
    A continuous punish sequence by one player against an opponent.

    end_frame and end_percent stay None while the conversion is open.
    opening_type is resolved once by the deferred classification pass.
    """
    player_index: int
    opponent_index: int
    start_frame: int
    start_percent: float
    current_percent: float
    end_frame: Optional[int] = None
    end_percent: Optional[float] = None
    moves: List[MoveLanded] = field(default_factory=list)
    did_kill: bool = False
    opening_type: OpeningType = OpeningType.UNKNOWN

    @property
    def indices(self) -> PlayerIndices:
        return PlayerIndices(self.player_index, self.opponent_index)

    @property
    def is_open(self) -> bool:
        return self.end_frame is None

    @property
    def total_damage(self) -> float:
        """Damage summed over every registered hit."""
        return sum(move.damage for move in self.moves)


@dataclass
class InputTally:
    """Controller activity counts for one player. Counters only ever grow."""
    player_index: int
    opponent_index: int
    input_count: int = 0
    joystick_input_count: int = 0
    cstick_input_count: int = 0
    button_input_count: int = 0
    trigger_input_count: int = 0
    joystick_distance_traveled: float = 0.0
    joystick_motion_frame_count: int = 0
