"""
Action-state lookup tables and predicates.

Action-state ids are the numeric animation codes Melee writes into every
post-frame update. The predicates here classify them into the coarse groups
the stat computers care about.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from replay_stats.frames.records import PostFrameUpdate


# ---------------------------------------------------------------------------
# Action-state id ranges (inclusive)
# ---------------------------------------------------------------------------

DYING_START, DYING_END = 0x00, 0x0A
GROUNDED_CONTROL_START, GROUNDED_CONTROL_END = 0x0E, 0x18
SQUAT_START, SQUAT_END = 0x27, 0x29
GROUND_ATTACK_START, GROUND_ATTACK_END = 0x2C, 0x40
DAMAGE_START, DAMAGE_END = 0x4B, 0x5B
DOWN_START, DOWN_END = 0xB7, 0xC6
TECH_START, TECH_END = 0xC7, 0xCC
CAPTURE_START, CAPTURE_END = 0xDF, 0xE8

# ---------------------------------------------------------------------------
# Specific action-state id
# ---------------------------------------------------------------------------

GRAB = 0xD4


def is_in_control(state: int) -> bool:
    """Standing, walking, dashing, crouching, ground attacks, or grabbing."""
    ground = GROUNDED_CONTROL_START <= state <= GROUNDED_CONTROL_END
    squat = SQUAT_START <= state <= SQUAT_END
    # Range start is exclusive: 0x2C is LandingFallSpecial
    ground_attack = GROUND_ATTACK_START < state <= GROUND_ATTACK_END
    return ground or squat or ground_attack or state == GRAB


def is_teching(state: int) -> bool:
    return TECH_START <= state <= TECH_END


def is_down(state: int) -> bool:
    return DOWN_START <= state <= DOWN_END


def is_damaged(state: int) -> bool:
    return DAMAGE_START <= state <= DAMAGE_END


def is_grabbed(state: int) -> bool:
    return CAPTURE_START <= state <= CAPTURE_END


def is_dead(state: int) -> bool:
    return DYING_START <= state <= DYING_END


def calc_damage_taken(
    frame: Optional["PostFrameUpdate"],
    prev_frame: Optional["PostFrameUpdate"],
) -> float:
    """
    Percent gained since the previous frame, clamped at zero.

    Healing and the percent reset on respawn both produce negative deltas,
    which never count as a hit.
    """
    percent = frame.percent if frame is not None else 0.0
    prev_percent = prev_frame.percent if prev_frame is not None else 0.0
    return max(0.0, percent - prev_percent)


def did_lose_stock(
    frame: Optional["PostFrameUpdate"],
    prev_frame: Optional["PostFrameUpdate"],
) -> bool:
    if frame is None or prev_frame is None:
        return False
    return prev_frame.stocks_remaining - frame.stocks_remaining > 0
