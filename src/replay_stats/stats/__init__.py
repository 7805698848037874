"""
Stats module - per-frame stat computers and the coordinator driving them.
"""

from replay_stats.stats.base import StatComputer
from replay_stats.stats.conversions import ConversionComputer, PairConversionState
from replay_stats.stats.inputs import InputComputer, JoystickRegion, get_joystick_region
from replay_stats.stats.coordinator import StatsCoordinator, is_completed_frame

__all__ = [
    "StatComputer",
    "ConversionComputer",
    "PairConversionState",
    "InputComputer",
    "JoystickRegion",
    "get_joystick_region",
    "StatsCoordinator",
    "is_completed_frame",
]
