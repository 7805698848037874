"""
Configuration and computer registry.
"""

from replay_stats.core.types import PUNISH_RESET_FRAMES
from replay_stats.stats.conversions import ConversionComputer, OPENING_LOOKBACK_FRAMES
from replay_stats.stats.inputs import (
    InputComputer,
    BUTTON_MASK,
    MOTION_THRESHOLD,
    STICK_REGION_THRESHOLD,
    TRIGGER_THRESHOLD,
)


# ---------------------------------------------------------------------------
# Computer Registry
# ---------------------------------------------------------------------------

COMPUTERS = {
    "conversions": ConversionComputer,
    "inputs": InputComputer,
}


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

class Config:
    """Stats configuration with sensible defaults."""

    def __init__(
        self,
        punish_reset_frames: int = PUNISH_RESET_FRAMES,
        opening_lookback_frames: int = OPENING_LOOKBACK_FRAMES,
        stick_threshold: float = STICK_REGION_THRESHOLD,
        trigger_threshold: float = TRIGGER_THRESHOLD,
        motion_threshold: float = MOTION_THRESHOLD,
        button_mask: int = BUTTON_MASK,
        process_on_the_fly: bool = True,
        computers: tuple = tuple(COMPUTERS),
    ):
        if punish_reset_frames < 0:
            raise ValueError(f"punish_reset_frames must be >= 0, got {punish_reset_frames}")
        if opening_lookback_frames < 0:
            raise ValueError(f"opening_lookback_frames must be >= 0, got {opening_lookback_frames}")
        if not 0.0 < stick_threshold <= 1.0:
            raise ValueError(f"stick_threshold must be in (0, 1], got {stick_threshold}")
        if not 0.0 < trigger_threshold <= 1.0:
            raise ValueError(f"trigger_threshold must be in (0, 1], got {trigger_threshold}")
        if motion_threshold < 0.0:
            raise ValueError(f"motion_threshold must be >= 0, got {motion_threshold}")
        if not 0 <= button_mask <= BUTTON_MASK:
            raise ValueError(f"button_mask must be in [0, {BUTTON_MASK:#x}], got {button_mask:#x}")

        unknown = [name for name in computers if name not in COMPUTERS]
        if unknown:
            available = ", ".join(COMPUTERS)
            raise ValueError(f"Unknown computer(s): {unknown}. Available: {available}")

        self.punish_reset_frames = punish_reset_frames
        self.opening_lookback_frames = opening_lookback_frames
        self.stick_threshold = stick_threshold
        self.trigger_threshold = trigger_threshold
        self.motion_threshold = motion_threshold
        self.button_mask = button_mask
        self.process_on_the_fly = process_on_the_fly
        self.computers = tuple(computers)


# Default configuration
DEFAULT_CONFIG = Config()
