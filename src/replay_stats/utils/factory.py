"""
Factory functions for creating stat computers and wired pipelines.
"""

from typing import Dict, Optional

from replay_stats.frames.aggregator import FrameAggregator
from replay_stats.stats.base import StatComputer
from replay_stats.stats.coordinator import StatsCoordinator
from replay_stats.utils.config import COMPUTERS, DEFAULT_CONFIG, Config


def create_computer(name: str, config: Config = DEFAULT_CONFIG) -> StatComputer:
    """
    Create a stat computer configured from the given settings.

    Args:
        name: Key from COMPUTERS registry (e.g., "conversions")
        config: Thresholds to build the computer with

    Returns:
        Configured computer instance
    """
    if name not in COMPUTERS:
        available = ", ".join(COMPUTERS.keys())
        raise ValueError(f"Unknown computer: {name}. Available: {available}")

    if name == "conversions":
        return COMPUTERS[name](
            punish_reset_frames=config.punish_reset_frames,
            opening_lookback_frames=config.opening_lookback_frames,
        )
    return COMPUTERS[name](
        stick_threshold=config.stick_threshold,
        trigger_threshold=config.trigger_threshold,
        motion_threshold=config.motion_threshold,
        button_mask=config.button_mask,
    )


def create_computers(config: Config = DEFAULT_CONFIG) -> Dict[str, StatComputer]:
    return {name: create_computer(name, config) for name in config.computers}


def create_pipeline(config: Optional[Config] = None) -> FrameAggregator:
    """
    Build a FrameAggregator wired to a coordinator with every configured computer.

    The coordinator is reachable as ``aggregator.coordinator``.
    """
    config = config or DEFAULT_CONFIG
    coordinator = StatsCoordinator(process_on_the_fly=config.process_on_the_fly)
    for name, computer in create_computers(config).items():
        coordinator.register(name, computer)
    return FrameAggregator(coordinator)
