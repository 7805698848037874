"""
Public API for computing replay stats.

Usage:
    from replay_stats import compute_stats, UpdateKind

    result = compute_stats(game_start, updates, game_end)
    for conversion in result.conversions:
        print(conversion.opening_type, conversion.total_damage)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from replay_stats.core.types import Conversion, InputTally
from replay_stats.frames.records import (
    GameEnd,
    GameStart,
    PostFrameUpdate,
    PreFrameUpdate,
    UpdateKind,
)
from replay_stats.utils.config import Config
from replay_stats.utils.factory import create_pipeline

Update = Tuple[UpdateKind, Union[PreFrameUpdate, PostFrameUpdate]]


@dataclass
class StatsResult:
    """Raw stats for one match, ready for a reporting layer."""
    conversions: List[Conversion]
    inputs: List[InputTally]
    settings: Optional[GameStart]
    last_frame: Optional[int]
    playable_frame_count: int


def compute_stats(
    game_start: GameStart,
    updates: Iterable[Update],
    game_end: Optional[GameEnd] = None,
    config: Optional[Config] = None,
) -> StatsResult:
    """
    Main entry point: run one match's updates through the pipeline.

    Parameters
    ----------
    game_start : GameStart
        Match metadata. Only 1v1 matches produce stats.
    updates : Iterable[Tuple[UpdateKind, payload]]
        Pre/post updates in stream order.
    game_end : GameEnd, optional
        Pass when the stream is complete, so every settled conversion
        gets its opening type.
    config : Config, optional
        Thresholds; defaults to DEFAULT_CONFIG.
    """
    frames = create_pipeline(config)
    frames.start_match(game_start)

    for kind, payload in updates:
        frames.ingest(kind, payload)

    if game_end is not None:
        frames.end_match(game_end)

    stats = frames.coordinator.fetch()
    return StatsResult(
        conversions=stats.get("conversions", []),
        inputs=stats.get("inputs", []),
        settings=frames.get_settings(),
        last_frame=frames.coordinator.last_processed_frame,
        playable_frame_count=frames.playable_frame_count(),
    )


__all__ = [
    "compute_stats",
    "create_pipeline",
    "StatsResult",
]
