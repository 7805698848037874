"""
Replay Stats - punish and input statistics for recorded Melee matches.

This package consumes already-decoded pre/post frame updates and derives
conversions (punish sequences tagged with how they opened) and per-player
controller input tallies.

Quick Start:
    from replay_stats import compute_stats

    result = compute_stats(game_start, updates, game_end)
    result.conversions   # List[Conversion]
    result.inputs        # List[InputTally]

Streaming:
    frames = create_pipeline()
    frames.start_match(game_start)
    for kind, payload in updates:
        frames.ingest(kind, payload)
    frames.coordinator.fetch()

Modules:
    core   - Fundamental types, constants, action-state tables
    frames - Update records and frame assembly
    stats  - Conversion and input computers, coordinator
"""

from replay_stats.api import compute_stats, create_pipeline, StatsResult

from replay_stats.core import Conversion, InputTally, MoveLanded, OpeningType, PlayerIndices
from replay_stats.frames import (
    FrameAggregator,
    GameEnd,
    GameStart,
    PlayerSettings,
    PostFrameUpdate,
    PreFrameUpdate,
    UpdateKind,
)
from replay_stats.utils.config import Config, DEFAULT_CONFIG

__version__ = "1.0.0"

__all__ = [
    # Main API
    "compute_stats",
    "create_pipeline",
    "StatsResult",
    "FrameAggregator",
    "Config",
    "DEFAULT_CONFIG",
    # Types
    "Conversion",
    "InputTally",
    "MoveLanded",
    "OpeningType",
    "PlayerIndices",
    "GameStart",
    "GameEnd",
    "PlayerSettings",
    "PreFrameUpdate",
    "PostFrameUpdate",
    "UpdateKind",
]
