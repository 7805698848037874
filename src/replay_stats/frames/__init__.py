"""
Frames module - typed update records and frame assembly.
"""

from replay_stats.frames.records import (
    UpdateKind,
    PreFrameUpdate,
    PostFrameUpdate,
    PlayerFrame,
    FrameEntry,
    PlayerSettings,
    GameStart,
    GameEnd,
)
from replay_stats.frames.aggregator import FrameAggregator, singles_player_indices

__all__ = [
    "UpdateKind",
    "PreFrameUpdate",
    "PostFrameUpdate",
    "PlayerFrame",
    "FrameEntry",
    "PlayerSettings",
    "GameStart",
    "GameEnd",
    "FrameAggregator",
    "singles_player_indices",
]
