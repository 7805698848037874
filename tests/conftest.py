"""
Shared test fixtures for replay_stats tests.

Design principles:
- Matches are scripted frame by frame with small builder helpers
- Only the fields a test cares about are spelled out
- Minimal, focused fixtures
"""

from typing import Dict, Optional

import pytest

from replay_stats.core.types import PlayerIndices
from replay_stats.frames.aggregator import FrameAggregator
from replay_stats.frames.records import (
    GameStart,
    PlayerSettings,
    PostFrameUpdate,
    PreFrameUpdate,
    UpdateKind,
)
from replay_stats.stats.conversions import ConversionComputer
from replay_stats.stats.coordinator import StatsCoordinator
from replay_stats.stats.inputs import InputComputer


# =============================================================================
# Action states used by scripted matches
# =============================================================================

WAIT = 0x0E        # standing, in control
FALL = 0x1D        # airborne, neither damaged nor in control
ATTACK_11 = 0x2C + 0x0C  # jab, a ground attack
NAIR = 0x41        # aerial attack
DAMAGE = 0x4B      # hitstun
CAPTURE = 0xDF     # being held

P1, P2 = 0, 1
FOX, FALCO = 0x01, 0x14


# =============================================================================
# Builders
# =============================================================================

def pre(frame: int, player: int, **fields) -> PreFrameUpdate:
    return PreFrameUpdate(frame=frame, player_index=player, **fields)


def post(frame: int, player: int, **fields) -> PostFrameUpdate:
    fields.setdefault("action_state_id", WAIT)
    fields.setdefault("stocks_remaining", 4)
    return PostFrameUpdate(frame=frame, player_index=player, **fields)


def feed_frame(
    frames: FrameAggregator,
    frame: int,
    posts: Optional[Dict[int, dict]] = None,
    pres: Optional[Dict[int, dict]] = None,
) -> None:
    """Push a full frame (pre then post for both players) into the aggregator."""
    posts = posts or {}
    pres = pres or {}
    for player in (P1, P2):
        frames.ingest(UpdateKind.PRE, pre(frame, player, **pres.get(player, {})))
    for player in (P1, P2):
        frames.ingest(UpdateKind.POST, post(frame, player, **posts.get(player, {})))


def make_game_start(*characters: int, stage_id: int = 31) -> GameStart:
    return GameStart(
        stage_id=stage_id,
        players=[
            PlayerSettings(player_index=i, character_id=character)
            for i, character in enumerate(characters)
        ],
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def game_start() -> GameStart:
    """Fox vs Falco on Battlefield."""
    return make_game_start(FOX, FALCO)


@pytest.fixture
def forward() -> PlayerIndices:
    return PlayerIndices(P1, P2)


@pytest.fixture
def backward() -> PlayerIndices:
    return PlayerIndices(P2, P1)


@pytest.fixture
def conversions() -> ConversionComputer:
    return ConversionComputer()


@pytest.fixture
def inputs() -> InputComputer:
    return InputComputer()


@pytest.fixture
def coordinator(conversions, inputs) -> StatsCoordinator:
    coordinator = StatsCoordinator()
    coordinator.register("conversions", conversions)
    coordinator.register("inputs", inputs)
    return coordinator


@pytest.fixture
def frames(coordinator, game_start) -> FrameAggregator:
    """Aggregator wired to both computers, match already started."""
    frames = FrameAggregator(coordinator)
    frames.start_match(game_start)
    return frames
