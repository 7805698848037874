"""
Typed records handed over by the replay decoder.

Pre- and post-frame payloads default every numeric field to zero, so an
``empty()`` payload doubles as the "no prior data" placeholder used for
lookback past the start of history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional


class UpdateKind(IntEnum):
    """Event command bytes for frame updates."""
    PRE = 0x37
    POST = 0x38


@dataclass
class PreFrameUpdate:
    """Controller state as read at the start of a frame."""
    frame: Optional[int] = None
    player_index: int = 0
    is_follower: bool = False
    joystick_x: float = 0.0
    joystick_y: float = 0.0
    cstick_x: float = 0.0
    cstick_y: float = 0.0
    physical_l_trigger: float = 0.0
    physical_r_trigger: float = 0.0
    physical_buttons: int = 0

    @classmethod
    def empty(cls, frame: Optional[int] = None, player_index: int = 0) -> "PreFrameUpdate":
        return cls(frame=frame, player_index=player_index)


@dataclass
class PostFrameUpdate:
    """Character state after the frame has been simulated."""
    frame: Optional[int] = None
    player_index: int = 0
    is_follower: bool = False
    internal_character_id: int = 0
    action_state_id: int = 0
    action_state_counter: float = 0.0
    percent: float = 0.0
    last_attack_landed: int = 0
    stocks_remaining: int = 0

    @classmethod
    def empty(cls, frame: Optional[int] = None, player_index: int = 0) -> "PostFrameUpdate":
        return cls(frame=frame, player_index=player_index)


@dataclass
class PlayerFrame:
    """Pre/post pair for one player slot on one frame."""
    pre: Optional[PreFrameUpdate] = None
    post: Optional[PostFrameUpdate] = None

    @property
    def is_complete(self) -> bool:
        return self.pre is not None and self.post is not None


@dataclass
class FrameEntry:
    """
    All player data for a single frame index.

    Accessors never fail: a missing slot or sub-record resolves to an
    empty payload.
    """
    frame: int
    players: Dict[int, PlayerFrame] = field(default_factory=dict)

    def player(self, index: int) -> PlayerFrame:
        return self.players.get(index) or PlayerFrame()

    def pre(self, index: int) -> PreFrameUpdate:
        pre = self.player(index).pre
        return pre if pre is not None else PreFrameUpdate.empty(self.frame, index)

    def post(self, index: int) -> PostFrameUpdate:
        post = self.player(index).post
        return post if post is not None else PostFrameUpdate.empty(self.frame, index)

    def has_player(self, index: int) -> bool:
        return index in self.players and self.players[index].is_complete


# ---------------------------------------------------------------------------
# Match metadata
# ---------------------------------------------------------------------------

@dataclass
class PlayerSettings:
    """Per-port settings from the game start event."""
    player_index: int
    character_id: int
    type: int = 0
    port: Optional[int] = None


@dataclass
class GameStart:
    stage_id: Optional[int]
    players: List[PlayerSettings] = field(default_factory=list)

    def player(self, index: int) -> Optional[PlayerSettings]:
        for settings in self.players:
            if settings.player_index == index:
                return settings
        return None


@dataclass
class GameEnd:
    method: int
    lras_initiator: Optional[int] = None
