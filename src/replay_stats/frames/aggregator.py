"""
FrameAggregator - merges pre/post updates into frame-indexed records.

Single writer, append/merge only. Each merged update is pushed on to the
stats coordinator, which decides when a frame is complete enough to process.
"""

from __future__ import annotations

import copy
import logging
from typing import Dict, List, Optional, Union, TYPE_CHECKING

from replay_stats.core.types import (
    EMPTY_PLAYER_TYPE,
    FIRST_FRAME,
    FIRST_PLAYABLE_FRAME,
    PlayerIndices,
)
from replay_stats.frames.records import (
    FrameEntry,
    GameEnd,
    GameStart,
    PlayerFrame,
    PostFrameUpdate,
    PreFrameUpdate,
    UpdateKind,
)

if TYPE_CHECKING:
    from replay_stats.stats.coordinator import StatsCoordinator

logger = logging.getLogger(__name__)

FrameUpdate = Union[PreFrameUpdate, PostFrameUpdate]

# Transformation characters: internal id seen in frame data -> character id
# the match metadata should report instead.
_INTERNAL_SHEIK = 0x07
_INTERNAL_ZELDA = 0x13
_CHARACTER_CORRECTIONS = {
    _INTERNAL_SHEIK: 0x13,  # Sheik
    _INTERNAL_ZELDA: 0x12,  # Zelda
}


def singles_player_indices(settings: GameStart) -> List[PlayerIndices]:
    """Both attack directions for a 1v1 match, or nothing for any other player count."""
    if len(settings.players) != 2:
        return []

    first, second = settings.players
    return [
        PlayerIndices(first.player_index, second.player_index),
        PlayerIndices(second.player_index, first.player_index),
    ]


class FrameAggregator:
    """
    Builds FrameEntry records from a stream of pre/post updates.

    Follower updates (the second Ice Climber) are kept in their own history
    and never reach the stats coordinator.
    """

    def __init__(self, coordinator: Optional["StatsCoordinator"] = None):
        self.coordinator = coordinator
        self._frames: Dict[int, FrameEntry] = {}
        self._follower_frames: Dict[int, FrameEntry] = {}
        self._settings: Optional[GameStart] = None
        self._game_end: Optional[GameEnd] = None
        self._latest_frame_number: Optional[int] = None
        self._first_frame_number: Optional[int] = None
        self._player_indices: List[PlayerIndices] = []

        if coordinator is not None:
            coordinator.attach(self)

    # -------------------------------------------------------------------------
    # Match boundaries
    # -------------------------------------------------------------------------

    def start_match(self, settings: GameStart) -> None:
        """Reset history for a new match and hand the player pairs to the coordinator."""
        if not settings.stage_id:
            logger.debug("Ignoring game start without a stage id")
            return

        # Metadata is corrected in place later on, keep the caller's copy intact
        settings = copy.deepcopy(settings)
        settings.players = [p for p in settings.players if p.type != EMPTY_PLAYER_TYPE]

        self._settings = settings
        self._game_end = None
        self._frames = {}
        self._follower_frames = {}
        self._latest_frame_number = None
        self._first_frame_number = None
        self._player_indices = singles_player_indices(settings)

        logger.info(
            "Match started on stage %s with %d players",
            settings.stage_id, len(settings.players),
        )
        if self.coordinator is not None:
            self.coordinator.set_player_indices(self._player_indices)

    def end_match(self, game_end: GameEnd) -> None:
        self._game_end = game_end
        logger.info("Match ended at frame %s (method %s)", self._latest_frame_number, game_end.method)
        if self.coordinator is not None:
            self.coordinator.finish()

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    def ingest(self, kind: UpdateKind, payload: FrameUpdate) -> None:
        """Merge one pre or post update into the frame it belongs to."""
        if kind not in (UpdateKind.PRE, UpdateKind.POST):
            raise ValueError(f"Unknown update kind: {kind!r}")

        if payload.frame is None:
            # Streams can end mid-frame; nothing to merge
            logger.debug("Dropping %s update without a frame number", kind.name)
            return

        frame_number = payload.frame
        if kind == UpdateKind.POST:
            self._correct_character(payload)

        frames = self._follower_frames if payload.is_follower else self._frames
        entry = frames.get(frame_number)
        if entry is None:
            entry = frames[frame_number] = FrameEntry(frame=frame_number)

        player = entry.players.setdefault(payload.player_index, PlayerFrame())
        if kind == UpdateKind.PRE:
            player.pre = payload
        else:
            player.post = payload

        self._latest_frame_number = frame_number
        if self._first_frame_number is None or frame_number < self._first_frame_number:
            self._first_frame_number = frame_number

        if not payload.is_follower and self.coordinator is not None:
            self.coordinator.add_frame(entry)

    def _correct_character(self, payload: PostFrameUpdate) -> None:
        if self._settings is None or payload.frame > FIRST_FRAME:
            return

        corrected = _CHARACTER_CORRECTIONS.get(payload.internal_character_id)
        player = self._settings.player(payload.player_index)
        if corrected is not None and player is not None:
            player.character_id = corrected

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def has_frame(self, frame_number: int) -> bool:
        return frame_number in self._frames

    def get_frame(self, frame_number: int) -> FrameEntry:
        """Frame at the index, or an empty placeholder when it was never seen."""
        entry = self._frames.get(frame_number)
        return entry if entry is not None else FrameEntry(frame=frame_number)

    def get_previous_frame(self, frame_number: int) -> FrameEntry:
        return self.get_frame(frame_number - 1)

    def get_frames(self) -> Dict[int, FrameEntry]:
        return self._frames

    def get_follower_frames(self) -> Dict[int, FrameEntry]:
        return self._follower_frames

    def get_settings(self) -> Optional[GameStart]:
        return self._settings

    def get_game_end(self) -> Optional[GameEnd]:
        return self._game_end

    @property
    def player_indices(self) -> List[PlayerIndices]:
        return list(self._player_indices)

    @property
    def latest_frame_number(self) -> Optional[int]:
        return self._latest_frame_number

    @property
    def first_frame_number(self) -> Optional[int]:
        return self._first_frame_number

    def playable_frame_count(self) -> int:
        latest = self._latest_frame_number
        if latest is None or latest < FIRST_PLAYABLE_FRAME:
            return 0
        return latest - FIRST_PLAYABLE_FRAME

    def get_latest_frame(self) -> Optional[FrameEntry]:
        """
        Newest frame known to be fully written.

        While the match is running the latest frame may still be receiving
        updates, so the one before it is returned instead.
        """
        frame_number = self._latest_frame_number
        if frame_number is None:
            frame_number = FIRST_FRAME
        if self._game_end is None:
            frame_number -= 1
        return self._frames.get(frame_number)
