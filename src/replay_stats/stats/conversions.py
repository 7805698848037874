"""
Conversion detection and opening classification.

Two separate phases:
- Streaming: every completed frame extends, opens, or closes the
  conversion each attacker has on their opponent.
- Batch: fetch() labels how each settled conversion opened. This needs
  the opposite direction's end frames, which only exist after the fact.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, TYPE_CHECKING

from replay_stats.core.states import (
    calc_damage_taken,
    did_lose_stock,
    is_damaged,
    is_grabbed,
    is_in_control,
)
from replay_stats.core.types import (
    Conversion,
    MoveLanded,
    OpeningType,
    PlayerIndices,
    PUNISH_RESET_FRAMES,
)
from replay_stats.frames.records import FrameEntry
from replay_stats.stats.base import StatComputer

if TYPE_CHECKING:
    from replay_stats.frames.aggregator import FrameAggregator

logger = logging.getLogger(__name__)

# Frames a conversion's start must trail the newest processed frame before
# its opening is classified, so the opposite direction has been seen.
OPENING_LOOKBACK_FRAMES = 1


@dataclass
class PairConversionState:
    """Per-match tracking for one attack direction."""
    conversion: Optional[Conversion] = None
    move: Optional[MoveLanded] = None
    reset_counter: int = 0
    last_hit_animation: Optional[int] = None


class ConversionComputer(StatComputer[List[Conversion]]):
    """Detects punish sequences for each ordered pair."""

    def __init__(
        self,
        punish_reset_frames: int = PUNISH_RESET_FRAMES,
        opening_lookback_frames: int = OPENING_LOOKBACK_FRAMES,
    ):
        self.punish_reset_frames = punish_reset_frames
        self.opening_lookback_frames = opening_lookback_frames
        self.setup([])

    def setup(self, player_indices: List[PlayerIndices]) -> None:
        self._player_indices = list(player_indices)
        self._state: Dict[PlayerIndices, PairConversionState] = {
            indices: PairConversionState() for indices in self._player_indices
        }
        self._conversions: List[Conversion] = []
        self._last_end_frame_by_player: Dict[int, Optional[int]] = {}
        self._last_frame: Optional[int] = None
        self._finished = False
        self.frame_count = 0

    def state_for(self, indices: PlayerIndices) -> PairConversionState:
        return self._state[indices]

    # -------------------------------------------------------------------------
    # Streaming phase
    # -------------------------------------------------------------------------

    def process_frame(self, frame: FrameEntry, frames: "FrameAggregator") -> None:
        prev_frame = frames.get_previous_frame(frame.frame)
        for indices in self._player_indices:
            self._handle_pair(self._state[indices], indices, frame, prev_frame)
        self._last_frame = frame.frame
        self.frame_count += 1

    def _handle_pair(
        self,
        state: PairConversionState,
        indices: PlayerIndices,
        frame: FrameEntry,
        prev_frame: FrameEntry,
    ) -> None:
        player = frame.post(indices.player_index)
        prev_player = prev_frame.post(indices.player_index)
        opponent = frame.post(indices.opponent_index)
        prev_opponent = prev_frame.post(indices.opponent_index)

        opponent_is_damaged = is_damaged(opponent.action_state_id)
        opponent_is_grabbed = is_grabbed(opponent.action_state_id)
        damage_taken = calc_damage_taken(opponent, prev_opponent)

        # A new move starts once the attacker leaves the animation that
        # landed the last hit, or restarts it (rapid jabs share a state id).
        action_changed_since_hit = player.action_state_id != state.last_hit_animation
        action_counter_reset = player.action_state_counter < prev_player.action_state_counter
        if action_changed_since_hit or action_counter_reset:
            state.last_hit_animation = None

        if opponent_is_damaged or opponent_is_grabbed:
            if state.conversion is None:
                state.conversion = Conversion(
                    player_index=indices.player_index,
                    opponent_index=indices.opponent_index,
                    start_frame=frame.frame,
                    start_percent=prev_opponent.percent,
                    current_percent=opponent.percent,
                )
                self._conversions.append(state.conversion)
                logger.debug(
                    "Conversion opened: player %d on %d at frame %d",
                    indices.player_index, indices.opponent_index, frame.frame,
                )

            if damage_taken > 0:
                if state.last_hit_animation is None:
                    state.move = MoveLanded(
                        frame=frame.frame,
                        move_id=player.last_attack_landed,
                    )
                    state.conversion.moves.append(state.move)

                if state.move is not None:
                    state.move.hit_count += 1
                    state.move.damage += damage_taken

                # The previous frame's state is the one that connected, even on trades
                state.last_hit_animation = prev_player.action_state_id

        if state.conversion is None:
            return

        opponent_in_control = is_in_control(opponent.action_state_id)
        opponent_lost_stock = did_lose_stock(opponent, prev_opponent)

        if not opponent_lost_stock:
            state.conversion.current_percent = opponent.percent

        if opponent_is_damaged or opponent_is_grabbed:
            state.reset_counter = 0

        starting = state.reset_counter == 0 and opponent_in_control
        if starting or state.reset_counter > 0:
            state.reset_counter += 1

        should_terminate = False
        if opponent_lost_stock:
            state.conversion.did_kill = True
            should_terminate = True
        if state.reset_counter > self.punish_reset_frames:
            should_terminate = True

        if should_terminate:
            state.conversion.end_frame = frame.frame
            # Previous frame: the current one already shows the respawn percent
            state.conversion.end_percent = prev_opponent.percent
            logger.debug(
                "Conversion closed: player %d on %d at frame %d (kill=%s)",
                indices.player_index, indices.opponent_index, frame.frame,
                state.conversion.did_kill,
            )
            state.conversion = None
            state.move = None

    # -------------------------------------------------------------------------
    # Batch phase
    # -------------------------------------------------------------------------

    def finish(self) -> None:
        self._finished = True

    def fetch(self) -> List[Conversion]:
        self._populate_opening_types()
        return list(self._conversions)

    def _is_settled(self, conversion: Conversion) -> bool:
        if self._last_frame is None:
            return False
        if self._finished:
            return conversion.start_frame <= self._last_frame
        return conversion.start_frame < self._last_frame - self.opening_lookback_frames

    def _populate_opening_types(self) -> None:
        """
        Classify every settled conversion whose opening is still unknown.

        Groups are handled in start order and each conversion records its
        end frame before the next group is looked at. While the match is
        running an open conversion halts the pass: later groups may depend
        on its end frame. Once the match has ended it never closes, so it
        stays unknown and counts as running past the last frame.
        """
        by_start: Dict[int, List[Conversion]] = defaultdict(list)
        for conversion in self._conversions:
            if conversion.opening_type is OpeningType.UNKNOWN and self._is_settled(conversion):
                by_start[conversion.start_frame].append(conversion)

        for start_frame in sorted(by_start):
            group = by_start[start_frame]
            if not self._finished and any(conversion.is_open for conversion in group):
                break

            is_trade = len(group) >= 2
            for conversion in group:
                if conversion.is_open:
                    self._last_end_frame_by_player[conversion.player_index] = self._last_frame + 1
                    continue

                self._last_end_frame_by_player[conversion.player_index] = conversion.end_frame

                if is_trade:
                    conversion.opening_type = OpeningType.TRADE
                    continue

                opponent_end = self._last_end_frame_by_player.get(conversion.opponent_index)
                is_counter_attack = opponent_end is not None and opponent_end > start_frame
                conversion.opening_type = (
                    OpeningType.COUNTER_ATTACK if is_counter_attack else OpeningType.NEUTRAL_WIN
                )
