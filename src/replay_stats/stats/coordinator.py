"""
StatsCoordinator - drives stat computers over completed frames.

Frames are processed strictly in ascending order. Processing stops at the
first frame that is missing or still waiting on a sub-record, and resumes
from there on the next call.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, TYPE_CHECKING

from replay_stats.core.types import PlayerIndices
from replay_stats.frames.records import FrameEntry
from replay_stats.stats.base import StatComputer

if TYPE_CHECKING:
    from replay_stats.frames.aggregator import FrameAggregator

logger = logging.getLogger(__name__)


def is_completed_frame(player_indices: List[PlayerIndices], frame: FrameEntry) -> bool:
    """Every player of every pair has both a pre and a post record."""
    for indices in player_indices:
        if not frame.has_player(indices.player_index):
            return False
        if not frame.has_player(indices.opponent_index):
            return False
    return True


class StatsCoordinator:
    """Owns the registered computers and feeds them completed frames."""

    def __init__(self, process_on_the_fly: bool = True):
        self.process_on_the_fly = process_on_the_fly
        self._computers: Dict[str, StatComputer] = {}
        self._frames: Optional["FrameAggregator"] = None
        self._player_indices: List[PlayerIndices] = []
        self.last_processed_frame: Optional[int] = None
        self.finished = False

    # -------------------------------------------------------------------------
    # Wiring
    # -------------------------------------------------------------------------

    def attach(self, frames: "FrameAggregator") -> None:
        self._frames = frames

    def register(self, name: str, computer: StatComputer) -> None:
        if name in self._computers:
            raise ValueError(f"Computer already registered: {name}")
        self._computers[name] = computer
        computer.setup(self._player_indices)

    def computer(self, name: str) -> StatComputer:
        return self._computers[name]

    @property
    def player_indices(self) -> List[PlayerIndices]:
        return list(self._player_indices)

    # -------------------------------------------------------------------------
    # Match lifecycle
    # -------------------------------------------------------------------------

    def set_player_indices(self, player_indices: List[PlayerIndices]) -> None:
        """Match boundary: every computer starts over with the new pairs."""
        self._player_indices = list(player_indices)
        self.last_processed_frame = None
        self.finished = False
        for computer in self._computers.values():
            computer.setup(self._player_indices)

    def add_frame(self, frame: FrameEntry) -> None:
        if self.process_on_the_fly:
            self.process()

    def finish(self) -> None:
        self.process()
        self.finished = True
        for computer in self._computers.values():
            computer.finish()

    # -------------------------------------------------------------------------
    # Processing
    # -------------------------------------------------------------------------

    def _next_frame_number(self) -> Optional[int]:
        if self.last_processed_frame is not None:
            return self.last_processed_frame + 1
        return self._frames.first_frame_number

    def process(self) -> int:
        """
        Run every computer over the frames that became complete.

        Returns:
            Number of frames processed by this call.
        """
        if self._frames is None or not self._player_indices:
            return 0

        processed = 0
        i = self._next_frame_number()
        while i is not None and self._frames.has_frame(i):
            frame = self._frames.get_frame(i)
            if not is_completed_frame(self._player_indices, frame):
                break

            for computer in self._computers.values():
                computer.process_frame(frame, self._frames)

            self.last_processed_frame = i
            processed += 1
            i += 1

        if processed:
            logger.debug("Processed %d frame(s) up to %s", processed, self.last_processed_frame)
        return processed

    def fetch(self) -> Dict[str, object]:
        if not self.process_on_the_fly:
            self.process()
        return {name: computer.fetch() for name, computer in self._computers.items()}
