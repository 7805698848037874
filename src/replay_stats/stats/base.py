"""
StatComputer - abstract base class for all per-frame stat computers.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar, TYPE_CHECKING

from replay_stats.core.types import PlayerIndices
from replay_stats.frames.records import FrameEntry

if TYPE_CHECKING:
    from replay_stats.frames.aggregator import FrameAggregator

T = TypeVar("T")


class StatComputer(ABC, Generic[T]):
    """
    Abstract base class for stat computers driven by the coordinator.

    IMPORTANT ARCHITECTURE NOTE:
    -----------------------------
    - Computers see completed frames only, strictly in ascending order.
    - All per-match state lives on the computer and is rebuilt by setup().
    - Computers never mutate frame data.
    """

    @abstractmethod
    def setup(self, player_indices: List[PlayerIndices]) -> None:
        """Drop all state and start tracking the given pairs for a new match."""
        pass

    @abstractmethod
    def process_frame(self, frame: FrameEntry, frames: "FrameAggregator") -> None:
        """
        Consume one completed frame for every tracked pair.

        Args:
            frame: The frame being processed.
            frames: Full history, used for one-frame lookback.
        """
        pass

    @abstractmethod
    def fetch(self) -> T:
        """Return the computed stats so far."""
        pass

    def finish(self) -> None:
        """Called once the stream is known to be complete."""
        pass
