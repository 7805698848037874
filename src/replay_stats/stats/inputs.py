"""
Controller input tallies.

Counts discrete inputs (button presses, stick region changes, trigger
presses) and tracks how far the joystick travels.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, TYPE_CHECKING

import numpy as np

from replay_stats.core.types import FIRST_PLAYABLE_FRAME, InputTally, PlayerIndices
from replay_stats.frames.records import FrameEntry
from replay_stats.stats.base import StatComputer

if TYPE_CHECKING:
    from replay_stats.frames.aggregator import FrameAggregator

STICK_REGION_THRESHOLD = 0.2875
TRIGGER_THRESHOLD = 0.3
MOTION_THRESHOLD = 0.001

# A, B, X, Y, Z, L, R, Start and the d-pad
BUTTON_MASK = 0xFFF


class JoystickRegion(IntEnum):
    DZ = 0
    NE = 1
    SE = 2
    SW = 3
    NW = 4
    N = 5
    E = 6
    S = 7
    W = 8


def get_joystick_region(x: float, y: float, threshold: float = STICK_REGION_THRESHOLD) -> JoystickRegion:
    """Discretize a stick reading. Diagonals win over cardinals."""
    if x >= threshold and y >= threshold:
        return JoystickRegion.NE
    if x >= threshold and y <= -threshold:
        return JoystickRegion.SE
    if x <= -threshold and y <= -threshold:
        return JoystickRegion.SW
    if x <= -threshold and y >= threshold:
        return JoystickRegion.NW
    if y >= threshold:
        return JoystickRegion.N
    if x >= threshold:
        return JoystickRegion.E
    if y <= -threshold:
        return JoystickRegion.S
    if x <= -threshold:
        return JoystickRegion.W
    return JoystickRegion.DZ


def count_set_bits(x: int) -> int:
    return bin(x).count("1")


def count_new_buttons(prev_buttons: int, buttons: int, mask: int = BUTTON_MASK) -> int:
    """Buttons that went from released to pressed."""
    return count_set_bits(~prev_buttons & buttons & mask)


def is_new_region(prev: JoystickRegion, current: JoystickRegion) -> bool:
    """Region changes count, except returning to the dead zone."""
    return prev != current and current != JoystickRegion.DZ


class InputComputer(StatComputer[List[InputTally]]):
    """Tallies controller activity for each ordered pair."""

    def __init__(
        self,
        stick_threshold: float = STICK_REGION_THRESHOLD,
        trigger_threshold: float = TRIGGER_THRESHOLD,
        motion_threshold: float = MOTION_THRESHOLD,
        button_mask: int = BUTTON_MASK,
    ):
        self.stick_threshold = stick_threshold
        self.trigger_threshold = trigger_threshold
        self.motion_threshold = motion_threshold
        self.button_mask = button_mask
        self.setup([])

    def setup(self, player_indices: List[PlayerIndices]) -> None:
        self._player_indices = list(player_indices)
        self._state: Dict[PlayerIndices, InputTally] = {
            indices: InputTally(indices.player_index, indices.opponent_index)
            for indices in self._player_indices
        }

    def process_frame(self, frame: FrameEntry, frames: "FrameAggregator") -> None:
        # Inputs before the players get control aren't real decisions
        if frame.frame < FIRST_PLAYABLE_FRAME:
            return

        prev_number = frame.frame - 1
        if not frames.has_frame(prev_number):
            return
        prev_frame = frames.get_frame(prev_number)

        for indices in self._player_indices:
            if indices.player_index not in prev_frame.players:
                continue
            self._handle_pair(self._state[indices], indices, frame, prev_frame)

    def _handle_pair(
        self,
        state: InputTally,
        indices: PlayerIndices,
        frame: FrameEntry,
        prev_frame: FrameEntry,
    ) -> None:
        current = frame.pre(indices.player_index)
        prev = prev_frame.pre(indices.player_index)

        new_buttons = count_new_buttons(
            prev.physical_buttons, current.physical_buttons, self.button_mask
        )
        state.input_count += new_buttons
        state.button_input_count += new_buttons

        threshold = self.stick_threshold
        if is_new_region(
            get_joystick_region(prev.joystick_x, prev.joystick_y, threshold),
            get_joystick_region(current.joystick_x, current.joystick_y, threshold),
        ):
            state.input_count += 1
            state.joystick_input_count += 1

        if is_new_region(
            get_joystick_region(prev.cstick_x, prev.cstick_y, threshold),
            get_joystick_region(current.cstick_x, current.cstick_y, threshold),
        ):
            state.input_count += 1
            state.cstick_input_count += 1

        # Only the press point counts; light/hard shield changes do not
        for prev_value, value in (
            (prev.physical_l_trigger, current.physical_l_trigger),
            (prev.physical_r_trigger, current.physical_r_trigger),
        ):
            if prev_value < self.trigger_threshold <= value:
                state.input_count += 1
                state.trigger_input_count += 1

        # Unit coordinates; a standard GameCube stick makes these convertible to meters
        distance = float(np.hypot(
            current.joystick_x - prev.joystick_x,
            current.joystick_y - prev.joystick_y,
        ))
        state.joystick_distance_traveled += distance
        if distance > self.motion_threshold:
            state.joystick_motion_frame_count += 1

    def fetch(self) -> List[InputTally]:
        return list(self._state.values())
