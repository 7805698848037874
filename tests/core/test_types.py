"""
Tests for replay_stats.core.types

Tests constants and the conversion / input data classes.
"""

import pytest

from replay_stats.core.types import (
    Conversion,
    InputTally,
    MoveLanded,
    OpeningType,
    PlayerIndices,
    FIRST_FRAME,
    FIRST_PLAYABLE_FRAME,
    PUNISH_RESET_FRAMES,
)


class TestConstants:
    """Tests for module constants."""

    def test_frame_order(self):
        """Players get control after the replay starts and before GO."""
        assert FIRST_FRAME < FIRST_PLAYABLE_FRAME < 0

    def test_punish_reset_window(self):
        """Roughly three quarters of a second at 60fps."""
        assert PUNISH_RESET_FRAMES == 45


class TestOpeningType:

    def test_values(self):
        assert OpeningType.NEUTRAL_WIN.value == "neutral-win"
        assert OpeningType.COUNTER_ATTACK == "counter-attack"
        assert {t.value for t in OpeningType} == {"unknown", "neutral-win", "counter-attack", "trade"}


class TestPlayerIndices:

    def test_directional(self):
        """Reverse pair is a different key."""
        assert PlayerIndices(0, 1) != PlayerIndices(1, 0)
        assert len({PlayerIndices(0, 1), PlayerIndices(1, 0), PlayerIndices(0, 1)}) == 2


class TestConversion:
    """Conversion helper property tests."""

    def test_new_conversion_is_open_and_unknown(self):
        c = Conversion(player_index=0, opponent_index=1, start_frame=10, start_percent=0, current_percent=9)
        assert c.is_open
        assert c.opening_type is OpeningType.UNKNOWN
        assert c.moves == []
        assert c.did_kill is False
        assert c.indices == PlayerIndices(0, 1)

    def test_total_damage_sums_moves(self):
        c = Conversion(player_index=0, opponent_index=1, start_frame=10, start_percent=0, current_percent=0)
        c.moves.append(MoveLanded(frame=10, move_id=2, hit_count=1, damage=4.0))
        c.moves.append(MoveLanded(frame=20, move_id=13, hit_count=3, damage=9.5))
        assert c.total_damage == pytest.approx(13.5)

    def test_move_lists_not_shared(self):
        a = Conversion(0, 1, 1, 0, 0)
        b = Conversion(1, 0, 1, 0, 0)
        a.moves.append(MoveLanded(frame=1, move_id=2))
        assert b.moves == []


class TestInputTally:

    def test_starts_at_zero(self):
        tally = InputTally(player_index=1, opponent_index=0)
        assert tally.input_count == 0
        assert tally.joystick_distance_traveled == 0.0
