"""Tests for snake and linear draft-order arithmetic."""

import pytest

from src.draft_manager import draft_order


# ── Rounds and slots ─────────────────────────────────────────────────


class TestRoundArithmetic:
    @pytest.mark.parametrize(
        "pick, expected_round, expected_in_round",
        [(1, 1, 1), (12, 1, 12), (13, 2, 1), (24, 2, 12), (25, 3, 1)],
    )
    def test_round_and_position(self, pick, expected_round, expected_in_round):
        assert draft_order.round_for_pick(pick, 12) == expected_round
        assert draft_order.pick_in_round(pick, 12) == expected_in_round

    def test_snake_reverses_even_rounds(self):
        assert draft_order.slot_for_pick(1, 12, "snake") == 1
        assert draft_order.slot_for_pick(12, 12, "snake") == 12
        assert draft_order.slot_for_pick(13, 12, "snake") == 12
        assert draft_order.slot_for_pick(24, 12, "snake") == 1

    def test_linear_repeats_order(self):
        assert draft_order.slot_for_pick(13, 12, "linear") == 1
        assert draft_order.slot_for_pick(24, 12, "linear") == 12


# ── Turn distance ────────────────────────────────────────────────────


class TestPicksUntilTurn:
    def test_on_the_clock_is_zero(self):
        assert draft_order.picks_until_turn(1, 1, 12, "snake") == 0

    def test_later_in_same_round(self):
        # Round 3 is odd: slot 4 picks 28th overall
        assert draft_order.next_pick_for_slot(25, 4, 12, "snake") == 28
        assert draft_order.picks_until_turn(25, 4, 12, "snake") == 3

    def test_already_picked_this_round(self):
        # Slot 4 went 28th; in round 4 it picks 9th of the round (pick 45)
        assert draft_order.next_pick_for_slot(29, 4, 12, "snake") == 45
        assert draft_order.picks_until_turn(29, 4, 12, "snake") == 16

    def test_linear_wraps_to_next_round(self):
        assert draft_order.next_pick_for_slot(5, 4, 12, "linear") == 16

    def test_turn_at_snake_turnaround(self):
        # Slot 12 picks 12 and 13 back to back
        assert draft_order.picks_until_turn(13, 12, 12, "snake") == 0


class TestPicksBetweenTurns:
    def test_snake_odd_round(self):
        assert draft_order.picks_between_turns(28, 4, 12, "snake") == 17

    def test_snake_even_round(self):
        assert draft_order.picks_between_turns(45, 4, 12, "snake") == 7

    def test_snake_turnaround_slot(self):
        assert draft_order.picks_between_turns(12, 12, 12, "snake") == 1

    def test_linear_is_league_size(self):
        assert draft_order.picks_between_turns(4, 4, 12, "linear") == 12


class TestFuturePicks:
    def test_next_three_picks(self):
        assert draft_order.future_picks_for_slot(25, 4, 12, "snake", 3) == [28, 45, 52]

    def test_bounded_by_draft_length(self):
        picks = draft_order.future_picks_for_slot(25, 4, 12, "snake", 3, total_picks=50)
        assert picks == [28, 45]

    def test_zero_count(self):
        assert draft_order.future_picks_for_slot(1, 1, 12, "snake", 0) == []
