"""Tests for the availability (reach) probability model."""

import logging

import pytest

from src.availability.config import ProbabilityConfig
from src.availability.reach_probability import (
    ACTION_DRAFT_NOW,
    ACTION_WAIT,
    RISK_HIGH,
    RISK_LOW,
    STRATEGY_DRAFT_NOW,
    STRATEGY_WAIT_ONE,
    STRATEGY_WAIT_TWO,
    multi_round_reach,
    reach_probability,
    survival_probability,
)
from src.draft_manager.draft_state import DraftState


# ── Helpers ──────────────────────────────────────────────────────────


def _make_state(make_player, make_settings, make_teams, target, current_pick=25, fillers=7):
    """12-team snake, user in slot 4, *target* plus same-position fillers."""
    players = [target] + [
        make_player(f"{target.position.lower()}_f{i}", target.position, rank=200 + i)
        for i in range(fillers)
    ]
    return DraftState.create(
        make_settings(draft_slot=4),
        players,
        make_teams(12, user_slot=4),
        current_pick=current_pick,
    )


# ── Logistic core ────────────────────────────────────────────────────


class TestSurvivalProbability:
    def test_at_adp_is_even(self):
        assert survival_probability(40, 40, 0.22) == pytest.approx(50.0)

    def test_later_adp_survives_longer(self):
        assert survival_probability(28, 40, 0.22) > survival_probability(28, 30, 0.22)

    def test_extremes_do_not_overflow(self):
        assert survival_probability(10_000, 1, 0.22) == pytest.approx(0.0, abs=1e-9)
        assert survival_probability(1, 10_000, 0.22) == pytest.approx(100.0)


# ── Next / following pick ────────────────────────────────────────────


class TestReachProbability:
    def test_scenario_mid_draft(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target)
        assert state.picks_until_my_turn == 3

        result = reach_probability(target, state)

        assert result.picks_to_next == 3
        assert result.picks_to_following > 0
        assert result.next_pick_probability == 93
        assert result.following_pick_probability == 25
        assert result.probability == 93
        assert result.risk_level == RISK_LOW
        assert result.recommended_action == ACTION_WAIT
        assert "Next pick: 93% (3 picks away)" in result.reasoning
        assert "Following pick: 25% (20 picks away)" in result.reasoning
        assert "ADP 40.0" in result.reasoning

    @pytest.mark.parametrize("adp", [1.0, 40.0, 500.0])
    def test_probability_bounds(self, make_player, make_settings, make_teams, adp):
        target = make_player("wr_t", "WR", rank=int(adp), adp=adp)
        state = _make_state(make_player, make_settings, make_teams, target)
        result = reach_probability(target, state)
        for value in (result.probability, result.following_pick_probability):
            assert 1 <= value <= 99

    def test_early_adp_clamped_to_floor(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=1, adp=1.0)
        state = _make_state(make_player, make_settings, make_teams, target)
        result = reach_probability(target, state)
        assert result.probability == 1
        assert result.risk_level == RISK_HIGH
        assert result.recommended_action == ACTION_DRAFT_NOW

    def test_on_the_clock(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target, current_pick=28)
        assert state.picks_until_my_turn == 0

        result = reach_probability(target, state)

        assert result.next_pick_probability == 100
        assert result.probability == result.following_pick_probability
        assert result.reasoning.startswith("Your turn now. Next pick: 100%")

    def test_missing_adp_falls_back_to_rank(
        self, make_player, make_settings, make_teams, caplog
    ):
        target = make_player("wr_t", "WR", rank=40, adp=float("nan"))
        state = _make_state(make_player, make_settings, make_teams, target)
        with caplog.at_level(logging.WARNING):
            result = reach_probability(target, state)
        assert result.next_pick_probability == 93
        assert "No ADP, using rank 40" in result.reasoning
        assert "no usable ADP" in caplog.text


class TestAdjustments:
    def test_thin_top_tier_lowers_probability(self, make_player, make_settings, make_teams):
        target = make_player("rb_t", "RB", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target, fillers=2)
        result = reach_probability(target, state)
        assert result.next_pick_probability == 78
        assert "Only 3 top-tier RBs left" in result.reasoning

    def test_limited_top_tier(self, make_player, make_settings, make_teams):
        target = make_player("rb_t", "RB", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target, fillers=4)
        result = reach_probability(target, state)
        assert result.next_pick_probability == 85
        assert "Limited top-tier RBs remaining" in result.reasoning

    def test_trending_up(self, make_player, make_settings, make_teams):
        baseline = make_player("wr_t", "WR", rank=40, adp=40.0)
        rising = make_player("wr_t", "WR", rank=55, adp=40.0)
        base = reach_probability(
            baseline, _make_state(make_player, make_settings, make_teams, baseline)
        )
        result = reach_probability(
            rising, _make_state(make_player, make_settings, make_teams, rising)
        )
        assert result.next_pick_probability == base.next_pick_probability - 10
        assert "trending up" in result.reasoning

    def test_trending_down(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=25, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target)
        result = reach_probability(target, state)
        assert result.next_pick_probability == 98
        assert "trending down" in result.reasoning

    def test_config_overrides_steepness(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target)
        flat = reach_probability(target, state, ProbabilityConfig(logistic_steepness=0.0))
        assert flat.next_pick_probability == 50
        assert flat.following_pick_probability == 50


# ── Multi-round planning ─────────────────────────────────────────────


class TestMultiRoundReach:
    @pytest.mark.parametrize(
        "adp, expected",
        [
            (60.0, STRATEGY_WAIT_TWO),
            (40.0, STRATEGY_WAIT_ONE),
            (30.0, STRATEGY_WAIT_ONE),
            (25.0, STRATEGY_DRAFT_NOW),
        ],
    )
    def test_strategy(self, make_player, make_settings, make_teams, adp, expected):
        target = make_player("wr_t", "WR", rank=int(adp), adp=adp)
        state = _make_state(make_player, make_settings, make_teams, target)
        result = multi_round_reach(target, state)
        assert result.best_strategy == expected
        assert result.next_round.target_pick == 28
        assert result.two_rounds_ahead.target_pick == 45

    def test_on_the_clock(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target, current_pick=28)
        result = multi_round_reach(target, state)
        assert result.best_strategy == STRATEGY_DRAFT_NOW
        assert result.next_round is None

    def test_no_future_picks(self, make_player, make_settings, make_teams):
        target = make_player("wr_t", "WR", rank=40, adp=40.0)
        state = _make_state(make_player, make_settings, make_teams, target, current_pick=178)
        result = multi_round_reach(target, state)
        assert result.best_strategy == STRATEGY_DRAFT_NOW
        assert result.strategy_reasoning == "No future picks available"
