"""Tests for positional-run and tier-collapse detection."""

from src.draft_manager.draft_state import Pick
from src.draft_signals.alerts import SignalDetector
from src.draft_signals.config import (
    SOUND_MAJOR_RUN,
    SOUND_RUN,
    SOUND_TIER_COLLAPSE,
    SignalConfig,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _make_picks(make_player, positions):
    return [
        Pick.create(n, 12, team_id=(n - 1) % 12, player=make_player(f"p{n}", pos))
        for n, pos in enumerate(positions, start=1)
    ]


def _make_tier_pool(make_player, tiers, position="RB", drafted=()):
    players = [
        make_player(f"{position.lower()}{i}", position, tier=tier)
        for i, tier in enumerate(tiers)
    ]
    for player in players:
        if player.player_id in drafted:
            player.is_drafted = True
    return players


# ── Positional runs ──────────────────────────────────────────────────


class TestPositionalRuns:
    def test_run_detected_in_window(self, make_player):
        picks = _make_picks(make_player, ["RB", "WR", "RB", "QB", "RB", "TE"])
        runs = SignalDetector(picks, []).positional_runs()
        assert len(runs) == 1
        assert runs[0].position == "RB"
        assert runs[0].count == 3
        assert runs[0].in_last_picks == 8
        assert runs[0].is_active is False

    def test_active_run(self, make_player):
        picks = _make_picks(make_player, ["WR", "WR", "RB", "WR", "WR"])
        runs = SignalDetector(picks, []).positional_runs()
        assert runs[0].position == "WR"
        assert runs[0].is_active is True

    def test_only_recent_window_counts(self, make_player):
        picks = _make_picks(make_player, ["TE"] * 4 + ["QB", "K", "WR", "DEF"] * 2)
        assert SignalDetector(picks, []).positional_runs() == []

    def test_no_picks(self):
        assert SignalDetector([], []).positional_runs() == []

    def test_empty_slots_ignored(self, make_player):
        picks = [Pick.create(n, 12, team_id=0) for n in range(1, 6)]
        assert SignalDetector(picks, []).positional_runs() == []


# ── Tier alerts ──────────────────────────────────────────────────────


class TestTierAlerts:
    def test_single_tier_one_player_is_collapsing(self, make_player):
        players = _make_tier_pool(make_player, [1, 2, 2, 2])
        alerts = SignalDetector([], players).tier_alerts()
        assert alerts[0].position == "RB"
        assert alerts[0].tier == 1
        assert alerts[0].remaining_players == 1
        assert alerts[0].is_collapsing is True

    def test_drafted_players_not_counted(self, make_player):
        players = _make_tier_pool(make_player, [1, 1, 1], drafted=("rb0",))
        alerts = SignalDetector([], players).tier_alerts()
        assert len(alerts) == 1
        assert alerts[0].remaining_players == 2
        assert alerts[0].is_collapsing is False

    def test_owner_tagged_players_not_counted(self, make_player):
        players = _make_tier_pool(make_player, [1, 1, 1])
        players[0].drafted_by = 5
        (alert,) = SignalDetector([], players).tier_alerts()
        assert alert.remaining_players == 2

    def test_untiered_players_not_counted(self, make_player):
        players = _make_tier_pool(make_player, [1, 1])
        players.append(make_player("rb_untiered", "RB", tier=None))
        counts = SignalDetector([], players).position_tier_counts("RB")
        assert counts["tier1"] == 2

    def test_sorted_by_tier_then_collapsing(self, make_player):
        players = (
            _make_tier_pool(make_player, [2, 2, 3], position="WR")
            + _make_tier_pool(make_player, [2, 3, 3], position="TE")
        )
        alerts = SignalDetector([], players).tier_alerts()
        assert [(a.position, a.tier) for a in alerts] == [
            ("TE", 2), ("WR", 2), ("WR", 3), ("TE", 3),
        ]

    def test_deep_tiers_ignored(self, make_player):
        players = _make_tier_pool(make_player, [9])
        assert SignalDetector([], players).tier_alerts() == []

    def test_position_tier_counts(self, make_player):
        players = _make_tier_pool(make_player, [1, 2, 2, 3, 5])
        counts = SignalDetector([], players).position_tier_counts("RB")
        assert counts == {"tier1": 1, "tier2": 2, "tier3": 1, "total": 5}


# ── Alert gate and sound ─────────────────────────────────────────────


class TestAlertSound:
    def test_major_run_wins(self, make_player):
        picks = _make_picks(make_player, ["RB"] * 5)
        players = _make_tier_pool(make_player, [1], position="QB")
        detector = SignalDetector(picks, players)
        assert detector.should_alert() is True
        assert detector.alert_sound() == SOUND_MAJOR_RUN

    def test_active_run(self, make_player):
        picks = _make_picks(make_player, ["RB"] * 4)
        assert SignalDetector(picks, []).alert_sound() == SOUND_RUN

    def test_top_tier_collapse(self, make_player):
        players = _make_tier_pool(make_player, [1, 2, 2, 2])
        assert SignalDetector([], players).alert_sound() == SOUND_TIER_COLLAPSE

    def test_deep_collapse_alerts_without_sound(self, make_player):
        players = _make_tier_pool(make_player, [5, 6, 6, 6])
        detector = SignalDetector([], players)
        assert detector.should_alert() is True
        assert detector.alert_sound() is None

    def test_quiet_board(self, make_player):
        picks = _make_picks(make_player, ["RB", "WR", "QB", "TE"])
        players = _make_tier_pool(make_player, [1, 1, 1])
        detector = SignalDetector(picks, players)
        assert detector.should_alert() is False
        assert detector.alert_sound() is None

    def test_config_window(self, make_player):
        picks = _make_picks(make_player, ["RB", "RB", "WR", "WR", "WR"])
        detector = SignalDetector(picks, [], SignalConfig(run_window=2, run_min_count=2))
        runs = detector.positional_runs()
        assert [(r.position, r.count) for r in runs] == [("WR", 2)]

    def test_from_draft_state(self, draft_state):
        detector = SignalDetector.from_draft_state(draft_state)
        assert detector.players is draft_state.players
        assert detector.picks is draft_state.picks
