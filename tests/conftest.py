"""Shared fixtures for the draft valuation test suite."""

import pytest

from src.draft_manager.config import (
    DEFAULT_LEAGUE_SIZE,
    DEFAULT_NUMBER_OF_ROUNDS,
    DEFAULT_ROSTER_SLOTS,
)
from src.draft_manager.draft_state import (
    DraftSettings,
    DraftState,
    Pick,
    Player,
    TeamRoster,
)


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

def build_player(pid, position, points=200.0, tier=3, rank=50, adp=None, **overrides):
    fields = {
        "player_id": pid,
        "name": f"Player {pid}",
        "position": position,
        "team": "TST",
        "adp": float(rank) if adp is None else adp,
        "tier": tier,
        "bye_week": 0,
        "rank": rank,
        "position_rank": 1,
        "projected_points": points,
    }
    fields.update(overrides)
    return Player(**fields)


def build_settings(**overrides):
    fields = {
        "league_size": DEFAULT_LEAGUE_SIZE,
        "draft_slot": 4,
        "number_of_rounds": DEFAULT_NUMBER_OF_ROUNDS,
        "draft_type": "snake",
        "scoring_format": "half_ppr",
        "roster_slots": dict(DEFAULT_ROSTER_SLOTS),
    }
    fields.update(overrides)
    return DraftSettings(**fields)


def build_teams(league_size, user_slot=1):
    return [
        TeamRoster(
            team_id=i,
            team_name=f"Team {i + 1}",
            is_user=(i + 1 == user_slot),
        )
        for i in range(league_size)
    ]


def draft_player(state, player, team):
    """Record *player* as taken by *team* on *state* (pick history included)."""
    player.is_drafted = True
    player.drafted_by = team.team_id
    team.add_player(player)
    state.picks.append(
        Pick.create(len(state.picks) + 1, state.settings.league_size, team.team_id, player)
    )


@pytest.fixture
def make_player():
    return build_player


@pytest.fixture
def make_settings():
    return build_settings


@pytest.fixture
def make_teams():
    return build_teams


@pytest.fixture
def record_pick():
    return draft_player


@pytest.fixture
def sample_players():
    """A small but complete pool: every position, several tiers."""
    specs = [
        # (id, position, points, tier, rank)
        ("qb1", "QB", 380.0, 1, 20), ("qb2", "QB", 350.0, 2, 45),
        ("qb3", "QB", 320.0, 3, 80), ("qb4", "QB", 290.0, 4, 120),
        ("rb1", "RB", 300.0, 1, 1), ("rb2", "RB", 280.0, 1, 3),
        ("rb3", "RB", 250.0, 2, 12), ("rb4", "RB", 220.0, 3, 30),
        ("rb5", "RB", 190.0, 4, 55), ("rb6", "RB", 160.0, 5, 90),
        ("wr1", "WR", 310.0, 1, 2), ("wr2", "WR", 290.0, 1, 5),
        ("wr3", "WR", 260.0, 2, 15), ("wr4", "WR", 230.0, 3, 35),
        ("wr5", "WR", 200.0, 4, 60), ("wr6", "WR", 170.0, 5, 95),
        ("te1", "TE", 220.0, 1, 18), ("te2", "TE", 170.0, 2, 50),
        ("te3", "TE", 130.0, 3, 110),
        ("k1", "K", 150.0, 1, 150), ("k2", "K", 140.0, 2, 160),
        ("def1", "DEF", 140.0, 1, 140), ("def2", "DEF", 125.0, 2, 155),
    ]
    return [
        build_player(pid, pos, points=pts, tier=tier, rank=rank)
        for pid, pos, pts, tier, rank in specs
    ]


@pytest.fixture
def draft_state(sample_players):
    """12-team snake draft, user in slot 4, before the first pick."""
    settings = build_settings()
    return DraftState.create(settings, sample_players, build_teams(12, user_slot=4))
