from dataclasses import dataclass, field
from typing import Dict

# Opponent analysis
LIKELY_TARGETS_PER_TEAM = 5
OPPONENT_WINDOW_PICKS = 5  # Opponents on the clock within this many picks
MAX_OPPONENT_WINDOWS = 3
COMPETITIVE_MIN_TEAMS = 2

# Candidate pre-filter
CANDIDATE_MAX_TIER = 4
MAX_CANDIDATES = 20
CANDIDATE_POSITION_LIMITS = {
    "QB": 4,
    "RB": 6,
    "WR": 6,
    "TE": 3,
    "K": 2,
    "DEF": 2,
}
STRESSED_POSITION_EXTRA = 1

# K/DEF only become candidates late and once core starters are in place
K_DEF_WINDOW = 12
CORE_NEEDS = {"QB": 1, "RB": 2, "WR": 2, "TE": 1}

# Availability estimate when ADP is known
MIN_AVAILABILITY_SPAN = 12
UNKNOWN_ADP_AVAILABILITY = 0.5

# Stack bonuses
STACK_BONUS_WITH_QB = 0.2  # WR/TE whose QB is already rostered
STACK_BONUS_WITH_RECEIVER = 0.15  # QB whose WR/TE is already rostered

# Risk estimate
DEFAULT_RISK = 0.3
RISK_PER_TIER = 0.1
MAX_TIER_RISK = 0.6
ROOKIE_RISK = 0.2
MAX_RISK = 0.8
ROOKIE_MARKER = "(R)"

# Floor playstyle drops high-risk candidates unless the tier cliff is steep
FLOOR_MAX_RISK = 0.6
FLOOR_CLIFF_OVERRIDE = 0.8

# Untiered players never pass the candidate tier filter
UNTIERED_CANDIDATE_TIER = 999

# Supply / demand thresholds for position scarcity
HIGH_SCARCITY_RATIO = 1.2
MEDIUM_SCARCITY_RATIO = 2.0

RECENT_PICKS_LIMIT = 10

PLAYSTYLES = ("value", "balanced", "floor", "upside")
DEFAULT_PLAYSTYLE = "value"

DEFAULT_SCORING_WEIGHTS = {
    "w_vorp": 0.4,
    "w_need": 0.2,
    "w_adp": 0.15,
    "w_stack": 0.1,
    "w_bye": 0.05,
    "w_risk": 0.05,
    "w_snipe": 0.05,
}


@dataclass
class ContextConfig:
    """Tunable parameters for the advisory context bundle."""

    playstyle: str = DEFAULT_PLAYSTYLE
    k_def_window: int = K_DEF_WINDOW
    max_candidates: int = MAX_CANDIDATES
    candidate_max_tier: int = CANDIDATE_MAX_TIER
    position_limits: Dict[str, int] = field(
        default_factory=lambda: dict(CANDIDATE_POSITION_LIMITS)
    )
    likely_targets_per_team: int = LIKELY_TARGETS_PER_TEAM
    opponent_window_picks: int = OPPONENT_WINDOW_PICKS
    max_opponent_windows: int = MAX_OPPONENT_WINDOWS
    recent_picks_limit: int = RECENT_PICKS_LIMIT
    scoring_weights: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_SCORING_WEIGHTS)
    )
