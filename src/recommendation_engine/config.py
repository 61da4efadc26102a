from dataclasses import dataclass, field
from typing import Dict

DEFAULT_RECOMMENDATION_LIMIT = 10

# Need level -> score multiplier
NEED_MULTIPLIERS = {
    3: 1.8,  # Unfilled required slot
    2: 1.4,  # Flex-eligible with flex capacity left
    1: 1.1,  # Depth below required + 1
    0: 0.8,  # No immediate need
}

# Base score
BASE_RANK_CEILING = 500
NEED_BONUS_PER_LEVEL = 100

# Rank boosts by scoring format (positive = better effective rank)
PPR_RANK_BOOST = {"WR": 5, "RB": 3, "TE": 3}
PPR_RB_MAX_TIER = 4
HALF_PPR_FACTOR = 0.5
STANDARD_RANK_BOOST = {"RB": 2, "WR": -2}

# Rank boosts by roster format
SUPERFLEX_QB_BOOST = 15
MULTI_FLEX_SKILL_BOOST = 3
TE_PREMIUM_BOOST = 8
TWO_QB_BOOST = 10

# Tier bonus
LAST_IN_TIER_BONUS = 75
LAST_IN_TIER_MAX_TIER = 5
THIN_TIER_BONUS = 40
THIN_TIER_MAX_TIER = 8

# ADP value
STRONG_POOL_ROUNDS_AHEAD = 1.5
WEAK_POOL_ROUNDS_AHEAD = 0.75
WEAK_POOL_QUALITY_TIER = 3
WEAK_POOL_MIN_QUALITY = 3
WEAK_POOL_MIN_AVERAGE_POINTS = 100.0
GREAT_VALUE_ROUNDS_AHEAD = 2

# Roster fit
TARGET_BONUS = 200
BYE_WEEK_PENALTY = 25
BYE_CONFLICT_REASON_MIN = 2
PLAYOFF_SCHEDULE_BONUS = {"Good": 25, "Avg": 0, "Tough": -15}

# Scarcity
TOP_TIER_MAX = 3
LAST_TOP_TIER_BONUS = 60
THIN_TOP_TIER_BONUS = 40
DROPOFF_MIN_SEVERITY = 0.3
DROPOFF_BONUS_SCALE = 50
RUN_PREDICTED_BONUS = 25
RUN_LOOKBACK_PICKS = 4
RUN_LOOKBACK_MIN = 2
UPCOMING_PICKS_WINDOW = 4
UPCOMING_TEAMS_MIN = 2
RUN_OPPONENT_DEMAND_MIN = 3
LEAGUE_DEMAND_BONUSES = ((2.0, 30), (1.5, 20), (1.2, 10))

# Opponent pressure
OPPONENT_DEMAND_HIGH = 4
OPPONENT_DEMAND_HIGH_BONUS = 35
OPPONENT_DEMAND_MEDIUM = 2
OPPONENT_DEMAND_MEDIUM_BONUS = 20

# Urgency (heuristic mode)
URGENT_SCARCITY_BONUS = 30
MODERATE_SCARCITY_BONUS = 20

# Pure-value mode
VORP_REASON_BANDS = ((100, "Elite"), (60, "Strong"), (30, "Good"), (10, "Moderate"))
VORP_VALUE_MIN = 30
VORP_HIGH_URGENCY = 100
VORP_MEDIUM_URGENCY = 50
BEST_AT_SCARCE_BONUS = 100
BEST_AT_POSITION_BONUS = 50
SCARCE_TOP_THREE_BONUS = 60
SCARCE_TOP_THREE_STEP = 20
PURE_SCARCITY_MEDIUM_URGENCY = 35
QUALITY_REASON_MAX = 3


@dataclass
class ScoringConfig:
    """Empirically tuned scoring thresholds, overridable per scorer."""

    need_multipliers: Dict[int, float] = field(
        default_factory=lambda: dict(NEED_MULTIPLIERS)
    )
    last_in_tier_bonus: float = LAST_IN_TIER_BONUS
    thin_tier_bonus: float = THIN_TIER_BONUS
    strong_pool_rounds_ahead: float = STRONG_POOL_ROUNDS_AHEAD
    weak_pool_rounds_ahead: float = WEAK_POOL_ROUNDS_AHEAD
    target_bonus: float = TARGET_BONUS
    bye_week_penalty: float = BYE_WEEK_PENALTY

    # Hidden gems
    gem_threshold: float = 50
    gem_bonus_cap: float = 100
    cliff_bonus: float = 40
    cliff_drop_ratio: float = 0.15
    cliff_tier_gap: int = 2
    convergence_bonus: float = 30
    convergence_min_teams: float = 3
    convergence_max_in_tier: int = 2
    breakpoint_bonus: float = 35
    breakpoint_drop_ratio: float = 0.15
    breakpoint_max_in_tier: int = 2
    thin_pool_value_bonus: float = 30
    thin_pool_max_tier: int = 4
    below_adp_value_bonus: float = 25
    below_adp_min_rounds: float = 1.0
    below_adp_min_points: float = 150
    opportunity_bonus: float = 25
    opportunity_margin: float = 1.1
    opportunity_needs_considered: int = 3
