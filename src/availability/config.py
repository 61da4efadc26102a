from dataclasses import dataclass, field
from typing import Dict

# Logistic survival curve
LOGISTIC_STEEPNESS = 0.22

# Probability bounds: never report certainty either way
MIN_PROBABILITY = 1
MAX_PROBABILITY = 99

# Risk thresholds (percent)
LOW_RISK_THRESHOLD = 75
MEDIUM_RISK_THRESHOLD = 45
VERY_LOW_RISK_THRESHOLD = 80
WAIT_ONE_ROUND_THRESHOLD = 50
UNLIKELY_TWO_ROUNDS_THRESHOLD = 30

# Adjustments (percentage points)
SCARCITY_HIGH_ADJUSTMENT = -15
SCARCITY_MEDIUM_ADJUSTMENT = -8
TRENDING_UP_ADJUSTMENT = -10
TRENDING_DOWN_ADJUSTMENT = 5

# Rank-vs-ADP gap that counts as a trend
TREND_THRESHOLD = 10

# Top-tier group size per position, by overall rank among available players
TOP_TIER_SIZES = {
    "QB": 12,
    "RB": 24,
    "WR": 30,
    "TE": 12,
    "K": 12,
    "DEF": 12,
}
SCARCITY_HIGH_GROUP_SIZE = 3
SCARCITY_MEDIUM_GROUP_SIZE = 5


@dataclass
class ProbabilityConfig:
    """Tunable availability-model parameters."""

    logistic_steepness: float = LOGISTIC_STEEPNESS
    low_risk: float = LOW_RISK_THRESHOLD
    medium_risk: float = MEDIUM_RISK_THRESHOLD
    very_low_risk: float = VERY_LOW_RISK_THRESHOLD
    scarcity_high: float = SCARCITY_HIGH_ADJUSTMENT
    scarcity_medium: float = SCARCITY_MEDIUM_ADJUSTMENT
    trending_up: float = TRENDING_UP_ADJUSTMENT
    trending_down: float = TRENDING_DOWN_ADJUSTMENT
    trend_threshold: float = TREND_THRESHOLD
    top_tier_sizes: Dict[str, int] = field(default_factory=lambda: dict(TOP_TIER_SIZES))
