from dataclasses import dataclass, field
from typing import Dict

# Share of league-wide skill/flex shortfall credited to each position
FLEX_DEMAND_WEIGHTS = {
    "RB": 0.45,
    "WR": 0.45,
    "TE": 0.10,
}

# Bench depth a team still wants at a position: (roster below, extra demand, else)
DEPTH_ALLOWANCE = {
    "QB": (2, 1, 0),
    "RB": (4, 2, 1),
    "WR": (5, 2, 1),
    "TE": (2, 1, 0),
}

# Typical twelfth-best-starter totals, used when a position's pool is empty
STATIC_REPLACEMENT_BASELINES = {
    "QB": 288.4,
    "RB": 191.8,
    "WR": 207.0,
    "TE": 120.0,
    "K": 140.0,
    "DEF": 130.0,
}

# Tier assumed when a player carries none or a non-positive one
DEFAULT_TIER = 5

# Depth analysis
TIER_DROP_RATIO = 0.15
MIN_PLAYERS_FOR_TIER_BREAK = 3
QUALITY_MARGIN_POINTS = 20.0
SCARCITY_MULTIPLIER_CAP = 2.0
SCARCITY_SLOPE = 0.5
SCARCE_DEMAND_RATIO = 1.5
SCARCE_QUALITY_REMAINING = 2

# Cooperative recompute
RECOMPUTE_CHUNK_SIZE = 50


@dataclass
class ValuationConfig:
    """Tunable value-model thresholds; defaults are the module constants."""

    flex_demand_weights: Dict[str, float] = field(
        default_factory=lambda: dict(FLEX_DEMAND_WEIGHTS)
    )
    static_baselines: Dict[str, float] = field(
        default_factory=lambda: dict(STATIC_REPLACEMENT_BASELINES)
    )
    tier_drop_ratio: float = TIER_DROP_RATIO
    quality_margin: float = QUALITY_MARGIN_POINTS
    scarcity_cap: float = SCARCITY_MULTIPLIER_CAP
    scarcity_slope: float = SCARCITY_SLOPE
    scarce_demand_ratio: float = SCARCE_DEMAND_RATIO
    scarce_quality_remaining: int = SCARCE_QUALITY_REMAINING
