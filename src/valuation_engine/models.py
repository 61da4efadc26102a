"""Data models for the valuation engine."""

from dataclasses import dataclass


@dataclass
class VORResult:
    """Result of dynamic VORP calculation for a single player."""

    player_id: str
    position: str
    projected_points: float
    replacement_level: float
    vorp: float
    scarcity_multiplier: float
    position_rank: int  # Rank among available players at this position (1-based)


@dataclass
class DepthAnalysis:
    """Supply, demand and tier shape of one position's remaining pool."""

    position: str
    total_available: int
    quality_remaining: int
    average_vorp_remaining: float
    next_tier_break: int
    scarcity_multiplier: float
    is_scarce: bool
    remaining_demand: int
    replacement_level: float
