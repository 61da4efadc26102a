"""Data models for the recommendation engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from src.draft_manager.draft_state import Player

URGENCY_HIGH = "High"
URGENCY_MEDIUM = "Medium"
URGENCY_LOW = "Low"


class ScoringMode(str, Enum):
    PURE_VALUE = "pure_value"
    FULL_HEURISTIC = "full_heuristic"


@dataclass
class Recommendation:
    """A ranked player with the reasons behind the ranking."""

    player: Player
    score: float
    reasons: List[str] = field(default_factory=list)
    is_value: bool = False
    urgency: str = URGENCY_LOW
    is_hidden_gem: bool = False


@dataclass
class PoolStrength:
    """Depth of the remaining pool at one position, by tier and points."""

    is_weak: bool
    quality_players: int
    total_remaining: int
    average_points: float


@dataclass
class ValueAssessment:
    """How far past ADP a player has fallen."""

    is_value: bool
    rounds_ahead: float
    position_value: float
    value_score: float
    pool_is_weak: bool


@dataclass
class GemAssessment:
    """Independent hidden-gem signals that fired for one player."""

    gem_score: float
    reasons: List[str]
    threshold: float
    cap: float

    @property
    def is_hidden_gem(self) -> bool:
        return self.gem_score >= self.threshold

    @property
    def bonus(self) -> float:
        return min(self.gem_score, self.cap)
