from src.availability.config import ProbabilityConfig
from src.availability.reach_probability import (
    MultiRoundReachResult,
    PickProbability,
    ReachProbabilityResult,
    multi_round_reach,
    reach_probability,
    survival_probability,
)

__all__ = [
    "MultiRoundReachResult",
    "PickProbability",
    "ProbabilityConfig",
    "ReachProbabilityResult",
    "multi_round_reach",
    "reach_probability",
    "survival_probability",
]
