from src.recommendation_engine.config import ScoringConfig
from src.recommendation_engine.models import Recommendation, ScoringMode
from src.recommendation_engine.scorer import RecommendationScorer
from src.recommendation_engine.strategies import (
    HeuristicStrategy,
    PureValueStrategy,
    get_strategy,
)

__all__ = [
    "HeuristicStrategy",
    "PureValueStrategy",
    "Recommendation",
    "RecommendationScorer",
    "ScoringConfig",
    "ScoringMode",
    "get_strategy",
]
