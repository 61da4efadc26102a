from src.advisory_context.candidate_features import (
    AdvisoryContext,
    CandidateFeature,
    ContextBuilder,
    PositionScarcity,
)
from src.advisory_context.config import ContextConfig
from src.advisory_context.opponent_analysis import (
    OpponentAnalyzer,
    OpponentProfile,
    OpponentWindow,
)

__all__ = [
    "AdvisoryContext",
    "CandidateFeature",
    "ContextBuilder",
    "ContextConfig",
    "OpponentAnalyzer",
    "OpponentProfile",
    "OpponentWindow",
    "PositionScarcity",
]
