from src.valuation_engine.config import ValuationConfig
from src.valuation_engine.models import DepthAnalysis, VORResult
from src.valuation_engine.recompute import (
    VORPRecomputeCoordinator,
    recalculate_all_vorp,
    recalculate_incremental_vorp,
    recalculate_vorp_async,
)
from src.valuation_engine.vor_calculator import DynamicVORCalculator

__all__ = [
    "DepthAnalysis",
    "DynamicVORCalculator",
    "VORPRecomputeCoordinator",
    "VORResult",
    "ValuationConfig",
    "recalculate_all_vorp",
    "recalculate_incremental_vorp",
    "recalculate_vorp_async",
]
