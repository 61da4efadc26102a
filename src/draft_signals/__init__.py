from src.draft_signals.alerts import PositionalRun, SignalDetector, TierAlert
from src.draft_signals.config import SignalConfig

__all__ = ["PositionalRun", "SignalConfig", "SignalDetector", "TierAlert"]
