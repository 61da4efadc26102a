from dataclasses import dataclass

# Positional runs
RUN_WINDOW = 8  # Recent picks inspected
RUN_MIN_COUNT = 3
ACTIVE_RUN_MIN_COUNT = 4
MAJOR_RUN_MIN_COUNT = 5

# Tier alerts
MAX_ALERT_TIER = 8
COLLAPSE_SOUND_MAX_TIER = 3

# Alert tokens, highest priority first
SOUND_MAJOR_RUN = "position-run-major"
SOUND_RUN = "position-run"
SOUND_TIER_COLLAPSE = "tier-collapse"


@dataclass
class SignalConfig:
    """Tunable signal-detection thresholds."""

    run_window: int = RUN_WINDOW
    run_min_count: int = RUN_MIN_COUNT
    active_run_min_count: int = ACTIVE_RUN_MIN_COUNT
    major_run_min_count: int = MAJOR_RUN_MIN_COUNT
    max_alert_tier: int = MAX_ALERT_TIER
    collapse_sound_max_tier: int = COLLAPSE_SOUND_MAX_TIER
