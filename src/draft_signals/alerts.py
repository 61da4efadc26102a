"""Positional-run and tier-collapse detection."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from src.draft_manager.config import POSITIONS
from src.draft_manager.draft_state import DraftState, Pick, Player
from src.draft_signals.config import (
    SOUND_MAJOR_RUN,
    SOUND_RUN,
    SOUND_TIER_COLLAPSE,
    SignalConfig,
)


@dataclass
class PositionalRun:
    position: str
    count: int
    in_last_picks: int
    is_active: bool


@dataclass
class TierAlert:
    position: str
    tier: int
    remaining_players: int
    is_collapsing: bool


class SignalDetector:
    """Detects runs over recent picks and thinning tiers in the pool."""

    def __init__(
        self,
        picks: List[Pick],
        players: List[Player],
        config: Optional[SignalConfig] = None,
    ):
        self.picks = picks
        self.players = players
        self.config = config or SignalConfig()

    @classmethod
    def from_draft_state(
        cls, draft_state: DraftState, config: Optional[SignalConfig] = None
    ) -> "SignalDetector":
        return cls(draft_state.picks, draft_state.players, config)

    def positional_runs(self) -> List[PositionalRun]:
        """Positions taken at least ``run_min_count`` times in the recent window."""
        cfg = self.config
        recent = self.picks[-cfg.run_window:] if cfg.run_window > 0 else []

        runs: List[PositionalRun] = []
        for position in POSITIONS:
            count = sum(1 for pick in recent if pick.position == position)
            if count >= cfg.run_min_count:
                runs.append(
                    PositionalRun(
                        position=position,
                        count=count,
                        in_last_picks=cfg.run_window,
                        is_active=count >= cfg.active_run_min_count,
                    )
                )
        return runs

    def tier_alerts(self) -> List[TierAlert]:
        """Tiers down to one or two undrafted players.

        Sorted by tier, then collapsing first, then fewest remaining.
        """
        alerts: List[TierAlert] = []
        for position in POSITIONS:
            tier_counts = self._tier_counts(position)
            for tier in range(1, self.config.max_alert_tier + 1):
                remaining = tier_counts.get(tier, 0)
                if remaining in (1, 2):
                    alerts.append(
                        TierAlert(
                            position=position,
                            tier=tier,
                            remaining_players=remaining,
                            is_collapsing=remaining == 1,
                        )
                    )

        return sorted(
            alerts,
            key=lambda a: (a.tier, not a.is_collapsing, a.remaining_players),
        )

    def position_tier_counts(self, position: str) -> Dict[str, int]:
        """Undrafted tier-1/2/3 counts and total at *position*."""
        counts = self._tier_counts(position)
        return {
            "tier1": counts.get(1, 0),
            "tier2": counts.get(2, 0),
            "tier3": counts.get(3, 0),
            "total": sum(counts.values()),
        }

    def should_alert(self) -> bool:
        """True when any run is active or any tier is collapsing."""
        return any(run.is_active for run in self.positional_runs()) or any(
            alert.is_collapsing for alert in self.tier_alerts()
        )

    def alert_sound(self) -> Optional[str]:
        """Single highest-priority alert token, or None."""
        runs = self.positional_runs()
        if any(r.is_active and r.count >= self.config.major_run_min_count for r in runs):
            return SOUND_MAJOR_RUN
        if any(r.is_active for r in runs):
            return SOUND_RUN
        if any(
            a.is_collapsing and a.tier <= self.config.collapse_sound_max_tier
            for a in self.tier_alerts()
        ):
            return SOUND_TIER_COLLAPSE
        return None

    def _tier_counts(self, position: str) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for player in self.players:
            if player.position == position and not player.is_taken:
                counts[player.tier] = counts.get(player.tier, 0) + 1
        return counts
