"""Dynamic VORP calculator that tracks remaining league demand.

Replacement level is not a static rank cutoff: it is the projected points of
the last player at a position who would still start for someone, given what
every roster in the league has left to fill.
"""

import logging
import math
from typing import Dict, List, Optional

import pandas as pd

from src.draft_manager.config import FLEX_ELIGIBLE_POSITIONS, POSITIONS
from src.draft_manager.draft_state import DraftSettings, DraftState, Player, TeamRoster
from src.draft_manager.roster_needs import RosterNeeds
from src.valuation_engine.config import (
    DEPTH_ALLOWANCE,
    MIN_PLAYERS_FOR_TIER_BREAK,
    ValuationConfig,
)
from src.valuation_engine.models import DepthAnalysis, VORResult
from src.valuation_engine.pool_frame import build_pool_frame, is_finite_number, position_points

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round halves away from zero for non-negative values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


class DynamicVORCalculator:
    """Calculate dynamic VORP for one draft snapshot.

    An instance is bound to a single snapshot of players and rosters. It
    memoises replacement levels and depth analyses for that snapshot only;
    build a new calculator after every pick.
    """

    def __init__(
        self,
        players: List[Player],
        settings: DraftSettings,
        teams: List[TeamRoster],
        config: Optional[ValuationConfig] = None,
    ):
        self.players = players
        self.settings = settings
        self.teams = teams
        self.config = config or ValuationConfig()
        self.needs = RosterNeeds(settings)
        self.pool: pd.DataFrame = build_pool_frame(players)

        self._demand_cache: Dict[str, int] = {}
        self._replacement_cache: Dict[str, float] = {}
        self._depth_cache: Dict[str, DepthAnalysis] = {}

    @classmethod
    def from_draft_state(
        cls, draft_state: DraftState, config: Optional[ValuationConfig] = None
    ) -> "DynamicVORCalculator":
        """Convenience constructor that extracts data from a DraftState."""
        return cls(draft_state.players, draft_state.settings, draft_state.teams, config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def remaining_demand(self, position: str) -> int:
        """Players at *position* the league still expects to draft.

        Summed across every team::

            basic     = max(0, required - rostered)
            flex      = round(skill_shortfall * flex_weight)      (RB/WR/TE)
            superflex = max(0, superflex - max(0, rostered - required))   (QB)
            depth     = bench allowance by roster count          (QB/RB/WR/TE)

        Never less than 1.
        """
        if position in self._demand_cache:
            return self._demand_cache[position]

        total = 0
        weight = self.config.flex_demand_weights.get(position, 0.0)
        required = self.settings.slots_for(position)

        for team in self.teams:
            current = team.get_roster_count(position)
            total += max(0, required - current)

            if position in FLEX_ELIGIBLE_POSITIONS:
                total += round_half_up(self.needs.skill_shortfall(team) * weight)

            if position == "QB":
                surplus = max(0, current - required)
                total += max(0, self.settings.superflex_slots() - surplus)

            if position in DEPTH_ALLOWANCE:
                below, extra, otherwise = DEPTH_ALLOWANCE[position]
                total += extra if current < below else otherwise

        demand = max(1, total)
        self._demand_cache[position] = demand
        return demand

    def replacement_level(self, position: str) -> float:
        """Projected points of the last startable player at *position*.

        Falls back to the static baseline table when no player at the
        position is left (or the position is unknown).
        """
        if position in self._replacement_cache:
            return self._replacement_cache[position]

        points = position_points(self.pool, position)
        if not points:
            level = self.config.static_baselines.get(position, 0.0)
        else:
            index = max(0, min(self.remaining_demand(position), len(points)) - 1)
            level = points[index]

        self._replacement_cache[position] = level
        return level

    def calculate_vorp(self, player: Player) -> float:
        """VORP for one player, never negative.

        Invalid positions or projections are logged and value at 0.
        """
        if player.position not in POSITIONS:
            logger.warning(
                "Invalid position for player %s: %r", player.name, player.position
            )
            return 0.0

        if not is_finite_number(player.projected_points):
            logger.warning(
                "Player %s has invalid projected points: %r",
                player.name, player.projected_points,
            )
            return 0.0

        return max(0.0, player.projected_points - self.replacement_level(player.position))

    def depth_analysis(self, position: str) -> DepthAnalysis:
        """Supply/demand picture for one position.

        Formula::

            ratio      = remaining_demand / max(1, available)
            multiplier = min(cap, 1 + slope * (ratio - 1))
            scarce     = ratio > 1.5 or quality_remaining <= 2
        """
        if position in self._depth_cache:
            return self._depth_cache[position]

        cfg = self.config
        points = position_points(self.pool, position)
        total_available = len(points)
        demand = self.remaining_demand(position)
        replacement = self.replacement_level(position)

        quality_remaining = sum(1 for p in points if p >= replacement + cfg.quality_margin)
        total_vorp = sum(max(0.0, p - replacement) for p in points)
        average_vorp = total_vorp / total_available if total_available else 0.0

        ratio = demand / max(1, total_available)
        multiplier = min(cfg.scarcity_cap, 1 + (ratio - 1) * cfg.scarcity_slope)
        is_scarce = (
            ratio > cfg.scarce_demand_ratio
            or quality_remaining <= cfg.scarce_quality_remaining
        )

        analysis = DepthAnalysis(
            position=position,
            total_available=total_available,
            quality_remaining=quality_remaining,
            average_vorp_remaining=average_vorp,
            next_tier_break=self.find_tier_break(points, cfg.tier_drop_ratio),
            scarcity_multiplier=multiplier,
            is_scarce=is_scarce,
            remaining_demand=demand,
            replacement_level=replacement,
        )
        self._depth_cache[position] = analysis
        return analysis

    def calculate_all(self) -> Dict[str, VORResult]:
        """Dynamic VORP for every available player.

        Returns:
            Dict mapping ``player_id`` to :class:`VORResult`.
        """
        results: Dict[str, VORResult] = {}
        for position in POSITIONS:
            pos_df = self.pool.loc[self.pool["position"] == position]
            if pos_df.empty:
                continue
            replacement = self.replacement_level(position)
            multiplier = self.depth_analysis(position).scarcity_multiplier

            for rank, row in enumerate(pos_df.itertuples(index=False), start=1):
                results[row.player_id] = VORResult(
                    player_id=row.player_id,
                    position=position,
                    projected_points=row.projected_points,
                    replacement_level=replacement,
                    vorp=max(0.0, row.projected_points - replacement),
                    scarcity_multiplier=multiplier,
                    position_rank=rank,
                )

        logger.debug("Calculated dynamic VORP for %d available players", len(results))
        return results

    def best_by_position(self) -> Dict[str, Optional[VORResult]]:
        """Top remaining VORP at each position (None when the pool is empty)."""
        best: Dict[str, Optional[VORResult]] = {pos: None for pos in POSITIONS}
        for result in self.calculate_all().values():
            current = best[result.position]
            if current is None or result.vorp > current.vorp:
                best[result.position] = result
        return best

    def vorp_change_after_pick(self, player: Player) -> float:
        """How far the best VORP left at a position falls if *player* goes.

        Returns 0 when *player* is not the best left, or is not available.
        """
        if not player.is_available or player.position not in POSITIONS:
            return 0.0

        points = position_points(self.pool, player.position)
        if not points or player.projected_points < points[0]:
            return 0.0

        replacement = self.replacement_level(player.position)
        best_vorp = max(0.0, points[0] - replacement)
        next_vorp = max(0.0, points[1] - replacement) if len(points) > 1 else 0.0
        return best_vorp - next_vorp

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def find_tier_break(points: List[float], drop_ratio: float) -> int:
        """Index just past the first relative drop larger than *drop_ratio*.

        Returns 0 for fewer than three players and ``len(points)`` when no
        drop qualifies.
        """
        if len(points) < MIN_PLAYERS_FOR_TIER_BREAK:
            return 0

        for i in range(len(points) - 1):
            current, following = points[i], points[i + 1]
            if current <= 0:
                continue
            if (current - following) / current > drop_ratio:
                return i + 1

        return len(points)
