"""Per-request view of a draft snapshot shared by every scoring strategy."""

import math
from typing import Dict, List, Optional

from src.draft_manager import draft_order
from src.draft_manager.draft_state import DraftSettings, Pick, Player, TeamRoster
from src.draft_manager.roster_needs import RosterNeeds
from src.recommendation_engine.config import (
    WEAK_POOL_MIN_AVERAGE_POINTS,
    WEAK_POOL_MIN_QUALITY,
    WEAK_POOL_QUALITY_TIER,
)
from src.recommendation_engine.models import PoolStrength
from src.valuation_engine.config import ValuationConfig
from src.valuation_engine.models import DepthAnalysis
from src.valuation_engine.pool_frame import effective_tier, is_finite_number
from src.valuation_engine.vor_calculator import DynamicVORCalculator


def points_of(player: Player) -> float:
    """Projected points, with unusable figures read as 0."""
    if is_finite_number(player.projected_points):
        return float(player.projected_points)
    return 0.0


class ScoringContext:
    """Everything a strategy needs to score one snapshot.

    Built once per ``recommend`` call; the value model and every memo held
    here live exactly as long as the request.
    """

    def __init__(
        self,
        players: List[Player],
        user_team: TeamRoster,
        all_teams: List[TeamRoster],
        settings: DraftSettings,
        current_pick: int,
        picks: List[Pick],
        valuation_config: Optional[ValuationConfig] = None,
    ):
        self.players = players
        self.user_team = user_team
        self.all_teams = all_teams
        self.settings = settings
        self.current_pick = current_pick
        self.picks = picks

        self.calculator = DynamicVORCalculator(players, settings, all_teams, valuation_config)
        self.needs = RosterNeeds(settings)
        self.available = [p for p in players if p.is_available]
        self.opponent_demand = self.needs.opponent_demand(all_teams)
        self.user_needs = self.needs.team_needs(user_team)

        self._by_rank: Dict[str, List[Player]] = {}
        for player in sorted(self.available, key=lambda p: (p.rank, p.player_id)):
            self._by_rank.setdefault(player.position, []).append(player)

        self._vorp: Dict[str, float] = {}
        self._pool_strength: Dict[str, PoolStrength] = {}

    # ------------------------------------------------------------------
    # Value model
    # ------------------------------------------------------------------

    def vorp(self, player: Player) -> float:
        if player.player_id not in self._vorp:
            self._vorp[player.player_id] = self.calculator.calculate_vorp(player)
        return self._vorp[player.player_id]

    def depth(self, position: str) -> DepthAnalysis:
        return self.calculator.depth_analysis(position)

    # ------------------------------------------------------------------
    # Pool shape
    # ------------------------------------------------------------------

    def position_pool(self, position: str) -> List[Player]:
        """Available players at *position*, best rank first."""
        return self._by_rank.get(position, [])

    def rank_index(self, player: Player) -> int:
        """0-based index of *player* in its position pool, -1 if absent."""
        for i, candidate in enumerate(self.position_pool(player.position)):
            if candidate.player_id == player.player_id:
                return i
        return -1

    def tier_players(self, position: str, tier: int) -> List[Player]:
        return [p for p in self.position_pool(position) if effective_tier(p) == tier]

    def pool_strength(self, position: str) -> PoolStrength:
        """Weak when fewer than three top-three-tier players or thin points."""
        if position not in self._pool_strength:
            pool = self.position_pool(position)
            if not pool:
                strength = PoolStrength(True, 0, 0, 0.0)
            else:
                quality = sum(1 for p in pool if effective_tier(p) <= WEAK_POOL_QUALITY_TIER)
                average = sum(points_of(p) for p in pool) / len(pool)
                strength = PoolStrength(
                    is_weak=(
                        quality < WEAK_POOL_MIN_QUALITY
                        or average < WEAK_POOL_MIN_AVERAGE_POINTS
                    ),
                    quality_players=quality,
                    total_remaining=len(pool),
                    average_points=average,
                )
            self._pool_strength[position] = strength
        return self._pool_strength[position]

    # ------------------------------------------------------------------
    # Rosters and draft flow
    # ------------------------------------------------------------------

    def need_level(self, position: str) -> int:
        return self.needs.need_level(self.user_team, position)

    def bye_conflicts(self, player: Player) -> int:
        """Rostered players sharing *player*'s bye week (bye 0 = unknown)."""
        if not player.bye_week:
            return 0
        return sum(1 for p in self.user_team.all_players() if p.bye_week == player.bye_week)

    def current_round(self) -> int:
        return draft_order.round_for_pick(self.current_pick, self.settings.league_size)

    def adp_round(self, adp: float) -> int:
        return draft_order.round_for_pick(math.ceil(adp), self.settings.league_size)

    def recent_position_picks(self, position: str, lookback: int) -> int:
        recent = self.picks[-lookback:] if lookback > 0 else []
        return sum(1 for pick in recent if pick.position == position)

    def upcoming_teams_needing(self, position: str, window: int) -> int:
        """Opponents on the clock in the next *window* picks who need *position*."""
        total_picks = self.settings.total_picks()
        count = 0
        for offset in range(1, window + 1):
            pick = self.current_pick + offset
            if pick > total_picks:
                break
            slot = draft_order.slot_for_pick(
                pick, self.settings.league_size, self.settings.draft_type
            )
            if slot > len(self.all_teams):
                continue
            team = self.all_teams[slot - 1]
            if team.is_user:
                continue
            if self.needs.team_needs_position(team, position):
                count += 1
        return count
