"""Scoring strategies.

Both strategies score the same :class:`ScoringContext` and return
unsorted :class:`Recommendation` objects; the scorer owns ordering and
truncation.
"""

import logging
from typing import Dict, List, Optional, Tuple

from src.draft_manager.config import FLEX_ELIGIBLE_POSITIONS
from src.draft_manager.draft_state import Player
from src.recommendation_engine import config as rec_config
from src.recommendation_engine.config import ScoringConfig
from src.recommendation_engine.models import (
    URGENCY_HIGH,
    URGENCY_LOW,
    URGENCY_MEDIUM,
    GemAssessment,
    Recommendation,
    ScoringMode,
    ValueAssessment,
)
from src.recommendation_engine.scoring_context import ScoringContext, points_of
from src.valuation_engine.pool_frame import effective_tier, is_finite_number
from src.valuation_engine.vor_calculator import round_half_up

logger = logging.getLogger(__name__)

HIDDEN_GEM_REASON = "Hidden gem detected"


class PureValueStrategy:
    """Score = dynamic VORP, nothing else."""

    mode = ScoringMode.PURE_VALUE

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score_all(self, ctx: ScoringContext) -> List[Recommendation]:
        by_vorp = self._rank_by_vorp(ctx)
        recommendations = []
        for player in ctx.available:
            vorp = ctx.vorp(player)
            recommendations.append(
                Recommendation(
                    player=player,
                    score=round(vorp, 1),
                    reasons=self._reasons(player, vorp, ctx),
                    is_value=vorp >= rec_config.VORP_VALUE_MIN,
                    urgency=self._urgency(player, vorp, by_vorp, ctx),
                )
            )
        return recommendations

    @staticmethod
    def _rank_by_vorp(ctx: ScoringContext) -> Dict[str, int]:
        """0-based VORP order of each player within its position."""
        order: Dict[str, int] = {}
        grouped: Dict[str, List[Player]] = {}
        for player in ctx.available:
            grouped.setdefault(player.position, []).append(player)
        for players in grouped.values():
            players.sort(key=lambda p: (-ctx.vorp(p), p.player_id))
            for i, player in enumerate(players):
                order[player.player_id] = i
        return order

    def _scarcity_bonus(self, player: Player, by_vorp: Dict[str, int], ctx: ScoringContext) -> int:
        is_scarce = ctx.depth(player.position).is_scarce
        index = by_vorp.get(player.player_id, -1)
        if index == 0:
            return rec_config.BEST_AT_SCARCE_BONUS if is_scarce else rec_config.BEST_AT_POSITION_BONUS
        if is_scarce and 0 <= index < 3:
            return rec_config.SCARCE_TOP_THREE_BONUS - index * rec_config.SCARCE_TOP_THREE_STEP
        return 0

    def _reasons(self, player: Player, vorp: float, ctx: ScoringContext) -> List[str]:
        reasons = []

        band = "Low"
        for threshold, label in rec_config.VORP_REASON_BANDS:
            if vorp >= threshold:
                band = label
                break
        reasons.append(f"{band} VORP: +{vorp:.0f} vs current replacement")

        depth = ctx.depth(player.position)
        if depth.is_scarce:
            reasons.append(
                f"{player.position} position is scarce ({depth.total_available} left)"
            )
        if 0 < depth.quality_remaining <= rec_config.QUALITY_REASON_MAX:
            reasons.append(f"Only {depth.quality_remaining} quality {player.position}s left")

        if self._is_last_before_drop(player, depth.next_tier_break, ctx):
            reasons.append("Last player before significant talent drop")

        need = ctx.need_level(player.position)
        if need >= 3:
            reasons.append(f"High need at {player.position}")
        elif need >= 2:
            reasons.append("Flex depth needed")

        if player.is_targeted:
            reasons.append("On your target list")

        return reasons

    @staticmethod
    def _is_last_before_drop(player: Player, tier_break: int, ctx: ScoringContext) -> bool:
        if tier_break <= 0:
            return False
        ordered = sorted(
            ctx.position_pool(player.position),
            key=lambda p: (-points_of(p), p.player_id),
        )
        return (
            len(ordered) >= tier_break
            and ordered[tier_break - 1].player_id == player.player_id
        )

    def _urgency(
        self,
        player: Player,
        vorp: float,
        by_vorp: Dict[str, int],
        ctx: ScoringContext,
    ) -> str:
        scarcity = self._scarcity_bonus(player, by_vorp, ctx)
        need = ctx.need_level(player.position)
        if vorp >= rec_config.VORP_HIGH_URGENCY or scarcity >= rec_config.BEST_AT_SCARCE_BONUS or need >= 3:
            return URGENCY_HIGH
        if vorp >= rec_config.VORP_MEDIUM_URGENCY or scarcity >= rec_config.PURE_SCARCITY_MEDIUM_URGENCY or need >= 2:
            return URGENCY_MEDIUM
        return URGENCY_LOW


class HeuristicStrategy:
    """Composite score blending rank, need, tiers, ADP value and scarcity.

    Formula::

        score = (base_rank + need * 100 + tier_bonus) * need_multiplier
                + adp_value + scarcity - bye_conflicts * 25
                + playoff + target + opponent_pressure
                + hidden_gem_bonus
    """

    mode = ScoringMode.FULL_HEURISTIC

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score_all(self, ctx: ScoringContext) -> List[Recommendation]:
        base_scores = {p.player_id: self.base_score(p, ctx) for p in ctx.available}

        recommendations = []
        for player in ctx.available:
            gem = self.assess_gem(player, ctx, base_scores)
            score = base_scores[player.player_id]
            reasons = self._reasons(player, ctx)
            if gem.is_hidden_gem:
                score += gem.bonus
                reasons = [HIDDEN_GEM_REASON] + gem.reasons + reasons

            recommendations.append(
                Recommendation(
                    player=player,
                    score=round(score, 1),
                    reasons=reasons,
                    is_value=self.enhanced_value(player, ctx).is_value,
                    urgency=self._urgency(player, ctx, gem),
                    is_hidden_gem=gem.is_hidden_gem,
                )
            )

        logger.debug(
            "Heuristic scoring: %d players, %d hidden gems",
            len(recommendations), sum(1 for r in recommendations if r.is_hidden_gem),
        )
        return recommendations

    # ------------------------------------------------------------------
    # Score components
    # ------------------------------------------------------------------

    def base_score(self, player: Player, ctx: ScoringContext) -> float:
        """Composite score before the hidden-gem pass."""
        cfg = self.config
        need = ctx.need_level(player.position)

        core = (
            max(0, rec_config.BASE_RANK_CEILING - self.league_adjusted_rank(player, ctx))
            + need * rec_config.NEED_BONUS_PER_LEVEL
            + self.tier_bonus(player, ctx)
        ) * cfg.need_multipliers.get(need, 1.0)

        value = self.enhanced_value(player, ctx)
        score = core + (value.value_score if value.is_value else 0.0)
        score += self.scarcity_bonus(player, ctx)
        score -= ctx.bye_conflicts(player) * cfg.bye_week_penalty
        score += rec_config.PLAYOFF_SCHEDULE_BONUS.get(player.playoff_schedule or "", 0)
        if player.is_targeted:
            score += cfg.target_bonus
        score += self.opponent_pressure_bonus(player, ctx)
        return score

    def league_adjusted_rank(self, player: Player, ctx: ScoringContext) -> int:
        """Overall rank nudged for scoring and roster format, never below 1."""
        boost = self._scoring_rank_boost(player, ctx) + self._format_rank_boost(player, ctx)
        return max(1, player.rank - boost)

    def _scoring_rank_boost(self, player: Player, ctx: ScoringContext) -> int:
        settings = ctx.settings
        position = player.position

        if settings.scoring_format == "custom" and settings.custom_scoring is not None:
            custom = settings.custom_scoring
            boost = 0
            if custom.receptions > 0.5:
                if position == "WR":
                    boost += 5
                elif position == "TE":
                    boost += 3
                elif position == "RB" and effective_tier(player) <= rec_config.PPR_RB_MAX_TIER:
                    boost += 2
            if custom.passing_touchdowns > 4 and position == "QB":
                boost += 3
            if (custom.defense_sacks > 1 or custom.defense_interceptions > 2) and position == "DEF":
                boost += 5
            return boost

        if settings.scoring_format in ("full_ppr", "half_ppr"):
            if position == "RB" and effective_tier(player) > rec_config.PPR_RB_MAX_TIER:
                ppr = 0
            else:
                ppr = rec_config.PPR_RANK_BOOST.get(position, 0)
            if settings.scoring_format == "half_ppr":
                return round_half_up(ppr * rec_config.HALF_PPR_FACTOR)
            return ppr

        if settings.scoring_format == "standard":
            return rec_config.STANDARD_RANK_BOOST.get(position, 0)

        return 0

    def _format_rank_boost(self, player: Player, ctx: ScoringContext) -> int:
        settings = ctx.settings
        position = player.position
        boost = 0

        if settings.superflex_slots() > 0 and position == "QB":
            boost += rec_config.SUPERFLEX_QB_BOOST
        if settings.flex_slots() >= 2 and position in FLEX_ELIGIBLE_POSITIONS:
            boost += rec_config.MULTI_FLEX_SKILL_BOOST
        if settings.slots_for("TE") >= 2 and position == "TE":
            boost += rec_config.TE_PREMIUM_BOOST
        if settings.slots_for("QB") >= 2 and settings.superflex_slots() == 0 and position == "QB":
            boost += rec_config.TWO_QB_BOOST

        return boost

    def tier_bonus(self, player: Player, ctx: ScoringContext) -> float:
        tier = effective_tier(player)
        in_tier = len(ctx.tier_players(player.position, tier))
        if in_tier == 1 and tier <= rec_config.LAST_IN_TIER_MAX_TIER:
            return self.config.last_in_tier_bonus
        if in_tier <= 2 and tier <= rec_config.THIN_TIER_MAX_TIER:
            return self.config.thin_tier_bonus
        return 0.0

    def enhanced_value(self, player: Player, ctx: ScoringContext) -> ValueAssessment:
        """ADP value, with a lower bar when the position pool is weak.

        Formula::

            rounds_ahead = ceil(adp / N) - ceil(current_pick / N)
            value_score  = 20 * rounds_ahead + 30 * position_value
                           + 25 (weak pool) + 10 * (4 - tier) (tier <= 3)
        """
        strength = ctx.pool_strength(player.position)
        if player.adp is None or not is_finite_number(player.adp):
            return ValueAssessment(False, 0.0, 0.0, 0.0, strength.is_weak)

        rounds_ahead = ctx.adp_round(player.adp) - ctx.current_round()
        pool = ctx.position_pool(player.position)
        index = ctx.rank_index(player)
        position_value = max(0.0, 1 - index / len(pool)) if index >= 0 else 0.0

        threshold = (
            self.config.weak_pool_rounds_ahead
            if strength.is_weak
            else self.config.strong_pool_rounds_ahead
        )
        is_value = rounds_ahead > threshold

        value_score = max(0.0, rounds_ahead * 20) + position_value * 30
        if strength.is_weak:
            value_score += 25
        tier = effective_tier(player)
        if tier <= 3:
            value_score += (4 - tier) * 10

        return ValueAssessment(
            is_value=is_value,
            rounds_ahead=rounds_ahead,
            position_value=position_value,
            value_score=round_half_up(value_score),
            pool_is_weak=strength.is_weak,
        )

    def scarcity_bonus(self, player: Player, ctx: ScoringContext) -> float:
        """Top-tier depletion, a points cliff behind the head of the pool,
        a run underway or expected, and league-wide slot pressure."""
        pool = ctx.position_pool(player.position)
        bonus = 0.0

        top_tier_remaining = sum(1 for p in pool if effective_tier(p) <= rec_config.TOP_TIER_MAX)
        if effective_tier(player) <= rec_config.TOP_TIER_MAX:
            if top_tier_remaining == 1:
                bonus += rec_config.LAST_TOP_TIER_BONUS
            elif top_tier_remaining <= 2:
                bonus += rec_config.THIN_TOP_TIER_BONUS

        if len(pool) >= 2 and pool[0].player_id == player.player_id:
            head, runner_up = points_of(pool[0]), points_of(pool[1])
            if head > 0:
                severity = max(0.0, (head - runner_up) / head)
                if severity > rec_config.DROPOFF_MIN_SEVERITY:
                    bonus += round_half_up(severity * rec_config.DROPOFF_BONUS_SCALE)

        if self.is_run_predicted(player.position, ctx):
            bonus += rec_config.RUN_PREDICTED_BONUS

        bonus += self._league_demand_bonus(player.position, len(pool), ctx)
        return bonus

    def is_run_predicted(self, position: str, ctx: ScoringContext) -> bool:
        if ctx.recent_position_picks(position, rec_config.RUN_LOOKBACK_PICKS) >= rec_config.RUN_LOOKBACK_MIN:
            return True
        return (
            ctx.upcoming_teams_needing(position, rec_config.UPCOMING_PICKS_WINDOW) >= rec_config.UPCOMING_TEAMS_MIN
            and ctx.opponent_demand.get(position, 0) >= rec_config.RUN_OPPONENT_DEMAND_MIN
        )

    @staticmethod
    def _league_demand_bonus(position: str, remaining: int, ctx: ScoringContext) -> float:
        if remaining == 0:
            return 0.0
        settings = ctx.settings
        slots = settings.slots_for(position)
        if position in FLEX_ELIGIBLE_POSITIONS:
            slots += settings.flex_slots()
        if position == "QB":
            slots += settings.superflex_slots()

        ratio = slots * settings.league_size / remaining
        for threshold, bonus in rec_config.LEAGUE_DEMAND_BONUSES:
            if ratio > threshold:
                return bonus
        return 0.0

    @staticmethod
    def opponent_pressure_bonus(player: Player, ctx: ScoringContext) -> float:
        demand = ctx.opponent_demand.get(player.position, 0)
        if demand >= rec_config.OPPONENT_DEMAND_HIGH:
            return rec_config.OPPONENT_DEMAND_HIGH_BONUS
        if demand >= rec_config.OPPONENT_DEMAND_MEDIUM:
            return rec_config.OPPONENT_DEMAND_MEDIUM_BONUS
        return 0.0

    # ------------------------------------------------------------------
    # Hidden gems
    # ------------------------------------------------------------------

    def assess_gem(
        self,
        player: Player,
        ctx: ScoringContext,
        base_scores: Dict[str, float],
    ) -> GemAssessment:
        cfg = self.config
        score = 0.0
        reasons: List[str] = []
        in_tier = len(ctx.tier_players(player.position, effective_tier(player)))

        if self._at_scarcity_cliff(player, ctx):
            score += cfg.cliff_bonus
            reasons.append(f"Last quality {player.position} before talent cliff")

        teams_converging = ctx.opponent_demand.get(player.position, 0)
        if teams_converging >= cfg.convergence_min_teams and in_tier <= cfg.convergence_max_in_tier:
            score += cfg.convergence_bonus
            reasons.append(f"{teams_converging:g} teams likely targeting similar players")

        if in_tier <= cfg.breakpoint_max_in_tier and self._tier_drop(player, ctx) > cfg.breakpoint_drop_ratio:
            score += cfg.breakpoint_bonus
            reasons.append("Significant talent drop after this tier")

        advanced_bonus, advanced_reason = self._advanced_value(player, ctx)
        if advanced_bonus:
            score += advanced_bonus
            reasons.append(advanced_reason)

        if self._beats_alternatives(player, ctx, base_scores):
            score += cfg.opportunity_bonus
            reasons.append("Optimal timing vs other position needs")

        return GemAssessment(score, reasons, cfg.gem_threshold, cfg.gem_bonus_cap)

    def _at_scarcity_cliff(self, player: Player, ctx: ScoringContext) -> bool:
        pool = ctx.position_pool(player.position)
        index = ctx.rank_index(player)
        if index == -1 or index >= len(pool) - 1:
            return False

        following = pool[index + 1]
        points = points_of(player)
        drop = (points - points_of(following)) / points if points > 0 else 0.0
        tier_gap = effective_tier(following) - effective_tier(player)
        return drop > self.config.cliff_drop_ratio or tier_gap >= self.config.cliff_tier_gap

    @staticmethod
    def _tier_drop(player: Player, ctx: ScoringContext) -> float:
        """Relative drop from this tier's average to the next populated tier's."""
        pool = ctx.position_pool(player.position)
        tier = effective_tier(player)
        current = [points_of(p) for p in pool if effective_tier(p) == tier]
        lower_tiers = sorted({effective_tier(p) for p in pool if effective_tier(p) > tier})
        if not current or not lower_tiers:
            return 0.0

        following = [points_of(p) for p in pool if effective_tier(p) == lower_tiers[0]]
        current_avg = sum(current) / len(current)
        following_avg = sum(following) / len(following)
        if current_avg <= 0:
            return 0.0
        return (current_avg - following_avg) / current_avg

    def _advanced_value(self, player: Player, ctx: ScoringContext) -> Tuple[float, str]:
        cfg = self.config
        bonus, reason = 0.0, ""

        if effective_tier(player) <= cfg.thin_pool_max_tier and ctx.pool_strength(player.position).is_weak:
            bonus, reason = cfg.thin_pool_value_bonus, "Quality player in thin position pool"

        value = self.enhanced_value(player, ctx)
        if value.rounds_ahead > cfg.below_adp_min_rounds and points_of(player) > cfg.below_adp_min_points:
            if cfg.below_adp_value_bonus > bonus:
                bonus = cfg.below_adp_value_bonus
            reason = "High scorer available below ADP"

        return bonus, reason

    def _beats_alternatives(
        self,
        player: Player,
        ctx: ScoringContext,
        base_scores: Dict[str, float],
    ) -> bool:
        """Taking *player* now beats the best option at other top needs by 10%."""
        if player.position not in ctx.user_needs:
            return False

        best_alternative = 0.0
        for position in ctx.user_needs[: self.config.opportunity_needs_considered]:
            if position == player.position:
                continue
            pool = ctx.position_pool(position)
            if pool:
                best_alternative = max(best_alternative, base_scores.get(pool[0].player_id, 0.0))

        return base_scores[player.player_id] > best_alternative * self.config.opportunity_margin

    # ------------------------------------------------------------------
    # Explanations
    # ------------------------------------------------------------------

    def _reasons(self, player: Player, ctx: ScoringContext) -> List[str]:
        reasons = []

        need = ctx.need_level(player.position)
        if need >= 3:
            reasons.append(f"High need at {player.position}")
        elif need >= 2:
            reasons.append("Flex depth needed")

        if player.is_targeted:
            reasons.append("On your target list")

        value = self.enhanced_value(player, ctx)
        if value.is_value:
            if value.rounds_ahead > rec_config.GREAT_VALUE_ROUNDS_AHEAD:
                reasons.append(f"Great value ({value.rounds_ahead:.1f} rounds ahead of ADP)")
            else:
                reasons.append("Value pick vs ADP")
            if value.pool_is_weak:
                reasons.append("Weak remaining pool at position")

        tier_bonus = self.tier_bonus(player, ctx)
        if tier_bonus >= self.config.last_in_tier_bonus:
            reasons.append("Last elite player in tier")
        elif tier_bonus >= self.config.thin_tier_bonus:
            reasons.append("Tier about to collapse")

        if ctx.bye_conflicts(player) >= rec_config.BYE_CONFLICT_REASON_MIN:
            reasons.append(f"Bye week conflict (Week {player.bye_week})")

        if player.playoff_schedule == "Good":
            reasons.append("Great playoff matchups")
        elif player.playoff_schedule == "Tough":
            reasons.append("Tough playoff schedule")

        if self.scarcity_bonus(player, ctx) > 0:
            reasons.append(f"{player.position} position getting scarce")

        pressure = self.opponent_pressure_bonus(player, ctx)
        if pressure >= rec_config.OPPONENT_DEMAND_HIGH_BONUS:
            reasons.append("High demand from other teams")
        elif pressure >= rec_config.OPPONENT_DEMAND_MEDIUM_BONUS:
            reasons.append(f"Multiple teams need {player.position}")

        return reasons

    def _urgency(self, player: Player, ctx: ScoringContext, gem: GemAssessment) -> str:
        tier_bonus = self.tier_bonus(player, ctx)
        need = ctx.need_level(player.position)
        scarcity = self.scarcity_bonus(player, ctx)

        if (
            gem.is_hidden_gem
            or tier_bonus >= self.config.last_in_tier_bonus
            or need >= 3
            or scarcity >= rec_config.URGENT_SCARCITY_BONUS
        ):
            return URGENCY_HIGH
        if (
            tier_bonus >= self.config.thin_tier_bonus
            or need >= 2
            or scarcity >= rec_config.MODERATE_SCARCITY_BONUS
        ):
            return URGENCY_MEDIUM
        return URGENCY_LOW


_STRATEGIES = {
    ScoringMode.PURE_VALUE: PureValueStrategy,
    ScoringMode.FULL_HEURISTIC: HeuristicStrategy,
}


def get_strategy(mode, config: Optional[ScoringConfig] = None):
    """Strategy instance for a :class:`ScoringMode` (or its string value)."""
    return _STRATEGIES[ScoringMode(mode)](config)
