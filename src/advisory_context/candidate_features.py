"""Structured draft context handed to an external advisory collaborator.

Everything here is read-only with respect to the snapshot: the bundle built
by :meth:`ContextBuilder.build_advisory_context` is the only output, and
nothing in it is ever fed back into valuation or scoring.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.advisory_context.config import (
    CORE_NEEDS,
    DEFAULT_RISK,
    FLOOR_CLIFF_OVERRIDE,
    FLOOR_MAX_RISK,
    HIGH_SCARCITY_RATIO,
    MAX_RISK,
    MAX_TIER_RISK,
    MEDIUM_SCARCITY_RATIO,
    MIN_AVAILABILITY_SPAN,
    PLAYSTYLES,
    RISK_PER_TIER,
    ROOKIE_MARKER,
    ROOKIE_RISK,
    STACK_BONUS_WITH_QB,
    STACK_BONUS_WITH_RECEIVER,
    STRESSED_POSITION_EXTRA,
    UNKNOWN_ADP_AVAILABILITY,
    UNTIERED_CANDIDATE_TIER,
    ContextConfig,
)
from src.advisory_context.opponent_analysis import (
    OpponentAnalyzer,
    OpponentProfile,
    OpponentWindow,
)
from src.draft_manager.config import FLEX_ELIGIBLE_POSITIONS, POSITIONS
from src.draft_manager.draft_state import DraftState, Pick, Player, TeamRoster
from src.draft_signals.alerts import SignalDetector
from src.valuation_engine.pool_frame import effective_tier, is_finite_number
from src.valuation_engine.vor_calculator import DynamicVORCalculator

logger = logging.getLogger(__name__)

SCARCITY_HIGH = "High"
SCARCITY_MEDIUM = "Medium"
SCARCITY_LOW = "Low"


@dataclass
class CandidateFeature:
    """One pre-filtered candidate with the features an advisor ranks on."""

    player_id: str
    name: str
    position: str
    team: str
    bye_week: int
    tier: int
    adp: Optional[float]
    vorp: float
    scarcity_multiplier: float
    adp_delta: float
    p_available_next_pick: float
    stack_bonus: float
    risk: float


@dataclass
class PositionScarcity:
    available: int
    average_vorp: float
    supply_demand_ratio: float
    level: str


@dataclass
class AdvisoryContext:
    """Bundle describing the draft at one pick, for an outside advisor."""

    current_pick: int
    picks_until_my_turn: int
    user_team: Optional[TeamRoster]
    candidates: List[CandidateFeature]
    opponents: List[OpponentProfile]
    opponent_windows: List[OpponentWindow]
    competitive_positions: List[str]
    tier_counts: Dict[str, Dict[int, int]]
    position_alerts: List[str]
    position_scarcity: Dict[str, PositionScarcity]
    recent_picks: List[Pick]
    playstyle: str
    scoring_weights: Dict[str, float] = field(default_factory=dict)
    k_def_window: int = 0


class ContextBuilder:
    """Builds candidate features and the advisory context for a snapshot."""

    def __init__(self, draft_state: DraftState, config: Optional[ContextConfig] = None):
        self.state = draft_state
        self.config = config or ContextConfig()
        self.calculator = DynamicVORCalculator.from_draft_state(draft_state)
        self.opponents = OpponentAnalyzer(draft_state, self.config, self.calculator)
        self.signals = SignalDetector.from_draft_state(draft_state)
        self._vorp: Dict[str, float] = {}

        if self.config.playstyle not in PLAYSTYLES:
            logger.warning("Unknown playstyle %r; no risk filtering applied", self.config.playstyle)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_advisory_context(self) -> AdvisoryContext:
        """Assemble the full context bundle for the current pick."""
        context = AdvisoryContext(
            current_pick=self.state.current_pick,
            picks_until_my_turn=self.state.picks_until_my_turn,
            user_team=self.state.user_team,
            candidates=self.build_candidate_features(),
            opponents=self.opponents.analyze_opponents(),
            opponent_windows=self.opponents.opponent_windows(),
            competitive_positions=self.opponents.competitive_positions(),
            tier_counts=self.tier_counts(),
            position_alerts=self.position_alerts(),
            position_scarcity=self.position_scarcity(),
            recent_picks=self.state.recent_picks(self.config.recent_picks_limit),
            playstyle=self.config.playstyle,
            scoring_weights=dict(self.config.scoring_weights),
            k_def_window=self.config.k_def_window,
        )
        logger.info(
            "Built advisory context at pick %d: %d candidates, %d alerts",
            context.current_pick, len(context.candidates), len(context.position_alerts),
        )
        return context

    def build_candidate_features(
        self, pool: Optional[List[Player]] = None
    ) -> List[CandidateFeature]:
        """Feature records for the top of the pool.

        Only the top tiers are considered, capped per position and overall.
        K/DEF are held back until the user's turn is close and the core
        starters are rostered. The "floor" playstyle also drops high-risk
        candidates unless their position is about to fall off a tier cliff.

        Args:
            pool: Players to consider; defaults to every available player.

        Returns:
            Candidates ordered by dynamic VORP, best first.
        """
        selected = self._filter_top_players(
            self.state.available_players() if pool is None else pool
        )
        user_team = self.state.user_team
        next_pick = self.state.current_pick + self.state.picks_until_my_turn
        core_needs_met = user_team is not None and self._core_needs_satisfied(user_team)

        candidates: List[CandidateFeature] = []
        for player in selected:
            if player.position in ("K", "DEF"):
                if not (
                    self.state.picks_until_my_turn < self.config.k_def_window
                    and core_needs_met
                ):
                    continue

            risk = self._risk(player)
            if (
                self.config.playstyle == "floor"
                and risk > FLOOR_MAX_RISK
                and self.tier_cliff_pressure(player.position) <= FLOOR_CLIFF_OVERRIDE
            ):
                continue

            candidates.append(
                CandidateFeature(
                    player_id=player.player_id,
                    name=player.name,
                    position=player.position,
                    team=player.team,
                    bye_week=player.bye_week,
                    tier=player.tier,
                    adp=player.adp,
                    vorp=self._vorp_of(player),
                    scarcity_multiplier=self.calculator.depth_analysis(
                        player.position
                    ).scarcity_multiplier,
                    adp_delta=(
                        player.adp - self.state.current_pick
                        if is_finite_number(player.adp)
                        else 0.0
                    ),
                    p_available_next_pick=self._availability(player, next_pick),
                    stack_bonus=self._stack_bonus(player, user_team),
                    risk=risk,
                )
            )
        return candidates

    def tier_counts(self) -> Dict[str, Dict[int, int]]:
        """Available players per tier at each position."""
        counts: Dict[str, Dict[int, int]] = {pos: {} for pos in POSITIONS}
        for player in self.state.available_players():
            if player.position not in counts:
                continue
            tier = effective_tier(player)
            counts[player.position][tier] = counts[player.position].get(tier, 0) + 1
        return counts

    def position_alerts(self) -> List[str]:
        """One line per position whose top two tiers are nearly gone."""
        alerts: List[str] = []
        for position, tiers in self.tier_counts().items():
            tier1 = tiers.get(1, 0)
            tier2 = tiers.get(2, 0)
            if tier1 <= 1:
                alerts.append(f"{position}: Tier-1 nearly empty ({tier1} left)")
            elif tier2 <= 2:
                alerts.append(f"{position}: Tier-2 nearly empty ({tier2} left)")
        return alerts

    def tier_cliff_pressure(self, position: str) -> float:
        """How close *position* is to losing its top tiers, 0.1 to 0.9."""
        tiers = self.tier_counts().get(position, {})
        tier1 = tiers.get(1, 0)
        tier2 = tiers.get(2, 0)
        tier3 = tiers.get(3, 0)

        if tier1 <= 1:
            return 0.9
        if tier1 <= 2 and tier2 <= 2:
            return 0.7
        if tier2 <= 1:
            return 0.6
        if tier2 <= 3 and tier3 <= 3:
            return 0.4
        return 0.1

    def position_scarcity(self) -> Dict[str, PositionScarcity]:
        """Supply against league-wide starter demand at each position.

        Formula::

            demand = (slots + flex_slots / 3) * teams    (flex share: RB/WR/TE)
            ratio  = available / demand
        """
        settings = self.state.settings
        available = self.state.available_players()
        scarcity: Dict[str, PositionScarcity] = {}

        for position in POSITIONS:
            players = [p for p in available if p.position == position]
            vorps = [self._vorp_of(p) for p in players]
            slots = float(settings.slots_for(position))
            if position in FLEX_ELIGIBLE_POSITIONS:
                slots += settings.flex_slots() / 3
            demand = slots * len(self.state.teams)
            ratio = len(players) / demand if demand > 0 else float("inf")

            if ratio < HIGH_SCARCITY_RATIO:
                level = SCARCITY_HIGH
            elif ratio < MEDIUM_SCARCITY_RATIO:
                level = SCARCITY_MEDIUM
            else:
                level = SCARCITY_LOW

            scarcity[position] = PositionScarcity(
                available=len(players),
                average_vorp=sum(vorps) / len(vorps) if vorps else 0.0,
                supply_demand_ratio=ratio,
                level=level,
            )
        return scarcity

    def likely_available_at_next_turn(self) -> List[Player]:
        """Available players left once the next picks take the top VORPs."""
        ranked = sorted(
            self.state.available_players(),
            key=lambda p: (-self._vorp_of(p), p.player_id),
        )
        taken = min(self.state.picks_until_my_turn, len(ranked))
        return ranked[taken:]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _vorp_of(self, player: Player) -> float:
        if player.player_id not in self._vorp:
            self._vorp[player.player_id] = self.calculator.calculate_vorp(player)
        return self._vorp[player.player_id]

    def _stressed_positions(self) -> List[str]:
        stressed = {alert.split(":")[0] for alert in self.position_alerts()}
        stressed.update(run.position for run in self.signals.positional_runs())
        return [pos for pos in POSITIONS if pos in stressed]

    def _filter_top_players(self, pool: List[Player]) -> List[Player]:
        stressed = self._stressed_positions()
        limits = dict(self.config.position_limits)
        for position in stressed:
            limits[position] = limits.get(position, 0) + STRESSED_POSITION_EXTRA

        eligible = [
            p for p in pool
            if p.is_available
            and effective_tier(p, UNTIERED_CANDIDATE_TIER) <= self.config.candidate_max_tier
        ]
        eligible.sort(key=lambda p: (-self._vorp_of(p), p.player_id))

        selected: List[Player] = []
        counts: Dict[str, int] = {}
        for player in eligible:
            if len(selected) >= self.config.max_candidates:
                break
            if counts.get(player.position, 0) < limits.get(player.position, 0):
                selected.append(player)
                counts[player.position] = counts.get(player.position, 0) + 1

        logger.debug("Filtered %d candidates (stressed: %s)", len(selected), stressed)
        return selected

    @staticmethod
    def _core_needs_satisfied(team: TeamRoster) -> bool:
        return all(
            team.get_roster_count(pos) >= minimum for pos, minimum in CORE_NEEDS.items()
        )

    def _availability(self, player: Player, next_pick: int) -> float:
        if not is_finite_number(player.adp):
            return UNKNOWN_ADP_AVAILABILITY
        span = max(MIN_AVAILABILITY_SPAN, self.state.picks_until_my_turn)
        return max(0.0, min(1.0, (player.adp - next_pick) / span))

    @staticmethod
    def _stack_bonus(player: Player, user_team: Optional[TeamRoster]) -> float:
        if user_team is None:
            return 0.0
        if player.position in ("WR", "TE"):
            qb_teams = {qb.team for qb in user_team.roster.get("QB", [])}
            return STACK_BONUS_WITH_QB if player.team in qb_teams else 0.0
        if player.position == "QB":
            has_receiver = any(
                p.team == player.team and p.position in ("WR", "TE")
                for p in user_team.all_players()
            )
            return STACK_BONUS_WITH_RECEIVER if has_receiver else 0.0
        return 0.0

    @staticmethod
    def _risk(player: Player) -> float:
        tier = effective_tier(player, None)
        if tier is None or not is_finite_number(player.adp):
            return DEFAULT_RISK
        tier_risk = min(MAX_TIER_RISK, (tier - 1) * RISK_PER_TIER)
        rookie_risk = ROOKIE_RISK if ROOKIE_MARKER in player.name else 0.0
        return min(MAX_RISK, tier_risk + rookie_risk)
