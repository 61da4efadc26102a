"""Will a player still be on the board at my next pick(s)?

Survival is modelled with a logistic curve over the gap between the pick
being evaluated and the player's ADP, then nudged by positional scarcity and
rank-vs-ADP trend, and finally clamped so it never reports certainty.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from src.availability.config import (
    MAX_PROBABILITY,
    MIN_PROBABILITY,
    SCARCITY_HIGH_GROUP_SIZE,
    SCARCITY_MEDIUM_GROUP_SIZE,
    UNLIKELY_TWO_ROUNDS_THRESHOLD,
    WAIT_ONE_ROUND_THRESHOLD,
    ProbabilityConfig,
)
from src.draft_manager import draft_order
from src.draft_manager.draft_state import DraftState, Player
from src.valuation_engine.pool_frame import is_finite_number

logger = logging.getLogger(__name__)

RISK_LOW = "Low"
RISK_MEDIUM = "Medium"
RISK_HIGH = "High"

ACTION_WAIT = "Wait"
ACTION_CONSIDER = "Consider Now"
ACTION_DRAFT_NOW = "Draft Now"

STRATEGY_DRAFT_NOW = "Draft Now"
STRATEGY_WAIT_ONE = "Wait 1 Round"
STRATEGY_WAIT_TWO = "Wait 2 Rounds"


@dataclass
class ReachProbabilityResult:
    """Availability estimate for the user's next two picks."""

    probability: int
    next_pick_probability: int
    following_pick_probability: int
    risk_level: str
    recommended_action: str
    reasoning: str
    picks_to_next: int
    picks_to_following: int


@dataclass
class PickProbability:
    """Availability estimate at one specific future pick."""

    target_pick: int
    probability: int
    risk_level: str
    recommended_action: str
    reasoning: str


@dataclass
class MultiRoundReachResult:
    next_round: Optional[PickProbability]
    two_rounds_ahead: Optional[PickProbability]
    best_strategy: str
    strategy_reasoning: str


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------


def reach_probability(
    player: Player,
    draft_state: DraftState,
    config: Optional[ProbabilityConfig] = None,
) -> ReachProbabilityResult:
    """Chance *player* survives to the user's next and following picks.

    ``probability`` is the figure for the next pick the user cannot already
    make: the next pick normally, the following pick when the user is on
    the clock (in which case ``next_pick_probability`` is exactly 100).

    Args:
        player: Player to evaluate.
        draft_state: Current snapshot.
        config: Optional :class:`ProbabilityConfig` overrides.

    Returns:
        :class:`ReachProbabilityResult`.
    """
    cfg = config or ProbabilityConfig()
    settings = draft_state.settings
    current = draft_state.current_pick
    picks_until = max(0, draft_state.picks_until_my_turn)

    next_pick = current + picks_until
    following_pick = next_pick + draft_order.picks_between_turns(
        next_pick, settings.draft_slot, settings.league_size, settings.draft_type
    )
    picks_to_following = following_pick - current - 1

    adp, adp_note = _effective_adp(player)
    adjustment, notes = _adjustments(player, draft_state, adp, cfg)

    following_probability = _clamped_probability(following_pick, adp, adjustment, cfg)

    if picks_until == 0:
        next_probability = 100
        probability = following_probability
        parts = ["Your turn now. Next pick: 100%"]
    else:
        next_probability = _clamped_probability(next_pick, adp, adjustment, cfg)
        probability = next_probability
        parts = [f"Next pick: {next_probability}% ({picks_until} picks away)"]

    parts.append(
        f"Following pick: {following_probability}% "
        f"({following_pick - current} picks away)"
    )
    parts.append(adp_note)
    parts.extend(notes)

    risk_level, action = _classify(probability, cfg)

    return ReachProbabilityResult(
        probability=probability,
        next_pick_probability=next_probability,
        following_pick_probability=following_probability,
        risk_level=risk_level,
        recommended_action=action,
        reasoning=". ".join(parts),
        picks_to_next=picks_until,
        picks_to_following=picks_to_following,
    )


def multi_round_reach(
    player: Player,
    draft_state: DraftState,
    config: Optional[ProbabilityConfig] = None,
) -> MultiRoundReachResult:
    """Compare waiting one round against waiting two.

    Strategy::

        two rounds >= 80%                   -> Wait 2 Rounds
        next round >= 80%                   -> Wait 1 Round
        next >= 50% and two rounds < 30%    -> Wait 1 Round
        next < 50%                          -> Draft Now
        otherwise                           -> Wait 1 Round
    """
    cfg = config or ProbabilityConfig()
    settings = draft_state.settings
    current = draft_state.current_pick

    if draft_state.picks_until_my_turn == 0:
        return MultiRoundReachResult(
            next_round=None,
            two_rounds_ahead=None,
            best_strategy=STRATEGY_DRAFT_NOW,
            strategy_reasoning="It's your turn - draft now if you want this player",
        )

    future_picks = draft_order.future_picks_for_slot(
        current,
        settings.draft_slot,
        settings.league_size,
        settings.draft_type,
        count=2,
        total_picks=settings.total_picks(),
    )
    if not future_picks:
        return MultiRoundReachResult(
            next_round=None,
            two_rounds_ahead=None,
            best_strategy=STRATEGY_DRAFT_NOW,
            strategy_reasoning="No future picks available",
        )

    adp, _ = _effective_adp(player)
    adjustment, _ = _adjustments(player, draft_state, adp, cfg)

    next_round = _pick_probability(future_picks[0], current, adp, adjustment, cfg)
    two_rounds = (
        _pick_probability(future_picks[1], current, adp, adjustment, cfg)
        if len(future_picks) > 1
        else None
    )

    strategy, reasoning = _best_strategy(next_round, two_rounds, cfg)
    return MultiRoundReachResult(
        next_round=next_round,
        two_rounds_ahead=two_rounds,
        best_strategy=strategy,
        strategy_reasoning=reasoning,
    )


def survival_probability(target_pick: float, adp: float, steepness: float) -> float:
    """Raw logistic survival in percent, before adjustments and clamping.

    Formula::

        p = 100 / (1 + exp(steepness * (target_pick - adp)))

    ADP well after the target pick tends to 100, well before tends to 0.
    """
    x = steepness * (target_pick - adp)
    if x >= 0:
        z = math.exp(-x)
        return 100.0 * z / (1.0 + z)
    return 100.0 / (1.0 + math.exp(x))


# ----------------------------------------------------------------------
# Private helpers
# ----------------------------------------------------------------------


def _effective_adp(player: Player) -> Tuple[float, str]:
    """ADP to model with, falling back to overall rank when ADP is unusable."""
    if player.adp is not None and is_finite_number(player.adp):
        return float(player.adp), f"ADP {player.adp:.1f}"

    logger.warning(
        "Player %s has no usable ADP (%r); using rank %d",
        player.name, player.adp, player.rank,
    )
    return float(player.rank), f"No ADP, using rank {player.rank}"


def _adjustments(
    player: Player,
    draft_state: DraftState,
    adp: float,
    cfg: ProbabilityConfig,
) -> Tuple[float, List[str]]:
    """Scarcity and trend adjustment (percentage points) with reasons."""
    total = 0.0
    notes: List[str] = []

    group = sorted(
        (
            p for p in draft_state.players
            if p.position == player.position and p.is_available
        ),
        key=lambda p: (p.rank, p.player_id),
    )[: cfg.top_tier_sizes.get(player.position, 12)]
    in_group = any(p.player_id == player.player_id for p in group)

    if in_group and len(group) <= SCARCITY_HIGH_GROUP_SIZE:
        total += cfg.scarcity_high
        notes.append(f"Only {len(group)} top-tier {player.position}s left")
    elif in_group and len(group) <= SCARCITY_MEDIUM_GROUP_SIZE:
        total += cfg.scarcity_medium
        notes.append(f"Limited top-tier {player.position}s remaining")

    rank_gap = adp - player.rank
    if rank_gap < -cfg.trend_threshold:
        total += cfg.trending_up
        notes.append("Player trending up in drafts")
    elif rank_gap > cfg.trend_threshold:
        total += cfg.trending_down
        notes.append("Player trending down in drafts")

    return total, notes


def _clamped_probability(
    target_pick: int, adp: float, adjustment: float, cfg: ProbabilityConfig
) -> int:
    raw = survival_probability(target_pick, adp, cfg.logistic_steepness) + adjustment
    return int(round(min(MAX_PROBABILITY, max(MIN_PROBABILITY, raw))))


def _classify(probability: float, cfg: ProbabilityConfig) -> Tuple[str, str]:
    if probability >= cfg.low_risk:
        return RISK_LOW, ACTION_WAIT
    if probability >= cfg.medium_risk:
        return RISK_MEDIUM, ACTION_CONSIDER
    return RISK_HIGH, ACTION_DRAFT_NOW


def _pick_probability(
    target_pick: int,
    current_pick: int,
    adp: float,
    adjustment: float,
    cfg: ProbabilityConfig,
) -> PickProbability:
    probability = _clamped_probability(target_pick, adp, adjustment, cfg)
    risk_level, action = _classify(probability, cfg)
    return PickProbability(
        target_pick=target_pick,
        probability=probability,
        risk_level=risk_level,
        recommended_action=action,
        reasoning=(
            f"Pick {target_pick}: {probability}% "
            f"({target_pick - current_pick} picks away, ADP {adp:.1f})"
        ),
    )


def _best_strategy(
    next_round: PickProbability,
    two_rounds: Optional[PickProbability],
    cfg: ProbabilityConfig,
) -> Tuple[str, str]:
    later = two_rounds.probability if two_rounds else 0
    nearer = next_round.probability

    if later >= cfg.very_low_risk:
        return STRATEGY_WAIT_TWO, f"Very safe to wait - {later}% chance available in 2 rounds"

    if nearer >= cfg.very_low_risk:
        return STRATEGY_WAIT_ONE, f"Safe to wait one round - {nearer}% chance available"

    if nearer >= WAIT_ONE_ROUND_THRESHOLD and later < UNLIKELY_TWO_ROUNDS_THRESHOLD:
        return STRATEGY_WAIT_ONE, (
            f"Reasonable chance next round ({nearer}%), "
            f"unlikely to last 2 rounds ({later}%)"
        )

    if nearer < WAIT_ONE_ROUND_THRESHOLD:
        return STRATEGY_DRAFT_NOW, f"Risky to wait - only {nearer}% chance available next round"

    return STRATEGY_WAIT_ONE, f"Moderate risk - {nearer}% chance available next round"
