"""Ranked, explained recommendations for the user's next pick."""

import logging
from typing import List, Optional, Union

from src.draft_manager.draft_state import DraftSettings, DraftState, Pick, Player, TeamRoster
from src.recommendation_engine.config import DEFAULT_RECOMMENDATION_LIMIT, ScoringConfig
from src.recommendation_engine.models import Recommendation, ScoringMode
from src.recommendation_engine.scoring_context import ScoringContext
from src.recommendation_engine.strategies import get_strategy
from src.valuation_engine.config import ValuationConfig

logger = logging.getLogger(__name__)


class RecommendationScorer:
    """Rank available players with a pluggable scoring strategy.

    The strategy is chosen by :class:`ScoringMode`; both modes share the
    same per-request value model. Output order is score descending with
    ``player_id`` breaking ties, so identical snapshots always produce
    identical lists.
    """

    def __init__(
        self,
        mode: Union[ScoringMode, str] = ScoringMode.FULL_HEURISTIC,
        config: Optional[ScoringConfig] = None,
        valuation_config: Optional[ValuationConfig] = None,
    ):
        self.mode = ScoringMode(mode)
        self.strategy = get_strategy(self.mode, config)
        self.valuation_config = valuation_config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def recommend(
        self,
        players: List[Player],
        user_team: Optional[TeamRoster],
        all_teams: List[TeamRoster],
        settings: DraftSettings,
        current_pick: int,
        picks: List[Pick],
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    ) -> List[Recommendation]:
        """Score every available player and return the best *limit*.

        Drafted and do-not-draft players never appear. An empty pool, or a
        snapshot without a user team, yields an empty list.

        Args:
            players: Full player pool.
            user_team: The user's roster.
            all_teams: Every team, ordered by draft slot.
            settings: League settings.
            current_pick: Overall pick on the clock.
            picks: Pick history, oldest first.
            limit: Maximum recommendations returned.

        Returns:
            Recommendations, best first.
        """
        if user_team is None:
            logger.warning("No user team in snapshot; returning no recommendations")
            return []

        ctx = ScoringContext(
            players,
            user_team,
            all_teams,
            settings,
            current_pick,
            picks,
            self.valuation_config,
        )
        if not ctx.available:
            logger.info("No available players to recommend at pick %d", current_pick)
            return []

        scored = self.strategy.score_all(ctx)
        scored.sort(key=lambda rec: (-rec.score, rec.player.player_id))

        logger.debug(
            "Scored %d players at pick %d (%s mode)",
            len(scored), current_pick, self.mode.value,
        )
        return scored[:max(0, limit)]

    def recommend_from_state(
        self, draft_state: DraftState, limit: int = DEFAULT_RECOMMENDATION_LIMIT
    ) -> List[Recommendation]:
        """Convenience wrapper that extracts data from a DraftState."""
        return self.recommend(
            draft_state.players,
            draft_state.user_team,
            draft_state.teams,
            draft_state.settings,
            draft_state.current_pick,
            draft_state.picks,
            limit,
        )
