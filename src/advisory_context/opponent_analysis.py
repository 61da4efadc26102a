"""Opponent rosters, draft windows and contested positions."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.advisory_context.config import COMPETITIVE_MIN_TEAMS, ContextConfig
from src.draft_manager import draft_order
from src.draft_manager.config import POSITIONS
from src.draft_manager.draft_state import DraftState, Player, TeamRoster
from src.draft_manager.roster_needs import RosterNeeds
from src.valuation_engine.vor_calculator import DynamicVORCalculator

logger = logging.getLogger(__name__)


@dataclass
class OpponentProfile:
    """What one opponent still needs and who they are likely to take."""

    team: TeamRoster
    needs: List[str]
    strengths: List[str]
    picks_until_turn: int
    likely_targets: List[Player] = field(default_factory=list)


@dataclass
class OpponentWindow:
    """An opponent on the clock before the user's next pick."""

    team_name: str
    picks_before_me: int
    needs: List[str]
    stacks_in_progress: List[str]


class OpponentAnalyzer:
    """Reads every opponent roster in a draft snapshot."""

    def __init__(
        self,
        draft_state: DraftState,
        config: Optional[ContextConfig] = None,
        calculator: Optional[DynamicVORCalculator] = None,
    ):
        self.state = draft_state
        self.config = config or ContextConfig()
        self.needs = RosterNeeds(draft_state.settings)
        self.calculator = calculator or DynamicVORCalculator.from_draft_state(draft_state)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze_opponents(self) -> List[OpponentProfile]:
        """Profile every non-user team, in draft-slot order."""
        ranked = self._available_by_vorp()
        profiles: List[OpponentProfile] = []

        for team in self.opponents():
            needs = self.needs.roster_needs(team)
            targets = [p for p in ranked if p.position in needs]
            profiles.append(
                OpponentProfile(
                    team=team,
                    needs=needs,
                    strengths=self.needs.position_strengths(team),
                    picks_until_turn=self.picks_until_team_turn(team),
                    likely_targets=targets[:self.config.likely_targets_per_team],
                )
            )

        logger.debug("Profiled %d opponents at pick %d", len(profiles), self.state.current_pick)
        return profiles

    def opponent_windows(self) -> List[OpponentWindow]:
        """Opponents picking soon, in draft-slot order, at most a handful."""
        if self.state.user_team is None:
            return []

        windows: List[OpponentWindow] = []
        for team in self.opponents():
            picks_before_me = self.picks_until_team_turn(team)
            if picks_before_me > self.config.opponent_window_picks:
                continue
            windows.append(
                OpponentWindow(
                    team_name=team.team_name,
                    picks_before_me=picks_before_me,
                    needs=self.needs.roster_needs(team),
                    stacks_in_progress=self.stacks_in_progress(team),
                )
            )
        return windows[:self.config.max_opponent_windows]

    def competitive_positions(self) -> List[str]:
        """Positions needed by at least two opponents."""
        counts: Dict[str, int] = {pos: 0 for pos in POSITIONS}
        for team in self.opponents():
            for position in self.needs.roster_needs(team):
                counts[position] += 1
        return [pos for pos in POSITIONS if counts[pos] >= COMPETITIVE_MIN_TEAMS]

    def opponents(self) -> List[TeamRoster]:
        return [team for team in self.state.teams if not team.is_user]

    def picks_until_team_turn(self, team: TeamRoster) -> int:
        """Picks before *team* is next on the clock (0 = on the clock)."""
        settings = self.state.settings
        return draft_order.picks_until_turn(
            self.state.current_pick,
            self.state.draft_slot_of(team),
            settings.league_size,
            settings.draft_type,
        )

    @staticmethod
    def stacks_in_progress(team: TeamRoster) -> List[str]:
        """QB-WR / QB-TE pairings from the same NFL team already rostered."""
        qb_teams = {qb.team for qb in team.roster.get("QB", [])}
        stacks: List[str] = []
        if any(wr.team in qb_teams for wr in team.roster.get("WR", [])):
            stacks.append("QB-WR")
        if any(te.team in qb_teams for te in team.roster.get("TE", [])):
            stacks.append("QB-TE")
        return stacks

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _available_by_vorp(self) -> List[Player]:
        available = self.state.available_players()
        vorps = {p.player_id: self.calculator.calculate_vorp(p) for p in available}
        return sorted(available, key=lambda p: (-vorps[p.player_id], p.player_id))
