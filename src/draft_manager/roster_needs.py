"""Roster need and league demand logic shared by valuation and scoring."""

from typing import Dict, List

from src.draft_manager.config import (
    FLEX_ELIGIBLE_POSITIONS,
    OPPONENT_DEPTH_TARGETS,
    POSITIONS,
    STRENGTH_FILL_RATIO,
    STRENGTH_MIN_AVERAGE_VORP,
)
from src.draft_manager.draft_state import DraftSettings, TeamRoster

# Need levels, highest first
NEED_REQUIRED_SLOT = 3
NEED_FLEX_SLOT = 2
NEED_DEPTH = 1
NO_NEED = 0

SKILL_POSITIONS = ("RB", "WR", "TE")


class RosterNeeds:
    """Works out what a roster still needs under a league's slot settings."""

    def __init__(self, settings: DraftSettings):
        self.settings = settings

    def unmet_required(self, team: TeamRoster, position: str) -> int:
        """Open required slots at *position*."""
        return max(0, self.settings.slots_for(position) - team.get_roster_count(position))

    def skill_slots_required(self) -> int:
        """RB + WR + TE starters plus every FLEX / W/R/T slot."""
        return (
            sum(self.settings.slots_for(pos) for pos in SKILL_POSITIONS)
            + self.settings.flex_slots()
        )

    def skill_shortfall(self, team: TeamRoster) -> int:
        """Skill starters (including flex) the team has yet to fill."""
        return max(0, self.skill_slots_required() - team.skill_count())

    def need_level(self, team: TeamRoster, position: str) -> int:
        """
        Discrete need for *position* on *team*.

        Priority: unfilled required slot -> flex-eligible with flex capacity
        remaining -> depth below required + 1 -> no need.
        """
        current = team.get_roster_count(position)
        required = self.settings.slots_for(position)

        if current < required:
            return NEED_REQUIRED_SLOT

        if position in FLEX_ELIGIBLE_POSITIONS and self.skill_shortfall(team) > 0:
            return NEED_FLEX_SLOT

        if current < required + 1:
            return NEED_DEPTH

        return NO_NEED

    def team_needs(self, team: TeamRoster) -> List[str]:
        """
        Positions the team still needs, one entry per open required slot,
        followed by skill positions short of depth while flex is open.
        """
        needs: List[str] = []
        for position in POSITIONS:
            needs.extend([position] * self.unmet_required(team, position))

        if self.skill_shortfall(team) > 0:
            for position in SKILL_POSITIONS:
                if team.get_roster_count(position) < self.settings.slots_for(position) + 1:
                    needs.append(position)

        return needs

    def team_needs_position(self, team: TeamRoster, position: str) -> bool:
        """Basic, flex or superflex need for *position*."""
        current = team.get_roster_count(position)
        required = self.settings.slots_for(position)

        if current < required:
            return True

        if position in FLEX_ELIGIBLE_POSITIONS:
            return self.skill_shortfall(team) > 0

        if position == "QB":
            return current < required + self.settings.superflex_slots()

        return False

    def opponent_demand(self, teams: List[TeamRoster]) -> Dict[str, float]:
        """
        How many opponents are still shopping at each position.

        Each opponent adds 1 per position with an open required slot, and
        0.5 per skill position below required + 1 while it still has skill
        slots to fill.
        """
        demand = {pos: 0.0 for pos in POSITIONS}

        for team in teams:
            if team.is_user:
                continue

            for position in POSITIONS:
                if self.unmet_required(team, position) > 0:
                    demand[position] += 1

            if self.skill_shortfall(team) > 0:
                for position in SKILL_POSITIONS:
                    if team.get_roster_count(position) < self.settings.slots_for(position) + 1:
                        demand[position] += 0.5

        return demand

    def roster_needs(self, team: TeamRoster) -> List[str]:
        """Unmet required positions plus minimum depth targets."""
        needs: List[str] = []
        for position in POSITIONS:
            current = team.get_roster_count(position)
            target = max(
                self.settings.slots_for(position),
                OPPONENT_DEPTH_TARGETS.get(position, 0),
            )
            if current < target:
                needs.append(position)
        return needs

    def position_strengths(self, team: TeamRoster) -> List[str]:
        """Positions filled well past their slots with useful players."""
        strengths: List[str] = []
        for position in POSITIONS:
            slots = self.settings.slots_for(position)
            players = team.roster.get(position, [])
            if slots == 0 or len(players) < slots * STRENGTH_FILL_RATIO:
                continue
            average_vorp = sum(p.vorp or 0.0 for p in players) / len(players)
            if average_vorp > STRENGTH_MIN_AVERAGE_VORP:
                strengths.append(position)
        return strengths
