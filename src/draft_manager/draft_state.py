"""Draft state data models - the snapshot every valuation runs against."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import uuid

from src.draft_manager.config import (
    DEFAULT_DRAFT_TYPE,
    DEFAULT_SCORING_FORMAT,
    FLEX_ELIGIBLE_POSITIONS,
    FLEX_SLOT_KEYS,
    POSITIONS,
    SUPERFLEX_SLOT_KEY,
)
from src.draft_manager import draft_order


@dataclass
class Player:
    """A single player in the draft pool.

    ``vorp`` is a derived figure: it is refreshed by the valuation engine on
    every recompute and is never treated as authoritative input.
    """

    player_id: str
    name: str
    position: str
    team: str
    adp: Optional[float]
    tier: int
    bye_week: int
    rank: int
    position_rank: int
    projected_points: float
    vorp: Optional[float] = None
    is_drafted: bool = False
    is_do_not_draft: bool = False
    is_targeted: bool = False
    drafted_by: Optional[int] = None
    playoff_schedule: Optional[str] = None  # "Good", "Avg" or "Tough"

    @property
    def is_taken(self) -> bool:
        """Drafted, either by flag or by carrying an owning team."""
        return self.is_drafted or self.drafted_by is not None

    @property
    def is_available(self) -> bool:
        """Not taken and not on the user's do-not-draft list."""
        return not self.is_taken and not self.is_do_not_draft


@dataclass
class TeamRoster:
    """A team's roster, keyed by the drafted player's position."""

    team_id: int
    team_name: str
    is_user: bool = False
    roster: Dict[str, List[Player]] = field(default_factory=dict)

    def get_roster_count(self, position: str) -> int:
        """Get number of players at position."""
        return len(self.roster.get(position, []))

    def add_player(self, player: Player):
        """Add player to the roster under their position."""
        self.roster.setdefault(player.position, []).append(player)

    def all_players(self) -> List[Player]:
        """Every rostered player, in position order."""
        players: List[Player] = []
        for position in POSITIONS:
            players.extend(self.roster.get(position, []))
        return players

    def skill_count(self) -> int:
        """Number of rostered flex-eligible players."""
        return sum(self.get_roster_count(pos) for pos in FLEX_ELIGIBLE_POSITIONS)

    def get_total_picks(self) -> int:
        """Total number of players rostered."""
        return sum(len(players) for players in self.roster.values())


@dataclass
class CustomScoring:
    """Per-event scoring weights for leagues on custom scoring."""

    receptions: float = 0.0
    passing_touchdowns: float = 4.0
    defense_sacks: float = 1.0
    defense_interceptions: float = 2.0


@dataclass
class DraftSettings:
    """League configuration settings."""

    league_size: int
    draft_slot: int  # 1-indexed
    number_of_rounds: int
    draft_type: str = DEFAULT_DRAFT_TYPE  # "snake" or "linear"
    scoring_format: str = DEFAULT_SCORING_FORMAT  # "full_ppr", "half_ppr", "standard", "custom"
    roster_slots: Dict[str, int] = field(default_factory=dict)
    custom_scoring: Optional[CustomScoring] = None

    def slots_for(self, position: str) -> int:
        """Get required roster slots for position."""
        return self.roster_slots.get(position, 0)

    def flex_slots(self) -> int:
        """FLEX plus W/R/T slots."""
        return sum(self.roster_slots.get(key, 0) for key in FLEX_SLOT_KEYS)

    def superflex_slots(self) -> int:
        return self.roster_slots.get(SUPERFLEX_SLOT_KEY, 0)

    def total_picks(self) -> int:
        """Overall number of picks in the draft."""
        return self.league_size * self.number_of_rounds


@dataclass
class Pick:
    """Represents a single draft pick. Recorded picks are never modified."""

    pick_number: int
    round: int
    pick_in_round: int
    team_id: int
    player: Optional[Player]
    timestamp: str

    @classmethod
    def create(
        cls,
        pick_number: int,
        league_size: int,
        team_id: int,
        player: Optional[Player] = None,
    ) -> "Pick":
        return cls(
            pick_number=pick_number,
            round=draft_order.round_for_pick(pick_number, league_size),
            pick_in_round=draft_order.pick_in_round(pick_number, league_size),
            team_id=team_id,
            player=player,
            timestamp=datetime.now().isoformat(),
        )

    @property
    def position(self) -> Optional[str]:
        return self.player.position if self.player else None


@dataclass
class DraftState:
    """Complete draft snapshot - single source of truth for one recompute.

    Teams are ordered by draft slot: ``teams[i]`` owns slot ``i + 1``.
    """

    settings: DraftSettings
    players: List[Player]
    teams: List[TeamRoster]
    picks: List[Pick] = field(default_factory=list)
    current_pick: int = 1
    is_active: bool = True
    picks_until_my_turn: int = 0
    draft_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def create(
        cls,
        settings: DraftSettings,
        players: List[Player],
        teams: List[TeamRoster],
        picks: Optional[List[Pick]] = None,
        current_pick: Optional[int] = None,
    ) -> "DraftState":
        """Build a snapshot, deriving the current pick and turn distance."""
        picks = list(picks or [])
        if current_pick is None:
            current_pick = len(picks) + 1
        picks_until = draft_order.picks_until_turn(
            current_pick,
            settings.draft_slot,
            settings.league_size,
            settings.draft_type,
        )
        return cls(
            settings=settings,
            players=players,
            teams=teams,
            picks=picks,
            current_pick=current_pick,
            is_active=current_pick <= settings.total_picks(),
            picks_until_my_turn=picks_until,
        )

    @property
    def user_team(self) -> Optional[TeamRoster]:
        """The team with ``is_user`` set, if any."""
        for team in self.teams:
            if team.is_user:
                return team
        return None

    def available_players(self) -> List[Player]:
        """Players that are neither drafted nor marked do-not-draft."""
        return [p for p in self.players if p.is_available]

    def undrafted_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_taken]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Look up a player by id."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_team(self, team_id: int) -> Optional[TeamRoster]:
        """Get specific team by ID."""
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def draft_slot_of(self, team: TeamRoster) -> int:
        """1-indexed draft slot owned by *team*."""
        return self.teams.index(team) + 1

    def recent_picks(self, count: int) -> List[Pick]:
        return self.picks[-count:] if count > 0 else []

    def with_players(self, players: Iterable[Player]) -> "DraftState":
        """Return a new snapshot carrying *players*; this one is untouched."""
        return replace(self, players=list(players))
