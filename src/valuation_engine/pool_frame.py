"""Available-player pool as a pandas DataFrame.

Built once per draft snapshot and shared by every replacement-level and
depth lookup for that snapshot.
"""

import logging
import math
from typing import Iterable, List, Optional

import pandas as pd

from src.draft_manager.config import POSITIONS
from src.draft_manager.draft_state import Player
from src.valuation_engine.config import DEFAULT_TIER

logger = logging.getLogger(__name__)

POOL_COLUMNS = ["player_id", "position", "projected_points", "tier", "rank"]


def is_finite_number(value) -> bool:
    """True for a real, finite int or float (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def effective_tier(player: Player, default: Optional[int] = DEFAULT_TIER) -> Optional[int]:
    """Player tier, or *default* when it is missing or not a positive int."""
    tier = player.tier
    if isinstance(tier, bool) or not isinstance(tier, int) or tier < 1:
        return default
    return tier


def build_pool_frame(players: Iterable[Player]) -> pd.DataFrame:
    """Frame of players still on the board, best first within position.

    Drafted and do-not-draft players are excluded. Rows with non-finite
    projections or an unknown position are dropped with a warning; they
    value at zero rather than distorting the replacement level.

    Returns:
        DataFrame with ``POOL_COLUMNS`` sorted by position, projected
        points (descending) and ``player_id``.
    """
    rows = []
    for player in players:
        if not player.is_available:
            continue
        if player.position not in POSITIONS:
            logger.warning(
                "Skipping %s (%s): unknown position %r",
                player.name, player.player_id, player.position,
            )
            continue
        if not is_finite_number(player.projected_points):
            logger.warning(
                "Skipping %s (%s): invalid projected points %r",
                player.name, player.player_id, player.projected_points,
            )
            continue
        rows.append(
            {
                "player_id": player.player_id,
                "position": player.position,
                "projected_points": float(player.projected_points),
                "tier": effective_tier(player),
                "rank": player.rank,
            }
        )

    frame = pd.DataFrame(rows, columns=POOL_COLUMNS)
    if frame.empty:
        return frame

    return frame.sort_values(
        ["position", "projected_points", "player_id"],
        ascending=[True, False, True],
    ).reset_index(drop=True)


def position_points(frame: pd.DataFrame, position: str) -> List[float]:
    """Projected points at *position*, highest first."""
    if frame.empty:
        return []
    return frame.loc[frame["position"] == position, "projected_points"].tolist()
