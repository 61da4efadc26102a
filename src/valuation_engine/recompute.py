"""Full, incremental and cooperative VORP recomputation over a snapshot.

Every function returns a new :class:`DraftState`; the input snapshot and its
players are left untouched.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from src.draft_manager.draft_state import DraftState, Player
from src.valuation_engine.config import RECOMPUTE_CHUNK_SIZE, ValuationConfig
from src.valuation_engine.vor_calculator import DynamicVORCalculator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


def _with_vorp(player: Player, calculator: DynamicVORCalculator) -> Player:
    return replace(player, vorp=calculator.calculate_vorp(player))


def recalculate_all_vorp(
    state: DraftState, config: Optional[ValuationConfig] = None
) -> DraftState:
    """Refresh VORP for every undrafted player."""
    if not state.players:
        return state

    calculator = DynamicVORCalculator.from_draft_state(state, config)
    players = [
        p if p.is_taken else _with_vorp(p, calculator)
        for p in state.players
    ]
    return state.with_players(players)


def recalculate_incremental_vorp(
    state: DraftState,
    new_pick_player_ids: Iterable[str],
    config: Optional[ValuationConfig] = None,
) -> DraftState:
    """Refresh VORP only at positions touched by the listed picks.

    Players at other positions keep whatever VORP they already carry.
    """
    pick_ids = set(new_pick_player_ids)
    if not state.players or not pick_ids:
        return state

    affected = {p.position for p in state.players if p.player_id in pick_ids}
    calculator = DynamicVORCalculator.from_draft_state(state, config)

    players = [
        _with_vorp(p, calculator)
        if not p.is_taken and p.position in affected
        else p
        for p in state.players
    ]
    logger.debug("Incremental VORP refresh for positions: %s", sorted(affected))
    return state.with_players(players)


async def recalculate_vorp_async(
    state: DraftState,
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: int = RECOMPUTE_CHUNK_SIZE,
    config: Optional[ValuationConfig] = None,
) -> DraftState:
    """Chunked :func:`recalculate_all_vorp` that yields to the event loop.

    Undrafted players are processed in batches of *chunk_size*; after each
    batch *on_progress* receives the percentage complete (0-100] and control
    returns to the loop before the next batch starts.
    """
    undrafted_idx = [i for i, p in enumerate(state.players) if not p.is_taken]
    if not undrafted_idx:
        return state

    calculator = DynamicVORCalculator.from_draft_state(state, config)
    players: List[Player] = list(state.players)
    chunks = [
        undrafted_idx[start:start + chunk_size]
        for start in range(0, len(undrafted_idx), chunk_size)
    ]

    for chunk_number, chunk in enumerate(chunks, start=1):
        for i in chunk:
            players[i] = _with_vorp(players[i], calculator)

        if on_progress is not None:
            on_progress(chunk_number / len(chunks) * 100)

        if chunk_number < len(chunks):
            await asyncio.sleep(0)

    return state.with_players(players)


class VORPRecomputeCoordinator:
    """Runs cooperative recomputes where only the newest request counts.

    Submitting a new snapshot supersedes earlier ones. A superseded task is
    not cancelled; it finishes and its result is dropped.
    """

    def __init__(
        self,
        chunk_size: int = RECOMPUTE_CHUNK_SIZE,
        config: Optional[ValuationConfig] = None,
    ):
        self.chunk_size = chunk_size
        self.config = config
        self.latest_state: Optional[DraftState] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def submit(
        self, state: DraftState, on_progress: Optional[ProgressCallback] = None
    ) -> "asyncio.Task":
        """Schedule a recompute on the running loop.

        The task resolves to the refreshed snapshot, or ``None`` if a newer
        submission arrived before it finished.
        """
        self._generation += 1
        loop = asyncio.get_running_loop()
        return loop.create_task(self._run(state, self._generation, on_progress))

    async def _run(
        self,
        state: DraftState,
        generation: int,
        on_progress: Optional[ProgressCallback],
    ) -> Optional[DraftState]:
        result = await recalculate_vorp_async(
            state, on_progress, self.chunk_size, self.config
        )
        if generation != self._generation:
            logger.debug(
                "Discarding stale VORP recompute (generation %d, latest %d)",
                generation, self._generation,
            )
            return None
        self.latest_state = result
        return result
