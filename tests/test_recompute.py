"""Tests for full, incremental and cooperative VORP recomputation."""

import asyncio

from src.valuation_engine.recompute import (
    VORPRecomputeCoordinator,
    recalculate_all_vorp,
    recalculate_incremental_vorp,
    recalculate_vorp_async,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _vorps(state):
    return {p.player_id: p.vorp for p in state.players}


# ── Synchronous recompute ────────────────────────────────────────────


class TestRecalculateAll:
    def test_every_undrafted_player_valued(self, draft_state):
        result = recalculate_all_vorp(draft_state)
        assert all(p.vorp is not None and p.vorp >= 0 for p in result.players)

    def test_input_snapshot_untouched(self, draft_state):
        recalculate_all_vorp(draft_state)
        assert all(p.vorp is None for p in draft_state.players)

    def test_drafted_players_keep_vorp(self, draft_state):
        draft_state.get_player("rb1").is_drafted = True
        draft_state.get_player("rb1").vorp = 42.0
        result = recalculate_all_vorp(draft_state)
        assert result.get_player("rb1").vorp == 42.0

    def test_empty_pool_returns_state(self, draft_state):
        empty = draft_state.with_players([])
        assert recalculate_all_vorp(empty) is empty


class TestRecalculateIncremental:
    def test_only_affected_positions_refreshed(self, draft_state):
        draft_state.get_player("rb1").is_drafted = True
        result = recalculate_incremental_vorp(draft_state, ["rb1"])
        assert result.get_player("rb2").vorp is not None
        assert result.get_player("wr1").vorp is None

    def test_no_new_picks_is_noop(self, draft_state):
        assert recalculate_incremental_vorp(draft_state, []) is draft_state

    def test_matches_full_recompute_for_position(self, draft_state):
        draft_state.get_player("wr1").is_drafted = True
        full = _vorps(recalculate_all_vorp(draft_state))
        partial = _vorps(recalculate_incremental_vorp(draft_state, ["wr1"]))
        for pid in ("wr2", "wr3", "wr6"):
            assert partial[pid] == full[pid]


# ── Cooperative recompute ────────────────────────────────────────────


class TestRecalculateAsync:
    def test_chunked_matches_synchronous(self, draft_state):
        sync = _vorps(recalculate_all_vorp(draft_state))
        chunked = _vorps(asyncio.run(recalculate_vorp_async(draft_state, chunk_size=5)))
        assert chunked == sync

    def test_progress_reported_per_chunk(self, draft_state):
        progress = []
        asyncio.run(
            recalculate_vorp_async(draft_state, on_progress=progress.append, chunk_size=10)
        )
        # 23 undrafted players in chunks of 10
        assert len(progress) == 3
        assert progress == sorted(progress)
        assert progress[-1] == 100.0

    def test_nothing_to_do(self, draft_state):
        for player in draft_state.players:
            player.is_drafted = True
        progress = []
        result = asyncio.run(recalculate_vorp_async(draft_state, progress.append))
        assert result is draft_state
        assert progress == []


class TestRecomputeCoordinator:
    def test_latest_result_kept(self, draft_state):
        coordinator = VORPRecomputeCoordinator(chunk_size=5)

        async def run():
            return await coordinator.submit(draft_state)

        result = asyncio.run(run())
        assert result is not None
        assert coordinator.latest_state is result
        assert coordinator.generation == 1

    def test_superseded_result_discarded(self, draft_state):
        coordinator = VORPRecomputeCoordinator(chunk_size=5)
        draft_state.get_player("rb1").is_drafted = True
        newer = recalculate_all_vorp(draft_state)

        async def run():
            stale = coordinator.submit(draft_state)
            fresh = coordinator.submit(newer)
            return await asyncio.gather(stale, fresh)

        stale_result, fresh_result = asyncio.run(run())
        assert stale_result is None
        assert fresh_result is not None
        assert coordinator.latest_state is fresh_result
        assert coordinator.generation == 2
