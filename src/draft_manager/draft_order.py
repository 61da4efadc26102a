"""Snake and linear draft-order arithmetic.

All pick numbers are overall and 1-indexed; draft slots are 1-indexed.
"""

from typing import List, Optional


def round_for_pick(pick_number: int, league_size: int) -> int:
    """Round that contains an overall pick."""
    return (pick_number - 1) // league_size + 1


def pick_in_round(pick_number: int, league_size: int) -> int:
    """1-indexed position of an overall pick inside its round."""
    return (pick_number - 1) % league_size + 1


def _slot_position_in_round(
    round_number: int, slot: int, league_size: int, draft_type: str
) -> int:
    """Where *slot* picks inside *round_number* (1-indexed)."""
    if draft_type == "snake" and round_number % 2 == 0:  # Even rounds: N -> 1
        return league_size - slot + 1
    return slot


def slot_for_pick(pick_number: int, league_size: int, draft_type: str) -> int:
    """Which draft slot owns an overall pick.

    Snake drafts reverse the order in even rounds; linear drafts repeat it.
    """
    round_number = round_for_pick(pick_number, league_size)
    position = pick_in_round(pick_number, league_size)
    if draft_type == "snake" and round_number % 2 == 0:
        return league_size - position + 1
    return position


def next_pick_for_slot(
    current_pick: int, slot: int, league_size: int, draft_type: str
) -> int:
    """First overall pick at or after *current_pick* owned by *slot*."""
    round_number = round_for_pick(current_pick, league_size)
    pick = (round_number - 1) * league_size + _slot_position_in_round(
        round_number, slot, league_size, draft_type
    )
    if pick >= current_pick:
        return pick
    round_number += 1
    return (round_number - 1) * league_size + _slot_position_in_round(
        round_number, slot, league_size, draft_type
    )


def picks_until_turn(
    current_pick: int, slot: int, league_size: int, draft_type: str
) -> int:
    """Picks made by others before *slot* is on the clock (0 = on the clock)."""
    return next_pick_for_slot(current_pick, slot, league_size, draft_type) - current_pick


def picks_between_turns(
    pick_number: int, slot: int, league_size: int, draft_type: str
) -> int:
    """Distance from *slot*'s pick at *pick_number* to its following pick.

    Formula::

        snake, odd round:  2 * (N - slot) + 1
        snake, even round: 2 * (slot - 1) + 1
        linear:            N
    """
    if draft_type != "snake":
        return league_size
    if round_for_pick(pick_number, league_size) % 2 == 1:
        return 2 * (league_size - slot) + 1
    return 2 * (slot - 1) + 1


def future_picks_for_slot(
    current_pick: int,
    slot: int,
    league_size: int,
    draft_type: str,
    count: int,
    total_picks: Optional[int] = None,
) -> List[int]:
    """Next *count* overall picks owned by *slot*, bounded by draft length."""
    picks: List[int] = []
    pick = next_pick_for_slot(current_pick, slot, league_size, draft_type)
    while len(picks) < count:
        if total_picks is not None and pick > total_picks:
            break
        picks.append(pick)
        pick += picks_between_turns(pick, slot, league_size, draft_type)
    return picks
