"""
Prize pool and payout allocation.

Payouts are derived from a ratio schedule for the number of paid places and
rounded to clean denominations (multiples of 10, falling back to 5) while
keeping the total equal to the prize pool and the amounts non-increasing.
"""

import logging

from app_types import Payout, PayoutRatios
from constants import (
    PAYOUT_ROUNDING_STEPS,
    PAYOUT_SCHEDULES,
    TAPER_DECAY,
    TAPER_FIRST_SHARE,
    TAPER_MIN_SHARE,
)
from rounding import round_half_away_from_zero, round_to_step

logger = logging.getLogger("app.payouts")


def compute_pool(fee_per_player: float, total_players: int) -> int:
    """Total of a per-player fee, rounded to a whole amount and floored at 0."""
    return max(0, round_half_away_from_zero(fee_per_player * total_players))


def effective_paid_places(paid_places: int, num_teams: int) -> int:
    """Clamps the requested paid places to [1, num_teams]; 0 without teams."""
    if num_teams <= 0:
        return 0
    return max(1, min(paid_places, num_teams))


def payout_ratios(places: int) -> PayoutRatios:
    """
    Returns the share of the prize pool paid to each place.

    Up to five places use fixed schedules. Beyond that, first place gets 35%
    and each following place 70% of the previous share (at least 5%), with
    the last place taking what is left. The schedule always sums to 1.

    Args:
        places: Number of paid places (already clamped to the team count)

    Returns:
        Ratios for places 1..n, non-increasing
    """
    if places <= 0:
        return []
    if places in PAYOUT_SCHEDULES:
        return list(PAYOUT_SCHEDULES[places])

    ratios = []
    left = 1.0
    share = TAPER_FIRST_SHARE
    for place in range(places):
        if place == places - 1:
            ratio = max(0.0, left)
        else:
            ratio = max(TAPER_MIN_SHARE, share)
        ratios.append(ratio)
        left -= ratio
        share *= TAPER_DECAY

    total = sum(ratios)
    return [r / total for r in ratios]


def _enforce_non_increasing(amounts: list[int]) -> None:
    for i in range(1, len(amounts)):
        if amounts[i] > amounts[i - 1]:
            amounts[i] = amounts[i - 1]


def _round_with_step(values: list[float], total: int, step: int) -> list[int]:
    """
    Rounds values to multiples of step and nudges them toward total.

    The difference between total and the rounded sum is moved in units of
    step across places starting from first place, never taking a place
    below zero. Order is re-enforced afterwards, so the result can still
    miss total.
    """
    rounded = [max(0, round_to_step(v, step)) for v in values]
    diff = total - sum(rounded)
    direction = 1 if diff > 0 else -1
    diff = abs(diff)

    while diff >= step:
        adjusted = False
        for i in range(len(rounded)):
            if diff < step:
                break
            candidate = rounded[i] + direction * step
            if direction > 0 or candidate >= 0:
                rounded[i] = candidate
                diff -= step
                adjusted = True
        if not adjusted:
            break

    _enforce_non_increasing(rounded)
    return rounded


def _absorb_residual(amounts: list[int], residual: int) -> list[int]:
    """
    Adds the residual to first place while keeping order and the total exact.

    A negative residual that would drop first place below second place is
    taken from the lowest places upward instead.
    """
    amounts = list(amounts)
    if not amounts:
        return amounts

    first = amounts[0] + residual
    if residual >= 0 or len(amounts) == 1 or first >= amounts[1]:
        amounts[0] = first
        return amounts

    deficit = -residual
    for i in range(len(amounts) - 1, -1, -1):
        floor = amounts[i + 1] if i + 1 < len(amounts) else 0
        take = min(deficit, amounts[i] - floor)
        amounts[i] -= take
        deficit -= take
        if deficit == 0:
            break
    return amounts


def round_payouts(values: list[float], total: int) -> list[int]:
    """
    Rounds raw payout amounts to clean denominations summing to total.

    Tries multiples of 10 first, then multiples of 5. If neither lands
    exactly on total, the 5-rounded amounts are used and the leftover is
    given to first place.

    Args:
        values: Unrounded amounts per place, non-increasing
        total: The prize pool the amounts must sum to

    Returns:
        Whole amounts per place, non-increasing and summing to total
    """
    rounded: list[int] = []
    for step in PAYOUT_ROUNDING_STEPS:
        rounded = _round_with_step(values, total, step)
        if sum(rounded) == total:
            return rounded
        logger.debug(f"Rounding to {step} gave {rounded}, missing total {total}")

    return _absorb_residual(rounded, total - sum(rounded))


def allocate_payouts(prize_pool: int, paid_places: int, num_teams: int) -> list[Payout]:
    """
    Splits the prize pool across the paid places.

    Args:
        prize_pool: Total prize money
        paid_places: Requested number of paid places
        num_teams: Number of teams in the game (caps the paid places)

    Returns:
        One payout per paid place, starting at place 1
    """
    places = effective_paid_places(paid_places, num_teams)
    ratios = payout_ratios(places)
    raw_amounts = [r * prize_pool for r in ratios]
    amounts = round_payouts(raw_amounts, prize_pool)
    return [Payout(place=i + 1, amount=amt) for i, amt in enumerate(amounts)]
