import math

DAYS_PER_WEEK = 7

# Weeks of cover reported when an item has stock but no demand.
NO_DEMAND_COVER_WEEKS = 99.0


def weeks_of_cover(quantity: float, daily_velocity: float) -> float:
    """
    Weeks the given stock lasts at the given daily sales velocity.

    - velocity > 0: quantity / (velocity * 7)
    - velocity == 0 with stock: 99 (treated as "do not touch")
    - velocity == 0 without stock: 0
    """
    q = max(0.0, float(quantity or 0))
    v = max(0.0, float(daily_velocity or 0))
    if v > 0:
        return q / (v * DAYS_PER_WEEK)
    if q > 0:
        return NO_DEMAND_COVER_WEEKS
    return 0.0


def units_for_weeks(weeks: float, daily_velocity: float) -> int:
    """Whole units needed to cover `weeks` at `daily_velocity`, rounded up."""
    raw = float(weeks) * float(daily_velocity or 0) * DAYS_PER_WEEK
    if raw <= 0:
        return 0
    # Round first so float noise like 140.00000000000003 stays 140.
    return int(math.ceil(round(raw, 6)))


def priority_for_cover(cover_weeks: float) -> str:
    if cover_weeks < 0.5:
        return "P1"
    if cover_weeks < 1:
        return "P2"
    return "P3"
