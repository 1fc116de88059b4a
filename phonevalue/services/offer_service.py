"""
Offer arithmetic.

Everything here is pure: the only random input, the goodwill bonus, is drawn
through an injectable BonusSource so tests can pin it.
"""
import math
import random
from typing import Callable, Iterable, Optional

from phonevalue.core.config import settings
from phonevalue.models.quote_request import DeviceCondition

# (low, high) -> int, both ends inclusive
BonusSource = Callable[[int, int], int]

SCREEN_PENALTY = 0.15  # per grade step below 4
BODY_PENALTY = 0.10
NOT_FUNCTIONAL_FACTOR = 0.4
BROKEN_CAMERA_FACTOR = 0.8
POOR_BATTERY_FACTOR = 0.9
ORIGINAL_BOX_BONUS = 10
CHARGER_BONUS = 5


def draw_bonus(bonus_source: BonusSource = random.randint) -> int:
    return bonus_source(settings.BONUS_MIN, settings.BONUS_MAX)


def select_baseline(prices: Iterable[Optional[float]]) -> Optional[float]:
    """Highest competitor price, or None when no source produced a positive one."""
    present = [price for price in prices if price is not None]
    if not present:
        return None
    highest = max(present)
    return highest if highest > 0 else None


def apply_condition(baseline: float, condition: DeviceCondition) -> float:
    # Order matters: the flat box/charger additions come after every multiplier.
    base_price = baseline
    base_price -= (4 - condition.screen_condition) * base_price * SCREEN_PENALTY
    base_price -= (4 - condition.body_condition) * base_price * BODY_PENALTY
    if not condition.fully_functional:
        base_price *= NOT_FUNCTIONAL_FACTOR
    if not condition.camera_works:
        base_price *= BROKEN_CAMERA_FACTOR
    if not condition.battery_health:
        base_price *= POOR_BATTERY_FACTOR
    if condition.original_box:
        base_price += ORIGINAL_BOX_BONUS
    if condition.charger_included:
        base_price += CHARGER_BONUS
    return base_price


def round_half_up(value: float) -> int:
    """2.5 -> 3, -2.5 -> -2; Python's round() would give 2 (banker's rounding)."""
    return int(math.floor(value + 0.5))


def calculate_offer(baseline: float, condition: Optional[DeviceCondition], bonus: int) -> int:
    """
    Final offer for a device.

    With an itemised condition the baseline is degraded first; without one
    (graded requests) the competitor's grade-specific price is used as is.
    """
    adjusted = apply_condition(baseline, condition) if condition is not None else baseline
    return round_half_up(adjusted) + bonus
