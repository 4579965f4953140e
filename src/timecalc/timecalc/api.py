"""Public entry points of the calculation engine.

Every function is pure: it takes fully resolved input values and returns a
result value. Callers own persistence and decide when to recalculate.
"""

from __future__ import annotations

from .daily.calculator import calculate_day
from .daily.shift import detect_shift
from .monthly.aggregator import calculate_annual_carryover, calculate_month
from .vacation.calculator import calculate_vacation, calculate_vacation_deduction
from .vacation.carryover import calculate_carryover, calculate_carryover_with_capping

__all__ = [
    "calculate_day",
    "calculate_month",
    "calculate_vacation",
    "calculate_carryover",
    "calculate_vacation_deduction",
    "calculate_carryover_with_capping",
    "calculate_annual_carryover",
    "detect_shift",
]
