from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import MONTHS_PER_YEAR
from ..core.enums import SpecialCalcType, VacationBasis
from .model import ZERO, VacationCalcInput, VacationCalcOutput


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _full_years(start: date, reference: date) -> int:
    years = reference.year - start.year
    if (reference.month, reference.day) < (start.month, start.day):
        years -= 1
    return max(years, 0)


def age_at(birth_date: date, reference_date: date) -> int:
    return _full_years(birth_date, reference_date)


def tenure_at(entry_date: date, reference_date: date) -> int:
    if reference_date < entry_date:
        return 0
    return _full_years(entry_date, reference_date)


def vacation_period(year: int, entry_date: date, basis: VacationBasis) -> tuple[date, date]:
    if VacationBasis(basis) == VacationBasis.CALENDAR_YEAR:
        return date(year, 1, 1), date(year, 12, 31)
    day = min(entry_date.day, calendar.monthrange(year, entry_date.month)[1])
    start = date(year, entry_date.month, day)
    return start, add_months(start, MONTHS_PER_YEAR) - timedelta(days=1)


def months_employed_in_year(entry_date: date, exit_date: Optional[date], year: int, basis: VacationBasis) -> int:
    """Months of employment within the vacation year; partial months count as full."""
    period_start, period_end = vacation_period(year, entry_date, basis)
    effective_start = max(period_start, entry_date)
    effective_end = period_end if exit_date is None else min(period_end, exit_date)
    if effective_start > effective_end:
        return 0

    months = 0
    while add_months(effective_start, months) <= effective_end and months < MONTHS_PER_YEAR:
        months += 1
    return months


def round_to_half_day(value: Decimal) -> Decimal:
    """Nearest 0.5, exact midpoints rounding up."""
    doubled = (value * 2).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return doubled / 2


class VacationCalculator:
    """Annual vacation entitlement: pro-rating, part-time factor and special bonuses."""

    def calculate(self, data: VacationCalcInput) -> VacationCalcOutput:
        age = age_at(data.birth_date, data.reference_date)
        tenure = tenure_at(data.entry_date, data.reference_date)
        months = months_employed_in_year(data.entry_date, data.exit_date, data.year, data.basis)

        base = to_decimal(data.base_vacation_days)
        if months < MONTHS_PER_YEAR:
            pro_rated = base * Decimal(months) / Decimal(MONTHS_PER_YEAR)
        else:
            pro_rated = base

        standard = to_decimal(data.standard_weekly_hours)
        if standard > 0:
            part_time = pro_rated * to_decimal(data.weekly_hours) / standard
        else:
            part_time = pro_rated

        bonuses = {t: ZERO for t in SpecialCalcType}
        for special in data.special_calcs:
            kind = SpecialCalcType(special.type)
            if kind == SpecialCalcType.AGE:
                qualifies = age >= special.threshold
            elif kind == SpecialCalcType.TENURE:
                qualifies = tenure >= special.threshold
            else:
                qualifies = data.has_disability
            if qualifies:
                bonuses[kind] += to_decimal(special.bonus_days)

        total = part_time + sum(bonuses.values(), ZERO)
        return VacationCalcOutput(
            base_entitlement=base,
            pro_rated_entitlement=pro_rated,
            part_time_adjustment=part_time,
            age_bonus=bonuses[SpecialCalcType.AGE],
            tenure_bonus=bonuses[SpecialCalcType.TENURE],
            disability_bonus=bonuses[SpecialCalcType.DISABILITY],
            total_entitlement=round_to_half_day(total),
            months_employed=months,
            age_at_reference=age,
            tenure_years=tenure,
        )


def calculate_vacation(data: VacationCalcInput) -> VacationCalcOutput:
    return VacationCalculator().calculate(data)


def calculate_vacation_deduction(value, duration_fraction) -> Decimal:
    """Days to deduct for an absence: ``value`` per day times the day fraction (0.5, 1)."""
    return to_decimal(value) * to_decimal(duration_fraction)
