from __future__ import annotations

from typing import Optional

from ..core.enums import WarningCode
from .factory import CreditPolicyFactory
from .model import MonthlyCalcInput, MonthlyEvaluationRules, MonthlyResult


def apply_flextime_caps(balance: int, cap_positive: Optional[int], cap_negative: Optional[int]) -> tuple[int, int]:
    """Clip a balance into [-cap_negative, cap_positive].

    Returns the clipped balance and the forfeited positive excess.
    """
    forfeited = 0
    if cap_positive is not None and balance > cap_positive:
        forfeited = balance - cap_positive
        balance = cap_positive
    if cap_negative is not None and balance < -cap_negative:
        balance = -cap_negative
    return balance, forfeited


def calculate_annual_carryover(current_balance: Optional[int], annual_floor: Optional[int]) -> int:
    """Year-end carryover: a missing balance carries 0, negatives stop at the floor."""
    if current_balance is None:
        return 0
    if annual_floor is not None and current_balance < -annual_floor:
        return -annual_floor
    return current_balance


class MonthlyAggregator:
    """Sums a month of daily results and credits flextime per the evaluation rules."""

    def __init__(self, *, policy_factory: Optional[CreditPolicyFactory] = None):
        self._factory = policy_factory or CreditPolicyFactory()

    def calculate(self, data: MonthlyCalcInput) -> MonthlyResult:
        totals = dict(gross=0, net=0, target=0, overtime=0, undertime=0, breaks=0)
        work_days = 0
        days_with_errors = 0
        for day in data.daily_values:
            totals["gross"] += day.gross_minutes
            totals["net"] += day.net_minutes
            totals["target"] += day.target_minutes
            totals["overtime"] += day.overtime_minutes
            totals["undertime"] += day.undertime_minutes
            totals["breaks"] += day.break_minutes
            if day.gross_minutes > 0 or day.net_minutes > 0:
                work_days += 1
            if day.has_error:
                days_with_errors += 1

        start = int(data.previous_carryover or 0)
        change = totals["overtime"] - totals["undertime"]
        raw = start + change

        rules = data.evaluation_rules or MonthlyEvaluationRules()
        decision = self._factory.for_credit_type(rules.credit_type).credit(change, rules)
        warnings = list(decision.warnings)
        forfeited = decision.forfeited

        if decision.resets_balance:
            end = 0
        else:
            unclipped = start + decision.credited
            end, cap_forfeited = apply_flextime_caps(unclipped, rules.cap_positive, rules.cap_negative)
            forfeited += cap_forfeited
            if end != unclipped:
                warnings.append(WarningCode.FLEXTIME_CAPPED)

        absences = data.absence_summary
        return MonthlyResult(
            total_gross_minutes=totals["gross"],
            total_net_minutes=totals["net"],
            total_target_minutes=totals["target"],
            total_overtime_minutes=totals["overtime"],
            total_undertime_minutes=totals["undertime"],
            total_break_minutes=totals["breaks"],
            flextime_start=start,
            flextime_change=change,
            flextime_raw=raw,
            flextime_credited=decision.credited,
            flextime_forfeited=forfeited,
            flextime_end=end,
            work_days=work_days,
            days_with_errors=days_with_errors,
            vacation_taken=absences.vacation_days,
            sick_days=absences.sick_days,
            other_absence_days=absences.other_absence_days,
            warnings=tuple(warnings),
        )


def calculate_month(data: MonthlyCalcInput) -> MonthlyResult:
    return MonthlyAggregator().calculate(data)
