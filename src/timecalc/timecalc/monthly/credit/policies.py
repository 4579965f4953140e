from __future__ import annotations

from ...core.enums import WarningCode
from ..model import CreditDecision, MonthlyEvaluationRules
from .base import CreditPolicy, apply_monthly_cap


class NoEvaluationPolicy(CreditPolicy):
    """1:1 transfer of the month's change."""

    def credit(self, flextime_change: int, rules: MonthlyEvaluationRules) -> CreditDecision:
        return CreditDecision(credited=flextime_change)


class CompleteCarryoverPolicy(CreditPolicy):
    """Full transfer, limited by the monthly cap."""

    def credit(self, flextime_change: int, rules: MonthlyEvaluationRules) -> CreditDecision:
        return apply_monthly_cap(CreditDecision(credited=flextime_change), rules)


class AfterThresholdPolicy(CreditPolicy):
    """Only overtime above the threshold is credited; undertime is deducted in full."""

    def credit(self, flextime_change: int, rules: MonthlyEvaluationRules) -> CreditDecision:
        threshold = rules.flextime_threshold or 0
        if flextime_change > threshold:
            decision = CreditDecision(credited=flextime_change - threshold, forfeited=threshold)
        elif flextime_change > 0:
            decision = CreditDecision(
                credited=0,
                forfeited=flextime_change,
                warnings=(WarningCode.BELOW_THRESHOLD,),
            )
        else:
            decision = CreditDecision(credited=flextime_change)
        return apply_monthly_cap(decision, rules)


class NoCarryoverPolicy(CreditPolicy):
    """Balance resets to zero at every month boundary."""

    def credit(self, flextime_change: int, rules: MonthlyEvaluationRules) -> CreditDecision:
        return CreditDecision(
            credited=0,
            forfeited=flextime_change,
            warnings=(WarningCode.NO_CARRYOVER,),
            resets_balance=True,
        )
