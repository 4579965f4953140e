from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import WarningCode
from ..model import CreditDecision, MonthlyEvaluationRules


class CreditPolicy(ABC):
    """Credit policy interface (Strategy Pattern for flextime crediting)."""

    @abstractmethod
    def credit(self, flextime_change: int, rules: MonthlyEvaluationRules) -> CreditDecision:
        raise NotImplementedError


def apply_monthly_cap(decision: CreditDecision, rules: MonthlyEvaluationRules) -> CreditDecision:
    """Limit the credited amount to ``max_flextime_per_month``; the excess is forfeited."""
    cap = rules.max_flextime_per_month
    if cap is None or decision.credited <= cap:
        return decision
    return CreditDecision(
        credited=cap,
        forfeited=decision.forfeited + decision.credited - cap,
        warnings=decision.warnings + (WarningCode.MONTHLY_CAP,),
    )
