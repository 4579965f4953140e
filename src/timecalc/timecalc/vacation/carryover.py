from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import CappingRuleType, ExemptionType
from ..core.exceptions import ValidationError
from .calculator import to_decimal
from .model import ZERO, CappingRule, CappingRuleOutcome, CarryoverInput, CarryoverResult


def calculate_carryover(available, max_carryover: Optional[Decimal] = None) -> Decimal:
    """Clamp a remaining vacation balance to an optional ceiling.

    Non-positive balances carry nothing; ``None`` means no ceiling. A
    negative ceiling raises ``ValidationError``.
    """
    if max_carryover is not None:
        max_carryover = to_decimal(max_carryover)
        if max_carryover < 0:
            raise ValidationError("max_carryover must not be negative")
    available = to_decimal(available)
    if available <= 0:
        return ZERO
    if max_carryover is None:
        return available
    return min(available, max_carryover)


def _cutoff(rule: CappingRule, year: int) -> date:
    following = year + 1
    day = min(rule.cutoff_day, calendar.monthrange(following, rule.cutoff_month)[1])
    return date(following, rule.cutoff_month, day)


def _rule_is_due(rule: CappingRule, year: int, reference_date: date) -> bool:
    if CappingRuleType(rule.rule_type) == CappingRuleType.YEAR_END:
        return True
    return reference_date > _cutoff(rule, year)


def calculate_carryover_with_capping(data: CarryoverInput) -> CarryoverResult:
    """Apply the tariff's capping rules in order, honouring per-employee exceptions."""
    available = to_decimal(data.available_days)
    carryover = max(available, ZERO)
    exceptions = {e.capping_rule_id: e for e in data.exceptions}
    outcomes: list[CappingRuleOutcome] = []
    has_exception = False

    for rule in data.capping_rules:
        exception = exceptions.get(rule.rule_id)
        exception_active = exception is not None
        has_exception = has_exception or exception_active
        cap = to_decimal(rule.cap_value)
        applied = False

        if _rule_is_due(rule, data.year, data.reference_date):
            if exception is not None and ExemptionType(exception.exemption_type) == ExemptionType.FULL:
                cap = None
            elif exception is not None and exception.retain_days is not None:
                cap = max(cap, to_decimal(exception.retain_days))
            if cap is not None and carryover > cap:
                carryover = cap
                applied = True

        outcomes.append(
            CappingRuleOutcome(
                rule_id=rule.rule_id,
                rule_name=rule.rule_name,
                rule_type=CappingRuleType(rule.rule_type),
                cap_value=to_decimal(rule.cap_value),
                applied=applied,
                exception_active=exception_active,
            )
        )

    return CarryoverResult(
        available_days=available,
        capped_carryover=carryover,
        forfeited_days=max(available, ZERO) - carryover,
        rules_applied=tuple(outcomes),
        has_exception=has_exception,
    )
