from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import CappingRuleType, ExemptionType, SpecialCalcType, VacationBasis

ZERO = Decimal("0")


@dataclass(frozen=True)
class SpecialCalc:
    """Stackable bonus rule; ``threshold`` is ignored for disability."""

    type: SpecialCalcType
    threshold: int
    bonus_days: Decimal


@dataclass(frozen=True)
class VacationCalcInput:
    birth_date: date
    entry_date: date
    year: int
    reference_date: date
    base_vacation_days: Decimal
    weekly_hours: Decimal = Decimal("40")
    standard_weekly_hours: Decimal = Decimal("40")
    exit_date: Optional[date] = None
    has_disability: bool = False
    basis: VacationBasis = VacationBasis.CALENDAR_YEAR
    special_calcs: tuple[SpecialCalc, ...] = ()


@dataclass(frozen=True)
class VacationCalcOutput:
    base_entitlement: Decimal = ZERO
    pro_rated_entitlement: Decimal = ZERO
    part_time_adjustment: Decimal = ZERO
    age_bonus: Decimal = ZERO
    tenure_bonus: Decimal = ZERO
    disability_bonus: Decimal = ZERO
    total_entitlement: Decimal = ZERO
    months_employed: int = 0
    age_at_reference: int = 0
    tenure_years: int = 0


@dataclass(frozen=True)
class CappingRule:
    """Vacation carryover cap. ``mid_year`` rules bite after the cutoff in the following year."""

    rule_id: str
    rule_type: CappingRuleType
    cap_value: Decimal
    rule_name: str = ""
    cutoff_month: int = 12
    cutoff_day: int = 31


@dataclass(frozen=True)
class CappingException:
    capping_rule_id: str
    exemption_type: ExemptionType
    retain_days: Optional[Decimal] = None


@dataclass(frozen=True)
class CarryoverInput:
    available_days: Decimal
    year: int
    reference_date: date
    capping_rules: tuple[CappingRule, ...] = ()
    exceptions: tuple[CappingException, ...] = ()


@dataclass(frozen=True)
class CappingRuleOutcome:
    rule_id: str
    rule_name: str
    rule_type: CappingRuleType
    cap_value: Decimal
    applied: bool
    exception_active: bool


@dataclass(frozen=True)
class CarryoverResult:
    available_days: Decimal
    capped_carryover: Decimal
    forfeited_days: Decimal
    rules_applied: tuple[CappingRuleOutcome, ...] = ()
    has_exception: bool = False
