from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import CreditType, WarningCode


class DailyValueLike(Protocol):
    """Anything with the daily minute totals; ``DailyResult`` qualifies."""

    gross_minutes: int
    net_minutes: int
    target_minutes: int
    overtime_minutes: int
    undertime_minutes: int
    break_minutes: int

    @property
    def has_error(self) -> bool: ...


@dataclass(frozen=True)
class DailyValue:
    """Persisted daily totals as handed in by the orchestration layer."""

    gross_minutes: int = 0
    net_minutes: int = 0
    target_minutes: int = 0
    overtime_minutes: int = 0
    undertime_minutes: int = 0
    break_minutes: int = 0
    has_error: bool = False
    work_date: Optional[date] = None


@dataclass(frozen=True)
class AbsenceSummary:
    vacation_days: Decimal = Decimal("0")
    sick_days: int = 0
    other_absence_days: int = 0


@dataclass(frozen=True)
class MonthlyEvaluationRules:
    """Credit policy and caps (minutes). ``cap_negative`` is stored as a positive amount."""

    credit_type: CreditType = CreditType.NO_EVALUATION
    flextime_threshold: Optional[int] = None
    max_flextime_per_month: Optional[int] = None
    cap_positive: Optional[int] = None
    cap_negative: Optional[int] = None
    annual_floor: Optional[int] = None


@dataclass(frozen=True)
class MonthlyCalcInput:
    daily_values: Sequence[DailyValueLike] = ()
    previous_carryover: int = 0
    evaluation_rules: Optional[MonthlyEvaluationRules] = None
    absence_summary: AbsenceSummary = field(default_factory=AbsenceSummary)


@dataclass(frozen=True)
class CreditDecision:
    credited: int
    forfeited: int = 0
    warnings: tuple[WarningCode, ...] = ()
    resets_balance: bool = False


@dataclass(frozen=True)
class MonthlyResult:
    total_gross_minutes: int = 0
    total_net_minutes: int = 0
    total_target_minutes: int = 0
    total_overtime_minutes: int = 0
    total_undertime_minutes: int = 0
    total_break_minutes: int = 0

    flextime_start: int = 0
    flextime_change: int = 0
    flextime_raw: int = 0
    flextime_credited: int = 0
    flextime_forfeited: int = 0
    flextime_end: int = 0

    work_days: int = 0
    days_with_errors: int = 0

    vacation_taken: Decimal = Decimal("0")
    sick_days: int = 0
    other_absence_days: int = 0

    warnings: tuple[WarningCode, ...] = ()
