from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Hashable, Mapping, Optional

from ..bookings.model import Booking, BookingPair
from ..breaks.model import AppliedBreak, BreakRule
from ..core.enums import ErrorCode, WarningCode
from ..rules.capping import CappingResult
from ..rules.rounding import RoundingConfig
from ..rules.tolerance import ToleranceConfig
from .shift import ShiftDetectionInput, ShiftDetectionResult
from .surcharge import SurchargeCalculationResult, SurchargeConfig


@dataclass(frozen=True)
class DayPlanConfig:
    """Resolved day plan for one employee-day. All times are minutes from midnight."""

    target_minutes: int = 0
    come_from: Optional[int] = None
    come_to: Optional[int] = None
    go_from: Optional[int] = None
    go_to: Optional[int] = None
    core_start: Optional[int] = None
    core_end: Optional[int] = None
    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    rounding_come: Optional[RoundingConfig] = None
    rounding_go: Optional[RoundingConfig] = None
    breaks: tuple[BreakRule, ...] = ()
    min_net_work_time: Optional[int] = None
    max_net_work_time: Optional[int] = None
    round_all_bookings: bool = False
    cap_to_evaluation_window: bool = False
    variable_work_time: bool = False
    surcharges: tuple[SurchargeConfig, ...] = ()


@dataclass(frozen=True)
class ShiftCandidate:
    """Alternative day plan offered to shift detection."""

    detection: ShiftDetectionInput
    day_plan: DayPlanConfig


@dataclass(frozen=True)
class DailyCalcInput:
    bookings: tuple[Booking, ...]
    day_plan: DayPlanConfig = field(default_factory=DayPlanConfig)
    work_date: Optional[date] = None
    is_holiday: bool = False
    holiday_category: int = 0
    shift_detection: Optional[ShiftDetectionInput] = None
    shift_candidates: tuple[ShiftCandidate, ...] = ()


@dataclass(frozen=True)
class DailyResult:
    target_minutes: int = 0
    gross_minutes: int = 0
    net_minutes: int = 0
    break_minutes: int = 0
    paid_break_minutes: int = 0
    overtime_minutes: int = 0
    undertime_minutes: int = 0
    first_come: Optional[int] = None
    last_go: Optional[int] = None
    booking_count: int = 0
    calculated_times: Mapping[Hashable, int] = field(default_factory=lambda: MappingProxyType({}))
    pairs: tuple[BookingPair, ...] = ()
    unpaired_in_ids: tuple[Hashable, ...] = ()
    unpaired_out_ids: tuple[Hashable, ...] = ()
    error_codes: tuple[ErrorCode, ...] = ()
    warning_codes: tuple[WarningCode, ...] = ()
    applied_breaks: tuple[AppliedBreak, ...] = ()
    capping: CappingResult = field(default_factory=CappingResult)
    surcharges: SurchargeCalculationResult = field(default_factory=SurchargeCalculationResult)
    shift: Optional[ShiftDetectionResult] = None
    work_date: Optional[date] = None

    @property
    def has_error(self) -> bool:
        return len(self.error_codes) > 0

    @property
    def capped_minutes(self) -> int:
        return self.capping.total_capped
