from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Mapping, Optional

from ..bookings.model import Booking
from ..core.constants import MAX_SHIFT_ALTERNATIVES, MINUTES_PER_DAY
from ..core.enums import Category, Direction, ErrorCode, ShiftMatchType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ShiftDetectionInput:
    """Detection windows of one day plan (minutes from midnight, inclusive).

    A window counts only when both of its bounds are set.
    """

    plan_id: Hashable
    plan_code: str = ""
    arrive_from: Optional[int] = None
    arrive_to: Optional[int] = None
    depart_from: Optional[int] = None
    depart_to: Optional[int] = None
    alternative_plan_ids: tuple[Hashable, ...] = ()

    @property
    def has_arrival_window(self) -> bool:
        return self.arrive_from is not None and self.arrive_to is not None

    @property
    def has_departure_window(self) -> bool:
        return self.depart_from is not None and self.depart_to is not None

    @property
    def is_configured(self) -> bool:
        return self.has_arrival_window or self.has_departure_window


@dataclass(frozen=True)
class ShiftDetectionResult:
    matched_plan_id: Optional[Hashable] = None
    matched_plan_code: str = ""
    is_original_plan: bool = True
    matched_by: ShiftMatchType = ShiftMatchType.NONE
    error_code: Optional[ErrorCode] = None

    @property
    def has_error(self) -> bool:
        return self.error_code is not None


def first_and_last_work_times(bookings: Iterable[Booking]) -> tuple[Optional[int], Optional[int]]:
    """Earliest work arrival and latest work departure, as booked."""
    first = last = None
    for b in bookings:
        if b.category != Category.WORK:
            continue
        if b.direction == Direction.IN and (first is None or b.time < first):
            first = b.time
        elif b.direction == Direction.OUT and (last is None or b.time > last):
            last = b.time
    return first, last


def _within(minutes: Optional[int], start: int, end: int) -> bool:
    return minutes is not None and start <= minutes <= end


def match_plan(plan: ShiftDetectionInput, first_arrival: Optional[int], last_departure: Optional[int]) -> ShiftMatchType:
    """With both windows configured, both have to match."""
    arrival = plan.has_arrival_window and _within(first_arrival, plan.arrive_from, plan.arrive_to)
    departure = plan.has_departure_window and _within(last_departure, plan.depart_from, plan.depart_to)

    if plan.has_arrival_window and plan.has_departure_window:
        return ShiftMatchType.BOTH if arrival and departure else ShiftMatchType.NONE
    if plan.has_arrival_window:
        return ShiftMatchType.ARRIVAL if arrival else ShiftMatchType.NONE
    if plan.has_departure_window:
        return ShiftMatchType.DEPARTURE if departure else ShiftMatchType.NONE
    return ShiftMatchType.NONE


def _original(plan: ShiftDetectionInput, matched_by=ShiftMatchType.NONE, error_code=None) -> ShiftDetectionResult:
    return ShiftDetectionResult(
        matched_plan_id=plan.plan_id,
        matched_plan_code=plan.plan_code,
        is_original_plan=True,
        matched_by=matched_by,
        error_code=error_code,
    )


def detect_shift(
    assigned: Optional[ShiftDetectionInput],
    first_arrival: Optional[int],
    last_departure: Optional[int],
    *,
    candidates: Optional[Mapping[Hashable, ShiftDetectionInput]] = None,
) -> ShiftDetectionResult:
    """Pick the day plan whose detection windows fit the booked times.

    The assigned plan is tried first, then up to six of its alternatives in
    order, looked up in ``candidates``. No match keeps the assigned plan and
    reports ``no_matching_shift``.
    """
    if assigned is None:
        return ShiftDetectionResult()
    if not assigned.is_configured or (first_arrival is None and last_departure is None):
        return _original(assigned)

    matched_by = match_plan(assigned, first_arrival, last_departure)
    if matched_by != ShiftMatchType.NONE:
        return _original(assigned, matched_by)

    candidates = candidates or {}
    for plan_id in assigned.alternative_plan_ids[:MAX_SHIFT_ALTERNATIVES]:
        alternative = candidates.get(plan_id)
        if alternative is None:
            continue
        matched_by = match_plan(alternative, first_arrival, last_departure)
        if matched_by != ShiftMatchType.NONE:
            return ShiftDetectionResult(
                matched_plan_id=alternative.plan_id,
                matched_plan_code=alternative.plan_code,
                is_original_plan=False,
                matched_by=matched_by,
            )

    return _original(assigned, error_code=ErrorCode.NO_MATCHING_SHIFT)


def _window_errors(name: str, start: Optional[int], end: Optional[int]) -> list[str]:
    if start is None and end is None:
        return []
    if start is None or end is None:
        return [f"both {name}_from and {name}_to must be set together"]
    errors = []
    for label, value in ((f"{name}_from", start), (f"{name}_to", end)):
        if not 0 <= value <= MINUTES_PER_DAY:
            errors.append(f"{label} must be between 0 and {MINUTES_PER_DAY}")
    if start > end:
        errors.append(f"{name}_from must be <= {name}_to")
    return errors


def validate_shift_detection_config(config: ShiftDetectionInput) -> ShiftDetectionInput:
    errors = _window_errors("arrive", config.arrive_from, config.arrive_to)
    errors += _window_errors("depart", config.depart_from, config.depart_to)
    if len(config.alternative_plan_ids) > MAX_SHIFT_ALTERNATIVES:
        errors.append(f"at most {MAX_SHIFT_ALTERNATIVES} alternative plans are allowed")
    if errors:
        raise ValidationError("; ".join(errors))
    return config
