from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Hashable, Optional, Sequence

from ..bookings.model import Booking
from ..bookings.pairing import BookingPairer, gross_minutes
from ..breaks.calculator import BreakCalculator
from ..common.timeutil import is_valid_time_of_day
from ..core.enums import Category, Direction, ErrorCode, WarningCode
from ..rules.capping import CappedTime, aggregate_capping, cap_arrival, cap_departure, max_net_time_capping
from ..rules.rounding import Rounder, resolve_anchor
from ..rules.tolerance import ToleranceConfig, apply_come_tolerance, apply_go_tolerance
from .model import DailyCalcInput, DailyResult, DayPlanConfig
from .shift import ShiftDetectionResult, detect_shift, first_and_last_work_times
from .surcharge import calculate_surcharges, work_periods

logger = logging.getLogger(__name__)


def _append_once(codes: list, code) -> None:
    if code not in codes:
        codes.append(code)


def overtime_undertime(net_minutes: int, target_minutes: int) -> tuple[int, int]:
    return max(net_minutes - target_minutes, 0), max(target_minutes - net_minutes, 0)


def validate_time_window(minutes: int, earliest: Optional[int], latest: Optional[int], early: ErrorCode, late: ErrorCode) -> list[ErrorCode]:
    errors: list[ErrorCode] = []
    if earliest is not None and minutes < earliest:
        errors.append(early)
    if latest is not None and minutes > latest:
        errors.append(late)
    return errors


def validate_core_time(first_come: Optional[int], last_go: Optional[int], core_start: Optional[int], core_end: Optional[int]) -> list[ErrorCode]:
    errors: list[ErrorCode] = []
    if core_start is not None and (first_come is None or first_come > core_start):
        errors.append(ErrorCode.MISSED_CORE_START)
    if core_end is not None and (last_go is None or last_go < core_end):
        errors.append(ErrorCode.MISSED_CORE_END)
    return errors


class DailyCalculator:
    """Turns one employee-day of bookings into a ``DailyResult``.

    Phases: validate -> tolerance/rounding (and optional window capping) ->
    pairing -> gross -> breaks -> net/overtime/undertime. Anomalies never
    raise; they become error or warning codes on a best-effort result.
    """

    def __init__(
        self,
        *,
        pairer: Optional[BookingPairer] = None,
        break_calculator: Optional[BreakCalculator] = None,
        round_relative_to_plan: bool = False,
    ):
        self._pairer = pairer or BookingPairer()
        self._breaks = break_calculator or BreakCalculator()
        self._round_relative_to_plan = bool(round_relative_to_plan)

    def calculate(self, data: DailyCalcInput) -> DailyResult:
        plan = data.day_plan
        target = max(int(plan.target_minutes or 0), 0)
        bookings = list(data.bookings or ())
        errors: list[ErrorCode] = []
        warnings: list[WarningCode] = []

        if not bookings:
            return self._without_work(data, target, [ErrorCode.NO_BOOKINGS], booking_count=0)

        valid = self._validate(bookings, errors)
        if not valid:
            return self._without_work(data, target, errors, booking_count=len(bookings))

        plan, shift = self._select_plan(data, valid)
        if shift is not None and shift.has_error:
            errors.append(shift.error_code)
        target = max(int(plan.target_minutes or 0), 0)

        processed, validation_times, capped_items = self._process(valid, plan)
        calculated_times = {b.booking_id: b.time for b in processed}

        pairing = self._pairer.pair(processed)
        warnings.extend(pairing.warnings)
        self._unpaired_errors(processed, pairing.unpaired_in_ids, pairing.unpaired_out_ids, errors)

        first_come = min((t for b, t in validation_times if b.direction == Direction.IN), default=None)
        last_go = max((t for b, t in validation_times if b.direction == Direction.OUT), default=None)
        if first_come is not None:
            errors.extend(validate_time_window(first_come, plan.come_from, plan.come_to, ErrorCode.EARLY_COME, ErrorCode.LATE_COME))
        if last_go is not None:
            errors.extend(validate_time_window(last_go, plan.go_from, plan.go_to, ErrorCode.EARLY_GO, ErrorCode.LATE_GO))
        errors.extend(validate_core_time(first_come, last_go, plan.core_start, plan.core_end))

        gross = gross_minutes(pairing.pairs)
        breaks = self._breaks.calculate(pairing.pairs, plan.breaks, gross_minutes=gross)
        warnings.extend(breaks.warnings)

        net = gross - breaks.deducted_minutes
        max_capped = max_net_time_capping(net, plan.max_net_work_time)
        if max_capped is not None:
            warnings.append(WarningCode.MAX_TIME_REACHED)
        if plan.min_net_work_time is not None and net < plan.min_net_work_time:
            errors.append(ErrorCode.BELOW_MIN_WORK_TIME)

        overtime, undertime = overtime_undertime(net, target)
        surcharges = calculate_surcharges(
            work_periods(pairing.pairs),
            plan.surcharges or (),
            is_holiday=data.is_holiday,
            holiday_category=data.holiday_category,
        )

        unique_errors: list[ErrorCode] = []
        for code in errors:
            _append_once(unique_errors, code)
        unique_warnings: list[WarningCode] = []
        for code in warnings:
            _append_once(unique_warnings, code)

        return DailyResult(
            target_minutes=target,
            gross_minutes=gross,
            net_minutes=net,
            break_minutes=breaks.deducted_minutes,
            paid_break_minutes=breaks.paid_minutes,
            overtime_minutes=overtime,
            undertime_minutes=undertime,
            first_come=first_come,
            last_go=last_go,
            booking_count=len(bookings),
            calculated_times=MappingProxyType(calculated_times),
            pairs=pairing.pairs,
            unpaired_in_ids=pairing.unpaired_in_ids,
            unpaired_out_ids=pairing.unpaired_out_ids,
            error_codes=tuple(unique_errors),
            warning_codes=tuple(unique_warnings),
            applied_breaks=breaks.applied,
            capping=aggregate_capping([*capped_items, max_capped]),
            surcharges=surcharges,
            shift=shift,
            work_date=data.work_date,
        )

    def _validate(self, bookings: Sequence[Booking], errors: list[ErrorCode]) -> list[Booking]:
        valid: list[Booking] = []
        seen_in_times: set[int] = set()
        for b in bookings:
            if not is_valid_time_of_day(b.time):
                _append_once(errors, ErrorCode.INVALID_TIME)
                logger.debug("booking %s skipped: invalid time %r", b.booking_id, b.time)
                continue
            if b.category == Category.WORK and b.direction == Direction.IN:
                if b.time in seen_in_times:
                    _append_once(errors, ErrorCode.DUPLICATE_IN_TIME)
                    logger.debug("booking %s skipped: duplicate arrival at %s", b.booking_id, b.time)
                    continue
                seen_in_times.add(b.time)
            valid.append(b)
        return valid

    @staticmethod
    def _select_plan(data: DailyCalcInput, bookings: Sequence[Booking]) -> tuple[DayPlanConfig, Optional[ShiftDetectionResult]]:
        """Swap in the alternative plan chosen by shift detection, if any."""
        if data.shift_detection is None:
            return data.day_plan, None
        by_id = {c.detection.plan_id: c for c in data.shift_candidates}
        first, last = first_and_last_work_times(bookings)
        shift = detect_shift(
            data.shift_detection,
            first,
            last,
            candidates={plan_id: c.detection for plan_id, c in by_id.items()},
        )
        if not shift.is_original_plan and shift.matched_plan_id in by_id:
            logger.debug("shift detection switched to plan %s (%s)", shift.matched_plan_code, shift.matched_by.value)
            return by_id[shift.matched_plan_id].day_plan, shift
        return data.day_plan, shift

    def _process(self, bookings: Sequence[Booking], plan: DayPlanConfig):
        """Apply tolerance, rounding and window capping to work bookings.

        Returns the processed bookings, the pre-capping (booking, time) pairs
        used for window validation, and the capping items.
        """
        rounder = Rounder(
            come=resolve_anchor(plan.rounding_come, plan_start=plan.come_from, default_relative=self._round_relative_to_plan),
            go=resolve_anchor(plan.rounding_go, plan_start=plan.come_from, default_relative=self._round_relative_to_plan),
        )
        tolerance = plan.tolerance or ToleranceConfig()

        first_in = last_out = None
        if not plan.round_all_bookings:
            for idx, b in enumerate(bookings):
                if b.category != Category.WORK:
                    continue
                if b.direction == Direction.IN and first_in is None:
                    first_in = idx
                if b.direction == Direction.OUT:
                    last_out = idx

        processed: list[Booking] = []
        validation: list[tuple[Booking, int]] = []
        capped_items: list[CappedTime] = []
        for idx, b in enumerate(bookings):
            if b.category != Category.WORK:
                processed.append(b)
                continue

            if b.direction == Direction.IN:
                minutes = apply_come_tolerance(b.time, plan.come_from, tolerance)
                if plan.round_all_bookings or idx == first_in:
                    minutes = rounder.round_come(minutes)
            else:
                minutes = apply_go_tolerance(b.time, plan.go_from, plan.go_to, tolerance)
                if plan.round_all_bookings or idx == last_out:
                    minutes = rounder.round_go(minutes)
            validation.append((b, minutes))

            if plan.cap_to_evaluation_window:
                if b.direction == Direction.IN:
                    minutes, capped = cap_arrival(
                        minutes,
                        plan.come_from,
                        tolerance_minus=tolerance.come_minus,
                        variable_work_time=plan.variable_work_time,
                    )
                else:
                    minutes, capped = cap_departure(minutes, plan.go_to, tolerance_plus=tolerance.go_plus)
                if capped is not None:
                    capped_items.append(capped)

            processed.append(b.at(minutes))
        return processed, validation, capped_items

    @staticmethod
    def _unpaired_errors(
        bookings: Sequence[Booking],
        unpaired_in: Sequence[Hashable],
        unpaired_out: Sequence[Hashable],
        errors: list[ErrorCode],
    ) -> None:
        category_of = {b.booking_id: b.category for b in bookings}
        for booking_id in unpaired_in:
            if category_of.get(booking_id) == Category.WORK:
                _append_once(errors, ErrorCode.MISSING_GO)
            else:
                _append_once(errors, ErrorCode.UNPAIRED_BOOKING)
        for booking_id in unpaired_out:
            if category_of.get(booking_id) == Category.WORK:
                _append_once(errors, ErrorCode.MISSING_COME)
            else:
                _append_once(errors, ErrorCode.UNPAIRED_BOOKING)

    @staticmethod
    def _without_work(data: DailyCalcInput, target: int, errors: list[ErrorCode], *, booking_count: int) -> DailyResult:
        return DailyResult(
            target_minutes=target,
            undertime_minutes=target,
            booking_count=booking_count,
            error_codes=tuple(errors),
            work_date=data.work_date,
        )


def calculate_day(data: DailyCalcInput, *, round_relative_to_plan: bool = False) -> DailyResult:
    return DailyCalculator(round_relative_to_plan=round_relative_to_plan).calculate(data)
