from src.timecalc.timecalc.bookings.model import Booking
from src.timecalc.timecalc.breaks.model import BreakRule
from src.timecalc.timecalc.core.enums import (
    BreakType,
    CappingSource,
    Category,
    Direction,
    ErrorCode,
    RoundingType,
    ShiftMatchType,
    WarningCode,
)
from src.timecalc.timecalc.daily.calculator import DailyCalculator, calculate_day
from src.timecalc.timecalc.daily.model import DailyCalcInput, DayPlanConfig, ShiftCandidate
from src.timecalc.timecalc.daily.shift import ShiftDetectionInput
from src.timecalc.timecalc.daily.surcharge import SurchargeConfig
from src.timecalc.timecalc.rules.rounding import RoundingConfig
from src.timecalc.timecalc.rules.tolerance import ToleranceConfig


def _in(booking_id, time):
    return Booking(booking_id, time, Direction.IN)


def _out(booking_id, time):
    return Booking(booking_id, time, Direction.OUT)


def _day(*bookings, **plan):
    return DailyCalcInput(bookings=tuple(bookings), day_plan=DayPlanConfig(**plan))


STANDARD_BREAK = (BreakRule(type=BreakType.MINIMUM_AFTER, duration=30, after_work_minutes=360),)


def test_standard_day_with_minimum_break():
    result = calculate_day(_day(_in("a", 480), _out("b", 1020), target_minutes=480, breaks=STANDARD_BREAK))

    assert result.gross_minutes == 540
    assert result.break_minutes == 30
    assert result.net_minutes == 510
    assert result.overtime_minutes == 30
    assert result.undertime_minutes == 0
    assert result.first_come == 480
    assert result.last_go == 1020
    assert not result.has_error


def test_missing_departure():
    result = calculate_day(_day(_in("a", 480), target_minutes=480))

    assert ErrorCode.MISSING_GO in result.error_codes
    assert result.has_error
    assert result.net_minutes == 0
    assert result.unpaired_in_ids == ("a",)


def test_missing_arrival():
    result = calculate_day(_day(_out("b", 1020), target_minutes=480))

    assert ErrorCode.MISSING_COME in result.error_codes
    assert result.net_minutes == 0


def test_no_bookings_leaves_full_undertime():
    result = calculate_day(_day(target_minutes=480))

    assert result.error_codes == (ErrorCode.NO_BOOKINGS,)
    assert result.undertime_minutes == 480
    assert result.net_minutes == 0


def test_unpaired_break_booking():
    result = calculate_day(
        _day(_in("a", 480), Booking("b", 720, Direction.OUT, Category.BREAK), _out("c", 1020), target_minutes=480)
    )

    assert result.error_codes == (ErrorCode.UNPAIRED_BOOKING,)
    assert result.gross_minutes == 540


def test_rounding_applies_to_calculated_times():
    result = calculate_day(
        _day(
            _in("a", 481),
            _out("b", 1020),
            rounding_come=RoundingConfig(type=RoundingType.UP, interval=15),
        )
    )

    assert result.calculated_times["a"] == 495
    assert result.calculated_times["b"] == 1020
    assert result.gross_minutes == 525


def test_tolerance_snaps_before_rounding():
    result = calculate_day(
        _day(
            _in("a", 484),
            _out("b", 1020),
            come_from=480,
            tolerance=ToleranceConfig(come_plus=5),
            rounding_come=RoundingConfig(type=RoundingType.UP, interval=15),
        )
    )

    assert result.calculated_times["a"] == 480
    assert result.gross_minutes == 540


def test_only_first_arrival_and_last_departure_are_rounded():
    bookings = (_in("a", 481), _out("b", 720), _in("c", 751), _out("d", 1029))
    rounding = dict(
        rounding_come=RoundingConfig(type=RoundingType.UP, interval=15),
        rounding_go=RoundingConfig(type=RoundingType.DOWN, interval=15),
    )

    result = calculate_day(_day(*bookings, **rounding))
    assert dict(result.calculated_times) == {"a": 495, "b": 720, "c": 751, "d": 1020}
    assert result.gross_minutes == 494

    every = calculate_day(_day(*bookings, round_all_bookings=True, **rounding))
    assert every.calculated_times["c"] == 765


def test_global_relative_rounding_anchors_at_plan_start():
    calculator = DailyCalculator(round_relative_to_plan=True)
    result = calculator.calculate(
        _day(
            _in("a", 441),
            _out("b", 1020),
            come_from=425,
            rounding_come=RoundingConfig(type=RoundingType.UP, interval=15),
        )
    )

    assert result.calculated_times["a"] == 455


def test_time_window_violations():
    result = calculate_day(_day(_in("a", 560), _out("b", 900), come_to=540, go_from=960))

    assert ErrorCode.LATE_COME in result.error_codes
    assert ErrorCode.EARLY_GO in result.error_codes


def test_core_time_missed():
    result = calculate_day(_day(_in("a", 600), _out("b", 1020), core_start=540, core_end=900))

    assert result.error_codes == (ErrorCode.MISSED_CORE_START,)


def test_duplicate_arrival_is_excluded():
    result = calculate_day(_day(_in("a", 480), _in("a2", 480), _out("b", 1020)))

    assert result.error_codes == (ErrorCode.DUPLICATE_IN_TIME,)
    assert result.gross_minutes == 540
    assert "a2" not in result.calculated_times


def test_invalid_time_is_excluded():
    result = calculate_day(_day(_in("a", 480), _out("b", 1020), _out("bad", 1500)))

    assert result.error_codes == (ErrorCode.INVALID_TIME,)
    assert result.gross_minutes == 540
    assert result.booking_count == 3


def test_cross_midnight_shift():
    result = calculate_day(_day(_in("a", 1320), _out("b", 360), target_minutes=480))

    assert result.gross_minutes == 480
    assert result.net_minutes == 480
    assert WarningCode.CROSS_MIDNIGHT in result.warning_codes
    assert not result.has_error


def test_max_net_work_time_reported_without_breaking_net_identity():
    result = calculate_day(_day(_in("a", 480), _out("b", 1020), breaks=STANDARD_BREAK, max_net_work_time=480))

    assert WarningCode.MAX_TIME_REACHED in result.warning_codes
    assert result.net_minutes == result.gross_minutes - result.break_minutes == 510
    assert result.capping.items[0].source == CappingSource.MAX_NET_TIME
    assert result.capped_minutes == 30


def test_below_min_net_work_time():
    result = calculate_day(_day(_in("a", 480), _out("b", 720), min_net_work_time=300))

    assert result.error_codes == (ErrorCode.BELOW_MIN_WORK_TIME,)


def test_evaluation_window_capping_keeps_validation_on_raw_time():
    result = calculate_day(
        _day(_in("a", 360), _out("b", 1020), come_from=420, cap_to_evaluation_window=True)
    )

    assert result.calculated_times["a"] == 420
    assert result.gross_minutes == 600
    assert result.capped_minutes == 60
    assert result.capping.items[0].source == CappingSource.EARLY_ARRIVAL
    assert ErrorCode.EARLY_COME in result.error_codes


def test_night_surcharge_on_overnight_shift():
    night = SurchargeConfig(account_code="NIGHT", time_from=1320, time_to=360)
    result = calculate_day(_day(_in("a", 1320), _out("b", 360), surcharges=(night,)))

    assert result.surcharges.total_minutes == 480
    assert {s.account_code for s in result.surcharges.surcharges} == {"NIGHT"}


def test_net_identity_holds_across_days():
    days = [
        _day(_in("a", 480), _out("b", 1020), target_minutes=480, breaks=STANDARD_BREAK),
        _day(_in("a", 480), _out("b", 780), target_minutes=480, breaks=STANDARD_BREAK),
        _day(_in("a", 480), target_minutes=480),
        _day(target_minutes=420),
        _day(_in("a", 1320), _out("b", 360), target_minutes=480, breaks=STANDARD_BREAK),
    ]
    for data in days:
        result = calculate_day(data)
        assert result.net_minutes == result.gross_minutes - result.break_minutes
        assert result.overtime_minutes - result.undertime_minutes == result.net_minutes - result.target_minutes
        assert result.net_minutes >= 0


def test_window_capping_without_tolerance_config():
    result = calculate_day(
        _day(_in("a", 360), _out("b", 1200), come_from=420, go_to=1140, tolerance=None, cap_to_evaluation_window=True)
    )

    assert result.calculated_times == {"a": 420, "b": 1140}
    assert result.gross_minutes == 720
    assert result.capped_minutes == 120


def test_missing_surcharge_list_is_treated_as_empty():
    result = calculate_day(_day(_in("a", 480), _out("b", 1020), surcharges=None))

    assert result.surcharges.total_minutes == 0
    assert result.gross_minutes == 540


EARLY = ShiftDetectionInput(plan_id="early", plan_code="E", arrive_from=300, arrive_to=420, alternative_plan_ids=("late",))
LATE = ShiftDetectionInput(plan_id="late", plan_code="L", arrive_from=780, arrive_to=900)


def test_shift_detection_switches_to_matching_plan():
    data = DailyCalcInput(
        bookings=(_in("a", 840), _out("b", 1320)),
        day_plan=DayPlanConfig(target_minutes=480),
        shift_detection=EARLY,
        shift_candidates=(ShiftCandidate(detection=LATE, day_plan=DayPlanConfig(target_minutes=420)),),
    )
    result = calculate_day(data)

    assert result.shift.matched_plan_code == "L"
    assert not result.shift.is_original_plan
    assert result.shift.matched_by == ShiftMatchType.ARRIVAL
    assert result.target_minutes == 420
    assert result.overtime_minutes == 60
    assert not result.has_error


def test_shift_detection_without_match_keeps_plan_and_flags_error():
    data = DailyCalcInput(
        bookings=(_in("a", 600), _out("b", 1080)),
        day_plan=DayPlanConfig(target_minutes=480),
        shift_detection=EARLY,
        shift_candidates=(ShiftCandidate(detection=LATE, day_plan=DayPlanConfig(target_minutes=420)),),
    )
    result = calculate_day(data)

    assert result.shift.is_original_plan
    assert result.target_minutes == 480
    assert ErrorCode.NO_MATCHING_SHIFT in result.error_codes
    assert result.gross_minutes == 480
