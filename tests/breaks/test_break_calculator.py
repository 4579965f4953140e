from src.timecalc.timecalc.bookings.model import Booking
from src.timecalc.timecalc.bookings.pairing import gross_minutes, pair_bookings
from src.timecalc.timecalc.breaks.calculator import BreakCalculator
from src.timecalc.timecalc.breaks.model import BreakRule
from src.timecalc.timecalc.core.enums import BreakType, Category, Direction, WarningCode


def _pairs(start, end, manual=None):
    bookings = [Booking("in", start, Direction.IN), Booking("out", end, Direction.OUT)]
    if manual is not None:
        bookings += [
            Booking("b-out", manual[0], Direction.OUT, Category.BREAK),
            Booking("b-in", manual[1], Direction.IN, Category.BREAK),
        ]
    return pair_bookings(bookings).pairs


def _calculate(pairs, rules):
    return BreakCalculator().calculate(pairs, rules, gross_minutes=gross_minutes(pairs))


MINIMUM_30_AFTER_6H = BreakRule(type=BreakType.MINIMUM_AFTER, duration=30, after_work_minutes=360)


def test_minimum_after_deducts_when_no_break_booked():
    result = _calculate(_pairs(480, 1020), [MINIMUM_30_AFTER_6H])

    assert result.deducted_minutes == 30
    assert result.warnings == (WarningCode.NO_BREAK_RECORDED, WarningCode.AUTO_BREAK_APPLIED)


def test_minimum_after_tops_up_a_short_manual_break():
    result = _calculate(_pairs(480, 1020, manual=(720, 740)), [MINIMUM_30_AFTER_6H])

    assert result.recorded_minutes == 20
    assert result.deducted_minutes == 30
    assert result.applied[0].minutes == 10
    assert WarningCode.MANUAL_BREAK in result.warnings
    assert WarningCode.SHORT_BREAK in result.warnings


def test_minimum_after_satisfied_by_manual_break():
    result = _calculate(_pairs(480, 1020, manual=(720, 765)), [MINIMUM_30_AFTER_6H])

    assert result.deducted_minutes == 45
    assert result.applied == ()


def test_minimum_after_below_and_at_threshold():
    assert _calculate(_pairs(480, 779), [MINIMUM_30_AFTER_6H]).deducted_minutes == 0
    assert _calculate(_pairs(480, 840), [MINIMUM_30_AFTER_6H]).deducted_minutes == 30


def test_minimum_after_minutes_difference_grows_past_threshold():
    rule = BreakRule(type=BreakType.MINIMUM_AFTER, duration=30, after_work_minutes=360, minutes_difference=True)

    assert _calculate(_pairs(480, 850), [rule]).deducted_minutes == 10
    assert _calculate(_pairs(480, 1020), [rule]).deducted_minutes == 30


def test_fixed_break_deducts_worked_part_of_window():
    rule = BreakRule(type=BreakType.FIXED, duration=30, start_time=720, end_time=750)

    assert _calculate(_pairs(480, 1020), [rule]).deducted_minutes == 30
    assert _calculate(_pairs(480, 735), [rule]).deducted_minutes == 15
    assert _calculate(_pairs(780, 1020), [rule]).deducted_minutes == 0


def test_fixed_break_without_auto_deduct_yields_to_manual_break():
    rule = BreakRule(type=BreakType.FIXED, duration=30, start_time=720, end_time=750, auto_deduct=False)
    result = _calculate(_pairs(480, 1020, manual=(720, 735)), [rule])

    assert result.deducted_minutes == 15
    assert result.applied == ()


def test_variable_break_only_without_manual_break():
    rule = BreakRule(type=BreakType.VARIABLE, duration=30)

    assert _calculate(_pairs(480, 1020), [rule]).deducted_minutes == 30
    assert _calculate(_pairs(480, 1020, manual=(720, 730)), [rule]).deducted_minutes == 10


def test_paid_break_is_tracked_not_deducted():
    rule = BreakRule(type=BreakType.FIXED, duration=15, start_time=600, end_time=615, is_paid=True)
    result = _calculate(_pairs(480, 1020), [rule])

    assert result.deducted_minutes == 0
    assert result.paid_minutes == 15
    assert result.applied[0].is_paid


def test_breaks_never_exceed_gross_time():
    rule = BreakRule(type=BreakType.VARIABLE, duration=60)
    result = _calculate(_pairs(480, 500), [rule])

    assert result.deducted_minutes == 20


def test_rules_apply_in_sort_order():
    fixed = BreakRule(type=BreakType.FIXED, duration=30, start_time=720, end_time=750, sort_order=1)
    minimum = BreakRule(type=BreakType.MINIMUM_AFTER, duration=45, after_work_minutes=540, sort_order=2)
    result = _calculate(_pairs(480, 1080), [minimum, fixed])

    assert [a.rule for a in result.applied] == [fixed, minimum]
    assert result.deducted_minutes == 45
