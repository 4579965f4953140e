"""Example: calculate one employee-day and its month without any storage layer.

The orchestration layer owns persistence; here the inputs are built by hand.
"""

from timecalc.bookings.model import Booking
from timecalc.breaks.model import BreakRule
from timecalc.common.timeutil import format_hhmm, parse_hhmm
from timecalc.core.enums import BreakType, CreditType, Direction, RoundingType
from timecalc.daily.model import DailyCalcInput, DayPlanConfig
from timecalc.main import create_engine
from timecalc.monthly.model import MonthlyCalcInput, MonthlyEvaluationRules
from timecalc.rules.rounding import RoundingConfig


def main():
    engine = create_engine()

    plan = DayPlanConfig(
        target_minutes=480,
        come_from=parse_hhmm("07:00"),
        go_to=parse_hhmm("19:00"),
        rounding_come=RoundingConfig(type=RoundingType.UP, interval=15),
        breaks=(BreakRule(type=BreakType.MINIMUM_AFTER, duration=30, after_work_minutes=360),),
    )
    day = engine.daily_calculator.calculate(
        DailyCalcInput(
            bookings=(
                Booking("in", parse_hhmm("08:01"), Direction.IN),
                Booking("out", parse_hhmm("17:00"), Direction.OUT),
            ),
            day_plan=plan,
        )
    )
    print("net", format_hhmm(day.net_minutes), "overtime", format_hhmm(day.overtime_minutes), day.warning_codes)

    month = engine.monthly_aggregator.calculate(
        MonthlyCalcInput(
            daily_values=[day] * 20,
            previous_carryover=120,
            evaluation_rules=MonthlyEvaluationRules(credit_type=CreditType.COMPLETE_CARRYOVER, cap_positive=600),
        )
    )
    print("flextime", format_hhmm(month.flextime_start), "->", format_hhmm(month.flextime_end))


if __name__ == "__main__":
    main()
