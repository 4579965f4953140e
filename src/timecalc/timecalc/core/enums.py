from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Booking direction."""

    IN = "in"
    OUT = "out"


class Category(str, Enum):
    """Booking category: work interval or break interval."""

    WORK = "work"
    BREAK = "break"


class RoundingType(str, Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"
    NEAREST = "nearest"
    ADD = "add"
    SUBTRACT = "subtract"


class BreakType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"
    MINIMUM_AFTER = "minimum-after"


class CreditType(str, Enum):
    """Monthly flextime credit policy."""

    NO_EVALUATION = "no_evaluation"
    COMPLETE_CARRYOVER = "complete_carryover"
    AFTER_THRESHOLD = "after_threshold"
    NO_CARRYOVER = "no_carryover"


class VacationBasis(str, Enum):
    CALENDAR_YEAR = "calendar-year"
    ENTRY_DATE = "entry-date"


class SpecialCalcType(str, Enum):
    AGE = "age"
    TENURE = "tenure"
    DISABILITY = "disability"


class CappingSource(str, Enum):
    EARLY_ARRIVAL = "early_arrival"
    LATE_LEAVE = "late_leave"
    MAX_NET_TIME = "max_net_time"


class CappingRuleType(str, Enum):
    """Vacation carryover capping rule kinds."""

    YEAR_END = "year_end"
    MID_YEAR = "mid_year"


class ExemptionType(str, Enum):
    FULL = "full"
    PARTIAL = "partial"


class ShiftMatchType(str, Enum):
    """Which detection window(s) selected the day plan."""

    NONE = "none"
    ARRIVAL = "arrival"
    DEPARTURE = "departure"
    BOTH = "both"


class ErrorCode(str, Enum):
    """Closed taxonomy of hard anomalies reported on a daily result."""

    MISSING_COME = "missing_come"
    MISSING_GO = "missing_go"
    UNPAIRED_BOOKING = "unpaired_booking"
    EARLY_COME = "early_come"
    LATE_COME = "late_come"
    EARLY_GO = "early_go"
    LATE_GO = "late_go"
    MISSED_CORE_START = "missed_core_start"
    MISSED_CORE_END = "missed_core_end"
    BELOW_MIN_WORK_TIME = "below_min_work_time"
    NO_BOOKINGS = "no_bookings"
    INVALID_TIME = "invalid_time"
    DUPLICATE_IN_TIME = "duplicate_in_time"
    NO_MATCHING_SHIFT = "no_matching_shift"


class WarningCode(str, Enum):
    """Soft anomalies; daily and monthly level."""

    CROSS_MIDNIGHT = "cross_midnight"
    MAX_TIME_REACHED = "max_time_reached"
    MANUAL_BREAK = "manual_break"
    NO_BREAK_RECORDED = "no_break_recorded"
    SHORT_BREAK = "short_break"
    AUTO_BREAK_APPLIED = "auto_break_applied"

    MONTHLY_CAP = "monthly_cap"
    FLEXTIME_CAPPED = "flextime_capped"
    BELOW_THRESHOLD = "below_threshold"
    NO_CARRYOVER = "no_carryover"
