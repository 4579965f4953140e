from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..bookings.model import BookingPair
from ..core.enums import BreakType, WarningCode


@dataclass(frozen=True)
class BreakRule:
    """One configured break of a day plan.

    ``fixed`` rules use the ``start_time``/``end_time`` window; ``variable`` and
    ``minimum-after`` rules use ``after_work_minutes`` as their threshold.
    """

    type: BreakType
    duration: int
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    after_work_minutes: Optional[int] = None
    is_paid: bool = False
    auto_deduct: bool = True
    minutes_difference: bool = False
    sort_order: int = 0


@dataclass(frozen=True)
class BreakContext:
    """What a break strategy may look at while deciding one rule."""

    work_pairs: tuple[BookingPair, ...]
    break_pairs: tuple[BookingPair, ...]
    gross_minutes: int
    recorded_minutes: int
    counted_minutes: int

    @property
    def has_manual_break(self) -> bool:
        return self.recorded_minutes > 0 or bool(self.break_pairs)


@dataclass(frozen=True)
class BreakDecision:
    minutes: int = 0
    warnings: tuple[WarningCode, ...] = ()


@dataclass(frozen=True)
class AppliedBreak:
    rule: BreakRule
    minutes: int
    is_paid: bool


@dataclass(frozen=True)
class BreakResult:
    """Break outcome for one day.

    ``deducted_minutes`` is the unpaid break time (manual plus rule deductions)
    subtracted from gross; ``paid_minutes`` is tracked but not subtracted.
    """

    deducted_minutes: int = 0
    paid_minutes: int = 0
    recorded_minutes: int = 0
    applied: tuple[AppliedBreak, ...] = ()
    warnings: tuple[WarningCode, ...] = ()
