from __future__ import annotations

from ...common.timeutil import normalize_cross_midnight, overlap
from ...core.enums import WarningCode
from ..model import BreakContext, BreakDecision, BreakRule
from .base import BreakStrategy


def window_overlap(pairs, start: int, end: int) -> int:
    end = normalize_cross_midnight(start, end)
    return sum(overlap(p.start, p.end, start, end) for p in pairs)


class FixedBreakStrategy(BreakStrategy):
    """Fixed window: deduct the worked part of the window, capped at the duration.

    Skipped when a manual break already covers the window, unless auto-deduct.
    """

    def decide(self, rule: BreakRule, ctx: BreakContext) -> BreakDecision:
        if rule.start_time is None or rule.end_time is None:
            return BreakDecision()

        worked = window_overlap(ctx.work_pairs, rule.start_time, rule.end_time)
        minutes = min(rule.duration, worked)
        if minutes <= 0:
            return BreakDecision()

        manual_in_window = window_overlap(ctx.break_pairs, rule.start_time, rule.end_time) > 0
        if manual_in_window and not rule.auto_deduct:
            return BreakDecision()

        warnings = (WarningCode.AUTO_BREAK_APPLIED,) if rule.auto_deduct else ()
        return BreakDecision(minutes=minutes, warnings=warnings)
