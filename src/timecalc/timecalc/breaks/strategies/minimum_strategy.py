from __future__ import annotations

from ...core.enums import WarningCode
from ..model import BreakContext, BreakDecision, BreakRule
from .base import BreakStrategy


class MinimumAfterBreakStrategy(BreakStrategy):
    """Minimum break once work time reaches the threshold.

    Only the shortfall between break time already counted and the required
    minimum is deducted. With ``minutes_difference`` the requirement grows
    minute by minute past the threshold, up to ``duration``.
    """

    def decide(self, rule: BreakRule, ctx: BreakContext) -> BreakDecision:
        threshold = rule.after_work_minutes
        if threshold is None or ctx.gross_minutes < threshold:
            return BreakDecision()

        required = rule.duration
        if rule.minutes_difference:
            required = min(rule.duration, ctx.gross_minutes - threshold)

        shortfall = required - ctx.counted_minutes
        if shortfall <= 0:
            return BreakDecision()

        reason = WarningCode.SHORT_BREAK if ctx.recorded_minutes > 0 else WarningCode.NO_BREAK_RECORDED
        if not rule.auto_deduct:
            return BreakDecision(warnings=(reason,))
        return BreakDecision(minutes=shortfall, warnings=(reason, WarningCode.AUTO_BREAK_APPLIED))
