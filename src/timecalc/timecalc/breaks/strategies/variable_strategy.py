from __future__ import annotations

from ...core.enums import WarningCode
from ..model import BreakContext, BreakDecision, BreakRule
from .base import BreakStrategy


class VariableBreakStrategy(BreakStrategy):
    """Variable break: only applies when the employee booked no break at all."""

    def decide(self, rule: BreakRule, ctx: BreakContext) -> BreakDecision:
        if ctx.has_manual_break:
            return BreakDecision()
        if rule.after_work_minutes is not None and ctx.gross_minutes < rule.after_work_minutes:
            return BreakDecision()
        if not rule.auto_deduct:
            return BreakDecision(warnings=(WarningCode.NO_BREAK_RECORDED,))
        return BreakDecision(
            minutes=rule.duration,
            warnings=(WarningCode.NO_BREAK_RECORDED, WarningCode.AUTO_BREAK_APPLIED),
        )
