from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..bookings.model import BookingPair
from ..bookings.pairing import recorded_break_minutes
from ..core.enums import Category, WarningCode
from .factory import BreakStrategyFactory
from .model import AppliedBreak, BreakContext, BreakResult, BreakRule

logger = logging.getLogger(__name__)


def _unique(codes: Iterable[WarningCode]) -> tuple[WarningCode, ...]:
    seen: list[WarningCode] = []
    for code in codes:
        if code not in seen:
            seen.append(code)
    return tuple(seen)


class BreakCalculator:
    """Applies a day plan's break rules, in ``sort_order``, to paired intervals.

    Manual break pairs are always counted. Each rule may only consume work
    time that is still left, so the total never exceeds gross time.
    """

    def __init__(self, *, strategy_factory: Optional[BreakStrategyFactory] = None):
        self._factory = strategy_factory or BreakStrategyFactory()

    def calculate(self, pairs: Sequence[BookingPair], rules: Sequence[BreakRule], *, gross_minutes: int) -> BreakResult:
        work_pairs = tuple(p for p in pairs if p.category == Category.WORK)
        break_pairs = tuple(p for p in pairs if p.category == Category.BREAK)
        gross_minutes = max(int(gross_minutes), 0)

        recorded = recorded_break_minutes(break_pairs)
        deducted = min(recorded, gross_minutes)
        paid = 0
        warnings: list[WarningCode] = []
        applied: list[AppliedBreak] = []
        if recorded > 0:
            warnings.append(WarningCode.MANUAL_BREAK)

        for rule in sorted(rules or (), key=lambda r: r.sort_order):
            ctx = BreakContext(
                work_pairs=work_pairs,
                break_pairs=break_pairs,
                gross_minutes=gross_minutes,
                recorded_minutes=recorded,
                counted_minutes=deducted + paid,
            )
            decision = self._factory.for_rule(rule).decide(rule, ctx)
            warnings.extend(decision.warnings)

            remaining = gross_minutes - deducted - paid
            minutes = min(max(decision.minutes, 0), remaining)
            if minutes <= 0:
                continue
            if rule.is_paid:
                paid += minutes
            else:
                deducted += minutes
            applied.append(AppliedBreak(rule=rule, minutes=minutes, is_paid=rule.is_paid))
            logger.debug("break rule %s applied: %s min (paid=%s)", rule.type, minutes, rule.is_paid)

        return BreakResult(
            deducted_minutes=deducted,
            paid_minutes=paid,
            recorded_minutes=recorded,
            applied=tuple(applied),
            warnings=_unique(warnings),
        )
