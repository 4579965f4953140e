from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import BreakContext, BreakDecision, BreakRule


class BreakStrategy(ABC):
    """Strategy Pattern: encapsulate how one break rule type is deducted."""

    @abstractmethod
    def decide(self, rule: BreakRule, ctx: BreakContext) -> BreakDecision:
        raise NotImplementedError
