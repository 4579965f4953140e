from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import BreakType
from .model import BreakRule
from .strategies.base import BreakStrategy
from .strategies.fixed_strategy import FixedBreakStrategy
from .strategies.minimum_strategy import MinimumAfterBreakStrategy
from .strategies.variable_strategy import VariableBreakStrategy


@dataclass
class BreakStrategyFactory:
    """Factory Pattern: one strategy per break type."""

    strategies: dict[BreakType, BreakStrategy] = field(
        default_factory=lambda: {
            BreakType.FIXED: FixedBreakStrategy(),
            BreakType.VARIABLE: VariableBreakStrategy(),
            BreakType.MINIMUM_AFTER: MinimumAfterBreakStrategy(),
        }
    )

    def for_rule(self, rule: BreakRule) -> BreakStrategy:
        return self.strategies[BreakType(rule.type)]
