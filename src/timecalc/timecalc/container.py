from __future__ import annotations

from dataclasses import dataclass

from .batch.service import BatchRecalculationService
from .breaks.calculator import BreakCalculator
from .breaks.factory import BreakStrategyFactory
from .core.constants import DEFAULT_BATCH_MAX_WORKERS
from .daily.calculator import DailyCalculator
from .monthly.aggregator import MonthlyAggregator
from .monthly.factory import CreditPolicyFactory
from .vacation.calculator import VacationCalculator


@dataclass(frozen=True)
class Container:
    daily_calculator: DailyCalculator
    monthly_aggregator: MonthlyAggregator
    vacation_calculator: VacationCalculator
    batch_service: BatchRecalculationService


def build_container(*, settings: dict) -> Container:
    daily_calculator = DailyCalculator(
        break_calculator=BreakCalculator(strategy_factory=BreakStrategyFactory()),
        round_relative_to_plan=bool(settings.get("ROUND_RELATIVE_TO_PLAN", False)),
    )
    monthly_aggregator = MonthlyAggregator(policy_factory=CreditPolicyFactory())
    vacation_calculator = VacationCalculator()
    batch_service = BatchRecalculationService(
        daily_calculator=daily_calculator,
        monthly_aggregator=monthly_aggregator,
        max_workers=int(settings.get("BATCH_MAX_WORKERS", DEFAULT_BATCH_MAX_WORKERS)),
    )

    return Container(
        daily_calculator=daily_calculator,
        monthly_aggregator=monthly_aggregator,
        vacation_calculator=vacation_calculator,
        batch_service=batch_service,
    )
