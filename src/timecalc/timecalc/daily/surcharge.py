from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Hashable, Iterable, Optional, Sequence

from ..bookings.model import BookingPair
from ..common.timeutil import overlap
from ..common.validators import require_minute_of_day
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import Category
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TimePeriod:
    start: int
    end: int


@dataclass(frozen=True)
class SurchargeConfig:
    """Bonus account filled by work inside [time_from, time_to).

    Windows must not span midnight; use ``split_overnight_surcharge`` first.
    An empty ``holiday_categories`` matches every holiday category.
    """

    account_code: str
    time_from: int
    time_to: int
    applies_on_holiday: bool = False
    applies_on_workday: bool = True
    holiday_categories: tuple[int, ...] = ()
    account_id: Optional[Hashable] = None


@dataclass(frozen=True)
class SurchargeResult:
    account_code: str
    minutes: int
    account_id: Optional[Hashable] = None


@dataclass(frozen=True)
class SurchargeCalculationResult:
    surcharges: tuple[SurchargeResult, ...] = ()
    total_minutes: int = 0


def validate_surcharge_config(config: SurchargeConfig) -> SurchargeConfig:
    require_minute_of_day(config.time_from, "time_from")
    require_minute_of_day(config.time_to, "time_to", allow_end_of_day=True)
    if config.time_from >= config.time_to:
        raise ValidationError("time_from must be less than time_to (split overnight windows at midnight)")
    return config


def split_overnight_surcharge(config: SurchargeConfig) -> tuple[SurchargeConfig, ...]:
    """22:00-06:00 becomes [22:00-24:00, 00:00-06:00]; valid windows pass through."""
    if config.time_from < config.time_to:
        return (config,)
    return (
        replace(config, time_to=MINUTES_PER_DAY),
        replace(config, time_from=0),
    )


def work_periods(pairs: Iterable[BookingPair]) -> tuple[TimePeriod, ...]:
    """Work intervals of the day, with cross-midnight parts folded onto 00:00."""
    periods: list[TimePeriod] = []
    for pair in pairs:
        if pair.category != Category.WORK:
            continue
        if pair.end > MINUTES_PER_DAY:
            periods.append(TimePeriod(pair.start, MINUTES_PER_DAY))
            periods.append(TimePeriod(0, pair.end - MINUTES_PER_DAY))
        else:
            periods.append(TimePeriod(pair.start, pair.end))
    return tuple(periods)


def _applies(config: SurchargeConfig, is_holiday: bool, holiday_category: int) -> bool:
    if not is_holiday:
        return config.applies_on_workday
    if not config.applies_on_holiday:
        return False
    return not config.holiday_categories or holiday_category in config.holiday_categories


def calculate_surcharges(
    periods: Sequence[TimePeriod],
    configs: Sequence[SurchargeConfig],
    *,
    is_holiday: bool = False,
    holiday_category: int = 0,
) -> SurchargeCalculationResult:
    results: list[SurchargeResult] = []
    for config in configs:
        if not _applies(config, is_holiday, holiday_category):
            continue
        for window in split_overnight_surcharge(config):
            minutes = sum(overlap(p.start, p.end, window.time_from, window.time_to) for p in periods)
            if minutes > 0:
                results.append(SurchargeResult(account_code=config.account_code, minutes=minutes, account_id=config.account_id))
    return SurchargeCalculationResult(surcharges=tuple(results), total_minutes=sum(r.minutes for r in results))
