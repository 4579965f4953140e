from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.enums import CappingSource


@dataclass(frozen=True)
class CappedTime:
    minutes: int
    source: CappingSource
    reason: str


@dataclass(frozen=True)
class CappingResult:
    total_capped: int = 0
    items: tuple[CappedTime, ...] = ()


def cap_arrival(
    minutes: int,
    window_start: Optional[int],
    *,
    tolerance_minus: int = 0,
    variable_work_time: bool = False,
) -> tuple[int, Optional[CappedTime]]:
    """Clamp an arrival before the evaluation window start.

    With variable work time the window opens ``tolerance_minus`` minutes early.
    """
    if window_start is None:
        return minutes, None
    effective_start = window_start
    if variable_work_time and tolerance_minus > 0:
        effective_start = window_start - tolerance_minus
    if minutes < effective_start:
        capped = CappedTime(
            minutes=effective_start - minutes,
            source=CappingSource.EARLY_ARRIVAL,
            reason="Arrival before evaluation window",
        )
        return effective_start, capped
    return minutes, None


def cap_departure(minutes: int, window_end: Optional[int], *, tolerance_plus: int = 0) -> tuple[int, Optional[CappedTime]]:
    """Clamp a departure after the evaluation window end (plus go tolerance)."""
    if window_end is None:
        return minutes, None
    effective_end = window_end + max(tolerance_plus, 0)
    if minutes > effective_end:
        capped = CappedTime(
            minutes=minutes - effective_end,
            source=CappingSource.LATE_LEAVE,
            reason="Departure after evaluation window",
        )
        return effective_end, capped
    return minutes, None


def max_net_time_capping(net_minutes: int, max_net_work_time: Optional[int]) -> Optional[CappedTime]:
    if max_net_work_time is None or net_minutes <= max_net_work_time:
        return None
    return CappedTime(
        minutes=net_minutes - max_net_work_time,
        source=CappingSource.MAX_NET_TIME,
        reason="Exceeded maximum net work time",
    )


def aggregate_capping(items: Iterable[Optional[CappedTime]]) -> CappingResult:
    kept = tuple(item for item in items if item is not None and item.minutes > 0)
    return CappingResult(total_capped=sum(item.minutes for item in kept), items=kept)
