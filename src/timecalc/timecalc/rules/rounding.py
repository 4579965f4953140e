from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

from ..core.enums import RoundingType


@dataclass(frozen=True)
class RoundingConfig:
    """How one booking direction is rounded.

    ``anchor`` is the grid origin in minutes from midnight (0 = midnight).
    With ``relative_to_plan`` the daily calculator moves the anchor to the
    plan's arrival window start before rounding.
    """

    type: RoundingType = RoundingType.NONE
    interval: int = 0
    add_value: int = 0
    anchor: int = 0
    relative_to_plan: Optional[bool] = None

    def anchored_at(self, anchor: int) -> "RoundingConfig":
        return replace(self, anchor=anchor)


def _round_up(minutes: int, remainder: int, interval: int) -> int:
    return minutes if remainder == 0 else minutes + interval - remainder


def _round_down(minutes: int, remainder: int, interval: int) -> int:
    return minutes - remainder


def _round_nearest(minutes: int, remainder: int, interval: int) -> int:
    # Exact ties round up.
    if remainder * 2 >= interval:
        return _round_up(minutes, remainder, interval)
    return _round_down(minutes, remainder, interval)


_GRID_ROUNDERS: dict[RoundingType, Callable[[int, int, int], int]] = {
    RoundingType.UP: _round_up,
    RoundingType.DOWN: _round_down,
    RoundingType.NEAREST: _round_nearest,
}


def round_time(minutes: int, cfg: Optional[RoundingConfig]) -> int:
    """Round a minute-of-day according to ``cfg``.

    Absent config, type ``none`` and non-positive grid intervals are no-ops.
    """
    if cfg is None or cfg.type == RoundingType.NONE:
        return minutes

    if cfg.type == RoundingType.ADD:
        return minutes + cfg.add_value
    if cfg.type == RoundingType.SUBTRACT:
        return max(minutes - cfg.add_value, 0)

    rounder = _GRID_ROUNDERS[cfg.type]
    if cfg.interval <= 0:
        return minutes
    remainder = (minutes - cfg.anchor) % cfg.interval
    return rounder(minutes, remainder, cfg.interval)


def resolve_anchor(cfg: Optional[RoundingConfig], *, plan_start: Optional[int], default_relative: bool = False) -> Optional[RoundingConfig]:
    """Re-anchor ``cfg`` at the plan start when rounding is relative to the plan.

    ``default_relative`` is the global policy used when the config leaves
    ``relative_to_plan`` unset.
    """
    if cfg is None:
        return None
    relative = default_relative if cfg.relative_to_plan is None else cfg.relative_to_plan
    if relative and plan_start is not None:
        return cfg.anchored_at(plan_start)
    return cfg


class Rounder:
    """Applies arrival/departure rounding for one day plan."""

    def __init__(self, *, come: Optional[RoundingConfig], go: Optional[RoundingConfig]):
        self._come = come
        self._go = go

    def round_come(self, minutes: int) -> int:
        return round_time(minutes, self._come)

    def round_go(self, minutes: int) -> int:
        return round_time(minutes, self._go)
