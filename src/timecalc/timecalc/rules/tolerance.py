from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ToleranceConfig:
    """Grace windows (minutes) around the plan's arrival and departure boundaries."""

    come_plus: int = 0
    come_minus: int = 0
    go_plus: int = 0
    go_minus: int = 0


def apply_tolerance(minutes: int, boundary: Optional[int], plus_grace: int, minus_grace: int) -> int:
    """Snap ``minutes`` to ``boundary`` when inside [boundary - minus, boundary + plus].

    A missing boundary or a booking outside the window leaves the value unchanged.
    """
    if boundary is None:
        return minutes
    plus_grace = max(int(plus_grace or 0), 0)
    minus_grace = max(int(minus_grace or 0), 0)
    if boundary - minus_grace <= minutes <= boundary + plus_grace:
        return boundary
    return minutes


def apply_come_tolerance(minutes: int, come_from: Optional[int], tolerance: Optional[ToleranceConfig]) -> int:
    tolerance = tolerance or ToleranceConfig()
    return apply_tolerance(minutes, come_from, tolerance.come_plus, tolerance.come_minus)


def apply_go_tolerance(
    minutes: int,
    go_from: Optional[int],
    go_to: Optional[int],
    tolerance: Optional[ToleranceConfig],
) -> int:
    tolerance = tolerance or ToleranceConfig()
    expected = go_to if go_to is not None else go_from
    return apply_tolerance(minutes, expected, tolerance.go_plus, tolerance.go_minus)
