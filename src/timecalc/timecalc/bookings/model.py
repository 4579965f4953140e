from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Hashable, Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import Category, Direction, WarningCode


@dataclass(frozen=True)
class Booking:
    """A single clock event: minute-of-day, direction and category."""

    booking_id: Hashable
    time: int
    direction: Direction
    category: Category = Category.WORK
    pair_id: Optional[Hashable] = None

    def at(self, time: int) -> "Booking":
        """Copy with a recalculated time (tolerance, rounding, capping)."""
        return replace(self, time=time)


@dataclass(frozen=True)
class BookingPair:
    """Work pairs run in -> out, break pairs run out -> in."""

    in_booking: Booking
    out_booking: Booking
    category: Category
    duration: int

    @property
    def start(self) -> int:
        return self.in_booking.time if self.category == Category.WORK else self.out_booking.time

    @property
    def end(self) -> int:
        """End time, normalized past 1440 for cross-midnight pairs."""
        return self.start + self.duration

    @property
    def crosses_midnight(self) -> bool:
        return self.end >= MINUTES_PER_DAY


@dataclass(frozen=True)
class PairingResult:
    pairs: tuple[BookingPair, ...] = ()
    unpaired_in_ids: tuple[Hashable, ...] = ()
    unpaired_out_ids: tuple[Hashable, ...] = ()
    warnings: tuple[WarningCode, ...] = field(default_factory=tuple)

    def pairs_of(self, category: Category) -> tuple[BookingPair, ...]:
        return tuple(p for p in self.pairs if p.category == category)
