from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Sequence

from ..common.timeutil import duration
from ..core.enums import Category, Direction, WarningCode
from .model import Booking, BookingPair, PairingResult


def _create_pair(in_booking: Booking, out_booking: Booking, category: Category) -> BookingPair:
    # Work runs arrive -> leave, breaks run break start (out) -> break end (in).
    if category == Category.WORK:
        minutes = duration(in_booking.time, out_booking.time)
    else:
        minutes = duration(out_booking.time, in_booking.time)
    return BookingPair(in_booking=in_booking, out_booking=out_booking, category=category, duration=minutes)


def _pre_assigned(in_booking: Booking, out_booking: Booking) -> bool:
    if in_booking.pair_id is not None:
        if in_booking.pair_id == out_booking.booking_id or in_booking.pair_id == out_booking.pair_id:
            return True
    return out_booking.pair_id is not None and out_booking.pair_id == in_booking.booking_id


@dataclass
class _CategoryPairing:
    """Mutable scratch state for pairing one category; never leaves this module."""

    category: Category
    ins: list[Booking]
    outs: list[Booking]

    def __post_init__(self) -> None:
        self.pairs: list[BookingPair] = []
        self.warnings: list[WarningCode] = []
        self._paired_in: set[int] = set()
        self._paired_out: set[int] = set()

    def _take(self, i: int, o: int) -> BookingPair:
        pair = _create_pair(self.ins[i], self.outs[o], self.category)
        self._paired_in.add(i)
        self._paired_out.add(o)
        self.pairs.append(pair)
        return pair

    def pair_pre_assigned(self) -> None:
        for i, in_booking in enumerate(self.ins):
            for o, out_booking in enumerate(self.outs):
                if o in self._paired_out:
                    continue
                if _pre_assigned(in_booking, out_booking):
                    pair = self._take(i, o)
                    if pair.crosses_midnight:
                        self.warnings.append(WarningCode.CROSS_MIDNIGHT)
                    break

    def pair_chronologically(self) -> None:
        if self.category == Category.WORK:
            for i, in_booking in enumerate(self.ins):
                if i in self._paired_in:
                    continue
                o = self._next_unpaired(self.outs, self._paired_out, in_booking.time)
                if o is not None:
                    self._take(i, o)
        else:
            for o, out_booking in enumerate(self.outs):
                if o in self._paired_out:
                    continue
                i = self._next_unpaired(self.ins, self._paired_in, out_booking.time)
                if i is not None:
                    self._take(i, o)

    def pair_cross_midnight(self) -> None:
        if self.category != Category.WORK:
            return
        for i, in_booking in enumerate(self.ins):
            if i in self._paired_in:
                continue
            for o, out_booking in enumerate(self.outs):
                if o not in self._paired_out and out_booking.time < in_booking.time:
                    self._take(i, o)
                    self.warnings.append(WarningCode.CROSS_MIDNIGHT)
                    break

    def unpaired_in(self) -> list[Hashable]:
        return [b.booking_id for i, b in enumerate(self.ins) if i not in self._paired_in]

    def unpaired_out(self) -> list[Hashable]:
        return [b.booking_id for o, b in enumerate(self.outs) if o not in self._paired_out]

    @staticmethod
    def _next_unpaired(candidates: Sequence[Booking], taken: set[int], not_before: int):
        for idx, candidate in enumerate(candidates):
            if idx not in taken and candidate.time >= not_before:
                return idx
        return None


class BookingPairer:
    """Pairs directional bookings into work and break intervals.

    Bookings are ordered by time (input position breaks ties), so the same
    booking list always yields the same pairs and the same unpaired sets.
    Leftover bookings are reported, never dropped.
    """

    def pair(self, bookings: Iterable[Booking]) -> PairingResult:
        bookings = list(bookings)
        pairs: list[BookingPair] = []
        unpaired_in: list[Hashable] = []
        unpaired_out: list[Hashable] = []
        warnings: list[WarningCode] = []

        for category in (Category.WORK, Category.BREAK):
            of_category = sorted((b for b in bookings if b.category == category), key=lambda b: b.time)
            if not of_category:
                continue
            state = _CategoryPairing(
                category=category,
                ins=[b for b in of_category if b.direction == Direction.IN],
                outs=[b for b in of_category if b.direction == Direction.OUT],
            )
            state.pair_pre_assigned()
            state.pair_chronologically()
            state.pair_cross_midnight()

            pairs.extend(sorted(state.pairs, key=lambda p: p.start))
            unpaired_in.extend(state.unpaired_in())
            unpaired_out.extend(state.unpaired_out())
            warnings.extend(state.warnings)

        return PairingResult(
            pairs=tuple(pairs),
            unpaired_in_ids=tuple(unpaired_in),
            unpaired_out_ids=tuple(unpaired_out),
            warnings=tuple(warnings),
        )


def pair_bookings(bookings: Iterable[Booking]) -> PairingResult:
    return BookingPairer().pair(bookings)


def gross_minutes(pairs: Iterable[BookingPair]) -> int:
    """Sum of work pair durations."""
    return sum(p.duration for p in pairs if p.category == Category.WORK)


def recorded_break_minutes(pairs: Iterable[BookingPair]) -> int:
    """Sum of manually booked break pair durations."""
    return sum(p.duration for p in pairs if p.category == Category.BREAK)
