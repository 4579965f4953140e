from __future__ import annotations

import logging
import threading
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Optional

from ..core.constants import DEFAULT_BATCH_MAX_WORKERS
from ..core.exceptions import ConfigurationError
from ..daily.calculator import DailyCalculator
from ..daily.model import DailyCalcInput
from ..monthly.aggregator import MonthlyAggregator
from ..monthly.model import MonthlyCalcInput

logger = logging.getLogger(__name__)

_CANCELLED = object()


@dataclass(frozen=True)
class BatchItem:
    key: Hashable
    result: Any = None
    error: Optional[BaseException] = None
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.cancelled


@dataclass(frozen=True)
class BatchReport:
    """Outcome of one batch run, in submission order."""

    items: tuple[BatchItem, ...]

    @property
    def results(self) -> dict:
        return {item.key: item.result for item in self.items if item.ok}

    @property
    def failed_keys(self) -> list:
        return [item.key for item in self.items if item.error is not None]

    @property
    def cancelled_keys(self) -> list:
        return [item.key for item in self.items if item.cancelled]


class BatchRecalculationService:
    """Recalculates independent employee-days or employee-months on a thread pool.

    Units share nothing, so the engine runs without locks. A run stops handing
    out new units once ``cancel`` is set or ``timeout`` elapses; units that had
    already finished keep their results.
    """

    def __init__(
        self,
        *,
        daily_calculator: Optional[DailyCalculator] = None,
        monthly_aggregator: Optional[MonthlyAggregator] = None,
        max_workers: int = DEFAULT_BATCH_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        self._daily = daily_calculator or DailyCalculator()
        self._monthly = monthly_aggregator or MonthlyAggregator()
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def recalculate_days(
        self,
        units: Iterable[tuple[Hashable, DailyCalcInput]],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> BatchReport:
        return self._run(self._daily.calculate, units, timeout=timeout, cancel=cancel)

    def recalculate_months(
        self,
        units: Iterable[tuple[Hashable, MonthlyCalcInput]],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> BatchReport:
        return self._run(self._monthly.calculate, units, timeout=timeout, cancel=cancel)

    def _run(
        self,
        fn: Callable[[Any], Any],
        units: Iterable[tuple[Hashable, Any]],
        *,
        timeout: Optional[float],
        cancel: Optional[threading.Event],
    ) -> BatchReport:
        stop = cancel or threading.Event()
        units = list(units)
        if not units:
            return BatchReport(items=())

        def task(payload):
            if stop.is_set():
                return _CANCELLED
            return fn(payload)

        executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="timecalc-batch")
        try:
            futures: list[tuple[Hashable, Future]] = [(key, executor.submit(task, payload)) for key, payload in units]
            done, pending = wait([f for _, f in futures], timeout=timeout, return_when=ALL_COMPLETED)
            if pending:
                logger.warning("batch timed out after %ss with %d unit(s) pending", timeout, len(pending))
                stop.set()
                for future in pending:
                    future.cancel()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        items = [self._collect(key, future, done) for key, future in futures]
        report = BatchReport(items=tuple(items))
        logger.debug(
            "batch finished: %d ok, %d failed, %d cancelled",
            len(report.results),
            len(report.failed_keys),
            len(report.cancelled_keys),
        )
        return report

    @staticmethod
    def _collect(key: Hashable, future: Future, done: set) -> BatchItem:
        if future not in done or future.cancelled():
            return BatchItem(key=key, cancelled=True)
        error = future.exception()
        if error is not None:
            logger.error("batch unit %r failed: %s", key, error)
            return BatchItem(key=key, error=error)
        result = future.result()
        if result is _CANCELLED:
            return BatchItem(key=key, cancelled=True)
        return BatchItem(key=key, result=result)
