"""동기화된 결과 수집기./Synchronized result sink."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from .models import Outcome, ProgressCallback, ScanRecord, ScanStatistics
from .state import ScanState

logger = logging.getLogger(__name__)

RecordListener = Callable[[ScanRecord], None]

__all__ = ["ResultSink", "RecordListener"]


class ResultSink:
    """여러 워커의 결과를 직렬화합니다./Serialize outcomes from many workers.

    Every mutation and every listener call happens under one lock, so a
    listener writing to a shared stream never sees interleaved records. A
    record the listener fails to take is kept as an error for its path.
    """

    def __init__(
        self,
        *,
        on_record: RecordListener | None = None,
        progress_callback: ProgressCallback | None = None,
        throttle_interval: float = 0.2,
    ) -> None:
        self._lock = threading.Lock()
        self._records: list[ScanRecord] = []
        self._settled: set[str] = set()
        self._on_record = on_record
        self._state = ScanState(
            progress_callback=progress_callback,
            throttle_interval=throttle_interval,
        )

    def mark_discovered(self, path: str) -> None:
        """발견된 파일을 집계합니다./Count a file handed to the pool."""

        with self._lock:
            self._state.stats.discovered += 1

    def mark_scanned(self) -> None:
        """매처가 실행된 파일을 집계합니다./Count a file that reached the matcher."""

        with self._lock:
            self._state.stats.scanned += 1

    def mark_ineligible(self, path: str) -> None:
        """대상이 아닌 파일을 집계합니다./Count a file that failed classification."""

        with self._lock:
            self._settle(path)
            self._state.stats.ineligible += 1
            self._progress(path)

    def mark_clean(self, path: str) -> None:
        """레코드 없이 정상 파일을 집계합니다./Count a clean file without a record."""

        with self._lock:
            self._settle(path)
            self._state.stats.clean += 1
            self._progress(path)

    def mark_cancelled(self, count: int) -> None:
        """폐기된 작업을 집계합니다./Count units discarded before running."""

        with self._lock:
            self._state.stats.cancelled += count

    def emit(self, record: ScanRecord) -> None:
        """결과 레코드를 기록합니다./Record one outcome for a file."""

        with self._lock:
            self._emit_locked(record)

    def fail(self, path: str, error: BaseException) -> bool:
        """아직 결과가 없으면 오류를 기록합니다./Record an error unless already settled."""

        with self._lock:
            if path in self._settled:
                logger.warning("late failure for settled path %s: %s", path, error)
                return False
            self._emit_locked(
                ScanRecord(path=path, outcome=Outcome.ERROR, detail=_describe(error))
            )
            return True

    def records(self) -> list[ScanRecord]:
        """기록된 레코드 사본./Copy of emitted records."""

        with self._lock:
            return list(self._records)

    def statistics(self) -> ScanStatistics:
        """현재 통계 사본./Snapshot of the statistics so far."""

        with self._lock:
            return self._state.final_statistics(time.perf_counter())

    def finish(self) -> ScanStatistics:
        """마지막 진행 이벤트를 보내고 통계를 반환./Flush progress and return stats."""

        with self._lock:
            now = time.perf_counter()
            if self._state.progress_callback is not None:
                self._state.current_path = None
                self._state.emit_progress(now)
            return self._state.final_statistics(now)

    def _emit_locked(self, record: ScanRecord) -> None:
        self._settle(record.path)
        if self._on_record is not None:
            try:
                self._on_record(record)
            except Exception as exc:  # noqa: BLE001 - becomes the path's error outcome
                logger.error(
                    "cannot deliver %s record for %s: %s",
                    record.outcome.value,
                    record.path,
                    exc,
                )
                record = ScanRecord(
                    path=record.path,
                    outcome=Outcome.ERROR,
                    detail=f"{record.outcome.value}; report failed: {_describe(exc)}",
                )
        self._records.append(record)
        if record.outcome is Outcome.INFECTED:
            self._state.stats.infected += 1
        elif record.outcome is Outcome.CLEAN:
            self._state.stats.clean += 1
        else:
            self._state.stats.errors += 1
        self._progress(record.path)

    def _settle(self, path: str) -> None:
        if path in self._settled:
            raise ValueError(f"outcome already recorded for {path}")
        self._settled.add(path)

    def _progress(self, path: str) -> None:
        self._state.current_path = path
        now = time.perf_counter()
        if self._state.should_emit_progress(now):
            self._state.emit_progress(now)


def _describe(error: BaseException) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error) or type(error).__name__
