"""스캔 상태 추적기./Track scan progress state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace

from .models import ProgressCallback, ProgressEvent, ProgressStats, ScanStatistics


@dataclass(slots=True)
class ScanState:
    """스캔 진행 상황을 저장합니다./Store ongoing scan statistics.

    Not thread safe on its own; the result sink guards every call.
    """

    progress_callback: ProgressCallback | None = None
    throttle_interval: float = 0.2
    start_time: float = field(default_factory=time.perf_counter)
    last_callback_time: float = field(default_factory=time.perf_counter)
    stats: ScanStatistics = field(default_factory=ScanStatistics)
    current_path: str | None = None

    def snapshot(self, now: float) -> ProgressStats:
        """현재 통계를 계산합니다./Build a snapshot of current stats."""

        elapsed = max(now - self.start_time, 0.0)
        completed = self.stats.completed
        remaining = max(self.stats.discovered - completed, 0)
        eta: float | None = None
        if completed > 0 and remaining > 0:
            rate = elapsed / float(completed)
            eta = round(max(rate * remaining, 0.0), 2)
        elif completed > 0 and remaining == 0:
            eta = 0.0
        return ProgressStats(
            completed=completed,
            discovered=self.stats.discovered,
            infected=self.stats.infected,
            errors=self.stats.errors,
            elapsed_seconds=round(elapsed, 2),
            eta_seconds=eta,
        )

    def should_emit_progress(self, now: float) -> bool:
        """콜백 호출 여부를 결정합니다./Decide if progress callback should run."""

        if self.progress_callback is None:
            return False
        if self.throttle_interval <= 0.0:
            return True
        return now - self.last_callback_time >= self.throttle_interval

    def emit_progress(self, now: float) -> None:
        """진행률 콜백을 실행합니다./Invoke the progress callback."""

        if self.progress_callback is None:
            self.last_callback_time = now
            return
        event = ProgressEvent(stats=self.snapshot(now), current_path=self.current_path)
        self.progress_callback(event)
        self.last_callback_time = now

    def final_statistics(self, now: float) -> ScanStatistics:
        """최종 통계를 생성합니다./Produce final aggregate statistics."""

        elapsed = max(now - self.start_time, 0.0)
        return replace(self.stats, duration_seconds=round(elapsed, 2))
