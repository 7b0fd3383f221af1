"""스캐너 데이터 모델 정의./Define scanner data models."""

from __future__ import annotations

import enum
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from .exceptions import SignatureError

ProgressCallback = Callable[["ProgressEvent"], None]

DEFAULT_CHUNK_FLOOR = 4096
DEFAULT_CHUNK_SLACK = 1024


def default_worker_count() -> int:
    """하드웨어 병렬도를 반환합니다./Return available hardware parallelism."""

    return max(os.cpu_count() or 1, 1)


@dataclass(slots=True)
class ScanOptions:
    """스캔 동작 설정./Configuration for scanning behaviour."""

    roots: Sequence[Path]
    include: Sequence[str] = ()
    exclude: Sequence[str] = ()
    max_depth: int | None = None
    follow_symlinks: bool = False
    workers: int | None = None
    chunk_floor: int = DEFAULT_CHUNK_FLOOR
    chunk_slack: int = DEFAULT_CHUNK_SLACK
    audit: bool = False
    throttle_interval: float = 0.2
    overall_timeout: float | None = None

    def resolved_workers(self) -> int:
        """실제 워커 수를 계산합니다./Resolve the effective worker count."""

        if self.workers is None or self.workers < 1:
            return default_worker_count()
        return self.workers


@dataclass(slots=True)
class CancellationToken:
    """외부 취소 신호를 전달합니다./Carry cancellation signals."""

    _event: threading.Event = field(default_factory=threading.Event, init=False)

    def cancel(self) -> None:
        """취소 상태로 설정합니다./Mark token as cancelled."""

        self._event.set()

    def is_cancelled(self) -> bool:
        """취소 여부를 반환합니다./Return cancellation flag."""

        return self._event.is_set()


@dataclass(frozen=True, slots=True)
class Signature:
    """불변 바이트 시그니처./Immutable literal byte signature."""

    data: bytes
    source: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if not self.data:
            raise SignatureError("signature must contain at least one byte")

    def __len__(self) -> int:
        return len(self.data)

    @property
    def overlap(self) -> int:
        """청크 사이에 이월할 바이트 수./Bytes carried between chunks."""

        return len(self.data) - 1


class Outcome(str, enum.Enum):
    """파일별 스캔 결과./Per-file scan outcome."""

    INFECTED = "infected"
    CLEAN = "clean"
    ERROR = "error"


@dataclass(slots=True)
class ScanRecord:
    """단일 파일의 결과 레코드./Outcome record for a single file."""

    path: str
    outcome: Outcome
    detail: str = ""

    def to_payload(self) -> dict[str, object]:
        """JSON 직렬화용 딕트를 생성./Return dict for JSON serialisation."""

        payload: dict[str, object] = {"path": self.path, "outcome": self.outcome.value}
        if self.detail:
            payload["detail"] = self.detail
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "ScanRecord":
        """딕트에서 레코드를 복원합니다./Rebuild a record from a dict."""

        return cls(
            path=str(payload.get("path", "")),
            outcome=Outcome(str(payload.get("outcome", Outcome.ERROR.value))),
            detail=str(payload.get("detail", "")),
        )


@dataclass(slots=True)
class ProgressStats:
    """스캔 진행 통계./Scan progress statistics."""

    completed: int
    discovered: int
    infected: int
    errors: int
    elapsed_seconds: float
    eta_seconds: float | None


@dataclass(slots=True)
class ProgressEvent:
    """진행 콜백 이벤트./Event payload for progress callback."""

    stats: ProgressStats
    current_path: str | None


@dataclass(slots=True)
class ScanStatistics:
    """전체 스캔 요약 통계./Overall scan statistics."""

    discovered: int = 0
    scanned: int = 0
    ineligible: int = 0
    infected: int = 0
    clean: int = 0
    errors: int = 0
    cancelled: int = 0
    duration_seconds: float = 0.0

    @property
    def completed(self) -> int:
        """결과가 확정된 파일 수./Number of files with a settled outcome."""

        return self.ineligible + self.infected + self.clean + self.errors

    @property
    def status(self) -> str:
        """최종 상태를 반환합니다./Return the terminal run status."""

        if self.infected:
            return "infected"
        if self.errors or self.cancelled:
            return "incomplete"
        return "clean"

    def to_payload(self) -> dict[str, object]:
        """JSON 직렬화용 딕트를 생성./Return dict for JSON serialisation."""

        return {
            "status": self.status,
            "discovered": self.discovered,
            "scanned": self.scanned,
            "ineligible": self.ineligible,
            "infected": self.infected,
            "clean": self.clean,
            "errors": self.errors,
            "cancelled": self.cancelled,
            "duration_seconds": self.duration_seconds,
        }


@dataclass(slots=True)
class ScanResult:
    """레코드와 통계를 포함./Contain emitted records and final stats."""

    records: list[ScanRecord]
    statistics: ScanStatistics

    @property
    def infected_paths(self) -> list[str]:
        """감염 경로 목록./Paths reported as infected."""

        return [record.path for record in self.records if record.outcome is Outcome.INFECTED]

    @property
    def error_paths(self) -> list[str]:
        """오류 경로 목록./Paths that failed to scan."""

        return [record.path for record in self.records if record.outcome is Outcome.ERROR]
