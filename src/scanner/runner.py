"""병렬 시그니처 스캔 실행기./Parallel signature scan runner."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from ..utils.json_stream import JsonArrayWriter
from .classifier import is_elf_file
from .exceptions import ScanCancelledError, ScanTimeoutError
from .matcher import file_contains_signature
from .models import (
    CancellationToken,
    Outcome,
    ProgressCallback,
    ScanOptions,
    ScanRecord,
    ScanResult,
    ScanStatistics,
    Signature,
)
from .pool import TaskPool
from .sink import ResultSink
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.05

__all__ = ["ScanUnit", "scan_tree", "run_scan_to_files"]


@dataclass(slots=True)
class ScanUnit:
    """단일 파일 분류와 매칭 작업./Classify and match one file."""

    path: Path
    signature: Signature
    options: ScanOptions
    sink: ResultSink

    def __call__(self) -> None:
        label = str(self.path)
        try:
            if not is_elf_file(self.path):
                self.sink.mark_ineligible(label)
                return
            self.sink.mark_scanned()
            infected = file_contains_signature(
                self.path,
                self.signature,
                chunk_floor=self.options.chunk_floor,
                slack=self.options.chunk_slack,
            )
        except OSError as exc:
            logger.warning("error scanning %s: %s", label, exc)
            self.sink.fail(label, exc)
            return
        if infected:
            logger.info("signature found in %s", label)
            self.sink.emit(ScanRecord(path=label, outcome=Outcome.INFECTED))
        elif self.options.audit:
            self.sink.emit(ScanRecord(path=label, outcome=Outcome.CLEAN))
        else:
            self.sink.mark_clean(label)


def _ensure_limits(
    options: ScanOptions,
    cancellation_token: CancellationToken | None,
    start_time: float,
) -> None:
    """취소/타임아웃을 검사합니다./Check cancellation and timeout constraints."""

    if cancellation_token is not None and cancellation_token.is_cancelled():
        raise ScanCancelledError("scan cancelled")
    if (
        options.overall_timeout is not None
        and time.perf_counter() - start_time >= options.overall_timeout
    ):
        raise ScanTimeoutError("overall timeout exceeded")


def scan_tree(
    options: ScanOptions,
    signature: Signature,
    *,
    sink: ResultSink | None = None,
    progress_callback: ProgressCallback | None = None,
    cancellation_token: CancellationToken | None = None,
) -> ScanResult:
    """루트 아래 파일을 병렬로 스캔합니다./Scan every file under the roots in parallel.

    The calling thread walks the tree and submits one unit per file; it then
    blocks until the pool drains. On cancellation, timeout or a traversal
    failure the queued units are discarded, running units finish, every worker
    is joined and the error propagates.
    """

    if sink is None:
        sink = ResultSink(
            progress_callback=progress_callback,
            throttle_interval=options.throttle_interval,
        )
    elif progress_callback is not None:
        raise ValueError("pass progress_callback to the sink when supplying one")
    start_time = time.perf_counter()
    walker = DirectoryWalker(options)
    pool = TaskPool(options.resolved_workers(), on_failure=sink.fail)
    logger.info(
        "scan started roots=%s workers=%d signature_bytes=%d",
        [str(root) for root in options.roots],
        pool.worker_count,
        len(signature),
    )
    try:
        for path in walker.iter_files():
            _ensure_limits(options, cancellation_token, start_time)
            sink.mark_discovered(str(path))
            pool.submit(ScanUnit(path, signature, options, sink), label=str(path))
        while not pool.join(timeout=_POLL_INTERVAL):
            _ensure_limits(options, cancellation_token, start_time)
    except BaseException as exc:
        discarded = pool.shutdown(cancel_pending=True)
        sink.mark_cancelled(len(discarded))
        logger.error("scan aborted: %s", exc)
        raise
    pool.shutdown()
    statistics = sink.finish()
    logger.info(
        "scan completed status=%s infected=%d errors=%d",
        statistics.status,
        statistics.infected,
        statistics.errors,
    )
    return ScanResult(records=sink.records(), statistics=statistics)


def run_scan_to_files(
    options: ScanOptions,
    signature: Signature,
    *,
    output_path: Path,
    progress_callback: ProgressCallback | None = None,
    cancellation_token: CancellationToken | None = None,
) -> ScanStatistics:
    """스캔을 실행하고 파일로 기록./Run scan and stream records to a JSON file."""

    with JsonArrayWriter(output_path) as writer:
        sink = ResultSink(
            on_record=lambda record: writer.write(record.to_payload()),
            progress_callback=progress_callback,
            throttle_interval=options.throttle_interval,
        )
        result = scan_tree(
            options,
            signature,
            sink=sink,
            cancellation_token=cancellation_token,
        )
    return result.statistics
