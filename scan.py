"""시그니처 스캔 단계를 제공합니다./Provide the signature scan stage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Sequence, TypeVar

from core.config import ScannerConfig
from core.errors import PipelineError
from core.io import read_report
from src.scanner import (
    CancellationToken,
    ProgressEvent,
    ResultSink,
    ScanCancelledError,
    ScanRecord,
    ScanResult,
    ScanStatistics,
    ScanTimeoutError,
    Signature,
    SignatureError,
    TraversalError,
    load_signature,
    run_scan_to_files,
    scan_tree,
)
from src.utils.json_stream import JsonArrayWriter

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_run_signature(signature_path: Path, config: ScannerConfig) -> Signature:
    """시그니처를 로드합니다./Load the run signature or fail the run."""

    try:
        return load_signature(signature_path, max_bytes=config.max_signature_bytes)
    except SignatureError as exc:
        logger.error("signature rejected: %s", exc)
        raise PipelineError.wrap(exc, stage="signature") from exc


def _run_stage(action: Callable[[], T]) -> T:
    """엔진 치명 오류를 단계 오류로 변환./Translate fatal engine errors to stage errors."""

    try:
        return action()
    except TraversalError as exc:
        raise PipelineError.wrap(exc, stage="traversal") from exc
    except (ScanCancelledError, ScanTimeoutError) as exc:
        raise PipelineError.wrap(exc, stage="scan") from exc


def scan_paths(
    paths: Sequence[Path],
    signature_path: Path,
    *,
    config: ScannerConfig | None = None,
    sink: ResultSink | None = None,
    progress_callback: Callable[[ProgressEvent], None] | None = None,
    cancellation_token: CancellationToken | None = None,
) -> ScanResult:
    """경로 목록을 스캔합니다./Scan provided roots for the signature."""

    config = config or ScannerConfig()
    signature = load_run_signature(signature_path, config)
    options = config.to_options(paths)
    return _run_stage(
        lambda: scan_tree(
            options,
            signature,
            sink=sink,
            progress_callback=progress_callback,
            cancellation_token=cancellation_token,
        )
    )


def emit_scan(records: Iterable[ScanRecord], out_path: Path) -> int:
    """스캔 결과를 파일로 저장합니다./Persist scan records to disk."""

    with JsonArrayWriter(out_path) as writer:
        for record in records:
            writer.write(record.to_payload())
        return writer.count


def load_records(path: Path) -> list[ScanRecord]:
    """스캔 결과를 로드합니다./Load scan records from disk."""

    return read_report(path)


def stream_paths_to_files(
    paths: Sequence[Path],
    signature_path: Path,
    *,
    output_path: Path,
    config: ScannerConfig | None = None,
    progress_callback: Callable[[ProgressEvent], None] | None = None,
    cancellation_token: CancellationToken | None = None,
) -> ScanStatistics:
    """경로를 직접 파일로 기록합니다./Stream scan records directly to a file."""

    config = config or ScannerConfig()
    signature = load_run_signature(signature_path, config)
    options = config.to_options(paths)
    return _run_stage(
        lambda: run_scan_to_files(
            options,
            signature,
            output_path=output_path,
            progress_callback=progress_callback,
            cancellation_token=cancellation_token,
        )
    )


__all__ = [
    "emit_scan",
    "load_records",
    "load_run_signature",
    "scan_paths",
    "stream_paths_to_files",
]
