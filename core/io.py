"""리포트 입출력 헬퍼(KR). Report input/output helpers (EN)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from src.scanner import ScanRecord, ScanStatistics

from .timezone import utc_now


def read_report(path: Path) -> list[ScanRecord]:
    """스트리밍 리포트를 읽는다 · Read a streamed JSON record report."""

    if not path.exists():
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"expected list payload: {path}")
    return [ScanRecord.from_payload(dict(item)) for item in data]


def summary_payload(statistics: ScanStatistics, **extra: Any) -> dict[str, Any]:
    """요약 페이로드를 만든다 · Build the run summary payload."""

    return {**statistics.to_payload(), **extra, "finished_at": utc_now()}


def write_summary(path: Path, payload: dict[str, Any]) -> None:
    """요약 JSON을 기록한다 · Write the summary JSON object."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def read_summary(path: Path) -> dict[str, Any]:
    """요약 JSON을 읽는다 · Read a summary JSON object."""

    if not path.exists():
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        return dict(data)
    raise ValueError(f"expected object payload: {path}")


__all__ = ["read_report", "summary_payload", "write_summary", "read_summary"]
