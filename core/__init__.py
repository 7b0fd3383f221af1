"""코어 패키지 초기화(KR). Core package initialisation (EN)."""

from .config import ScannerConfig
from .errors import PipelineError
from .io import read_report, read_summary, summary_payload, write_summary
from .logging import configure_logging
from .timezone import UTC_TZ, utc_now

__all__ = [
    "ScannerConfig",
    "PipelineError",
    "configure_logging",
    "read_report",
    "read_summary",
    "summary_payload",
    "write_summary",
    "UTC_TZ",
    "utc_now",
]
