"""병렬 시그니처 스캐너 API./Parallel signature scanner API."""

from __future__ import annotations

from .classifier import ELF_MAGIC, has_elf_magic, is_elf_file
from .exceptions import (
    ConfigurationError,
    PoolClosedError,
    ScanCancelledError,
    ScanErrorBase,
    ScanTimeoutError,
    SignatureError,
    TraversalError,
)
from .matcher import chunk_size_for, contains_signature, file_contains_signature
from .models import (
    CancellationToken,
    Outcome,
    ProgressEvent,
    ProgressStats,
    ScanOptions,
    ScanRecord,
    ScanResult,
    ScanStatistics,
    Signature,
)
from .pool import TaskPool
from .runner import ScanUnit, run_scan_to_files, scan_tree
from .signature import load_signature
from .sink import ResultSink
from .walker import DirectoryWalker

__all__ = [
    "ELF_MAGIC",
    "CancellationToken",
    "ConfigurationError",
    "DirectoryWalker",
    "Outcome",
    "PoolClosedError",
    "ProgressEvent",
    "ProgressStats",
    "ResultSink",
    "ScanCancelledError",
    "ScanErrorBase",
    "ScanOptions",
    "ScanRecord",
    "ScanResult",
    "ScanStatistics",
    "ScanTimeoutError",
    "ScanUnit",
    "Signature",
    "SignatureError",
    "TaskPool",
    "TraversalError",
    "chunk_size_for",
    "contains_signature",
    "file_contains_signature",
    "has_elf_magic",
    "is_elf_file",
    "load_signature",
    "run_scan_to_files",
    "scan_tree",
]
