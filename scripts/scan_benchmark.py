"""병렬 시그니처 스캔 벤치마크 및 메모리 측정./Benchmark signature scan with memory profile."""

from __future__ import annotations

import argparse
import tempfile
import tracemalloc
from pathlib import Path
from time import perf_counter

from src.scanner import (
    ELF_MAGIC,
    ProgressEvent,
    ScanOptions,
    ScanStatistics,
    Signature,
    run_scan_to_files,
)


def _format_float(value: float) -> str:
    """소수점 둘째 자리까지 포맷./Format float to two decimals."""

    return f"{value:.2f}"


def _print_progress(event: ProgressEvent) -> None:
    """진행 상황을 로그합니다./Log progress updates."""

    eta = "∞" if event.stats.eta_seconds is None else _format_float(event.stats.eta_seconds)
    path = event.current_path or "-"
    print(
        f"completed={event.stats.completed} "
        f"discovered={event.stats.discovered} "
        f"infected={event.stats.infected} "
        f"elapsed={_format_float(event.stats.elapsed_seconds)}s "
        f"eta={eta}s path={path}",
        flush=True,
    )


def build_corpus(base: Path, files: int, size_mb: int, signature: bytes) -> Path:
    """합성 ELF 코퍼스를 만듭니다./Create a synthetic ELF corpus.

    Every tenth file carries the signature in its last bytes.
    """

    block = b"\x00" * (1024 * 1024)
    for index in range(files):
        path = base / f"bin_{index:05d}"
        with path.open("wb") as handle:
            handle.write(ELF_MAGIC)
            for _ in range(size_mb):
                handle.write(block)
            if index % 10 == 0:
                handle.write(signature)
    return base


def run_benchmark(
    roots: list[Path], signature: Signature, out_dir: Path, workers: int | None
) -> ScanStatistics:
    """벤치마크 스캔을 실행합니다./Execute benchmark scan."""

    options = ScanOptions(roots=roots, workers=workers, throttle_interval=0.2)
    out_dir.mkdir(parents=True, exist_ok=True)
    tracemalloc.start()
    started = perf_counter()
    stats = run_scan_to_files(
        options,
        signature,
        output_path=out_dir / "scan_results.json",
        progress_callback=_print_progress,
    )
    elapsed = perf_counter() - started
    _current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    print(
        "SUMMARY",
        f"duration={_format_float(elapsed)}s",
        f"scanned={stats.scanned}",
        f"infected={stats.infected}",
        f"errors={stats.errors}",
        f"peak_mb={_format_float(peak / (1024 * 1024))}",
        sep=" ",
    )
    return stats


def main() -> None:
    """CLI 진입점./CLI entry point."""

    parser = argparse.ArgumentParser(description="Signature scan benchmark")
    parser.add_argument("roots", nargs="*", type=Path, help="directories to scan")
    parser.add_argument("--signature", default="crypty", help="literal signature text")
    parser.add_argument("--workers", type=int, default=None, help="worker threads")
    parser.add_argument("--files", type=int, default=40, help="synthetic files to create")
    parser.add_argument("--size-mb", type=int, default=8, help="synthetic file size in MiB")
    parser.add_argument("--out", type=Path, default=Path(".cache"), help="output directory")
    args = parser.parse_args()
    signature = Signature(args.signature.encode("utf-8"))
    if args.roots:
        run_benchmark(
            [root.resolve() for root in args.roots], signature, args.out.resolve(), args.workers
        )
        return
    with tempfile.TemporaryDirectory() as tmp:
        corpus = build_corpus(Path(tmp), args.files, args.size_mb, signature.data)
        run_benchmark([corpus], signature, args.out.resolve(), args.workers)


if __name__ == "__main__":
    main()
