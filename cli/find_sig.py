'''find_sig CLI 진입점(KR). find_sig CLI entrypoint (EN).'''

from __future__ import annotations

import json
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Tuple

import click

from core import (
    PipelineError,
    ScannerConfig,
    configure_logging,
    summary_payload,
    write_summary,
)
from scan import scan_paths
from src.scanner import Outcome, ProgressEvent, ResultSink, ScanRecord, ScanStatistics
from src.utils.json_stream import JsonArrayWriter

logger = logging.getLogger(__name__)

DEFAULT_LOG = Path('.cache/find_sig.log')

EXIT_CLEAN = 0
EXIT_FATAL = 1
EXIT_INFECTED = 3
EXIT_INCOMPLETE = 4
EXIT_INTERRUPTED = 130


def exit_code_for(statistics: ScanStatistics) -> int:
    '''최종 상태를 종료 코드로 변환 · Map terminal status to exit code.'''

    if statistics.status == 'infected':
        return EXIT_INFECTED
    if statistics.status == 'incomplete':
        return EXIT_INCOMPLETE
    return EXIT_CLEAN


def _echo_record(record: ScanRecord) -> None:
    '''레코드를 사람이 읽는 형식으로 출력 · Print a record for humans.'''

    if record.outcome is Outcome.INFECTED:
        click.echo(f'!!! File {record.path} is infected!')
    elif record.outcome is Outcome.ERROR:
        click.echo(f'Error scanning {record.path}: {record.detail}', err=True)
    else:
        click.echo(f'File {record.path} is clean.')


def _echo_progress(event: ProgressEvent) -> None:
    '''진행 상황을 표준 오류로 출력 · Print progress to stderr.'''

    eta = '-' if event.stats.eta_seconds is None else f'{event.stats.eta_seconds:.2f}'
    click.echo(
        f'completed={event.stats.completed} discovered={event.stats.discovered} '
        f'infected={event.stats.infected} errors={event.stats.errors} '
        f'elapsed={event.stats.elapsed_seconds:.2f}s eta={eta}s',
        err=True,
    )


@click.command()
@click.argument('root', type=click.Path(path_type=Path))
@click.argument('signature_file', type=click.Path(path_type=Path))
@click.option(
    '--config-file',
    type=click.Path(path_type=Path),
    default=None,
    help='구성 파일 경로 · YAML config file path',
)
@click.option('--workers', type=click.IntRange(min=1), default=None, help='워커 수 · Worker threads')
@click.option(
    '--chunk-floor', type=click.IntRange(min=1), default=None, help='최소 청크 · Minimum chunk bytes'
)
@click.option('--include', multiple=True, help='포함 패턴 · Include glob (repeatable)')
@click.option('--exclude', multiple=True, help='제외 패턴 · Exclude glob (repeatable)')
@click.option('--max-depth', type=click.IntRange(min=0), default=None, help='최대 깊이 · Max depth')
@click.option(
    '--follow-symlinks/--no-follow-symlinks',
    default=None,
    help='심볼릭 링크 추적 · Follow symbolic links',
)
@click.option('--audit/--no-audit', default=None, help='정상 파일도 기록 · Record clean files')
@click.option(
    '--timeout', type=click.FloatRange(min=0, min_open=True), default=None, help='제한 시간 · Seconds'
)
@click.option(
    '--report',
    type=click.Path(path_type=Path),
    default=None,
    help='레코드 JSON 경로 · JSON record report path',
)
@click.option(
    '--summary',
    type=click.Path(path_type=Path),
    default=None,
    help='요약 JSON 경로 · JSON summary path',
)
@click.option('--progress', is_flag=True, help='진행률 출력 · Print progress to stderr')
@click.option('--verbose', is_flag=True, help='상세 로그 · Verbose logs')
@click.option('--quiet', is_flag=True, help='간략 로그 · Quiet logs')
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=DEFAULT_LOG,
    help='로그 파일 경로 · Log file path',
)
@click.pass_context
def main(
    ctx: click.Context,
    root: Path,
    signature_file: Path,
    config_file: Path | None,
    workers: int | None,
    chunk_floor: int | None,
    include: Tuple[str, ...],
    exclude: Tuple[str, ...],
    max_depth: int | None,
    follow_symlinks: bool | None,
    audit: bool | None,
    timeout: float | None,
    report: Path | None,
    summary: Path | None,
    progress: bool,
    verbose: bool,
    quiet: bool,
    log_file: Path,
) -> None:
    '''ROOT 아래 ELF 파일에서 시그니처를 찾는다 · Find the signature in ELF files under ROOT.'''

    level = 'INFO'
    if verbose:
        level = 'DEBUG'
    if quiet:
        level = 'WARNING'
    configure_logging(log_file, level=level)
    try:
        base = ScannerConfig.from_file(config_file) if config_file else ScannerConfig()
        config = base.merged(
            {
                'workers': workers,
                'chunk_floor': chunk_floor,
                'include': include,
                'exclude': exclude,
                'max_depth': max_depth,
                'follow_symlinks': follow_symlinks,
                'audit': audit,
                'overall_timeout': timeout,
            }
        )
    except PipelineError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo('Scanning started...\n')
    with ExitStack() as stack:
        writer = stack.enter_context(JsonArrayWriter(report)) if report else None

        def _on_record(record: ScanRecord) -> None:
            _echo_record(record)
            if writer is not None:
                writer.write(record.to_payload())

        sink = ResultSink(
            on_record=_on_record,
            progress_callback=_echo_progress if progress else None,
            throttle_interval=config.throttle_interval,
        )
        try:
            result = scan_paths([root], signature_file, config=config, sink=sink)
        except PipelineError as exc:
            logger.error('run aborted: %s', exc)
            raise click.ClickException(str(exc)) from exc
        except KeyboardInterrupt:
            click.echo('\nScan interrupted.', err=True)
            ctx.exit(EXIT_INTERRUPTED)

    statistics = result.statistics
    payload = summary_payload(statistics, root=str(root), signature=str(signature_file))
    if summary is not None:
        write_summary(summary, payload)
    click.echo('\nScan completed.')
    click.echo(json.dumps(payload, ensure_ascii=False))
    ctx.exit(exit_code_for(statistics))


__all__ = ['main', 'exit_code_for']


if __name__ == '__main__':  # pragma: no cover
    main()
