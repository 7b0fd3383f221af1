"""슬라이딩 버퍼 매처를 검증합니다./Validate the sliding-buffer matcher."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from src.scanner import (
    Signature,
    SignatureError,
    chunk_size_for,
    contains_signature,
    file_contains_signature,
)
from tests.fixtures.virtual_fs import ELF, SIGNATURE


class TrickleReader(io.RawIOBase):
    """요청보다 적게 읽는 스트림./Stream that returns short reads."""

    def __init__(self, data: bytes, step: int) -> None:
        self._data = data
        self._pos = 0
        self._step = step

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: memoryview) -> int:  # type: ignore[override]
        size = min(len(buffer), self._step, len(self._data) - self._pos)
        buffer[:size] = self._data[self._pos : self._pos + size]
        self._pos += size
        return size


class CountingReader(io.BytesIO):
    """읽기 요청 크기를 기록하는 스트림./Stream recording requested read sizes."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.requests: list[int] = []

    def readinto(self, buffer) -> int:  # type: ignore[override]
        self.requests.append(len(buffer))
        return super().readinto(buffer)


class EofGuardReader(io.BytesIO):
    """EOF 이후 읽기를 거부하는 스트림./Stream failing any read after EOF."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.eof_seen = False

    def readinto(self, buffer) -> int:  # type: ignore[override]
        assert not self.eof_seen, "read after EOF"
        count = super().readinto(buffer)
        if count == 0:
            self.eof_seen = True
        return count


def _matches(data: bytes, signature: bytes = SIGNATURE, **kwargs: int) -> bool:
    return contains_signature(io.BytesIO(data), signature, **kwargs)


def test_chunk_size_respects_floor_and_slack() -> None:
    """청크는 바닥값과 여유분 중 큰 값./Chunk is the larger of floor and length+slack."""

    assert chunk_size_for(6) == 4096
    assert chunk_size_for(6, chunk_floor=8, slack=4) == 10
    assert chunk_size_for(5000) == 6024


@pytest.mark.parametrize(("floor", "slack"), [(0, 1024), (4096, -1)])
def test_chunk_size_rejects_invalid_tuning(floor: int, slack: int) -> None:
    """잘못된 튜닝 값은 거부됩니다./Invalid tuning values are rejected."""

    with pytest.raises(ValueError):
        chunk_size_for(6, chunk_floor=floor, slack=slack)


@pytest.mark.parametrize("offset", [0, 1, 4090, 4095, 4096, 9000, 12282])
def test_signature_found_at_any_offset(offset: int) -> None:
    """모든 오프셋에서 탐지됩니다./Signature is detected at every offset."""

    data = bytearray(b"\x00" * 12288)
    data[offset : offset + len(SIGNATURE)] = SIGNATURE
    assert _matches(bytes(data))


@pytest.mark.parametrize(("floor", "slack"), [(1, 0), (7, 0), (8, 3), (16, 1), (64, 0)])
def test_boundary_straddle_detected_for_each_chunk_size(floor: int, slack: int) -> None:
    """모든 경계 분할에서 탐지됩니다./Every split across a chunk boundary is detected."""

    chunk = chunk_size_for(len(SIGNATURE), floor, slack)
    for boundary in (chunk, 2 * chunk, 3 * chunk):
        for split in range(1, len(SIGNATURE)):
            start = boundary - split
            data = bytearray(b"." * (4 * chunk + len(SIGNATURE)))
            data[start : start + len(SIGNATURE)] = SIGNATURE
            assert _matches(bytes(data), chunk_floor=floor, slack=slack), (chunk, start)


def test_signature_at_last_possible_offset() -> None:
    """파일 끝 시그니처./Signature occupying the last bytes."""

    data = b"\x01" * 8192 + SIGNATURE
    assert _matches(data)
    assert _matches(data, chunk_floor=1, slack=0)


@pytest.mark.parametrize(
    "data",
    [b"", b"cry", b"crypt", b"x" * 100_000, b"crypt" + b"x" + b"rypty"],
    ids=["empty", "shorter", "prefix", "large", "near-misses"],
)
def test_absent_signature_not_reported(data: bytes) -> None:
    """없는 시그니처는 탐지되지 않습니다./Absent signature is not reported."""

    assert not _matches(data)


def test_zero_signature_ignores_unfilled_buffer() -> None:
    """빈 버퍼 영역은 검색하지 않습니다./Unfilled buffer space never matches."""

    assert not _matches(b"\x01\x02", b"\x00\x00")
    assert not _matches(b"\x01" * 10_000, b"\x00\x00\x00")
    assert _matches(b"\x01" * 4095 + b"\x00\x00", b"\x00\x00")


def test_short_reads_are_refilled() -> None:
    """짧은 읽기도 청크를 채웁니다./Short reads are retried to fill a chunk."""

    data = b"A" * 4094 + SIGNATURE + b"B" * 5000
    assert contains_signature(TrickleReader(data, step=333), SIGNATURE)
    assert not contains_signature(TrickleReader(b"A" * 9000, step=7), SIGNATURE)


def test_reads_are_bounded_by_chunk_size() -> None:
    """메모리 사용은 청크 크기로 제한됩니다./Reads never exceed the chunk size."""

    reader = CountingReader(b"z" * 50_000)
    assert not contains_signature(reader, SIGNATURE, chunk_floor=1000, slack=10)
    assert reader.requests
    assert max(reader.requests) <= 1000


def test_stops_after_final_short_chunk() -> None:
    """짧은 청크 이후 추가 읽기가 없습니다./No read happens after EOF is seen."""

    reader = EofGuardReader(b"z" * 5000)
    assert not contains_signature(reader, SIGNATURE)
    assert reader.eof_seen


def test_empty_signature_rejected() -> None:
    """빈 시그니처는 설정 오류입니다./Empty signature is a configuration error."""

    with pytest.raises(SignatureError):
        _matches(b"anything", b"")
    with pytest.raises(SignatureError):
        Signature(b"")


def test_file_matcher_is_idempotent(tmp_path: Path) -> None:
    """같은 파일은 같은 결과를 냅니다./Repeated scans agree."""

    path = tmp_path / "bin"
    path.write_bytes(ELF + b"A" * 4093 + SIGNATURE + b"B" * 4096)
    signature = Signature(SIGNATURE)
    first = file_contains_signature(path, signature)
    second = file_contains_signature(path, signature)
    assert first is True
    assert first == second


def test_file_matcher_propagates_missing_file(tmp_path: Path) -> None:
    """열 수 없는 파일은 OSError./Unopenable files raise OSError."""

    with pytest.raises(OSError):
        file_contains_signature(tmp_path / "missing", SIGNATURE)
