"""슬라이딩 버퍼 시그니처 매처./Sliding-buffer signature matcher.

The matcher never holds more than ``chunk + overlap`` bytes of a source. The
last ``len(signature) - 1`` bytes of each window are carried to the front of
the buffer before the next read so a match split across two reads is still
seen as one contiguous run.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from .models import DEFAULT_CHUNK_FLOOR, DEFAULT_CHUNK_SLACK, Signature

__all__ = ["chunk_size_for", "contains_signature", "file_contains_signature"]


def _pattern_bytes(signature: Signature | bytes) -> bytes:
    if isinstance(signature, Signature):
        return signature.data
    # Signature validates emptiness.
    return Signature(bytes(signature)).data


def chunk_size_for(
    signature_length: int,
    chunk_floor: int = DEFAULT_CHUNK_FLOOR,
    slack: int = DEFAULT_CHUNK_SLACK,
) -> int:
    """읽기 청크 크기를 계산합니다./Compute the fresh-read chunk size."""

    if chunk_floor < 1:
        raise ValueError(f"chunk_floor must be positive: {chunk_floor}")
    if slack < 0:
        raise ValueError(f"slack must not be negative: {slack}")
    return max(chunk_floor, signature_length + slack)


def _fill(source: BinaryIO, target: memoryview) -> int:
    """EOF 또는 가득 찰 때까지 읽습니다./Read until target is full or EOF."""

    filled = 0
    wanted = len(target)
    readinto = getattr(source, "readinto", None)
    while filled < wanted:
        if readinto is not None:
            count = readinto(target[filled:])
        else:
            data = source.read(wanted - filled)
            count = len(data) if data else 0
            target[filled : filled + count] = data or b""
        if not count:
            break
        filled += count
    return filled


def contains_signature(
    source: BinaryIO,
    signature: Signature | bytes,
    *,
    chunk_floor: int = DEFAULT_CHUNK_FLOOR,
    slack: int = DEFAULT_CHUNK_SLACK,
) -> bool:
    """스트림에 시그니처가 있는지 검사합니다./Return True if source holds signature."""

    pattern = _pattern_bytes(signature)
    overlap = len(pattern) - 1
    chunk_size = chunk_size_for(len(pattern), chunk_floor, slack)
    buffer = bytearray(chunk_size + overlap)
    carried = 0
    with memoryview(buffer) as view:
        while True:
            read = _fill(source, view[carried : carried + chunk_size])
            valid = carried + read
            if buffer.find(pattern, 0, valid) != -1:
                return True
            if read < chunk_size:
                return False
            carried = min(overlap, valid)
            if carried:
                buffer[:carried] = buffer[valid - carried : valid]


def file_contains_signature(
    path: Path,
    signature: Signature | bytes,
    *,
    chunk_floor: int = DEFAULT_CHUNK_FLOOR,
    slack: int = DEFAULT_CHUNK_SLACK,
) -> bool:
    """파일에 시그니처가 있는지 검사합니다./Return True if file holds signature."""

    with Path(path).open("rb") as handle:
        return contains_signature(handle, signature, chunk_floor=chunk_floor, slack=slack)
