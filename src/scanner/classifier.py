"""ELF 헤더 판별./ELF header classification."""

from __future__ import annotations

from pathlib import Path

ELF_MAGIC = b"\x7fELF"


def has_elf_magic(header: bytes) -> bool:
    """헤더가 ELF 매직인지 확인합니다./Return True if header is ELF magic."""

    return len(header) >= len(ELF_MAGIC) and header[: len(ELF_MAGIC)] == ELF_MAGIC


def read_header(path: Path, size: int = len(ELF_MAGIC)) -> bytes:
    """파일 앞부분을 읽습니다./Read the leading bytes of a file."""

    with Path(path).open("rb") as handle:
        return handle.read(size)


def is_elf_file(path: Path) -> bool:
    """스캔 대상 ELF 파일인지 판정합니다./Return True if file is an ELF binary.

    Files shorter than the magic are simply ineligible. Open and read failures
    propagate as ``OSError``.
    """

    return has_elf_magic(read_header(path))
