"""스캔 테스트용 바이너리 파일 도우미./Binary file helpers for scan tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

ELF = b"\x7fELF"
SIGNATURE = b"crypty"


def create_binary_tree(base: Path, files: dict[str, bytes]) -> list[Path]:
    """상대 경로 맵으로 파일을 생성합니다./Create files from relative path mapping."""

    created: list[Path] = []
    for relative, content in files.items():
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        created.append(path)
    return created


def bulk_create_files(
    base: Path, count: int, *, infected_every: int = 0, prefix: str = "bin"
) -> Iterable[Path]:
    """대량 ELF 파일을 생성합니다./Generate many ELF files for stress tests."""

    for index in range(count):
        path = base / f"{prefix}_{index:05d}"
        path.parent.mkdir(parents=True, exist_ok=True)
        body = ELF + f"sample-{index}".encode("ascii")
        if infected_every and index % infected_every == 0:
            body += SIGNATURE
        path.write_bytes(body)
        yield path


def clean_elf() -> bytes:
    """시그니처 없는 ELF./ELF magic plus zero padding."""

    return (ELF + bytes(512))[:512]


def infected_elf() -> bytes:
    """중간에 시그니처가 있는 ELF./ELF with the signature in the middle."""

    return ELF + bytes(200) + SIGNATURE + bytes(300)


def elf_with_signature_at_start() -> bytes:
    """헤더 직후 시그니처./Signature right after the header."""

    return (ELF + SIGNATURE).ljust(512, b"\x00")


def elf_with_signature_at_end() -> bytes:
    """파일 끝 시그니처./Signature in the final bytes."""

    return ELF.ljust(512 - len(SIGNATURE), b"\x00") + SIGNATURE


def elf_with_cross_boundary_signature(buffer_size: int) -> bytes:
    """청크 경계를 걸친 시그니처./Signature straddling the first chunk boundary."""

    head = ELF.ljust(buffer_size - 2, b"A")
    return (head + SIGNATURE).ljust(buffer_size * 2, b"B")


def elf_with_partial_signature() -> bytes:
    """부분 시그니처만 있는 ELF./ELF holding only a signature prefix."""

    return (ELF + SIGNATURE[:3]).ljust(512, b"\x00")
