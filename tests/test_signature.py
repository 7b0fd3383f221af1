"""시그니처 로더를 검증합니다./Validate the signature loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.scanner import ConfigurationError, Signature, SignatureError, load_signature


def test_load_signature_reads_bytes(signature_file: Path) -> None:
    """파일 내용을 그대로 읽습니다./File content is loaded verbatim."""

    signature = load_signature(signature_file)
    assert signature.data == b"crypty"
    assert len(signature) == 6
    assert signature.overlap == 5
    assert signature.source == str(signature_file)


def test_signature_is_immutable() -> None:
    """시그니처는 변경할 수 없습니다./Signatures cannot be mutated."""

    signature = Signature(bytearray(b"abc"))
    assert isinstance(signature.data, bytes)
    with pytest.raises(AttributeError):
        signature.data = b"zzz"  # type: ignore[misc]


def test_empty_signature_file_rejected(tmp_path: Path) -> None:
    """빈 파일은 설정 오류입니다./Empty file is a configuration error."""

    path = tmp_path / "empty.sig"
    path.write_bytes(b"")
    with pytest.raises(SignatureError, match="empty"):
        load_signature(path)


def test_directory_signature_rejected(tmp_path: Path) -> None:
    """디렉터리는 거부됩니다./Directories are rejected."""

    with pytest.raises(ConfigurationError, match="regular file"):
        load_signature(tmp_path)


def test_missing_signature_rejected(tmp_path: Path) -> None:
    """없는 파일은 거부됩니다./Missing files are rejected."""

    with pytest.raises(SignatureError):
        load_signature(tmp_path / "missing.sig")


def test_oversized_signature_rejected(tmp_path: Path) -> None:
    """크기 제한을 넘으면 거부됩니다./Oversized signatures are rejected."""

    path = tmp_path / "big.sig"
    path.write_bytes(b"x" * 65)
    with pytest.raises(SignatureError, match="exceeds"):
        load_signature(path, max_bytes=64)
