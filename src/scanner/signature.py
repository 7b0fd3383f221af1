"""시그니처 파일 로더./Signature file loader."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import SignatureError
from .models import Signature

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIGNATURE_BYTES = 1024 * 1024


def load_signature(path: Path, *, max_bytes: int = DEFAULT_MAX_SIGNATURE_BYTES) -> Signature:
    """시그니처 파일을 메모리로 읽습니다./Read a signature file into memory."""

    path = Path(path)
    if not path.is_file():
        raise SignatureError(f"signature path is not a regular file: {path}")
    try:
        size = path.stat().st_size
        if size > max_bytes:
            raise SignatureError(f"signature file exceeds {max_bytes} bytes: {path}")
        data = path.read_bytes()
    except OSError as exc:
        raise SignatureError(f"cannot read signature file {path}: {exc}") from exc
    if not data:
        raise SignatureError(f"signature file is empty: {path}")
    logger.debug("loaded %d byte signature from %s", len(data), path)
    return Signature(data=data, source=str(path))
