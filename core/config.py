"""스캐너 설정 모델(KR). Scanner configuration models (EN)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.scanner import ScanOptions
from src.scanner.signature import DEFAULT_MAX_SIGNATURE_BYTES

from .errors import PipelineError


class ScannerConfig(BaseModel):
    """스캔 설정 전체를 표현 · Represent complete scan settings."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    workers: Optional[int] = Field(default=None, ge=1)
    chunk_floor: int = Field(default=4096, ge=1)
    chunk_slack: int = Field(default=1024, ge=0)
    max_signature_bytes: int = Field(default=DEFAULT_MAX_SIGNATURE_BYTES, ge=1)
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    max_depth: Optional[int] = Field(default=None, ge=0)
    follow_symlinks: bool = False
    audit: bool = False
    overall_timeout: Optional[float] = Field(default=None, gt=0)
    throttle_interval: float = Field(default=0.2, ge=0)

    @classmethod
    def from_file(cls, config_file: Path) -> "ScannerConfig":
        """설정 파일에서 로드 · Load settings from config file."""

        try:
            data = (
                yaml.safe_load(config_file.read_text(encoding="utf-8"))
                if config_file.exists()
                else {}
            )
        except (OSError, yaml.YAMLError) as exc:
            raise PipelineError(f"cannot read {config_file}: {exc}", stage="config") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise PipelineError("configuration file must contain a mapping", stage="config")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise PipelineError(str(exc), stage="config") from exc

    def merged(self, overrides: Dict[str, Any]) -> "ScannerConfig":
        """None이 아닌 값으로 덮어쓴다 · Apply non-None overrides."""

        values = {key: value for key, value in overrides.items() if value not in (None, ())}
        try:
            return self.model_validate({**self.model_dump(), **values})
        except ValidationError as exc:
            raise PipelineError(str(exc), stage="config") from exc

    def to_dict(self) -> Dict[str, Any]:
        """사전을 반환 · Return dictionary representation."""

        return dict(self.model_dump())

    def to_options(self, roots: Iterable[str | Path]) -> ScanOptions:
        """엔진 옵션을 생성 · Build engine scan options."""

        return ScanOptions(
            roots=tuple(Path(root).expanduser() for root in roots),
            include=self.include,
            exclude=self.exclude,
            max_depth=self.max_depth,
            follow_symlinks=self.follow_symlinks,
            workers=self.workers,
            chunk_floor=self.chunk_floor,
            chunk_slack=self.chunk_slack,
            audit=self.audit,
            throttle_interval=self.throttle_interval,
            overall_timeout=self.overall_timeout,
        )


__all__ = ["ScannerConfig"]
