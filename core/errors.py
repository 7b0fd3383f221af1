"""실행 단계 예외 정의(KR). Run stage exception definitions (EN)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PipelineError(Exception):
    """치명적 실행 단계 오류를 표현 · Represent a fatal run stage failure."""

    message: str
    stage: str | None = None

    def __str__(self) -> str:
        """사람 친화적 메시지를 생성 · Build human friendly message."""

        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message

    @classmethod
    def wrap(cls, error: BaseException, stage: str) -> "PipelineError":
        """하위 예외를 단계 오류로 감싼다 · Wrap a lower level error with its stage."""

        return cls(str(error) or type(error).__name__, stage=stage)


__all__ = ["PipelineError"]
