"""스캐너 전용 예외를 정의합니다./Define scanner specific exceptions."""

from __future__ import annotations


class ScanErrorBase(RuntimeError):
    """스캔 중 발생한 오류 기본 클래스./Base class for scan errors."""


class ConfigurationError(ScanErrorBase):
    """실행 전 설정 오류./Configuration problem detected before scanning."""


class SignatureError(ConfigurationError):
    """시그니처가 비었거나 읽을 수 없음./Signature is empty or unreadable."""


class TraversalError(ScanErrorBase):
    """디렉터리 순회 실패./Directory enumeration failed."""


class PoolClosedError(ScanErrorBase):
    """종료된 풀에 작업을 제출함./Work submitted after pool shutdown."""


class ScanCancelledError(ScanErrorBase):
    """취소 토큰으로 스캔이 중단됨./Scan stopped by cancellation token."""


class ScanTimeoutError(ScanErrorBase):
    """시간 제한을 초과함./Raised when a time limit is exceeded."""
