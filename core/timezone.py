'''시간대 유틸리티(KR). Timezone utilities (EN).'''

from __future__ import annotations

from datetime import datetime, timezone

UTC_TZ = timezone.utc


def utc_now() -> str:
    '''UTC 기준 현재 시각을 ISO8601로 반환 · Return UTC now as ISO8601.'''

    return datetime.now(tz=UTC_TZ).isoformat(timespec='seconds')


__all__ = ['utc_now', 'UTC_TZ']
