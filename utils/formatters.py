"""formatters: 응답 데이터 포맷팅 유틸리티 모듈."""

import math
from datetime import datetime


def format_datetime(dt: datetime | str | None) -> str | None:
    """datetime 객체를 ISO 8601 포맷 문자열로 변환합니다.

    Returns:
        "2024-01-01T12:00:00Z" 형식 문자열. None이면 None, 문자열이면 그대로 반환.
    """
    if not dt:
        return None
    if isinstance(dt, str):
        return dt
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def total_pages(total: int, limit: int) -> int:
    """전체 개수와 페이지 크기로 전체 페이지 수를 계산합니다 (ceil)."""
    return math.ceil(total / limit) if limit > 0 else 0
