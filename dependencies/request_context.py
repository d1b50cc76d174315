# request_context: 요청 컨텍스트 의존성
# TimingMiddleware가 기록한 요청 시각에 대한 접근을 제공합니다.

from datetime import datetime, timezone
from fastapi import Request


def get_request_time(request: Request) -> datetime:
    """요청 시각을 반환합니다. 미들웨어가 없으면 현재 UTC 시각."""
    if hasattr(request.state, "request_time"):
        return request.state.request_time
    return datetime.now(timezone.utc)


def get_request_timestamp(request: Request) -> str:
    """요청 시각을 ISO 8601 문자열로 반환합니다.

    같은 요청에서 만든 응답/에러가 모두 동일한 타임스탬프를 갖도록 합니다.
    """
    return get_request_time(request).strftime("%Y-%m-%dT%H:%M:%SZ")
