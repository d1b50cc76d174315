# timing: 요청 타이밍 미들웨어
# 각 요청에 타임스탬프를 주입하여 일관된 시간 정보를 제공합니다.

from datetime import datetime, timezone
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 타이밍 미들웨어

    요청이 들어온 시각을 request.state.request_time에 저장합니다.
    같은 요청에서 만들어지는 응답 봉투와 에러의 timestamp가 이 값을 공유합니다.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_time = datetime.now(timezone.utc)
        return await call_next(request)
