# security_headers: 보안 헤더 미들웨어
# 모든 응답에 브라우저 보안 관련 헤더를 추가합니다.

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.config import settings


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",  # MIME 스니핑 방지
    "X-Frame-Options": "SAMEORIGIN",  # 클릭재킹 방지
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "X-Permitted-Cross-Domain-Policies": "none",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    보안 헤더 미들웨어

    핸들러가 이미 설정한 헤더는 덮어쓰지 않습니다.
    Strict-Transport-Security는 HTTPS_ONLY 설정일 때만 추가합니다.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        if settings.HTTPS_ONLY:
            response.headers.setdefault("Strict-Transport-Security", HSTS_VALUE)

        return response
