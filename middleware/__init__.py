"""middleware: 미들웨어 패키지.

요청 타이밍, 로깅, 보안 헤더 등 HTTP 요청/응답 처리를 위한 미들웨어를 제공합니다.
"""

from .timing import TimingMiddleware
from .logging import LoggingMiddleware
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "TimingMiddleware",
    "LoggingMiddleware",
    "SecurityHeadersMiddleware",
]
