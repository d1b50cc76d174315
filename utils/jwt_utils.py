"""jwt_utils: Access Token 생성 및 검증 유틸리티 모듈.

HS256 JWT를 사용하며, 토큰에는 사용자 식별에 필요한 sub만 담습니다.
토큰 발급(로그인)은 사용자 서비스가 담당하고, 이 API는 검증만 수행합니다.
"""

from datetime import datetime, timedelta, timezone

import jwt

from core.config import settings
from utils.exceptions import unauthorized_error
from utils.formatters import format_datetime

_JWT_ALGORITHM = "HS256"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Access Token을 생성합니다.

    Args:
        user_id: 토큰 소유자 ID (sub 클레임).
        expires_minutes: 만료 시간(분). 기본값은 설정값.
    """
    now = _now_utc()
    minutes = (
        expires_minutes
        if expires_minutes is not None
        else settings.JWT_ACCESS_EXPIRE_MINUTES
    )
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
        "type": "access",
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=_JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Access Token을 검증하고 사용자 ID를 반환합니다.

    Raises:
        HTTPException 401: 만료되었거나, 서명/형식이 잘못되었거나, sub가 정수가 아닌 경우.
    """
    timestamp = format_datetime(_now_utc())
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[_JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise unauthorized_error("token_expired", timestamp, "Session expired. Please log in again.")
    except jwt.PyJWTError:
        raise unauthorized_error("token_invalid", timestamp, "Invalid authentication token.")

    if payload.get("type") != "access":
        raise unauthorized_error("token_invalid", timestamp, "Invalid authentication token.")

    try:
        return int(payload.get("sub"))
    except (ValueError, TypeError):
        raise unauthorized_error("token_invalid", timestamp, "Invalid authentication token.")
