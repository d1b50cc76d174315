"""auth: FastAPI 의존성 주입을 위한 인증 모듈.

Authorization: Bearer <token> 헤더로 현재 사용자를 확인합니다.
인증 실패는 비즈니스 로직에 도달하기 전에 401로 거부됩니다.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dependencies.request_context import get_request_timestamp
from models import user_models
from models.user_models import User
from utils.exceptions import unauthorized_error
from utils.jwt_utils import decode_access_token

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> User:
    """Bearer 토큰에서 현재 사용자를 추출하고 검증합니다.

    Args:
        request: FastAPI Request 객체.
        credentials: Authorization 헤더에서 파싱된 자격 증명.

    Returns:
        인증된 사용자 객체.

    Raises:
        HTTPException: 토큰이 없거나 유효하지 않거나, 사용자가 없거나 탈퇴했으면 401.
    """
    timestamp = get_request_timestamp(request)

    if credentials is None or not credentials.credentials:
        raise unauthorized_error("unauthorized", timestamp, "Authentication required.")

    user_id = decode_access_token(credentials.credentials)

    user = await user_models.get_user_by_id(user_id)
    if not user or not user.is_active:
        raise unauthorized_error("unauthorized", timestamp, "Authentication required.")

    return user
