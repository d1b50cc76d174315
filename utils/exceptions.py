"""exceptions: API 에러 응답 생성 헬퍼 모듈.

커뮤니티 API에서 사용하는 HTTP 에러를 표준화된 detail 형식으로 생성합니다.
detail은 항상 error 코드와 timestamp를 포함하고, 필요한 경우 message를 포함합니다.
"""

from fastapi import HTTPException, status


def _detail(error: str, timestamp: str, message: str | None) -> dict:
    detail = {"error": error, "timestamp": timestamp}
    if message:
        detail["message"] = message
    return detail


def not_found_error(
    resource: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """리소스를 찾을 수 없을 때 404 에러를 생성합니다.

    다른 사용자의 게시글에 접근하는 경우에도 존재 여부를 숨기기 위해 사용합니다.

    Args:
        resource: 리소스 이름 (예: 'post').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).
    """
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=_detail(f"{resource}_not_found", timestamp, message),
    )


def bad_request_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """잘못된 요청에 대한 400 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'validation_error', 'invalid_category').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).
    """
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=_detail(error_code, timestamp, message),
    )


def unauthorized_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """인증 실패 시 401 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'unauthorized', 'token_expired').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_detail(error_code, timestamp, message),
        headers={"WWW-Authenticate": "Bearer"},
    )
