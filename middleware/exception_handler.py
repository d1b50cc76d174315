"""exception_handler: 전역 예외 처리 핸들러 모듈.

처리되지 않은 예외를 내부 정보가 노출되지 않는 일관된 500 응답으로 변환합니다.
"""

import uuid
import logging
import traceback
from logging.handlers import RotatingFileHandler
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from dependencies.request_context import get_request_timestamp


GENERIC_ERROR_MESSAGE = "Something went wrong."

logger = logging.getLogger("api")

# 에러 전용 파일 로거
error_logger = logging.getLogger("api.error")
error_logger.setLevel(logging.ERROR)

# RotatingFileHandler: 10MB 단위로 로테이션, 최대 5개 백업 파일
if not error_logger.handlers:
    error_file_handler = RotatingFileHandler(
        "server_error.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
        delay=True,
    )
    error_file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    error_logger.addHandler(error_file_handler)


def _sanitize_binary(value):
    if isinstance(value, bytes):
        return f"<binary data: {len(value)} bytes>"
    return value


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """전역 예외 처리 핸들러.

    예외 내용과 스택 트레이스는 추적 ID와 함께 로그에만 남기고,
    클라이언트에는 추적 ID와 일반 메시지만 반환합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 예외.

    Returns:
        500 에러 JSON 응답.
    """
    tracking_id = str(uuid.uuid4())
    timestamp = get_request_timestamp(request)

    logger.error(
        f"[{tracking_id}] Unhandled exception on {request.method} {request.url.path}: {exc!r}"
    )
    error_logger.error(
        f"[{tracking_id}] Unhandled exception: {exc!r}\n"
        + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "trackingID": tracking_id,
            "error": GENERIC_ERROR_MESSAGE,
            "timestamp": timestamp,
        },
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 데이터 유효성 검사 예외 처리 핸들러.

    쿼리/경로 파라미터 타입 오류 등 FastAPI 단계의 검증 실패 시 호출됩니다.
    오류 정보에 업로드 바이너리가 포함된 경우 디코딩 오류를 방지하기 위해
    해당 데이터를 문자열 플레이스홀더로 대체합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 Validation 예외.

    Returns:
        422 Unprocessable Entity 에러 JSON 응답.
    """
    timestamp = get_request_timestamp(request)

    sanitized_errors = []
    for error in exc.errors():
        error_copy = dict(error)

        if "input" in error_copy:
            error_copy["input"] = _sanitize_binary(error_copy["input"])

        if isinstance(error_copy.get("ctx"), dict):
            error_copy["ctx"] = {
                k: _sanitize_binary(v) for k, v in error_copy["ctx"].items()
            }

        sanitized_errors.append(error_copy)

    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(sanitized_errors), "timestamp": timestamp},
    )
