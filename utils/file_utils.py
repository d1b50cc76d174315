"""file_utils: 첨부파일 형식 분류 및 공통 검증 모듈.

로컬 저장소와 S3 저장소가 공유하는 허용 형식, 크기 제한, 시그니처 검증을 정의합니다.
"""

import os
from dataclasses import dataclass

from fastapi import HTTPException, UploadFile, status

from core.config import settings

# 형식별 허용 확장자
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
VIDEO_EXTENSIONS = {".mp4", ".webm", ".mov"}
DOCUMENT_EXTENSIONS = {".pdf", ".doc", ".docx", ".txt", ".csv", ".xls", ".xlsx"}
ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS | DOCUMENT_EXTENSIONS

# 이미지 매직 넘버 (파일 시그니처)
MAGIC_NUMBERS = {
    "jpg": [b"\xFF\xD8\xFF"],
    "jpeg": [b"\xFF\xD8\xFF"],
    "png": [b"\x89\x50\x4E\x47\x0D\x0A\x1A\x0A"],
    "gif": [b"\x47\x49\x46\x38\x37\x61", b"\x47\x49\x46\x38\x39\x61"],
    "webp": [b"\x52\x49\x46\x46"],
}

CHUNK_SIZE = 1024 * 64  # 64KB


@dataclass(frozen=True)
class StoredFile:
    """저장소에 저장된 첨부파일 메타데이터.

    Attributes:
        url: 저장소 위치 (로컬 경로 URL 또는 S3/CloudFront URL).
        original_name: 업로드 당시 파일명.
        file_type: "image" | "video" | "document".
        content_type: 요청에 포함된 MIME 타입.
        size: 바이트 크기.
    """

    url: str
    original_name: str
    file_type: str
    content_type: str
    size: int


def classify_file_type(filename: str, content_type: str | None = None) -> str:
    """파일을 image / video / document 중 하나로 분류합니다.

    MIME 타입을 우선 사용하고, 없거나 일반 바이너리 타입이면 확장자로 판단합니다.
    """
    if content_type:
        if content_type.startswith("image/"):
            return "image"
        if content_type.startswith("video/"):
            return "video"
    ext = os.path.splitext(filename)[1].lower()
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in VIDEO_EXTENSIONS:
        return "video"
    return "document"


def validate_image_signature(first_chunk: bytes) -> bool:
    """파일의 첫 번째 청크에서 이미지 매직 넘버를 검증합니다."""
    for signatures in MAGIC_NUMBERS.values():
        for signature in signatures:
            if first_chunk.startswith(signature):
                return True
    return False


def validate_attachment_name(file: UploadFile) -> str:
    """파일명과 확장자를 검증하고 소문자 확장자를 반환합니다.

    Raises:
        HTTPException: 파일명이 없거나 허용되지 않은 확장자면 400.
    """
    if not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_filename", "message": "File name is missing."},
        )

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_file_type",
                "message": f"Unsupported file type: {file.filename}",
            },
        )
    return ext


def file_too_large_error(filename: str) -> HTTPException:
    """크기 제한 초과 400 에러를 생성합니다."""
    limit_mb = settings.MAX_ATTACHMENT_SIZE // (1024 * 1024)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": "file_too_large",
            "message": f"{filename} exceeds the {limit_mb}MB limit.",
        },
    )


def check_declared_size(file: UploadFile) -> None:
    """multipart 파서가 알려준 크기로 미리 제한을 검사합니다.

    크기를 알 수 없는 경우 저장 중 스트리밍 검사에 맡깁니다.
    """
    size = getattr(file, "size", None)
    if isinstance(size, int) and size > settings.MAX_ATTACHMENT_SIZE:
        raise file_too_large_error(file.filename or "")
