"""S3 첨부파일 저장소 백엔드.

AWS S3에 첨부파일을 업로드하고 URL을 반환합니다.
CLOUDFRONT_DOMAIN이 설정된 경우 CloudFront URL을, 아니면 직접 S3 URL을 반환합니다.
"""

import io
import logging
import uuid

import boto3
from botocore.exceptions import ClientError
from fastapi import HTTPException, UploadFile, status

from core.config import settings
from utils.file_utils import (
    CHUNK_SIZE,
    IMAGE_EXTENSIONS,
    StoredFile,
    classify_file_type,
    file_too_large_error,
    validate_attachment_name,
    validate_image_signature,
)

logger = logging.getLogger(__name__)


def get_s3_client():
    """S3 클라이언트를 생성합니다."""
    kwargs: dict[str, str] = {"region_name": settings.AWS_REGION}
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
    return boto3.client("s3", **kwargs)


def build_file_url(s3_key: str) -> str:
    """S3 키로부터 공개 접근 URL을 생성합니다.

    Args:
        s3_key: S3 객체 키 (예: "community/uuid.pdf").

    Returns:
        CloudFront URL 또는 직접 S3 URL.
    """
    if settings.CLOUDFRONT_DOMAIN:
        domain = settings.CLOUDFRONT_DOMAIN.rstrip("/")
        return f"https://{domain}/{s3_key}"
    return f"https://{settings.AWS_S3_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{s3_key}"


def extract_s3_key(file_url: str) -> str:
    """파일 URL에서 S3 키를 추출합니다.

    CloudFront URL, 직접 S3 URL, 로컬 경로(/uploads/...) 모두 지원합니다.
    """
    if settings.CLOUDFRONT_DOMAIN and settings.CLOUDFRONT_DOMAIN in file_url:
        domain = settings.CLOUDFRONT_DOMAIN.rstrip("/")
        return file_url.split(f"https://{domain}/")[-1]

    # CLOUDFRONT_DOMAIN이 비워진 뒤에도 기존 레코드를 처리할 수 있도록 패턴 매칭
    if ".cloudfront.net/" in file_url:
        return file_url.split(".cloudfront.net/")[-1]

    s3_suffix = f".s3.{settings.AWS_REGION}.amazonaws.com/"
    if s3_suffix in file_url:
        return file_url.split(s3_suffix)[-1]

    return file_url.lstrip("/")


async def upload_to_s3(file: UploadFile, folder: str = "community") -> StoredFile:
    """첨부파일을 S3에 업로드하고 메타데이터를 반환합니다.

    검증 순서는 로컬 저장소와 동일합니다 (확장자, 스트리밍 크기, 빈 파일, 이미지 시그니처).

    Raises:
        HTTPException: 검증 실패 시 400, S3 오류 시 500.
    """
    ext = validate_attachment_name(file)
    original_name = file.filename or ""
    s3_key = f"{folder}/{uuid.uuid4().hex}{ext}"

    file_buffer = io.BytesIO()
    total_size = 0
    first_chunk = True

    try:
        while chunk := await file.read(CHUNK_SIZE):
            total_size += len(chunk)
            if total_size > settings.MAX_ATTACHMENT_SIZE:
                raise file_too_large_error(original_name)

            if first_chunk:
                if ext in IMAGE_EXTENSIONS and not validate_image_signature(chunk):
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail={
                            "error": "invalid_file_content",
                            "message": f"{original_name} is not a valid image.",
                        },
                    )
                first_chunk = False

            file_buffer.write(chunk)

        if first_chunk:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "empty_file", "message": f"{original_name} is empty."},
            )

        file_buffer.seek(0)
        content_type = file.content_type or "application/octet-stream"
        get_s3_client().upload_fileobj(
            file_buffer,
            settings.AWS_S3_BUCKET_NAME,
            s3_key,
            ExtraArgs={"ContentType": content_type},
        )
    except ClientError:
        logger.exception(f"S3 upload failed: {s3_key}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "upload_error",
                "message": "Failed to store attachment.",
            },
        )

    return StoredFile(
        url=build_file_url(s3_key),
        original_name=original_name,
        file_type=classify_file_type(original_name, file.content_type),
        content_type=content_type,
        size=total_size,
    )


async def delete_from_s3(file_url: str) -> bool:
    """S3에서 파일을 삭제합니다. 실패하면 False를 반환합니다."""
    try:
        get_s3_client().delete_object(
            Bucket=settings.AWS_S3_BUCKET_NAME,
            Key=extract_s3_key(file_url),
        )
        return True
    except ClientError:
        logger.warning(f"S3 delete failed: {file_url}")
        return False
