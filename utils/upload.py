"""첨부파일 저장소 디스패처.

STORAGE_TYPE 설정에 따라 로컬 파일시스템 또는 S3로 저장/삭제를 라우팅합니다.
"""

import logging

from fastapi import UploadFile

from core.config import settings
from utils.file_utils import StoredFile
from utils.s3_utils import upload_to_s3, delete_from_s3
from utils.storage import save_uploaded_file, delete_file

logger = logging.getLogger(__name__)


async def save_file(file: UploadFile, folder: str = "community") -> StoredFile:
    """파일을 저장하고 메타데이터를 반환합니다."""
    if settings.STORAGE_TYPE == "s3":
        return await upload_to_s3(file, folder=folder)
    return await save_uploaded_file(file, folder=folder)


async def remove_file(file_url: str) -> bool:
    """저장된 파일을 삭제합니다."""
    if settings.STORAGE_TYPE == "s3":
        return await delete_from_s3(file_url)
    return delete_file(file_url)


async def save_files(files: list[UploadFile], folder: str = "community") -> list[StoredFile]:
    """여러 파일을 순서대로 저장합니다.

    중간에 실패하면 이미 저장한 파일을 삭제한 뒤 예외를 다시 던집니다.
    """
    stored: list[StoredFile] = []
    try:
        for file in files:
            stored.append(await save_file(file, folder=folder))
    except Exception:
        await remove_files([s.url for s in stored])
        raise
    return stored


async def remove_files(file_urls: list[str]) -> None:
    """여러 파일을 삭제합니다. 개별 실패는 로그만 남깁니다."""
    for url in file_urls:
        try:
            if not await remove_file(url):
                logger.warning(f"Stored file not removed: {url}")
        except Exception:
            logger.exception(f"Failed to remove stored file: {url}")
