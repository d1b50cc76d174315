"""Local file storage backend.

Saves uploaded attachments to the local filesystem and returns URL paths.
The app (or nginx in front of it) serves /uploads/* from this directory.
"""

import os
import uuid
from pathlib import Path

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

UPLOAD_DIR = Path(settings.UPLOAD_DIR)


async def save_uploaded_file(file: UploadFile, folder: str = "community") -> StoredFile:
    """Stream an uploaded attachment to disk and return its metadata.

    Validates:
    1. File name and extension
    2. File size (streamed, max settings.MAX_ATTACHMENT_SIZE)
    3. Not empty
    4. Magic number for image extensions

    Raises:
        HTTPException: If validation fails. The partial file is removed.
    """
    ext = validate_attachment_name(file)
    original_name = file.filename or ""

    unique_filename = f"{uuid.uuid4().hex}{ext}"
    save_dir = UPLOAD_DIR / folder
    save_dir.mkdir(parents=True, exist_ok=True)
    file_path = save_dir / unique_filename

    total_size = 0
    first_chunk = True

    try:
        with open(file_path, "wb") as f:
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

                f.write(chunk)

        if first_chunk:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "empty_file", "message": f"{original_name} is empty."},
            )
    except Exception:
        if file_path.exists():
            os.remove(file_path)
        raise

    return StoredFile(
        url=f"/uploads/{folder}/{unique_filename}",
        original_name=original_name,
        file_type=classify_file_type(original_name, file.content_type),
        content_type=file.content_type or "application/octet-stream",
        size=total_size,
    )


def delete_file(url_path: str) -> bool:
    """Delete a file by its URL path.

    Args:
        url_path: URL path like "/uploads/community/uuid.jpg".

    Returns:
        True if deleted, False if the path is outside the upload dir or missing.
    """
    if not url_path.startswith("/uploads/"):
        return False

    relative_path = url_path.replace("/uploads/", "", 1)
    file_path = (UPLOAD_DIR / relative_path).resolve()

    # Path Traversal 방지: 해석된 경로가 UPLOAD_DIR 내부인지 검증
    if not file_path.is_relative_to(UPLOAD_DIR.resolve()):
        return False

    if file_path.exists():
        file_path.unlink()
        return True
    return False
