"""common: 공통 응답 유틸리티 모듈.

API 응답 생성 및 게시글/첨부파일 직렬화 함수를 정의합니다.
"""

from datetime import datetime
from typing import Any

from utils.formatters import format_datetime


def create_response(
    code: str,
    message: str,
    data: dict[str, Any] | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """표준 API 응답 딕셔너리를 생성합니다.

    Args:
        code: 응답 코드 (예: "POST_CREATED").
        message: 사용자에게 표시할 메시지.
        data: 응답 데이터 (기본값: 빈 딕셔너리).
        timestamp: 타임스탬프 (기본값: 현재 시간).
    """
    return {
        "code": code,
        "message": message,
        "data": data if data is not None else {},
        "errors": [],
        "timestamp": timestamp or datetime.now().strftime("%Y-%m-%dT%H:%M:%SZ"),
    }


def serialize_attachment(attachment) -> dict[str, Any]:
    """Attachment 객체를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "attachment_id": attachment.id,
        "url": attachment.url,
        "original_name": attachment.original_name,
        "file_type": attachment.file_type,
        "content_type": attachment.content_type,
        "size": attachment.size,
    }


def serialize_post(post) -> dict[str, Any]:
    """Post 객체를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "post_id": post.id,
        "author_id": post.author_id,
        "title": post.title,
        "content": post.content,
        "category": post.category,
        "tags": list(post.tags),
        "attachments": [serialize_attachment(a) for a in post.attachments],
        "created_at": format_datetime(post.created_at),
        "updated_at": format_datetime(post.updated_at),
    }
