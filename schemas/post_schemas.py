"""post_schemas: 커뮤니티 게시글 관련 Pydantic 모델 모듈.

게시글 작성/수정 폼 스키마, 카테고리 목록, 태그 및 삭제 목록 파싱을 정의합니다.
"""

import json
from enum import Enum

from pydantic import BaseModel, Field, field_validator

MAX_TAGS = 10
MAX_TAG_LENGTH = 30

# 목록 필터 전용 값 (저장되는 카테고리가 아님)
CATEGORY_ALL = "All"


class PostCategory(str, Enum):
    """게시글 카테고리."""

    GENERAL = "General"
    CROP_HELP = "Crop Help"
    SOIL_ISSUES = "Soil Issues"
    WEATHER_DISCUSSION = "Weather Discussion"
    MARKET_UPDATES = "Market Updates"
    PEST_CONTROL = "Pest Control"
    IRRIGATION = "Irrigation"
    EQUIPMENT = "Equipment"
    SUCCESS_STORIES = "Success Stories"


def parse_tags(raw: str | None) -> list[str]:
    """쉼표로 구분된 태그 문자열을 목록으로 변환합니다.

    각 태그의 앞뒤 공백을 제거하고 빈 항목은 버리며, 입력 순서를 유지합니다.

    Examples:
        >>> parse_tags("wheat, harvest, 2023")
        ['wheat', 'harvest', '2023']
    """
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_category_filter(raw: str | None) -> PostCategory | None:
    """목록 조회용 카테고리 파라미터를 해석합니다.

    None, 빈 문자열, "All"은 필터 없음(None)을 의미합니다.

    Raises:
        ValueError: 알 수 없는 카테고리인 경우.
    """
    if raw is None or raw.strip() in ("", CATEGORY_ALL):
        return None
    return PostCategory(raw.strip())


def parse_removed_attachments(raw: str | None) -> list[int]:
    """removedAttachments 폼 필드(JSON 배열)를 첨부파일 ID 목록으로 변환합니다.

    숫자 문자열도 허용하며, 중복은 제거하고 순서를 유지합니다.

    Raises:
        ValueError: JSON 배열이 아니거나 정수로 변환할 수 없는 항목이 있는 경우.
    """
    if raw is None or not raw.strip():
        return []
    try:
        values = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError("removedAttachments must be a JSON array.") from e
    if not isinstance(values, list):
        raise ValueError("removedAttachments must be a JSON array.")

    ids: list[int] = []
    for value in values:
        if isinstance(value, bool):
            raise ValueError(f"Invalid attachment id: {value!r}")
        try:
            attachment_id = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid attachment id: {value!r}")
        if attachment_id not in ids:
            ids.append(attachment_id)
    return ids


class PostFormRequest(BaseModel):
    """게시글 작성/수정 폼 모델.

    multipart 폼의 텍스트 필드를 검증합니다. 수정 요청도 전체 필드를 다시 보냅니다.

    Attributes:
        title: 제목 (1~200자, 공백 제거 후).
        content: 내용 (1~10000자, 공백 제거 후).
        category: 카테고리 (기본값 General).
        tags: 쉼표 구분 문자열에서 변환된 태그 목록.
    """

    title: str = Field(..., max_length=200)
    content: str = Field(..., max_length=10000)
    category: PostCategory = PostCategory.GENERAL
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, v):
        """길이 검사 전에 앞뒤 공백을 제거합니다."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """제목의 공백을 제거하고 비어 있지 않은지 검증합니다."""
        v = v.strip()
        if not v:
            raise ValueError("Title is required.")
        return v

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """내용의 공백을 제거하고 비어 있지 않은지 검증합니다."""
        v = v.strip()
        if not v:
            raise ValueError("Content is required.")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v):
        """빈 카테고리는 General로 처리합니다."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return PostCategory.GENERAL
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        """쉼표 구분 문자열을 태그 목록으로 변환합니다."""
        if v is None or isinstance(v, str):
            return parse_tags(v)
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """태그 개수와 길이를 검증합니다."""
        if len(v) > MAX_TAGS:
            raise ValueError(f"At most {MAX_TAGS} tags are allowed.")
        for tag in v:
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tag '{tag}' is longer than {MAX_TAG_LENGTH} characters.")
        return v
