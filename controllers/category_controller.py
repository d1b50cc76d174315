"""category_controller: 게시글 카테고리 컨트롤러 모듈."""

from fastapi import Request

from dependencies.request_context import get_request_timestamp
from schemas.common import create_response
from schemas.post_schemas import CATEGORY_ALL, PostCategory


async def get_categories(request: Request) -> dict:
    """카테고리 목록을 조회합니다.

    목록 필터에서 사용하는 "All"을 맨 앞에 포함하고, 작성 폼에서 사용할 기본값을 함께 반환합니다.
    """
    timestamp = get_request_timestamp(request)

    return create_response(
        "CATEGORIES_RETRIEVED",
        "Categories loaded.",
        data={
            "categories": [CATEGORY_ALL] + [c.value for c in PostCategory],
            "default": PostCategory.GENERAL.value,
        },
        timestamp=timestamp,
    )
