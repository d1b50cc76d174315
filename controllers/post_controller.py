"""post_controller: 커뮤니티 게시글 컨트롤러 모듈.

요청 파라미터를 검증/변환하여 PostService를 호출하고 응답 형식을 만듭니다.
"""

from fastapi import Request, UploadFile
from pydantic import ValidationError

from dependencies.request_context import get_request_timestamp
from models.user_models import User
from schemas.common import create_response, serialize_post
from schemas.post_schemas import (
    PostFormRequest,
    parse_category_filter,
    parse_removed_attachments,
)
from services.post_service import PostService
from utils.exceptions import bad_request_error


def _validation_message(exc: ValidationError) -> str:
    """Pydantic 에러 목록을 사용자에게 보여줄 한 줄 메시지로 만듭니다."""
    messages = []
    for error in exc.errors(include_url=False, include_context=False):
        msg = error["msg"].removeprefix("Value error, ")
        if error["loc"] and error["loc"][0] == "category" and error["type"] == "enum":
            msg = "Invalid category."
        messages.append(msg)
    return " ".join(messages)


def build_post_form(
    title: str,
    content: str,
    category: str | None,
    tags: str | None,
    timestamp: str,
) -> PostFormRequest:
    """multipart 텍스트 필드로 PostFormRequest를 생성합니다.

    Raises:
        HTTPException: 검증 실패 시 400 validation_error.
    """
    try:
        return PostFormRequest(title=title, content=content, category=category, tags=tags)
    except ValidationError as e:
        raise bad_request_error("validation_error", timestamp, _validation_message(e))


# ============ 게시글 관련 핸들러 ============


async def get_my_posts(
    current_user: User,
    request: Request,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    category: str | None = None,
) -> dict:
    """내 게시글 목록을 조회합니다.

    Returns:
        {posts, page, limit, total, totalPages} 형식의 응답 딕셔너리.

    Raises:
        HTTPException: 알 수 없는 카테고리면 400.
    """
    timestamp = get_request_timestamp(request)

    try:
        category_filter = parse_category_filter(category)
    except ValueError:
        raise bad_request_error("invalid_category", timestamp, f"Unknown category: {category}")

    result = await PostService.list_my_posts(
        current_user.id, page, limit, search=search, category=category_filter
    )
    result["posts"] = [serialize_post(post) for post in result["posts"]]
    return result


async def get_my_post(post_id: int, current_user: User, request: Request) -> dict:
    """수정할 내 게시글 하나를 조회합니다."""
    timestamp = get_request_timestamp(request)

    post = await PostService.get_my_post(post_id, current_user.id, timestamp)

    return create_response(
        "POST_RETRIEVED",
        "Post loaded.",
        data={"post": serialize_post(post)},
        timestamp=timestamp,
    )


async def create_post(
    form: PostFormRequest,
    attachments: list[UploadFile] | None,
    current_user: User,
    request: Request,
) -> dict:
    """새 게시글을 생성합니다."""
    timestamp = get_request_timestamp(request)

    post = await PostService.create_post(current_user.id, form, attachments)

    return create_response(
        "POST_CREATED",
        "Post created successfully.",
        data={"post": serialize_post(post)},
        timestamp=timestamp,
    )


async def update_post(
    post_id: int,
    form: PostFormRequest,
    attachments: list[UploadFile] | None,
    removed_attachments: str | None,
    current_user: User,
    request: Request,
) -> dict:
    """게시글을 수정합니다.

    Raises:
        HTTPException: 삭제 목록 형식이 잘못되면 400, 게시글이 없거나 내 글이 아니면 404.
    """
    timestamp = get_request_timestamp(request)

    try:
        removed_ids = parse_removed_attachments(removed_attachments)
    except ValueError as e:
        raise bad_request_error("invalid_removed_attachments", timestamp, str(e))

    post = await PostService.update_post(
        post_id,
        current_user.id,
        form,
        timestamp,
        files=attachments,
        removed_attachment_ids=removed_ids,
    )

    return create_response(
        "POST_UPDATED",
        "Post updated successfully.",
        data={"post": serialize_post(post)},
        timestamp=timestamp,
    )


async def delete_post(post_id: int, current_user: User, request: Request) -> dict:
    """게시글을 삭제합니다."""
    timestamp = get_request_timestamp(request)

    await PostService.delete_post(post_id, current_user.id, timestamp)

    return create_response(
        "POST_DELETED",
        "Post deleted successfully.",
        data={"post_id": post_id},
        timestamp=timestamp,
    )
