"""community_router: 커뮤니티 게시글 라우터 모듈.

내 게시글 목록/조회/작성/수정/삭제 및 카테고리 목록 엔드포인트를 제공합니다.
작성/수정은 첨부파일을 포함한 multipart/form-data 요청을 받습니다.
"""

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Query,
    Request,
    UploadFile,
    status,
)

from controllers import category_controller, post_controller
from dependencies.auth import get_current_user
from dependencies.request_context import get_request_timestamp
from models.user_models import User


community_router = APIRouter(prefix="/api/community", tags=["community"])
"""커뮤니티 라우터 인스턴스."""


@community_router.get("/categories", status_code=status.HTTP_200_OK)
async def get_categories(request: Request) -> dict:
    """카테고리 목록을 조회합니다. 인증 불필요."""
    return await category_controller.get_categories(request)


@community_router.get("/posts/mine", status_code=status.HTTP_200_OK)
async def get_my_posts(
    request: Request,
    page: int = Query(1, ge=1, description="페이지 번호 (1부터 시작)"),
    limit: int = Query(10, ge=1, le=100, description="페이지당 게시글 수"),
    search: str | None = Query(None, description="제목/내용 검색어"),
    category: str | None = Query(None, description="카테고리 (All 또는 생략 시 전체)"),
    current_user: User = Depends(get_current_user),
) -> dict:
    """내 게시글 목록을 최신순으로 조회합니다.

    Returns:
        {posts, page, limit, total, totalPages}.
    """
    return await post_controller.get_my_posts(
        current_user, request, page=page, limit=limit, search=search, category=category
    )


@community_router.get("/posts/{post_id}", status_code=status.HTTP_200_OK)
async def get_my_post(
    post_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> dict:
    """수정할 내 게시글을 조회합니다. 다른 사용자의 글이면 404."""
    return await post_controller.get_my_post(post_id, current_user, request)


@community_router.post("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    request: Request,
    title: str = Form("", description="제목"),
    content: str = Form("", description="내용"),
    category: str | None = Form(None, description="카테고리"),
    tags: str | None = Form(None, description="쉼표로 구분된 태그"),
    attachments: list[UploadFile] | None = File(None, description="첨부파일 (각 5MB 이하)"),
    current_user: User = Depends(get_current_user),
) -> dict:
    """새 게시글을 작성합니다.

    Args:
        request: FastAPI Request 객체.
        title: 제목.
        content: 내용.
        category: 카테고리 (기본값 General).
        tags: 쉼표로 구분된 태그 문자열.
        attachments: 첨부파일 목록.
        current_user: 현재 인증된 사용자.

    Returns:
        생성된 게시글이 포함된 응답.
    """
    form = post_controller.build_post_form(
        title, content, category, tags, get_request_timestamp(request)
    )
    return await post_controller.create_post(form, attachments, current_user, request)


@community_router.put("/posts/{post_id}", status_code=status.HTTP_200_OK)
async def update_post(
    post_id: int,
    request: Request,
    title: str = Form("", description="제목"),
    content: str = Form("", description="내용"),
    category: str | None = Form(None, description="카테고리"),
    tags: str | None = Form(None, description="쉼표로 구분된 태그"),
    attachments: list[UploadFile] | None = File(None, description="추가할 첨부파일"),
    removed_attachments: str | None = Form(
        None, alias="removedAttachments", description="삭제할 첨부파일 ID (JSON 배열)"
    ),
    current_user: User = Depends(get_current_user),
) -> dict:
    """게시글을 수정합니다.

    Args:
        post_id: 수정할 게시글 ID.
        request: FastAPI Request 객체.
        title: 제목.
        content: 내용.
        category: 카테고리.
        tags: 쉼표로 구분된 태그 문자열.
        attachments: 추가할 첨부파일 목록.
        removed_attachments: 삭제할 첨부파일 ID의 JSON 배열.
        current_user: 현재 인증된 사용자.

    Returns:
        수정된 게시글이 포함된 응답.
    """
    form = post_controller.build_post_form(
        title, content, category, tags, get_request_timestamp(request)
    )
    return await post_controller.update_post(
        post_id, form, attachments, removed_attachments, current_user, request
    )


@community_router.delete("/posts/{post_id}", status_code=status.HTTP_200_OK)
async def delete_post(
    post_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> dict:
    """게시글과 모든 첨부파일을 삭제합니다."""
    return await post_controller.delete_post(post_id, current_user, request)
