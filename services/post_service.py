"""post_service: 커뮤니티 게시글 비즈니스 로직을 처리하는 서비스."""

import logging
from typing import Optional

from fastapi import UploadFile

from models import post_models
from models.post_models import Post
from schemas.post_schemas import PostCategory, PostFormRequest
from utils import upload
from utils.exceptions import not_found_error
from utils.file_utils import check_declared_size
from utils.formatters import total_pages

logger = logging.getLogger(__name__)

ATTACHMENT_FOLDER = "community"


def _selected_files(files: Optional[list[UploadFile]]) -> list[UploadFile]:
    """파일을 선택하지 않은 빈 파트(파일명 없음)를 제외합니다."""
    return [f for f in (files or []) if f.filename]


class PostService:
    """내 게시글 관리 서비스.

    모든 작업은 요청자 본인의 게시글로 한정됩니다.
    다른 사용자의 게시글은 존재 여부를 노출하지 않도록 404로 처리합니다.
    """

    @staticmethod
    async def _get_owned_post(post_id: int, user_id: int, timestamp: str) -> Post:
        post = await post_models.get_post_by_id(post_id)
        if not post or post.author_id != user_id:
            raise not_found_error("post", timestamp, "Post not found.")
        return post

    @staticmethod
    async def list_my_posts(
        user_id: int,
        page: int,
        limit: int,
        search: Optional[str] = None,
        category: Optional[PostCategory] = None,
    ) -> dict:
        """내 게시글 목록과 페이지네이션 정보를 반환합니다."""
        search = search.strip() if search and search.strip() else None
        category_name = category.value if category else None

        total = await post_models.count_posts_by_author(
            user_id, search=search, category=category_name
        )
        posts = await post_models.get_posts_by_author(
            user_id,
            offset=(page - 1) * limit,
            limit=limit,
            search=search,
            category=category_name,
        )
        return {
            "posts": posts,
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": total_pages(total, limit),
        }

    @staticmethod
    async def get_my_post(post_id: int, user_id: int, timestamp: str) -> Post:
        """수정 화면에 사용할 내 게시글을 조회합니다."""
        return await PostService._get_owned_post(post_id, user_id, timestamp)

    @staticmethod
    async def create_post(
        user_id: int,
        form: PostFormRequest,
        files: Optional[list[UploadFile]] = None,
    ) -> Post:
        """게시글 생성.

        첨부파일을 먼저 저장한 뒤 게시글과 첨부파일 행을 한 트랜잭션으로 기록합니다.
        기록에 실패하면 저장한 파일을 정리합니다.
        """
        files = _selected_files(files)
        for file in files:
            check_declared_size(file)

        stored = await upload.save_files(files, folder=ATTACHMENT_FOLDER)
        try:
            post = await post_models.create_post(
                author_id=user_id,
                title=form.title,
                content=form.content,
                category=form.category.value,
                tags=form.tags,
                attachments=stored,
            )
        except Exception:
            await upload.remove_files([s.url for s in stored])
            raise

        logger.info(f"Post {post.id} created by user {user_id} ({len(stored)} attachments)")
        return post

    @staticmethod
    async def update_post(
        post_id: int,
        user_id: int,
        form: PostFormRequest,
        timestamp: str,
        files: Optional[list[UploadFile]] = None,
        removed_attachment_ids: Optional[list[int]] = None,
    ) -> Post:
        """게시글 수정.

        결과 첨부파일 = 기존 첨부파일 - 삭제 목록 + 새 파일.
        삭제된 첨부파일의 저장소 파일은 커밋 이후에 정리합니다.
        """
        # 1. 존재 및 소유 확인
        await PostService._get_owned_post(post_id, user_id, timestamp)

        # 2. 새 파일 저장
        files = _selected_files(files)
        for file in files:
            check_declared_size(file)
        stored = await upload.save_files(files, folder=ATTACHMENT_FOLDER)

        # 3. DB 업데이트 (삭제 → 추가)
        try:
            updated_post, removed = await post_models.update_post(
                post_id,
                title=form.title,
                content=form.content,
                category=form.category.value,
                tags=form.tags,
                removed_attachment_ids=removed_attachment_ids or [],
                new_attachments=stored,
            )
        except Exception:
            await upload.remove_files([s.url for s in stored])
            raise

        if updated_post is None:
            # 확인 이후 다른 요청에서 삭제된 경우
            await upload.remove_files([s.url for s in stored])
            raise not_found_error("post", timestamp, "Post not found.")

        # 4. 삭제된 첨부파일 정리
        await upload.remove_files([a.url for a in removed])

        logger.info(
            f"Post {post_id} updated by user {user_id} "
            f"(+{len(stored)} / -{len(removed)} attachments)"
        )
        return updated_post

    @staticmethod
    async def delete_post(post_id: int, user_id: int, timestamp: str) -> None:
        """게시글 삭제. 첨부파일 행과 저장소 파일도 함께 삭제합니다."""
        await PostService._get_owned_post(post_id, user_id, timestamp)

        removed = await post_models.delete_post(post_id)
        await upload.remove_files([a.url for a in removed])

        logger.info(f"Post {post_id} deleted by user {user_id} ({len(removed)} attachments)")
