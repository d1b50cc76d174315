"""models: 데이터 클래스 및 데이터 관리 함수 패키지.

사용자, 커뮤니티 게시글, 첨부파일 데이터 모델과 MySQL 데이터베이스 관리 함수를 제공합니다.
"""

from .user_models import User, get_user_by_id

from .attachment_models import Attachment, get_attachments_by_post_ids

from .post_models import (
    Post,
    count_posts_by_author,
    get_posts_by_author,
    get_post_by_id,
    create_post,
    update_post,
    delete_post,
)

__all__ = [
    # 사용자 모델
    "User",
    "get_user_by_id",
    # 첨부파일 모델
    "Attachment",
    "get_attachments_by_post_ids",
    # 게시글 모델
    "Post",
    "count_posts_by_author",
    "get_posts_by_author",
    "get_post_by_id",
    "create_post",
    "update_post",
    "delete_post",
]
