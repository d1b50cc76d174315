"""post_models: 커뮤니티 게시글 데이터 모델 및 함수 모듈.

게시글 데이터 클래스와 MySQL 조회/변경 함수를 제공합니다.
게시글 변경과 첨부파일 행 변경은 하나의 트랜잭션으로 처리합니다.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime

import aiomysql

from database.connection import get_connection, transactional
from models import attachment_models
from models.attachment_models import Attachment
from utils.file_utils import StoredFile


# FULLTEXT BOOLEAN MODE 특수문자 이스케이프 패턴
_FULLTEXT_SPECIAL_CHARS = re.compile(r'([+\-><()~*"@])')

POST_SELECT_FIELDS = (
    "id, author_id, title, content, category, tags, created_at, updated_at, deleted_at"
)

# 최신순 (동일 시각이면 나중에 생성된 글 먼저)
ORDER_BY_LATEST = "created_at DESC, id DESC"


def _escape_fulltext_query(query: str) -> str:
    """FULLTEXT BOOLEAN MODE 특수문자를 이스케이프합니다."""
    return _FULLTEXT_SPECIAL_CHARS.sub(r'\\\1', query.strip())


@dataclass
class Post:
    """커뮤니티 게시글 데이터 클래스.

    Attributes:
        id: 게시글 고유 식별자.
        author_id: 작성자(소유자) ID.
        title: 제목.
        content: 내용.
        category: 카테고리 이름.
        tags: 태그 목록 (입력 순서 유지).
        created_at: 생성 시간.
        updated_at: 수정 시간.
        deleted_at: 삭제 시간.
        attachments: 첨부파일 목록.
    """

    id: int
    author_id: int
    title: str
    content: str
    category: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    attachments: list[Attachment] = field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        """게시글이 삭제되었는지 확인합니다."""
        return self.deleted_at is not None


def _load_tags(raw) -> list[str]:
    """JSON 컬럼 값을 태그 목록으로 변환합니다 (드라이버가 문자열로 반환)."""
    if raw is None:
        return []
    if isinstance(raw, (bytes, str)):
        raw = json.loads(raw)
    return list(raw)


def _row_to_post(row: tuple) -> Post:
    """데이터베이스 행을 Post 객체로 변환합니다."""
    return Post(
        id=row[0],
        author_id=row[1],
        title=row[2],
        content=row[3],
        category=row[4],
        tags=_load_tags(row[5]),
        created_at=row[6],
        updated_at=row[7],
        deleted_at=row[8],
    )


def build_author_filter(
    author_id: int,
    search: str | None = None,
    category: str | None = None,
) -> tuple[str, list]:
    """작성자 게시글 조회용 WHERE 절과 파라미터를 생성합니다.

    Args:
        author_id: 작성자 ID (항상 적용).
        search: 검색어 (제목+내용 FULLTEXT). 공백뿐이면 무시.
        category: 카테고리 이름 (정확히 일치). None이면 전체.

    Returns:
        (WHERE 절 문자열, 파라미터 목록) 튜플.
    """
    where = "author_id = %s AND deleted_at IS NULL"
    params: list = [author_id]

    if search and search.strip():
        where += " AND MATCH(title, content) AGAINST(%s IN BOOLEAN MODE)"
        params.append(_escape_fulltext_query(search))

    if category is not None:
        where += " AND category = %s"
        params.append(category)

    return where, params


async def _fetch_post(cur: aiomysql.Cursor, post_id: int) -> Post | None:
    """트랜잭션 안에서 게시글과 첨부파일을 함께 조회합니다."""
    await cur.execute(
        f"SELECT {POST_SELECT_FIELDS} FROM community_post WHERE id = %s AND deleted_at IS NULL",
        (post_id,),
    )
    row = await cur.fetchone()
    if not row:
        return None
    post = _row_to_post(row)
    post.attachments = await attachment_models.fetch_attachments(cur, post_id)
    return post


# ============ 조회 ============


async def count_posts_by_author(
    author_id: int,
    search: str | None = None,
    category: str | None = None,
) -> int:
    """조건에 맞는 작성자 게시글 총 개수를 반환합니다."""
    where, params = build_author_filter(author_id, search, category)
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(f"SELECT COUNT(*) FROM community_post WHERE {where}", params)
            row = await cur.fetchone()
            return row[0] if row else 0


async def get_posts_by_author(
    author_id: int,
    offset: int = 0,
    limit: int = 10,
    search: str | None = None,
    category: str | None = None,
) -> list[Post]:
    """작성자 게시글을 최신순으로 페이지 단위 조회합니다.

    첨부파일은 게시글 ID 목록으로 한 번에 조회하여 채웁니다.
    """
    where, params = build_author_filter(author_id, search, category)
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {POST_SELECT_FIELDS}
                FROM community_post
                WHERE {where}
                ORDER BY {ORDER_BY_LATEST}
                LIMIT %s OFFSET %s
                """,
                [*params, limit, offset],
            )
            rows = await cur.fetchall()

    posts = [_row_to_post(row) for row in rows]
    attachments = await attachment_models.get_attachments_by_post_ids([p.id for p in posts])
    for post in posts:
        post.attachments = attachments.get(post.id, [])
    return posts


async def get_post_by_id(post_id: int) -> Post | None:
    """ID로 게시글을 첨부파일과 함께 조회합니다. 없거나 삭제되었으면 None."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            return await _fetch_post(cur, post_id)


# ============ 변경 ============


async def create_post(
    author_id: int,
    title: str,
    content: str,
    category: str,
    tags: list[str],
    attachments: list[StoredFile] | None = None,
) -> Post:
    """게시글과 첨부파일 행을 하나의 트랜잭션으로 생성합니다."""
    async with transactional() as cur:
        await cur.execute(
            """
            INSERT INTO community_post (author_id, title, content, category, tags)
            VALUES (%s, %s, %s, %s, %s)
            """,
            (author_id, title, content, category, json.dumps(tags)),
        )
        post_id = cur.lastrowid
        await attachment_models.insert_attachments(cur, post_id, attachments or [])

        post = await _fetch_post(cur, post_id)
        assert post is not None  # 같은 트랜잭션에서 방금 생성됨
        return post


async def update_post(
    post_id: int,
    title: str,
    content: str,
    category: str,
    tags: list[str],
    removed_attachment_ids: list[int] | None = None,
    new_attachments: list[StoredFile] | None = None,
) -> tuple[Post | None, list[Attachment]]:
    """게시글을 수정하고 첨부파일을 제거/추가합니다.

    제거가 추가보다 먼저 적용되며, 다른 게시글의 첨부파일 ID는 무시됩니다.

    Returns:
        (수정된 게시글, 삭제된 첨부파일 목록) 튜플.
        게시글이 없거나 삭제된 경우 (None, []).
    """
    async with transactional() as cur:
        # rowcount는 변경된 행 수이므로 존재 여부는 잠금 조회로 확인
        await cur.execute(
            "SELECT id FROM community_post WHERE id = %s AND deleted_at IS NULL FOR UPDATE",
            (post_id,),
        )
        if await cur.fetchone() is None:
            return None, []

        await cur.execute(
            """
            UPDATE community_post
            SET title = %s, content = %s, category = %s, tags = %s,
                updated_at = NOW()
            WHERE id = %s
            """,
            (title, content, category, json.dumps(tags), post_id),
        )

        removed = await attachment_models.delete_attachments(
            cur, post_id, removed_attachment_ids or []
        )
        await attachment_models.insert_attachments(cur, post_id, new_attachments or [])

        return await _fetch_post(cur, post_id), removed


async def delete_post(post_id: int) -> list[Attachment]:
    """게시글을 소프트 삭제하고 모든 첨부파일 행을 삭제합니다.

    Returns:
        삭제된 첨부파일 목록 (저장소 파일 정리에 사용).
    """
    async with transactional() as cur:
        await cur.execute(
            """
            UPDATE community_post
            SET deleted_at = NOW()
            WHERE id = %s AND deleted_at IS NULL
            """,
            (post_id,),
        )
        if cur.rowcount == 0:
            return []
        return await attachment_models.delete_attachments(cur, post_id)
