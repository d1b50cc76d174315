"""attachment_models: 게시글 첨부파일 데이터 모델 및 함수 모듈.

첨부파일 행의 조회/추가/삭제를 담당합니다.
추가와 삭제는 게시글 변경과 같은 트랜잭션에서 실행되도록 커서를 인자로 받습니다.
"""

from dataclasses import dataclass
from datetime import datetime

import aiomysql

from database.connection import get_connection
from utils.file_utils import StoredFile

ATTACHMENT_SELECT_FIELDS = (
    "id, post_id, url, original_name, file_type, content_type, size, created_at"
)


@dataclass(frozen=True)
class Attachment:
    """첨부파일 데이터 클래스.

    Attributes:
        id: 첨부파일 고유 식별자.
        post_id: 소속 게시글 ID.
        url: 저장소 위치.
        original_name: 업로드 당시 파일명.
        file_type: "image" | "video" | "document".
        content_type: MIME 타입.
        size: 바이트 크기.
        created_at: 업로드 시간.
    """

    id: int
    post_id: int
    url: str
    original_name: str
    file_type: str
    content_type: str
    size: int
    created_at: datetime | None = None


def _row_to_attachment(row: tuple) -> Attachment:
    """데이터베이스 행을 Attachment 객체로 변환합니다."""
    return Attachment(
        id=row[0],
        post_id=row[1],
        url=row[2],
        original_name=row[3],
        file_type=row[4],
        content_type=row[5],
        size=row[6],
        created_at=row[7],
    )


async def get_attachments_by_post_ids(post_ids: list[int]) -> dict[int, list[Attachment]]:
    """여러 게시글의 첨부파일을 한 번에 조회합니다 (N+1 방지).

    Returns:
        {post_id: [Attachment, ...]} 딕셔너리. 첨부파일이 없는 게시글은 빈 목록.
    """
    result: dict[int, list[Attachment]] = {post_id: [] for post_id in post_ids}
    if not post_ids:
        return result

    placeholders = ", ".join(["%s"] * len(post_ids))
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {ATTACHMENT_SELECT_FIELDS}
                FROM community_attachment
                WHERE post_id IN ({placeholders})
                ORDER BY id ASC
                """,
                post_ids,
            )
            rows = await cur.fetchall()

    for row in rows:
        attachment = _row_to_attachment(row)
        result[attachment.post_id].append(attachment)
    return result


async def fetch_attachments(cur: aiomysql.Cursor, post_id: int) -> list[Attachment]:
    """트랜잭션 안에서 게시글의 첨부파일을 조회합니다."""
    await cur.execute(
        f"""
        SELECT {ATTACHMENT_SELECT_FIELDS}
        FROM community_attachment
        WHERE post_id = %s
        ORDER BY id ASC
        """,
        (post_id,),
    )
    rows = await cur.fetchall()
    return [_row_to_attachment(row) for row in rows]


async def insert_attachments(
    cur: aiomysql.Cursor, post_id: int, files: list[StoredFile]
) -> None:
    """저장소에 저장된 파일들의 메타데이터를 기록합니다."""
    if not files:
        return
    await cur.executemany(
        """
        INSERT INTO community_attachment
            (post_id, url, original_name, file_type, content_type, size)
        VALUES (%s, %s, %s, %s, %s, %s)
        """,
        [
            (post_id, f.url, f.original_name, f.file_type, f.content_type, f.size)
            for f in files
        ],
    )


async def delete_attachments(
    cur: aiomysql.Cursor, post_id: int, attachment_ids: list[int] | None = None
) -> list[Attachment]:
    """게시글의 첨부파일 행을 삭제하고 삭제된 행을 반환합니다.

    Args:
        cur: 트랜잭션 커서.
        post_id: 게시글 ID. 다른 게시글의 첨부파일은 삭제되지 않습니다.
        attachment_ids: 삭제할 첨부파일 ID 목록. None이면 전체 삭제.

    Returns:
        삭제된 첨부파일 목록 (저장소 파일 정리에 사용).
    """
    if attachment_ids is not None and not attachment_ids:
        return []

    where = "post_id = %s"
    params: list = [post_id]
    if attachment_ids is not None:
        where += f" AND id IN ({', '.join(['%s'] * len(attachment_ids))})"
        params.extend(attachment_ids)

    await cur.execute(
        f"SELECT {ATTACHMENT_SELECT_FIELDS} FROM community_attachment WHERE {where} FOR UPDATE",
        params,
    )
    removed = [_row_to_attachment(row) for row in await cur.fetchall()]
    if removed:
        await cur.execute(f"DELETE FROM community_attachment WHERE {where}", params)
    return removed
