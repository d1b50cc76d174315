"""user_models: 게시글 소유자 조회용 사용자 모델 모듈.

사용자 가입/로그인은 별도 서비스가 담당하며,
이 모듈은 Bearer 토큰의 sub로 사용자를 조회하는 기능만 제공합니다.
"""

from dataclasses import dataclass
from datetime import datetime

from database.connection import get_connection


@dataclass(frozen=True)
class User:
    """사용자 데이터 클래스.

    Attributes:
        id: 사용자 고유 식별자.
        email: 이메일 주소.
        name: 표시 이름.
        created_at: 가입 시간.
        deleted_at: 탈퇴 시간.
    """

    id: int
    email: str
    name: str
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """탈퇴하지 않은 사용자인지 확인합니다."""
        return self.deleted_at is None


def _row_to_user(row: tuple) -> User:
    """(id, email, name, created_at, deleted_at) 행을 User로 변환합니다."""
    return User(
        id=row[0],
        email=row[1],
        name=row[2],
        created_at=row[3],
        deleted_at=row[4],
    )


async def get_user_by_id(user_id: int) -> User | None:
    """ID로 사용자를 조회합니다.

    Args:
        user_id: 사용자 ID.

    Returns:
        사용자 객체, 없으면 None. 탈퇴한 사용자도 반환하므로 호출 측에서 확인해야 합니다.
    """
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, email, name, created_at, deleted_at
                FROM user
                WHERE id = %s
                """,
                (user_id,),
            )
            row = await cur.fetchone()
            return _row_to_user(row) if row else None
