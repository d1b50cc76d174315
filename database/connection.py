"""database.connection: MySQL 연결 풀 관리 모듈.

aiomysql 비동기 연결 풀을 생성/종료하고,
연결과 트랜잭션을 컨텍스트 매니저로 제공합니다.
"""

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

import aiomysql

from core.config import settings

logger = logging.getLogger("api")

# 전역 연결 풀
_pool: aiomysql.Pool | None = None


async def init_db() -> None:
    """연결 풀을 초기화합니다. 애플리케이션 시작 시 한 번 호출됩니다."""
    global _pool
    try:
        _pool = await aiomysql.create_pool(
            host=settings.DB_HOST,
            port=settings.DB_PORT,
            user=settings.DB_USER,
            password=settings.DB_PASSWORD,
            db=settings.DB_NAME,
            charset="utf8mb4",
            autocommit=True,
            minsize=1,
            maxsize=10,
            connect_timeout=5,
        )
        logger.info(
            f"Database pool ready: {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
        )
    except Exception:
        logger.exception("Failed to connect to database")
        raise


async def close_db() -> None:
    """연결 풀을 닫습니다. 애플리케이션 종료 시 호출됩니다."""
    global _pool
    if _pool:
        _pool.close()
        await _pool.wait_closed()
        _pool = None
        logger.info("Database pool closed")


def get_pool() -> aiomysql.Pool:
    """현재 연결 풀을 반환합니다.

    Raises:
        RuntimeError: init_db()가 호출되지 않은 경우.
    """
    if _pool is None:
        raise RuntimeError("Database pool is not initialised.")
    return _pool


@asynccontextmanager
async def get_connection() -> AsyncGenerator[aiomysql.Connection, None]:
    """풀에서 연결 하나를 빌려 줍니다 (autocommit 조회용).

    사용 예시:
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT 1")
    """
    async with get_pool().acquire() as conn:
        yield conn


@asynccontextmanager
async def transactional() -> AsyncGenerator[aiomysql.Cursor, None]:
    """하나의 트랜잭션 범위를 커서로 제공합니다.

    범위 안에서 예외가 발생하면 롤백 후 다시 던지고, 정상 종료 시 커밋합니다.
    """
    async with get_pool().acquire() as conn:
        try:
            await conn.begin()
            async with conn.cursor() as cur:
                yield cur
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
