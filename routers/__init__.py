"""routers: FastAPI 라우터 패키지.

커뮤니티 게시글 API 엔드포인트를 정의하는 라우터 모듈을 제공합니다.
"""

from .community_router import community_router

__all__ = [
    "community_router",
]
