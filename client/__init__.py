"""client: 내 게시글 화면의 클라이언트 뷰모델 패키지.

커뮤니티 API를 호출하는 비동기 HTTP 클라이언트와,
목록/페이지네이션/검색/필터 및 작성·수정 폼 상태를 관리하는 뷰모델을 제공합니다.
"""

from .api import ApiError, CommunityApiClient, extract_error_message
from .config import ClientSettings, client_settings
from .draft import LocalFile, PostDraft, join_tags
from .pagination import Pagination, visible_pages
from .session import Session, SessionStore
from .view_model import MyPostsViewModel

__all__ = [
    "ApiError",
    "CommunityApiClient",
    "extract_error_message",
    "ClientSettings",
    "client_settings",
    "LocalFile",
    "PostDraft",
    "join_tags",
    "Pagination",
    "visible_pages",
    "Session",
    "SessionStore",
    "MyPostsViewModel",
]
