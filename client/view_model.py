"""view_model: "내 게시글" 화면의 뷰모델.

목록 조회, 페이지 이동, 검색, 카테고리 필터와 작성/수정 폼 상태를 관리합니다.
상태는 모두 일반 속성이며, 각 액션이 API를 호출한 뒤 결과로 속성을 갱신합니다.

화면 상태 전이:
    loading -> list | error
    list -> form (open_create / open_edit) -> list (close_form / submit 성공)
    form -> form (submit 실패, action_error 표시)
"""

import logging
from typing import Any, Callable

from client.api import CATEGORY_ALL, ApiError, CommunityApiClient
from client.config import ClientSettings, client_settings
from client.draft import DEFAULT_CATEGORY, LocalFile, PostDraft
from client.pagination import Pagination
from client.session import SessionStore

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "Please log in to manage your posts."
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this post?"

DEFAULT_CATEGORIES = [
    CATEGORY_ALL,
    "General",
    "Crop Help",
    "Soil Issues",
    "Weather Discussion",
    "Market Updates",
    "Pest Control",
    "Irrigation",
    "Equipment",
    "Success Stories",
]


class MyPostsViewModel:
    """내 게시글 화면 뷰모델.

    Args:
        session_store: 로그인 세션 저장소. 기본값은 설정의 SESSION_FILE.
        client_factory: 토큰을 받아 CommunityApiClient를 만드는 함수.
        settings: 클라이언트 설정.
    """

    def __init__(
        self,
        session_store: SessionStore | None = None,
        client_factory: Callable[[str], CommunityApiClient] = CommunityApiClient,
        settings: ClientSettings | None = None,
    ):
        self.settings = settings or client_settings
        self.session_store = session_store or SessionStore(self.settings.SESSION_FILE)
        self._client_factory = client_factory
        self._api: CommunityApiClient | None = None

        # 목록
        self.posts: list[dict[str, Any]] = []
        self.loading = True
        self.error: str | None = None
        self.pagination = Pagination(limit=self.settings.PAGE_SIZE)
        self.search_query = ""
        self.selected_category = CATEGORY_ALL
        self.categories = list(DEFAULT_CATEGORIES)

        # 폼
        self.show_form = False
        self.draft: PostDraft | None = None
        self.files: list[LocalFile] = []
        self.existing_attachments: list[dict[str, Any]] = []
        self.removed_attachments: list[int] = []
        self.submitting = False
        self.action_error: str | None = None

    @property
    def view_state(self) -> str:
        """현재 화면: "loading" | "error" | "form" | "list"."""
        if self.loading and not self.show_form:
            return "loading"
        if self.error:
            return "error"
        if self.show_form:
            return "form"
        return "list"

    def _get_api(self) -> CommunityApiClient | None:
        if self._api is None:
            session = self.session_store.load()
            if session is None:
                return None
            self._api = self._client_factory(session.token)
        return self._api

    async def close(self) -> None:
        if self._api is not None:
            await self._api.aclose()
            self._api = None

    # ============ 목록 ============

    async def mount(self) -> None:
        """화면 진입 시 카테고리와 첫 페이지를 불러옵니다."""
        api = self._get_api()
        if api is not None:
            try:
                self.categories = await api.get_categories()
            except ApiError as e:
                logger.warning(f"Using built-in categories: {e.message}")
        await self.fetch_posts()

    async def fetch_posts(self) -> None:
        """현재 페이지/검색어/카테고리로 목록을 다시 불러옵니다. 오류 화면의 재시도도 이 메서드입니다."""
        api = self._get_api()
        if api is None:
            self.error = AUTH_REQUIRED_MESSAGE
            self.loading = False
            return

        self.loading = True
        try:
            body = await api.list_my_posts(
                page=self.pagination.page,
                limit=self.pagination.limit,
                search=self.search_query,
                category=self.selected_category,
            )
        except ApiError as e:
            self.error = e.message
        else:
            self.posts = body["posts"]
            self.pagination = Pagination.from_response(body)
            self.error = None
        finally:
            self.loading = False

    async def change_page(self, page: int) -> None:
        if page < 1 or page == self.pagination.page:
            return
        if self.pagination.total_pages and page > self.pagination.total_pages:
            return
        self.pagination.page = page
        await self.fetch_posts()

    async def select_category(self, category: str) -> None:
        """카테고리를 바꾸면 현재 페이지 그대로 다시 조회합니다."""
        if category == self.selected_category:
            return
        self.selected_category = category
        await self.fetch_posts()

    def set_search_query(self, query: str) -> None:
        """검색어 입력. 조회는 submit_search에서만 합니다."""
        self.search_query = query

    async def submit_search(self) -> None:
        await self.fetch_posts()

    async def reset_filters(self) -> None:
        """검색어와 카테고리, 페이지를 초기화합니다.

        페이지나 카테고리가 실제로 바뀐 경우에만 다시 조회합니다.
        """
        changed = self.pagination.page != 1 or self.selected_category != CATEGORY_ALL
        self.search_query = ""
        self.selected_category = CATEGORY_ALL
        self.pagination.page = 1
        if changed:
            await self.fetch_posts()

    # ============ 폼 ============

    def _reset_attachment_trackers(self, existing: list[dict[str, Any]]) -> None:
        self.files = []
        self.existing_attachments = list(existing)
        self.removed_attachments = []
        self.action_error = None

    def open_create(self) -> None:
        self.draft = PostDraft(category=DEFAULT_CATEGORY)
        self._reset_attachment_trackers([])
        self.show_form = True

    def open_edit(self, post: dict[str, Any]) -> None:
        self.draft = PostDraft.from_post(post)
        self._reset_attachment_trackers(post.get("attachments") or [])
        self.show_form = True

    def close_form(self) -> None:
        self.show_form = False
        self.draft = None
        self._reset_attachment_trackers([])

    def update_field(self, name: str, value: str) -> None:
        if self.draft is None:
            raise RuntimeError("No form is open.")
        if name not in ("title", "content", "category", "tags"):
            raise ValueError(f"Unknown form field: {name}")
        setattr(self.draft, name, value)

    def add_files(self, files: list[LocalFile]) -> list[LocalFile]:
        """선택한 파일을 추가합니다. 크기 제한을 넘는 파일은 제외하고 action_error에 표시합니다.

        Returns:
            추가된 파일 목록.
        """
        limit = self.settings.MAX_FILE_SIZE
        accepted = [f for f in files if f.size <= limit]
        rejected = [f.name for f in files if f.size > limit]

        self.files.extend(accepted)
        if rejected:
            limit_mb = limit // (1024 * 1024)
            self.action_error = f"{', '.join(rejected)} exceeds the {limit_mb}MB limit."
        return accepted

    def remove_file(self, index: int) -> None:
        if 0 <= index < len(self.files):
            del self.files[index]

    def remove_existing_attachment(self, attachment_id: int) -> None:
        """기존 첨부파일을 삭제 목록으로 옮깁니다."""
        remaining = [
            a for a in self.existing_attachments if a["attachment_id"] != attachment_id
        ]
        if len(remaining) == len(self.existing_attachments):
            return
        self.existing_attachments = remaining
        self.removed_attachments.append(attachment_id)

    async def submit(self) -> bool:
        """폼을 저장합니다.

        성공하면 폼을 닫고 목록을 다시 불러옵니다. 실패하면 폼과 초안을 유지한 채
        action_error에 메시지를 남깁니다. 저장 중에는 다시 호출해도 무시합니다.

        Returns:
            저장 성공 여부.
        """
        if self.submitting or self.draft is None:
            return False

        api = self._get_api()
        if api is None:
            self.action_error = AUTH_REQUIRED_MESSAGE
            return False

        self.submitting = True
        self.action_error = None
        try:
            if self.draft.is_edit:
                await api.update_post(
                    self.draft.post_id,
                    self.draft,
                    list(self.files),
                    list(self.removed_attachments),
                )
            else:
                await api.create_post(self.draft, list(self.files))
        except ApiError as e:
            self.action_error = e.message
            return False
        finally:
            self.submitting = False

        self.close_form()
        await self.fetch_posts()
        return True

    async def delete_post(self, post_id: int, confirm: Callable[[str], bool]) -> bool:
        """확인을 받은 경우에만 게시글을 삭제하고 목록을 다시 불러옵니다."""
        if not confirm(DELETE_CONFIRM_MESSAGE):
            return False

        api = self._get_api()
        if api is None:
            self.action_error = AUTH_REQUIRED_MESSAGE
            return False

        try:
            await api.delete_post(post_id)
        except ApiError as e:
            self.action_error = e.message
            return False

        self.action_error = None
        await self.fetch_posts()
        return True
