"""api: 커뮤니티 API 비동기 HTTP 클라이언트.

httpx.AsyncClient로 /api/community 엔드포인트를 호출합니다.
실패 응답은 서버 메시지(없으면 작업별 기본 메시지)를 담은 ApiError로 변환됩니다.
"""

import json
import logging
from typing import Any

import httpx

from client.config import client_settings
from client.draft import LocalFile, PostDraft

logger = logging.getLogger(__name__)

API_PREFIX = "/api/community"
CATEGORY_ALL = "All"
LIST_RESPONSE_KEYS = {"posts", "page", "limit", "total", "totalPages"}

FETCH_POSTS_ERROR = "Failed to fetch your posts"
FETCH_POST_ERROR = "Failed to load post"
SAVE_POST_ERROR = "Failed to save post"
DELETE_POST_ERROR = "Failed to delete post"
FETCH_CATEGORIES_ERROR = "Failed to load categories"


class ApiError(Exception):
    """API 호출 실패.

    Attributes:
        message: 사용자에게 표시할 메시지.
        status_code: HTTP 상태 코드. 네트워크 오류면 None.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """에러 응답에서 사용자 메시지를 꺼냅니다.

    최상위 message, detail.message, 문자열 detail 순으로 확인하고
    모두 없으면 fallback을 반환합니다.
    """
    try:
        body = response.json()
    except ValueError:
        return fallback

    if not isinstance(body, dict):
        return fallback

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    detail = body.get("detail")
    if isinstance(detail, dict):
        message = detail.get("message")
        if isinstance(message, str) and message:
            return message
    if isinstance(detail, str) and detail:
        return detail

    return fallback


class CommunityApiClient:
    """커뮤니티 API 클라이언트.

    Example:
        async with CommunityApiClient(token) as api:
            page = await api.list_my_posts(page=1)
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or client_settings.API_BASE_URL,
            timeout=timeout if timeout is not None else client_settings.TIMEOUT_SECONDS,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )

    async def __aenter__(self) -> "CommunityApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        unwrap: tuple[str, ...] = (),
        **kwargs,
    ) -> Any:
        """요청을 보내고 JSON 본문에서 unwrap 경로의 값을 꺼냅니다.

        성공 응답이라도 JSON이 아니거나 예상한 키가 없으면 fallback 메시지의 ApiError.
        """
        try:
            response = await self._client.request(method, f"{API_PREFIX}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise ApiError(fallback) from e

        if response.is_error:
            message = extract_error_message(response, fallback)
            logger.info(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        try:
            body = response.json()
            for key in unwrap:
                body = body[key]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"{method} {path} -> {response.status_code}: unexpected body {e!r}")
            raise ApiError(fallback, status_code=response.status_code) from e
        return body

    @staticmethod
    def _multipart(
        draft: PostDraft,
        files: list[LocalFile],
        removed_attachment_ids: list[int] | None = None,
    ) -> dict[str, Any]:
        """텍스트 필드도 파일 파트로 넣어 첨부파일이 없어도 multipart로 전송합니다."""
        fields = draft.form_fields()
        if removed_attachment_ids:
            fields["removedAttachments"] = json.dumps(removed_attachment_ids)
        parts: list[tuple[str, tuple]] = [
            (name, (None, value)) for name, value in fields.items()
        ]
        parts.extend(
            ("attachments", (f.name, f.content, f.content_type)) for f in files
        )
        return {"files": parts}

    async def list_my_posts(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        category: str = CATEGORY_ALL,
    ) -> dict[str, Any]:
        """내 게시글 목록을 조회합니다.

        category가 All이면 파라미터를 보내지 않습니다.

        Returns:
            {posts, page, limit, total, totalPages}.
        """
        params: dict[str, Any] = {"page": page, "limit": limit}
        if search and search.strip():
            params["search"] = search.strip()
        if category and category != CATEGORY_ALL:
            params["category"] = category
        body = await self._request("GET", "/posts/mine", FETCH_POSTS_ERROR, params=params)
        if not isinstance(body, dict) or not LIST_RESPONSE_KEYS <= body.keys():
            logger.warning(f"GET /posts/mine: unexpected body {body!r}")
            raise ApiError(FETCH_POSTS_ERROR)
        return body

    async def get_post(self, post_id: int) -> dict[str, Any]:
        return await self._request(
            "GET", f"/posts/{post_id}", FETCH_POST_ERROR, unwrap=("data", "post")
        )

    async def create_post(self, draft: PostDraft, files: list[LocalFile]) -> dict[str, Any]:
        """새 게시글을 작성하고 생성된 게시글을 반환합니다."""
        return await self._request(
            "POST",
            "/posts",
            SAVE_POST_ERROR,
            unwrap=("data", "post"),
            **self._multipart(draft, files),
        )

    async def update_post(
        self,
        post_id: int,
        draft: PostDraft,
        files: list[LocalFile],
        removed_attachment_ids: list[int],
    ) -> dict[str, Any]:
        """게시글을 수정합니다. 삭제 목록이 비어 있으면 removedAttachments를 보내지 않습니다."""
        return await self._request(
            "PUT",
            f"/posts/{post_id}",
            SAVE_POST_ERROR,
            unwrap=("data", "post"),
            **self._multipart(draft, files, removed_attachment_ids),
        )

    async def delete_post(self, post_id: int) -> None:
        await self._request("DELETE", f"/posts/{post_id}", DELETE_POST_ERROR)

    async def get_categories(self) -> list[str]:
        return await self._request(
            "GET", "/categories", FETCH_CATEGORIES_ERROR, unwrap=("data", "categories")
        )
