"""pagination: 목록 페이지네이션 상태와 페이지 번호 창 계산."""

from dataclasses import dataclass

MAX_VISIBLE_PAGES = 5


def visible_pages(page: int, total_pages: int) -> list[int]:
    """페이지 선택기에 표시할 페이지 번호(최대 5개)를 반환합니다.

    전체가 5페이지 이하면 모두, 앞쪽(page <= 3)이면 1~5,
    뒤쪽(page >= total_pages - 2)이면 마지막 5개, 그 외에는 page를 가운데로 둡니다.
    """
    if total_pages <= MAX_VISIBLE_PAGES:
        return list(range(1, total_pages + 1))
    if page <= 3:
        start = 1
    elif page >= total_pages - 2:
        start = total_pages - MAX_VISIBLE_PAGES + 1
    else:
        start = page - 2
    return list(range(start, start + MAX_VISIBLE_PAGES))


@dataclass
class Pagination:
    """페이지네이션 커서.

    total과 total_pages는 서버가 계산한 값이며 클라이언트에서 변경하지 않습니다.
    """

    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0

    @property
    def show_selector(self) -> bool:
        return self.total_pages > 1

    @property
    def previous_disabled(self) -> bool:
        return self.page <= 1

    @property
    def next_disabled(self) -> bool:
        return self.page >= self.total_pages

    @property
    def show_ellipsis(self) -> bool:
        return self.total_pages > MAX_VISIBLE_PAGES and self.page < self.total_pages - 2

    def visible_pages(self) -> list[int]:
        return visible_pages(self.page, self.total_pages)

    @classmethod
    def from_response(cls, body: dict) -> "Pagination":
        return cls(
            page=body["page"],
            limit=body["limit"],
            total=body["total"],
            total_pages=body["totalPages"],
        )
