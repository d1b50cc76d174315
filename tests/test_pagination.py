"""페이지 선택기 계산 테스트."""

import pytest

from client.pagination import Pagination, visible_pages


@pytest.mark.parametrize(
    "page, total_pages, expected",
    [
        (1, 0, []),
        (1, 1, [1]),
        (2, 3, [1, 2, 3]),
        (5, 5, [1, 2, 3, 4, 5]),
        (1, 10, [1, 2, 3, 4, 5]),
        (3, 10, [1, 2, 3, 4, 5]),
        (4, 10, [2, 3, 4, 5, 6]),
        (7, 10, [5, 6, 7, 8, 9]),
        (8, 10, [6, 7, 8, 9, 10]),
        (10, 10, [6, 7, 8, 9, 10]),
    ],
)
def test_visible_pages(page, total_pages, expected):
    assert visible_pages(page, total_pages) == expected


def test_visible_pages_never_exceed_five():
    for total_pages in range(1, 30):
        for page in range(1, total_pages + 1):
            pages = visible_pages(page, total_pages)
            assert len(pages) == min(5, total_pages)
            assert page in pages


@pytest.mark.parametrize(
    "page, total_pages, expected",
    [(1, 5, False), (1, 6, True), (3, 6, True), (4, 6, False), (7, 10, True), (8, 10, False)],
)
def test_ellipsis(page, total_pages, expected):
    assert Pagination(page=page, total_pages=total_pages).show_ellipsis is expected


def test_navigation_controls():
    first = Pagination(page=1, total=25, total_pages=3)
    last = Pagination(page=3, total=25, total_pages=3)
    single = Pagination(page=1, total=4, total_pages=1)

    assert first.previous_disabled and not first.next_disabled
    assert last.next_disabled and not last.previous_disabled
    assert not single.show_selector
    assert first.show_selector


def test_from_response():
    pagination = Pagination.from_response(
        {"posts": [], "page": 2, "limit": 10, "total": 15, "totalPages": 2}
    )

    assert pagination == Pagination(page=2, limit=10, total=15, total_pages=2)
