"""MyPostsViewModel 테스트.

httpx.MockTransport 위에 최소한의 가짜 서버를 두고 화면 동작을 검증합니다.
"""

import json
import math

import httpx
import pytest
import pytest_asyncio

from client.api import CommunityApiClient
from client.config import ClientSettings
from client.draft import LocalFile
from client.session import Session, SessionStore
from client.view_model import AUTH_REQUIRED_MESSAGE, MyPostsViewModel

CATEGORIES = ["All", "General", "Crop Help", "Pest Control"]


def make_post(post_id: int, **overrides) -> dict:
    post = {
        "post_id": post_id,
        "author_id": 1,
        "title": f"Post {post_id}",
        "content": "content",
        "category": "General",
        "tags": [],
        "attachments": [],
        "created_at": "2024-01-01T09:00:00Z",
        "updated_at": None,
    }
    post.update(overrides)
    return post


class FakeServer:
    """요청을 기록하고 정해진 응답을 돌려주는 MockTransport 핸들러."""

    def __init__(self, post_count: int = 0):
        self.requests: list[httpx.Request] = []
        self.posts = [make_post(i) for i in range(post_count, 0, -1)]
        self.failures: dict[tuple[str, str], httpx.Response] = {}

    def fail(self, method: str, path: str, response: httpx.Response) -> None:
        self.failures[(method, f"/api/community{path}")] = response

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path == f"/api/community{path}"
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.failures:
            return self.failures[key]

        path = request.url.path.removeprefix("/api/community")
        if path == "/categories":
            return httpx.Response(200, json={"data": {"categories": CATEGORIES}})
        if request.method == "GET" and path == "/posts/mine":
            page = int(request.url.params["page"])
            limit = int(request.url.params["limit"])
            posts = self.posts
            if "category" in request.url.params:
                posts = [p for p in posts if p["category"] == request.url.params["category"]]
            return httpx.Response(
                200,
                json={
                    "posts": posts[(page - 1) * limit:page * limit],
                    "page": page,
                    "limit": limit,
                    "total": len(posts),
                    "totalPages": math.ceil(len(posts) / limit),
                },
            )
        if request.method == "POST" and path == "/posts":
            return httpx.Response(201, json={"data": {"post": make_post(999)}})
        if request.method == "PUT":
            return httpx.Response(200, json={"data": {"post": make_post(int(path.rsplit("/", 1)[1]))}})
        if request.method == "DELETE":
            return httpx.Response(200, json={"data": {"post_id": int(path.rsplit("/", 1)[1])}})
        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def server():
    return FakeServer(post_count=15)


@pytest.fixture
def session_store(tmp_path):
    store = SessionStore(tmp_path / "session.json")
    store.save(Session(token="token-123", user_id=1))
    return store


@pytest.fixture
def make_view_model(server, session_store):
    def factory(**settings_overrides) -> MyPostsViewModel:
        return MyPostsViewModel(
            session_store=session_store,
            client_factory=lambda token: CommunityApiClient(
                token, base_url="http://test", transport=httpx.MockTransport(server)
            ),
            settings=ClientSettings(**settings_overrides),
        )

    return factory


@pytest_asyncio.fixture
async def vm(make_view_model):
    """첫 페이지(15개 중 10개)를 불러온 뷰모델."""
    view_model = make_view_model()
    await view_model.mount()
    yield view_model
    await view_model.close()


# ============ 목록 ============


@pytest.mark.asyncio
async def test_mount_loads_categories_and_first_page(make_view_model, server):
    view_model = make_view_model()
    assert view_model.view_state == "loading"

    await view_model.mount()

    assert view_model.view_state == "list"
    assert view_model.categories == CATEGORIES
    assert [p["post_id"] for p in view_model.posts][:2] == [15, 14]
    assert view_model.pagination.total == 15
    assert view_model.pagination.total_pages == 2
    assert server.requests_to("GET", "/posts/mine")[0].headers["authorization"] == "Bearer token-123"
    await view_model.close()


@pytest.mark.asyncio
async def test_without_session_reports_auth_error(server, tmp_path):
    view_model = MyPostsViewModel(
        session_store=SessionStore(tmp_path / "missing.json"),
        client_factory=lambda token: CommunityApiClient(
            token, base_url="http://test", transport=httpx.MockTransport(server)
        ),
    )

    await view_model.mount()

    assert view_model.view_state == "error"
    assert view_model.error == AUTH_REQUIRED_MESSAGE
    assert server.requests == []


@pytest.mark.asyncio
async def test_fetch_error_replaces_view_and_retry_recovers(make_view_model, server):
    server.fail(
        "GET",
        "/posts/mine",
        httpx.Response(500, json={"message": "Database unavailable"}),
    )
    view_model = make_view_model()

    await view_model.mount()
    assert view_model.view_state == "error"
    assert view_model.error == "Database unavailable"

    server.failures.clear()
    await view_model.fetch_posts()
    assert view_model.view_state == "list"
    assert view_model.error is None
    await view_model.close()


@pytest.mark.asyncio
async def test_non_json_list_body_shows_fallback_error(make_view_model, server):
    server.fail("GET", "/posts/mine", httpx.Response(200, text="maintenance"))
    view_model = make_view_model()

    await view_model.mount()

    assert view_model.view_state == "error"
    assert view_model.error == "Failed to fetch your posts"
    await view_model.close()


@pytest.mark.asyncio
async def test_change_page_refetches(vm, server):
    await vm.change_page(2)

    last = server.requests_to("GET", "/posts/mine")[-1]
    assert last.url.params["page"] == "2"
    assert len(vm.posts) == 5
    assert vm.pagination.next_disabled


@pytest.mark.asyncio
@pytest.mark.parametrize("page", [0, 1, 3])
async def test_change_page_ignores_invalid_or_current(vm, server, page):
    before = len(server.requests)

    await vm.change_page(page)

    assert len(server.requests) == before


@pytest.mark.asyncio
async def test_select_category_filters_on_current_page(vm, server):
    await vm.change_page(2)

    await vm.select_category("Pest Control")

    last = server.requests_to("GET", "/posts/mine")[-1]
    assert last.url.params["category"] == "Pest Control"
    assert last.url.params["page"] == "2"

    await vm.select_category("All")
    assert "category" not in server.requests_to("GET", "/posts/mine")[-1].url.params


@pytest.mark.asyncio
async def test_search_only_on_submit(vm, server):
    before = len(server.requests)

    vm.set_search_query("drip")
    assert len(server.requests) == before

    await vm.submit_search()
    assert server.requests_to("GET", "/posts/mine")[-1].url.params["search"] == "drip"


@pytest.mark.asyncio
async def test_submit_search_keeps_current_page(vm, server):
    await vm.change_page(2)
    vm.set_search_query("drip")

    await vm.submit_search()

    last = server.requests_to("GET", "/posts/mine")[-1]
    assert last.url.params["page"] == "2"
    assert last.url.params["search"] == "drip"


@pytest.mark.asyncio
async def test_reset_filters_refetches_only_when_page_or_category_changed(vm, server):
    vm.set_search_query("drip")
    before = len(server.requests)

    await vm.reset_filters()
    assert vm.search_query == ""
    assert len(server.requests) == before

    await vm.select_category("Crop Help")
    before = len(server.requests)
    await vm.reset_filters()
    assert vm.selected_category == "All"
    assert len(server.requests) == before + 1


# ============ 폼 ============


@pytest.mark.asyncio
async def test_open_create_resets_draft(vm):
    vm.open_edit(make_post(3, tags=["x"]))
    vm.open_create()

    assert vm.view_state == "form"
    assert (vm.draft.title, vm.draft.content, vm.draft.category, vm.draft.tags) == (
        "",
        "",
        "General",
        "",
    )
    assert vm.draft.post_id is None
    assert vm.files == [] and vm.existing_attachments == [] and vm.removed_attachments == []


@pytest.mark.asyncio
async def test_open_edit_seeds_from_post(vm):
    attachments = [{"attachment_id": 5, "original_name": "a.jpg"}]
    vm.open_edit(make_post(3, title="Rust", tags=["wheat", "harvest", "2023"], attachments=attachments))

    assert vm.draft.post_id == 3
    assert vm.draft.title == "Rust"
    assert vm.draft.tags == "wheat, harvest, 2023"
    assert vm.existing_attachments == attachments


@pytest.mark.asyncio
async def test_attachment_trackers(vm):
    vm.open_edit(
        make_post(
            3,
            attachments=[
                {"attachment_id": 5, "original_name": "a.jpg"},
                {"attachment_id": 6, "original_name": "b.pdf"},
            ],
        )
    )
    vm.add_files([LocalFile("c.png", b"png"), LocalFile("d.txt", b"txt")])

    vm.remove_existing_attachment(5)
    vm.remove_existing_attachment(404)
    vm.remove_file(0)

    assert [a["attachment_id"] for a in vm.existing_attachments] == [6]
    assert vm.removed_attachments == [5]
    assert [f.name for f in vm.files] == ["d.txt"]


@pytest.mark.asyncio
async def test_add_files_rejects_oversized(make_view_model):
    view_model = make_view_model(MAX_FILE_SIZE=10)
    view_model.open_create()

    added = view_model.add_files([LocalFile("ok.txt", b"small"), LocalFile("big.pdf", b"x" * 11)])

    assert [f.name for f in added] == ["ok.txt"]
    assert [f.name for f in view_model.files] == ["ok.txt"]
    assert "big.pdf" in view_model.action_error


@pytest.mark.asyncio
async def test_submit_create_closes_form_and_refetches(vm, server):
    vm.open_create()
    vm.update_field("title", "New post")
    vm.update_field("content", "Body")
    vm.add_files([LocalFile("a.jpg", b"\xff\xd8\xff", "image/jpeg")])

    assert await vm.submit() is True

    create = server.requests_to("POST", "/posts")[0]
    assert b'filename="a.jpg"' in create.content
    assert server.requests[-1].url.path == "/api/community/posts/mine"
    assert vm.view_state == "list"
    assert vm.draft is None


@pytest.mark.asyncio
async def test_submit_edit_sends_removal_list(vm, server):
    vm.open_edit(make_post(3, attachments=[{"attachment_id": 5}, {"attachment_id": 6}]))
    vm.remove_existing_attachment(5)
    vm.add_files([LocalFile("c.pdf", b"%PDF", "application/pdf")])

    assert await vm.submit() is True

    update = server.requests_to("PUT", "/posts/3")[0]
    assert b'name="removedAttachments"' in update.content
    assert json.dumps([5]).encode() in update.content


@pytest.mark.asyncio
async def test_submit_failure_keeps_form(vm, server):
    server.fail(
        "POST",
        "/posts",
        httpx.Response(400, json={"detail": {"error": "validation_error", "message": "Title is required."}}),
    )
    vm.open_create()
    vm.update_field("content", "Body only")

    assert await vm.submit() is False

    assert vm.view_state == "form"
    assert vm.action_error == "Title is required."
    assert vm.draft.content == "Body only"
    assert vm.submitting is False


@pytest.mark.asyncio
async def test_submit_ignored_while_submitting(vm, server):
    vm.open_create()
    vm.submitting = True
    before = len(server.requests)

    assert await vm.submit() is False
    assert len(server.requests) == before


def test_update_field_requires_open_form(make_view_model):
    view_model = make_view_model()

    with pytest.raises(RuntimeError):
        view_model.update_field("title", "x")


# ============ 삭제 ============


@pytest.mark.asyncio
async def test_delete_requires_confirmation(vm, server):
    prompts = []

    def decline(message):
        prompts.append(message)
        return False

    assert await vm.delete_post(3, decline) is False
    assert prompts == ["Are you sure you want to delete this post?"]
    assert server.requests_to("DELETE", "/posts/3") == []


@pytest.mark.asyncio
async def test_delete_confirmed_refetches(vm, server):
    assert await vm.delete_post(3, lambda message: True) is True

    assert len(server.requests_to("DELETE", "/posts/3")) == 1
    assert server.requests[-1].url.path == "/api/community/posts/mine"


@pytest.mark.asyncio
async def test_delete_failure_uses_fallback_message(vm, server):
    server.fail("DELETE", "/posts/3", httpx.Response(502, text="Bad Gateway"))

    assert await vm.delete_post(3, lambda message: True) is False
    assert vm.action_error == "Failed to delete post"
    assert vm.view_state == "list"
