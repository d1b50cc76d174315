import os
import sys
import tempfile

# Settings는 import 시점에 필수 값을 검증하므로 앱 import 전에 환경 변수를 설정
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-community-api-0123456789")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "community_test")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="community-uploads-"))

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import dataclasses
import itertools
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport

from core.config import settings
from main import app
from models import post_models, user_models
from models.attachment_models import Attachment
from models.post_models import Post
from models.user_models import User
from utils.file_utils import StoredFile
from utils.jwt_utils import create_access_token


JPEG_BYTES = b"\xFF\xD8\xFF\xE0" + b"fake jpeg body" * 4
PNG_BYTES = b"\x89\x50\x4E\x47\x0D\x0A\x1A\x0A" + b"fake png body"


class FakeCommunityStore:
    """MySQL 대신 사용하는 인메모리 게시글/사용자 저장소.

    post_models와 user_models의 공개 함수와 같은 시그니처를 가지며,
    반환하는 Post는 복사본이므로 호출 측의 변경이 저장소에 반영되지 않습니다.
    """

    def __init__(self):
        self.posts: dict[int, Post] = {}
        self.users: dict[int, User] = {}
        self._post_ids = itertools.count(1)
        self._attachment_ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1, 9, 0, 0)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    @staticmethod
    def _copy(post: Post) -> Post:
        return dataclasses.replace(
            post, tags=list(post.tags), attachments=list(post.attachments)
        )

    def _attachment(self, post_id: int, stored: StoredFile) -> Attachment:
        return Attachment(
            id=next(self._attachment_ids),
            post_id=post_id,
            url=stored.url,
            original_name=stored.original_name,
            file_type=stored.file_type,
            content_type=stored.content_type,
            size=stored.size,
            created_at=self._clock,
        )

    def _visible(self, author_id, search=None, category=None) -> list[Post]:
        posts = [
            p for p in self.posts.values()
            if p.author_id == author_id and not p.is_deleted
        ]
        if search and search.strip():
            needle = search.strip().lower()
            posts = [
                p for p in posts
                if needle in p.title.lower() or needle in p.content.lower()
            ]
        if category is not None:
            posts = [p for p in posts if p.category == category]
        return sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)

    def add_user(self, user_id: int, name: str = "farmer", deleted: bool = False) -> User:
        user = User(
            id=user_id,
            email=f"user{user_id}@example.com",
            name=name,
            created_at=self._clock,
            deleted_at=self._clock if deleted else None,
        )
        self.users[user_id] = user
        return user

    async def get_user_by_id(self, user_id):
        return self.users.get(user_id)

    async def count_posts_by_author(self, author_id, search=None, category=None):
        return len(self._visible(author_id, search, category))

    async def get_posts_by_author(
        self, author_id, offset=0, limit=10, search=None, category=None
    ):
        posts = self._visible(author_id, search, category)
        return [self._copy(p) for p in posts[offset:offset + limit]]

    async def get_post_by_id(self, post_id):
        post = self.posts.get(post_id)
        if post is None or post.is_deleted:
            return None
        return self._copy(post)

    async def create_post(
        self, author_id, title, content, category, tags, attachments=None
    ):
        post_id = next(self._post_ids)
        post = Post(
            id=post_id,
            author_id=author_id,
            title=title,
            content=content,
            category=category,
            tags=list(tags),
            created_at=self._tick(),
        )
        post.attachments = [self._attachment(post_id, s) for s in attachments or []]
        self.posts[post_id] = post
        return self._copy(post)

    async def update_post(
        self,
        post_id,
        title,
        content,
        category,
        tags,
        removed_attachment_ids=None,
        new_attachments=None,
    ):
        post = self.posts.get(post_id)
        if post is None or post.is_deleted:
            return None, []

        removed_ids = set(removed_attachment_ids or [])
        removed = [a for a in post.attachments if a.id in removed_ids]
        kept = [a for a in post.attachments if a.id not in removed_ids]

        post.title = title
        post.content = content
        post.category = category
        post.tags = list(tags)
        post.updated_at = self._tick()
        post.attachments = kept + [
            self._attachment(post_id, s) for s in new_attachments or []
        ]
        return self._copy(post), removed

    async def delete_post(self, post_id):
        post = self.posts.get(post_id)
        if post is None or post.is_deleted:
            return []
        removed = list(post.attachments)
        post.attachments = []
        post.deleted_at = self._tick()
        return removed


@pytest.fixture
def store(monkeypatch):
    """post_models/user_models의 DB 함수를 인메모리 저장소로 대체합니다."""
    fake_store = FakeCommunityStore()
    for name in (
        "count_posts_by_author",
        "get_posts_by_author",
        "get_post_by_id",
        "create_post",
        "update_post",
        "delete_post",
    ):
        monkeypatch.setattr(post_models, name, getattr(fake_store, name))
    monkeypatch.setattr(user_models, "get_user_by_id", fake_store.get_user_by_id)
    return fake_store


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """로컬 저장소 경로를 임시 디렉터리로 바꿉니다."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    monkeypatch.setattr(settings, "STORAGE_TYPE", "local")
    monkeypatch.setattr("utils.storage.UPLOAD_DIR", directory)
    return directory


@pytest_asyncio.fixture
async def client(store, upload_dir):
    """API 테스트를 위한 Async Client"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(store):
    """사용자를 등록하고 Bearer 헤더를 반환하는 팩토리."""

    def make(user_id: int) -> dict[str, str]:
        if user_id not in store.users:
            store.add_user(user_id)
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return make


@pytest.fixture
def fake():
    return Faker()


@pytest.fixture
def post_payload(fake):
    """게시글 작성용 폼 페이로드 생성"""
    return {
        "title": fake.sentence(nb_words=5)[:200],
        "content": fake.paragraph(nb_sentences=3),
        "category": "Crop Help",
        "tags": "wheat, harvest, 2023",
    }
