"""draft: 작성/수정 폼의 작업 사본과 로컬 첨부파일."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CATEGORY = "General"


def join_tags(tags: list[str]) -> str:
    """태그 목록을 수정 폼에 표시할 문자열로 합칩니다.

    Examples:
        >>> join_tags(["wheat", "harvest", "2023"])
        'wheat, harvest, 2023'
    """
    return ", ".join(tags)


@dataclass
class PostDraft:
    """폼에 열려 있는 게시글의 작업 사본.

    post_id가 없으면 작성, 있으면 수정 모드입니다.
    tags는 사용자가 입력하는 쉼표 구분 문자열 그대로 보관합니다.
    """

    title: str = ""
    content: str = ""
    category: str = DEFAULT_CATEGORY
    tags: str = ""
    post_id: int | None = None

    @property
    def is_edit(self) -> bool:
        return self.post_id is not None

    @classmethod
    def from_post(cls, post: dict[str, Any]) -> "PostDraft":
        """API 응답의 게시글로 수정용 초안을 만듭니다."""
        return cls(
            title=post.get("title", ""),
            content=post.get("content", ""),
            category=post.get("category") or DEFAULT_CATEGORY,
            tags=join_tags(post.get("tags") or []),
            post_id=post["post_id"],
        )

    def form_fields(self) -> dict[str, str]:
        """multipart 요청의 텍스트 필드."""
        return {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": self.tags,
        }


@dataclass(frozen=True)
class LocalFile:
    """아직 업로드되지 않은 로컬 파일."""

    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path) -> "LocalFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )
