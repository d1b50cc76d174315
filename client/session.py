"""session: 클라이언트 로그인 세션 저장소.

로그인 화면이 저장한 {"token": ..., "userId": ...} JSON 파일을 읽고 씁니다.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    token: str
    user_id: int | None = None


class SessionStore:
    """JSON 파일 기반 세션 저장소."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Session | None:
        """저장된 세션을 반환합니다. 파일이 없거나 토큰이 없으면 None."""
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Session file is corrupted: {self.path}")
            return None

        if not isinstance(data, dict) or not data.get("token"):
            return None

        user_id = data.get("userId")
        return Session(
            token=str(data["token"]),
            user_id=int(user_id) if user_id is not None else None,
        )

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": session.token, "userId": session.user_id}),
            encoding="utf-8",
        )

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
