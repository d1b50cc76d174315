from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """커뮤니티 클라이언트 설정.

    COMMUNITY_ 접두사가 붙은 환경 변수와 .env 파일에서 로드합니다.

    Attributes:
        API_BASE_URL: API 서버 주소.
        SESSION_FILE: 로그인 세션(토큰, 사용자 ID)을 저장한 JSON 파일 경로.
        PAGE_SIZE: 목록 페이지당 게시글 수.
        MAX_FILE_SIZE: 첨부파일 1개당 최대 크기 (바이트).
        TIMEOUT_SECONDS: HTTP 요청 타임아웃.
    """

    API_BASE_URL: str = "http://localhost:5000"
    SESSION_FILE: str = ".community_session.json"
    PAGE_SIZE: int = 10
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB
    TIMEOUT_SECONDS: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="COMMUNITY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


client_settings = ClientSettings()
