from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """커뮤니티 API 서버 설정을 관리하는 클래스.

    환경 변수와 .env 파일에서 설정을 로드하며, 기본값을 제공합니다.

    Attributes:
        SECRET_KEY: JWT 토큰 서명 키.
        ALLOWED_ORIGINS: CORS 허용 오리진 목록.
        DB_HOST: MySQL 호스트 주소.
        DB_PORT: MySQL 포트 번호.
        DB_USER: MySQL 사용자명.
        DB_PASSWORD: MySQL 비밀번호.
        DB_NAME: MySQL 데이터베이스 이름.
        STORAGE_TYPE: 첨부파일 저장소 종류 ("local" | "s3").
        MAX_ATTACHMENT_SIZE: 첨부파일 1개당 최대 크기 (바이트).
    """

    SECRET_KEY: str
    HTTPS_ONLY: bool = False
    ALLOWED_ORIGINS: list[str] = [
        "https://crop-rec-app-kappa.vercel.app",  # 프로덕션 프론트엔드
        "http://localhost:3000",  # 로컬 개발 (프론트엔드)
    ]

    DB_HOST: str
    DB_PORT: int = 3306
    DB_USER: str
    DB_PASSWORD: str
    DB_NAME: str

    JWT_ACCESS_EXPIRE_MINUTES: int = 60 * 24

    # 첨부파일 저장소
    STORAGE_TYPE: str = "local"  # "s3" (프로덕션) | "local" (개발)
    UPLOAD_DIR: str = "uploads"
    MAX_ATTACHMENT_SIZE: int = 5 * 1024 * 1024  # 5MB

    AWS_REGION: str = "ap-south-1"
    AWS_S3_BUCKET_NAME: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    CLOUDFRONT_DOMAIN: str = ""

    TRUSTED_PROXIES: set[str] = set()  # 프로덕션에서 프록시 IP 설정 필요

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()  # type: ignore[call-arg]  # pydantic-settings는 .env에서 환경 변수를 불러옴.
