"""main: FastAPI 애플리케이션의 메인 진입점.

애플리케이션 설정, 미들웨어 구성, 라우터 등록, 전역 예외 핸들러를 설정합니다.
"""

import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from routers import community_router
from middleware import TimingMiddleware, LoggingMiddleware, SecurityHeadersMiddleware
from middleware.exception_handler import (
    global_exception_handler,
    request_validation_exception_handler,
)
from core.config import settings
from database.connection import init_db, close_db
from fastapi.staticfiles import StaticFiles
from fastapi.exceptions import RequestValidationError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
from mangum import Mangum


logger = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리.

    시작 시 데이터베이스 연결 풀을 초기화하고 종료 시 정리합니다.
    """
    await init_db()
    yield
    await close_db()


app = FastAPI(
    title="Crop Community API",
    description="농업 커뮤니티 게시글 API 서버",
    version="1.0.0",
    lifespan=lifespan,
)

# 각 요청에 타임스탬프를 주입하여 request.state에서 접근 가능하게 함
app.add_middleware(TimingMiddleware)

app.add_middleware(LoggingMiddleware)

app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)

# 리버스 프록시 뒤에서 X-Forwarded-For/Proto를 명시된 프록시 IP에 한해 신뢰
_proxy_trusted_hosts = list(settings.TRUSTED_PROXIES) if settings.TRUSTED_PROXIES else ["127.0.0.1", "::1"]
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=_proxy_trusted_hosts)

app.include_router(community_router)

# 로컬 저장소 사용 시 업로드 파일 서빙 (Lambda에서는 /var/task가 읽기 전용)
if settings.STORAGE_TYPE == "local":
    if os.environ.get("AWS_LAMBDA_EXEC") != "true":
        os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    if os.path.isdir(settings.UPLOAD_DIR):
        app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/", response_class=PlainTextResponse, status_code=200)
async def root() -> str:
    return "Server is live and kicking!"


@app.get("/api/health", status_code=200)
async def health_check():
    """서버 상태 확인."""
    return {"status": "OK", "message": "API is running."}


@app.get("/cors-check", status_code=200)
async def cors_check():
    return {"message": "CORS is working fine!"}


app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)  # type: ignore[arg-type]

# AWS 핸들러 설정
handler = Mangum(app)
