"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from freenethub.adapters import json_db
from freenethub.background.scheduler import start_scheduler, shutdown_scheduler
from freenethub.server.errors import ApiError, api_error_handler
from freenethub.server.routers import admin, auth, health, status
from freenethub.server.settings import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

DEFAULT_INDEX_HTML = (
    '<!doctype html><html><head><meta charset="utf-8">'
    '<meta name="viewport" content="width=device-width,initial-scale=1">'
    "<title>FreeNetHub</title></head><body><h1>FreeNetHub API</h1>"
    "<p>Visit /api/status or /auth/google to try Google login.</p></body></html>"
)


def ensure_public_dir() -> Path:
    """정적 파일 디렉토리와 기본 index.html 생성"""
    public_dir = Path(settings.PUBLIC_DIR)
    public_dir.mkdir(parents=True, exist_ok=True)
    index = public_dir / "index.html"
    if not index.exists():
        index.write_text(DEFAULT_INDEX_HTML, encoding="utf-8")
    return public_dir


# FastAPI 생명주기 관리
@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행되는 코드"""
    logger.info("Starting application...")

    await json_db.db.init()
    ensure_public_dir()

    if settings.ENABLE_BACKUPS:
        start_scheduler()
        logger.info("Background scheduler started")

    yield

    logger.info("Shutting down application...")
    if settings.ENABLE_BACKUPS:
        shutdown_scheduler()
        logger.info("Background scheduler stopped")


# Create FastAPI app
app = FastAPI(
    title="FreeNetHub API",
    description="Accounts, Google sign-in and marketplace API backed by a JSON file",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_methods=["*"],
    allow_headers=["*"],
)

# OAuth state 저장용 서명 쿠키 세션
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    https_only=settings.SESSION_HTTPS_ONLY,
)

app.add_exception_handler(ApiError, api_error_handler)

# Include routers
app.include_router(health.router)
app.include_router(status.router)
app.include_router(auth.router)
app.include_router(admin.router)

# 조건부: 인증 없는 관리자 승격 엔드포인트
if settings.ENABLE_CREATE_ADMIN:
    app.include_router(admin.promote_router)
else:
    logger.info("/api/create-admin disabled (ENABLE_CREATE_ADMIN=false)")

# 정적 파일은 모든 라우트 뒤에 마운트 (/ 전체를 잡기 때문)
app.mount(
    "/",
    StaticFiles(directory=settings.PUBLIC_DIR, html=True, check_dir=False),
    name="public",
)


def run():
    import uvicorn
    uvicorn.run(
        "freenethub.server.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
    )


if __name__ == "__main__":
    run()
