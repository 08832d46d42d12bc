"""Health check endpoints."""
from fastapi import APIRouter, Depends
from typing import Dict, Any

from freenethub.adapters import google
from freenethub.adapters.json_db import JsonDatabase
from freenethub.server.deps import get_db

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def health_check() -> Dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.get("/readyz")
async def readiness_check(database: JsonDatabase = Depends(get_db)) -> Dict[str, Any]:
    """Readiness check endpoint.
    
    DB 파일을 읽을 수 있는지, Google OAuth가 설정되어 있는지 확인합니다.
    Google 설정은 참고용이며 readiness 판정에는 포함하지 않습니다.
    
    Returns:
        Status response with readiness info
    """
    try:
        await database.read()
        database_ok = True
    except (OSError, ValueError):
        database_ok = False

    checks = {
        "database": database_ok,
        "google_oauth": google.is_configured(),
    }

    return {
        "status": "ok" if database_ok else "not_ready",
        "checks": checks
    }
