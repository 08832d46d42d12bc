"""Admin endpoints.

- GET /api/create-admin: 이메일로 사용자를 관리자로 승격 (ENABLE_CREATE_ADMIN일 때만 등록)
- POST /api/admin/backup, GET /api/admin/stats: 관리자 토큰 필요
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from freenethub.adapters.json_db import JsonDatabase
from freenethub.background import backups
from freenethub.background.scheduler import run_task_now
from freenethub.models.user import User
from freenethub.repositories.user_repo import UserRepository
from freenethub.server.deps import get_db, get_user_repo, require_admin
from freenethub.server.errors import ApiError
from freenethub.server.schemas import AdminStatsResponse, BackupResponse, PromoteResponse

logger = logging.getLogger(__name__)

promote_router = APIRouter(prefix="/api", tags=["admin"])
router = APIRouter(prefix="/api/admin", tags=["admin"])


@promote_router.get("/create-admin", response_model=PromoteResponse)
async def create_admin(
    email: Optional[str] = None,
    users: UserRepository = Depends(get_user_repo),
):
    """이메일로 사용자를 관리자로 승격합니다.

    인증 없이 호출 가능하므로 운영 환경에서는 ENABLE_CREATE_ADMIN=false 권장.
    """
    if not email:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "missing_email")

    user = await users.promote_to_admin(email)
    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "user_not_found")

    return PromoteResponse(ok=True, message=f"User {email} promoted to admin.")


@router.post("/backup", response_model=BackupResponse)
async def trigger_backup(admin: User = Depends(require_admin)):
    """DB 스냅샷을 즉시 생성"""
    logger.info("Manual backup requested by %s", admin.id)
    path = await run_task_now("db_backup")
    return BackupResponse(ok=path is not None, path=str(path) if path else None)


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    _: User = Depends(require_admin),
    database: JsonDatabase = Depends(get_db),
):
    data = await database.read()
    return AdminStatsResponse(
        counts=await database.counts(),
        analytics=data.get("analytics") or {},
        backups=[path.name for path in backups.list_backups()],
    )
