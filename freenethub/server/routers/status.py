"""Status and catalogue endpoints."""
import time

from fastapi import APIRouter, Depends

from freenethub.adapters.json_db import JsonDatabase
from freenethub.server.deps import get_db
from freenethub.server.schemas import (
    MarketplaceResponse,
    StatusResponse,
    SubscriptionsResponse,
)

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(database: JsonDatabase = Depends(get_db)):
    """서버 상태 확인. 호출마다 analytics.visits를 1 증가시킵니다."""
    async with database.transaction() as data:
        analytics = data.setdefault("analytics", {})
        analytics["visits"] = analytics.get("visits", 0) + 1

    return StatusResponse(ok=True, time=int(time.time() * 1000))


@router.get("/marketplace", response_model=MarketplaceResponse)
async def list_marketplace(database: JsonDatabase = Depends(get_db)):
    data = await database.read()
    return MarketplaceResponse(items=data.get("marketplace") or [])


@router.get("/subscriptions", response_model=SubscriptionsResponse)
async def list_subscriptions(database: JsonDatabase = Depends(get_db)):
    data = await database.read()
    return SubscriptionsResponse(plans=data.get("subscriptions") or [])
