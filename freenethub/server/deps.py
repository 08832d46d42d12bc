"""Dependency injection for FastAPI routes."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from freenethub.adapters import json_db
from freenethub.adapters.json_db import JsonDatabase
from freenethub.models.user import User
from freenethub.repositories.user_repo import UserRepository
from freenethub.server.errors import ApiError
from freenethub.server.security import JWTVerificationError, decode_token

logger = logging.getLogger(__name__)

# 헤더가 없을 때 FastAPI 기본 403 대신 no_auth 코드를 반환하기 위해 auto_error=False
security = HTTPBearer(auto_error=False)


def get_db() -> JsonDatabase:
    return json_db.db


def get_user_repo(database: JsonDatabase = Depends(get_db)) -> UserRepository:
    return UserRepository(database)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repo),
) -> User:
    """Bearer 토큰으로 현재 사용자를 인증하고 조회합니다.

    Raises:
        ApiError:
            - 401 no_auth - Authorization 헤더 없음
            - 401 invalid_token - 토큰 검증 실패/만료
            - 401 unknown_user - 토큰은 유효하나 사용자가 없음
    """
    if credentials is None or not credentials.credentials:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "no_auth")

    try:
        payload = decode_token(credentials.credentials)
    except JWTVerificationError as exc:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "invalid_token") from exc

    user_id = payload.get("id")
    user = await users.get_by_id(user_id) if user_id else None
    if user is None:
        logger.warning("Token refers to unknown user %s", user_id)
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "unknown_user")

    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        logger.warning("User %s attempted an admin action", user.id)
        raise ApiError(status.HTTP_403_FORBIDDEN, "forbidden")
    return user
