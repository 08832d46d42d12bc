"""Security utilities: password hashing and session tokens."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from jwt import InvalidTokenError

from freenethub.models.user import User
from freenethub.server.settings import settings

logger = logging.getLogger(__name__)


class JWTVerificationError(Exception):
    """Raised when a JWT cannot be verified."""


BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # bcrypt는 앞 72바이트만 사용. bcrypt>=5.0은 초과 시 ValueError를 내므로 직접 자른다
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """비밀번호 검증. Google 전용 계정처럼 해시가 없으면 False."""
    if not hashed or password is None:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError as exc:
        logger.warning("Stored password hash is not a valid bcrypt hash: %s", exc)
        return False


def create_token(user: User) -> str:
    """사용자 세션 JWT 발급

    Claims:
        id, email, name, is_admin, iat, exp (JWT_EXPIRES_DAYS 후 만료)
    """
    now = datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "is_admin": bool(user.is_admin),
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except InvalidTokenError as exc:
        logger.warning("JWT verification failed: %s", exc)
        raise JWTVerificationError(str(exc)) from exc
