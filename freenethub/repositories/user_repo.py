"""User repository backed by the JSON file database."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from freenethub.adapters.json_db import JsonDatabase, db as default_db
from freenethub.models.user import User

logger = logging.getLogger(__name__)


def _find(users: List[Dict[str, Any]], **match: Any) -> Optional[Dict[str, Any]]:
    for record in users:
        if all(record.get(key) == value for key, value in match.items()):
            return record
    return None


class UserRepository:
    """users 컬렉션에 대한 조회/생성/수정"""

    def __init__(self, database: Optional[JsonDatabase] = None):
        self.db = database or default_db

    async def get_by_id(self, user_id: str) -> Optional[User]:
        data = await self.db.read()
        record = _find(data.get("users", []), id=user_id)
        return User.from_record(record) if record else None

    async def get_by_email(self, email: str) -> Optional[User]:
        data = await self.db.read()
        record = _find(data.get("users", []), email=email)
        return User.from_record(record) if record else None

    async def create_password_user(
        self,
        name: Optional[str],
        email: str,
        password_hash: str,
    ) -> Optional[User]:
        """이메일/비밀번호 사용자 생성

        Returns:
            생성된 User, 이미 같은 이메일이 있으면 None
        """
        async with self.db.transaction() as data:
            users = data.setdefault("users", [])
            if _find(users, email=email):
                return None

            user = User(name=name or "User", email=email, password=password_hash)
            users.append(user.to_record())

        logger.info("Registered user %s (%s)", user.id, email)
        return user

    async def upsert_google_user(
        self,
        google_id: str,
        display_name: Optional[str],
        email: Optional[str],
    ) -> User:
        """Google 프로필로 사용자를 찾거나 생성합니다.

        googleId가 같거나 이메일이 같은 기존 사용자가 있으면 그 사용자를 사용하고,
        googleId가 비어 있으면 연결합니다. 없으면 새로 만듭니다.

        googleId 일치를 이메일 일치보다 먼저 찾습니다. 서로 다른 두 레코드가
        각각 googleId와 이메일로 일치하면 googleId 쪽 레코드를 사용합니다.
        """
        async with self.db.transaction() as data:
            users = data.setdefault("users", [])

            record = _find(users, googleId=google_id)
            if record is None and email:
                record = _find(users, email=email)

            if record is None:
                user = User(
                    name=display_name or "GoogleUser",
                    email=email or f"noemail+{google_id}@example.com",
                    google_id=google_id,
                )
                users.append(user.to_record())
                logger.info("Created Google user %s (%s)", user.id, user.email)
                return user

            if not record.get("googleId"):
                record["googleId"] = google_id
                logger.info("Linked Google account to user %s", record.get("id"))

            return User.from_record(record)

    async def promote_to_admin(self, email: str) -> Optional[User]:
        async with self.db.transaction() as data:
            record = _find(data.get("users", []), email=email)
            if record is None:
                return None
            record["is_admin"] = True

        logger.info("Promoted %s to admin", email)
        return User.from_record(record)


# 전역 user repository 인스턴스
user_repo = UserRepository()
