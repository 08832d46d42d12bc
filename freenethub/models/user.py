"""User model and schema.

db.json의 users 컬렉션에 저장되는 사용자 정보를 표현합니다.
저장 키는 기존 파일 포맷(camelCase: googleId, referralCode)을 그대로 유지합니다.
"""
from __future__ import annotations

import secrets
import string
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

REFERRAL_ALPHABET = string.ascii_uppercase + string.digits


def generate_user_id() -> str:
    """짧은 url-safe 사용자 ID"""
    return secrets.token_urlsafe(6)


def generate_referral_code() -> str:
    return "REF" + "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(6))


class User(BaseModel):
    """사용자 모델.

    이메일/비밀번호 또는 Google OAuth로 가입한 사용자 정보를 담습니다.

    Attributes:
        id: 내부 사용자 ID
        name: 표시 이름
        email: 이메일 (고유)
        password: bcrypt 해시 (Google 전용 계정은 None)
        google_id: Google 계정 ID (저장 키: googleId)
        credits: 보유 크레딧
        is_admin: 관리자 여부
        referral_code: 추천 코드 (저장 키: referralCode)
        data_balance_mb: 남은 데이터 (MB)
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(default_factory=generate_user_id)
    name: str = "User"
    email: str
    password: Optional[str] = None
    google_id: Optional[str] = Field(None, alias="googleId")
    credits: Union[int, float] = 0
    is_admin: bool = False
    referral_code: str = Field(default_factory=generate_referral_code, alias="referralCode")
    data_balance_mb: Union[int, float] = 0

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        """Create a User from a db.json record."""
        return cls.model_validate(record)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UserPublic(BaseModel):
    """공개용 사용자 정보 (비밀번호 해시, 관리자 여부 제외)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    credits: Union[int, float] = 0
    referral_code: str = Field(..., alias="referralCode")
    data_balance_mb: Union[int, float] = 0

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            credits=user.credits,
            referral_code=user.referral_code,
            data_balance_mb=user.data_balance_mb,
        )
