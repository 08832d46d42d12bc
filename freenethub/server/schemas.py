"""Pydantic schemas for request/response models.

이 파일은 FastAPI 엔드포인트의 요청/응답 모델을 정의합니다.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from freenethub.models.user import UserPublic


# ============================================================================
# Auth 관련 스키마
# ============================================================================

class RegisterRequest(BaseModel):
    """이메일/비밀번호 가입 요청.

    email, password 누락은 422 대신 400 missing으로 처리하기 위해 Optional로 둡니다.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ada",
                "email": "ada@example.com",
                "password": "s3cret"
            }
        }


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """가입/로그인 성공 응답.

    Attributes:
        user: 사용자 공개 정보
        token: Bearer 토큰 (Authorization 헤더에 사용)
    """
    user: UserPublic
    token: str


class MeResponse(BaseModel):
    user: UserPublic


# ============================================================================
# 기타 엔드포인트 스키마
# ============================================================================

class StatusResponse(BaseModel):
    ok: bool = True
    time: int = Field(..., description="Server time in epoch milliseconds")


class MarketplaceResponse(BaseModel):
    items: List[Dict[str, Any]] = Field(default_factory=list)


class SubscriptionsResponse(BaseModel):
    plans: List[Dict[str, Any]] = Field(default_factory=list)


class PromoteResponse(BaseModel):
    ok: bool = True
    message: str


class BackupResponse(BaseModel):
    ok: bool
    path: Optional[str] = None


class AdminStatsResponse(BaseModel):
    counts: Dict[str, int]
    analytics: Dict[str, Any] = Field(default_factory=dict)
    backups: List[str] = Field(default_factory=list)


# ============================================================================
# Error 관련 스키마
# ============================================================================

class ErrorResponse(BaseModel):
    """에러 응답 모델.

    JSON 형식:
        {"error": "invalid_token"}
    """
    error: str
