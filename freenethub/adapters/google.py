"""Google OAuth 2.0 adapter.

인증 흐름:
1. build_authorization_url → 사용자를 Google 동의 화면으로 리다이렉트
2. exchange_code_for_token → callback으로 받은 code를 access token으로 교환
3. get_user_info → OpenID userinfo 엔드포인트에서 프로필 조회
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from freenethub.server.settings import settings

logger = logging.getLogger(__name__)

AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ("openid", "email", "profile")


def is_configured() -> bool:
    return bool(settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET)


def build_authorization_url(redirect_uri: str, state: str) -> str:
    """Google 동의 화면 URL 생성"""
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID or "",
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "state": state,
    }
    return f"{AUTHORIZATION_URL}?{urlencode(params)}"


async def exchange_code_for_token(code: str, redirect_uri: str) -> Optional[str]:
    """Google OAuth code를 access token으로 교환합니다.
    
    Args:
        code: callback으로 전달된 authorization code
        redirect_uri: 인증 요청에 사용한 것과 동일한 redirect URI
        
    Returns:
        Access token 문자열, 실패 시 None
    """
    if not is_configured():
        logger.error("Google OAuth credentials not configured")
        return None

    try:
        async with httpx.AsyncClient(timeout=settings.GOOGLE_TIMEOUT) as client:
            response = await client.post(
                TOKEN_URL,
                headers={"Accept": "application/json"},
                data={
                    "client_id": settings.GOOGLE_CLIENT_ID,
                    "client_secret": settings.GOOGLE_CLIENT_SECRET,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": redirect_uri,
                },
            )
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to exchange code for token: {e}")
        return None

    access_token = data.get("access_token")
    if not access_token:
        logger.error(f"No access token in response: {data}")
        return None

    logger.info("Successfully exchanged code for access token")
    return access_token


async def get_user_info(access_token: str) -> Optional[Dict[str, Any]]:
    """Google access token으로 사용자 프로필을 가져옵니다.
    
    Returns:
        사용자 정보 딕셔너리:
            - id: Google 계정 ID (sub)
            - name: 표시 이름 (optional)
            - email: 이메일 (optional)
        실패 시 None
    """
    try:
        async with httpx.AsyncClient(timeout=settings.GOOGLE_TIMEOUT) as client:
            response = await client.get(
                USERINFO_URL,
                headers={
                    "Accept": "application/json",
                    "Authorization": f"Bearer {access_token}",
                },
            )
            response.raise_for_status()
            profile = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to fetch user info: {e}")
        return None

    if not profile.get("sub"):
        logger.error(f"Userinfo response missing subject: {profile}")
        return None

    result = {
        "id": str(profile["sub"]),
        "name": profile.get("name"),
        "email": profile.get("email"),
    }
    logger.info(f"Successfully fetched Google profile {result['id']}")
    return result
