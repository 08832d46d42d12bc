"""Authentication endpoints.

- 이메일/비밀번호: POST /api/register, POST /api/login
- Google OAuth: GET /auth/google → Google → GET /auth/google/callback
- 로그인 성공 시 JWT를 발급하고, Google 로그인은 /dashboard?token=... 으로 전달합니다.
"""
import logging
import secrets
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from freenethub.adapters import google
from freenethub.models.user import User, UserPublic
from freenethub.repositories.user_repo import UserRepository
from freenethub.server.deps import get_current_user, get_user_repo
from freenethub.server.errors import ApiError
from freenethub.server.schemas import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from freenethub.server.security import create_token, hash_password, verify_password
from freenethub.server.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

FAILURE_PATH = "/auth/google/failure"
OAUTH_STATE_KEY = "google_oauth_state"

DASHBOARD_HTML = """<!doctype html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1"><title>FreeNetHub Dashboard</title></head>
<body style="font-family:Arial,Helvetica,sans-serif;background:#071024;color:#fff;display:flex;align-items:center;justify-content:center;height:100vh">
  <div style="max-width:720px;padding:20px;background:#071736;border-radius:12px;box-shadow:0 10px 30px rgba(0,0,0,0.6);">
    <h2>FreeNetHub Dashboard (Google Login)</h2>
    <p id="status">Processing login...</p>
    <script>
      (function(){
        var token = new URL(location.href).searchParams.get('token');
        var el = document.getElementById('status');
        if(token){
          try{ localStorage.setItem('freenethub_token', token); el.innerText = 'Login successful. Token saved to localStorage. You may close this page.'; }
          catch(e){ el.innerText = 'Login received but could not save to localStorage.'; }
        } else {
          el.innerText = 'No token received. Try logging in again.';
        }
      })();
    </script>
  </div>
</body>
</html>"""


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(user=UserPublic.from_user(user), token=create_token(user))


def _callback_url(request: Request) -> str:
    """GOOGLE_CALLBACK_URL이 상대 경로이면 요청 호스트 기준 절대 URL로 변환"""
    callback = settings.GOOGLE_CALLBACK_URL
    if callback.startswith(("http://", "https://")):
        return callback
    return str(request.base_url).rstrip("/") + "/" + callback.lstrip("/")


# ============================================================================
# 이메일/비밀번호
# ============================================================================

@router.post("/api/register", response_model=AuthResponse)
async def register(
    body: RegisterRequest,
    users: UserRepository = Depends(get_user_repo),
):
    if not body.email or not body.password:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "missing")

    user = await users.create_password_user(body.name, body.email, hash_password(body.password))
    if user is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "exists")

    return _auth_response(user)


@router.post("/api/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repo),
):
    user = await users.get_by_email(body.email) if body.email else None
    if user is None or not verify_password(body.password, user.password):
        logger.warning("Failed login for %s", body.email)
        raise ApiError(status.HTTP_400_BAD_REQUEST, "invalid")

    logger.info("User %s logged in", user.id)
    return _auth_response(user)


@router.get("/api/me", response_model=MeResponse)
async def me(user: User = Depends(get_current_user)):
    return MeResponse(user=UserPublic.from_user(user))


# ============================================================================
# Google OAuth
# ============================================================================

@router.get("/auth/google")
async def google_login(request: Request):
    """Google 동의 화면으로 리다이렉트합니다.

    CSRF 방지용 state는 서명된 세션 쿠키에 저장되어 callback에서 비교됩니다.
    """
    if not google.is_configured():
        logger.error("Google login requested but GOOGLE_CLIENT_ID/SECRET are not set")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "google_not_configured")

    state = secrets.token_urlsafe(16)
    request.session[OAUTH_STATE_KEY] = state
    url = google.build_authorization_url(_callback_url(request), state)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    users: UserRepository = Depends(get_user_repo),
):
    failure = RedirectResponse(FAILURE_PATH, status_code=status.HTTP_302_FOUND)
    params = request.query_params
    expected_state = request.session.pop(OAUTH_STATE_KEY, None)

    if params.get("error"):
        logger.warning("Google returned an error: %s", params.get("error"))
        return failure

    code = params.get("code")
    if not code:
        logger.warning("Google callback without authorization code")
        return failure

    state = params.get("state")
    if not expected_state or not state or not secrets.compare_digest(state, expected_state):
        logger.warning("Google callback state mismatch")
        return failure

    access_token = await google.exchange_code_for_token(code, _callback_url(request))
    if not access_token:
        return failure

    profile = await google.get_user_info(access_token)
    if not profile:
        return failure

    user = await users.upsert_google_user(
        google_id=profile["id"],
        display_name=profile.get("name"),
        email=profile.get("email"),
    )
    logger.info("Google sign-in for user %s", user.id)

    token = create_token(user)
    return RedirectResponse(
        f"{settings.DASHBOARD_PATH}?token={quote(token, safe='')}",
        status_code=status.HTTP_302_FOUND,
    )


@router.get(FAILURE_PATH)
async def google_failure():
    return PlainTextResponse("Google login failed", status_code=status.HTTP_400_BAD_REQUEST)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard():
    """Google 로그인 후 토큰을 localStorage에 저장하는 페이지"""
    return HTMLResponse(DASHBOARD_HTML)
