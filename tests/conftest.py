"""Pytest configuration and fixtures.

이 모듈은 모든 테스트에서 공유되는 pytest fixture들을 정의합니다.

주요 Fixture:
- db_path: 테스트마다 새로 만드는 임시 db.json 경로
- database: 임시 파일을 쓰는 JsonDatabase
- client: FastAPI 테스트 클라이언트 (lifespan 실행)
- registered_user / auth_headers: 가입된 사용자와 Bearer 헤더
- admin_headers: 관리자 권한 사용자 헤더
- mock_google_api: Google OAuth adapter mock
"""
import os
import tempfile

# 앱 import 전에 정적 파일 디렉토리와 스케줄러 설정을 고정
os.environ.setdefault("PUBLIC_DIR", tempfile.mkdtemp(prefix="freenethub-public-"))
os.environ.setdefault("ENABLE_BACKUPS", "false")
os.environ.setdefault("ENABLE_CREATE_ADMIN", "true")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch

from freenethub.adapters.json_db import JsonDatabase
from freenethub.server.main import app
from freenethub.server.settings import settings


@pytest.fixture(autouse=True)
def _isolated_storage(tmp_path, monkeypatch):
    """DB 파일과 백업 디렉토리를 테스트별 임시 경로로 교체합니다."""
    monkeypatch.setattr(settings, "DB_FILE", str(tmp_path / "db.json"))
    monkeypatch.setattr(settings, "BACKUP_DIR", str(tmp_path / "backups"))
    monkeypatch.setattr(settings, "ENABLE_BACKUPS", False)
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", "test_client_id")
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_SECRET", "test_client_secret")
    monkeypatch.setattr(settings, "GOOGLE_CALLBACK_URL", "/auth/google/callback")
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    yield tmp_path


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def database(db_path):
    return JsonDatabase(str(db_path))


@pytest.fixture
def client():
    """FastAPI 테스트 클라이언트를 생성합니다.

    with 블록으로 생성하므로 lifespan(DB 초기화, public 디렉토리 생성)이 실행됩니다.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """가입된 테스트 사용자 (응답 JSON 전체 반환)"""
    response = client.post(
        "/api/register",
        json={"name": "Test User", "email": "testuser@example.com", "password": "pw-123456"},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def admin_headers(client):
    """관리자로 승격된 사용자의 헤더

    토큰은 승격 이후 로그인으로 새로 발급받습니다.
    """
    client.post(
        "/api/register",
        json={"name": "Admin", "email": "admin@example.com", "password": "admin-pw"},
    )
    promoted = client.get("/api/create-admin", params={"email": "admin@example.com"})
    assert promoted.status_code == 200
    login = client.post("/api/login", json={"email": "admin@example.com", "password": "admin-pw"})
    return {"Authorization": f"Bearer {login.json()['token']}"}


@pytest.fixture
def mock_google_api():
    """Google OAuth adapter를 mocking합니다.

    Yields:
        Dict: exchange / userinfo AsyncMock

    설명:
        - 실제 Google API 호출 없이 테스트
        - code 교환 시 더미 access token 반환
        - 더미 프로필 (sub=google-123, Google Tester)
    """
    with patch(
        "freenethub.adapters.google.exchange_code_for_token", new_callable=AsyncMock
    ) as mock_exchange, patch(
        "freenethub.adapters.google.get_user_info", new_callable=AsyncMock
    ) as mock_userinfo:
        mock_exchange.return_value = "ya29.test-access-token"
        mock_userinfo.return_value = {
            "id": "google-123",
            "name": "Google Tester",
            "email": "tester@gmail.com",
        }
        yield {"exchange": mock_exchange, "userinfo": mock_userinfo}
