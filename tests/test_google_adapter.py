"""Tests for the Google OAuth adapter (httpx mocked)."""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

import httpx

from freenethub.adapters import google


@pytest.fixture
def mock_httpx():
    """httpx.AsyncClient를 mocking합니다.

    - POST /token: access token 반환
    - GET /userinfo: OpenID 프로필 반환
    """
    with patch("httpx.AsyncClient") as mock_client:
        mock_instance = AsyncMock()

        token_response = MagicMock()
        token_response.json.return_value = {"access_token": "ya29.token", "token_type": "Bearer"}

        user_response = MagicMock()
        user_response.json.return_value = {
            "sub": "1234567890",
            "name": "Google Tester",
            "email": "tester@gmail.com",
        }

        mock_instance.post = AsyncMock(return_value=token_response)
        mock_instance.get = AsyncMock(return_value=user_response)
        mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
        mock_instance.__aexit__ = AsyncMock(return_value=False)

        mock_client.return_value = mock_instance
        yield mock_instance


def test_build_authorization_url():
    url = google.build_authorization_url("http://localhost:3000/auth/google/callback", "xyz")
    parsed = urlparse(url)
    query = parse_qs(parsed.query)

    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == google.AUTHORIZATION_URL
    assert query["state"] == ["xyz"]
    assert query["redirect_uri"] == ["http://localhost:3000/auth/google/callback"]


@pytest.mark.asyncio
async def test_exchange_code_for_token(mock_httpx):
    token = await google.exchange_code_for_token("code-1", "http://cb")

    assert token == "ya29.token"
    _, kwargs = mock_httpx.post.call_args
    assert kwargs["data"]["grant_type"] == "authorization_code"
    assert kwargs["data"]["code"] == "code-1"
    assert kwargs["data"]["redirect_uri"] == "http://cb"


@pytest.mark.asyncio
async def test_exchange_code_missing_token(mock_httpx):
    mock_httpx.post.return_value.json.return_value = {"error": "invalid_grant"}
    assert await google.exchange_code_for_token("bad", "http://cb") is None


@pytest.mark.asyncio
async def test_exchange_code_http_error(mock_httpx):
    mock_httpx.post.side_effect = httpx.ConnectError("boom")
    assert await google.exchange_code_for_token("code", "http://cb") is None


@pytest.mark.asyncio
async def test_exchange_code_not_configured(mock_httpx, monkeypatch):
    monkeypatch.setattr(google.settings, "GOOGLE_CLIENT_SECRET", None)
    assert await google.exchange_code_for_token("code", "http://cb") is None
    mock_httpx.post.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_user_info(mock_httpx):
    profile = await google.get_user_info("ya29.token")

    assert profile == {"id": "1234567890", "name": "Google Tester", "email": "tester@gmail.com"}
    _, kwargs = mock_httpx.get.call_args
    assert kwargs["headers"]["Authorization"] == "Bearer ya29.token"


@pytest.mark.asyncio
async def test_get_user_info_without_subject(mock_httpx):
    mock_httpx.get.return_value.json.return_value = {"email": "x@example.com"}
    assert await google.get_user_info("token") is None


@pytest.mark.asyncio
async def test_get_user_info_http_error(mock_httpx):
    mock_httpx.get.return_value.raise_for_status.side_effect = httpx.HTTPStatusError(
        "401", request=MagicMock(), response=MagicMock()
    )
    assert await google.get_user_info("expired") is None
