"""Tests for the user repository."""
import pytest

from freenethub.repositories.user_repo import UserRepository


@pytest.fixture
def repo(database):
    return UserRepository(database)


@pytest.mark.asyncio
async def test_create_and_get(repo):
    user = await repo.create_password_user("Ada", "ada@example.com", "hash")

    assert user.id
    assert user.referral_code.startswith("REF")
    assert (await repo.get_by_id(user.id)).email == "ada@example.com"
    assert (await repo.get_by_email("ada@example.com")).id == user.id
    assert await repo.get_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_create_duplicate_returns_none(repo):
    await repo.create_password_user(None, "ada@example.com", "hash")
    assert await repo.create_password_user(None, "ada@example.com", "hash2") is None


@pytest.mark.asyncio
async def test_stored_record_uses_camel_case_keys(repo, database):
    await repo.upsert_google_user("g-1", "Gee", "gee@example.com")

    record = (await database.read())["users"][0]
    assert record["googleId"] == "g-1"
    assert "referralCode" in record
    assert "google_id" not in record


@pytest.mark.asyncio
async def test_upsert_google_user_is_idempotent(repo, database):
    first = await repo.upsert_google_user("g-1", "Gee", "gee@example.com")
    second = await repo.upsert_google_user("g-1", "Renamed", "gee@example.com")

    assert first.id == second.id
    assert second.name == "Gee"
    assert len((await database.read())["users"]) == 1


@pytest.mark.asyncio
async def test_upsert_google_user_keeps_existing_google_id(repo):
    """이미 다른 googleId가 연결된 계정은 덮어쓰지 않음"""
    original = await repo.upsert_google_user("g-1", "Gee", "gee@example.com")
    matched = await repo.upsert_google_user("g-2", "Gee", "gee@example.com")

    assert matched.id == original.id
    assert matched.google_id == "g-1"


@pytest.mark.asyncio
async def test_promote_to_admin(repo):
    user = await repo.create_password_user("Ada", "ada@example.com", "hash")

    promoted = await repo.promote_to_admin("ada@example.com")

    assert promoted.id == user.id
    assert promoted.is_admin is True
    assert (await repo.get_by_id(user.id)).is_admin is True
    assert await repo.promote_to_admin("ghost@example.com") is None


@pytest.mark.asyncio
async def test_unknown_record_fields_survive(repo, database):
    async with database.transaction() as data:
        data["users"].append({"id": "legacy", "email": "old@example.com", "referralCode": "REFOLD000", "plan": "pro"})

    await repo.promote_to_admin("old@example.com")

    record = (await database.read())["users"][0]
    assert record["plan"] == "pro"
    assert (await repo.get_by_id("legacy")).is_admin is True


@pytest.mark.asyncio
async def test_fractional_balances_load(repo, database):
    async with database.transaction() as data:
        data["users"].append({
            "id": "u1",
            "email": "f@example.com",
            "referralCode": "REFABC123",
            "credits": 2.5,
            "data_balance_mb": 512.5,
        })

    user = await repo.get_by_id("u1")
    assert user.credits == 2.5
    assert user.data_balance_mb == 512.5
    assert (await database.read())["users"][0]["data_balance_mb"] == 512.5


@pytest.mark.asyncio
async def test_upsert_google_user_prefers_google_id_match(repo):
    """googleId 일치 레코드가 이메일 일치 레코드보다 우선"""
    by_email = await repo.create_password_user("Mail", "shared@example.com", "hash")
    by_google = await repo.upsert_google_user("g-7", "Gee", "other@example.com")

    matched = await repo.upsert_google_user("g-7", "Gee", "shared@example.com")

    assert matched.id == by_google.id
    assert matched.id != by_email.id
    assert (await repo.get_by_email("shared@example.com")).google_id is None
