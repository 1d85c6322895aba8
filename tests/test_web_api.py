"""Tests for the aiohttp login receiver."""

import time

import pytest

from tg_login.assertion import canonicalize
from tg_login.config import Config
from tg_login.web_api import RECEIVER_PATH, create_web_app
from tg_login.web_auth import compute_hash


BOT_TOKEN = "test:token"


def _signed_query(auth_date: int | None = None, **fields) -> dict[str, str]:
    if auth_date is None:
        auth_date = int(time.time())
    signed = {"id": 42, "first_name": "Ann", "auth_date": auth_date}
    signed.update(fields)
    query = {k: str(v) for k, v in signed.items()}
    query["hash"] = compute_hash(BOT_TOKEN, canonicalize(signed))
    return query


@pytest.fixture
def app():
    return create_web_app(Config(bot_token=BOT_TOKEN))


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, aiohttp_client, app):
        client = await aiohttp_client(app)
        resp = await client.get("/api/health")
        assert resp.status == 200
        data = await resp.json()
        assert data["status"] == "ok"


class TestReceiver:
    @pytest.mark.asyncio
    async def test_valid_login(self, aiohttp_client, app):
        client = await aiohttp_client(app)
        resp = await client.get(RECEIVER_PATH, params=_signed_query(username="ann", last_name="Lee"))
        assert resp.status == 200
        data = await resp.json()
        assert data["external_id"] == "42"
        assert data["display_name"] == "Ann Lee"
        assert data["username"] == "ann"
        assert data["email"] == ""

    @pytest.mark.asyncio
    async def test_bad_signature_401(self, aiohttp_client, app):
        client = await aiohttp_client(app)
        query = _signed_query()
        query["first_name"] = "Eve"
        resp = await client.get(RECEIVER_PATH, params=query)
        assert resp.status == 401
        assert await resp.json() == {"error": "verification failed"}

    @pytest.mark.asyncio
    async def test_stale_and_malformed_look_the_same(self, aiohttp_client, app):
        client = await aiohttp_client(app)
        stale = await client.get(RECEIVER_PATH, params=_signed_query(auth_date=int(time.time()) - 90000))
        malformed = await client.get(RECEIVER_PATH, params={"id": "x", "auth_date": "1", "hash": "ab"})
        assert stale.status == malformed.status == 401
        assert await stale.json() == await malformed.json()

    @pytest.mark.asyncio
    async def test_no_params_401(self, aiohttp_client, app):
        client = await aiohttp_client(app)
        resp = await client.get(RECEIVER_PATH)
        assert resp.status == 401

    @pytest.mark.asyncio
    async def test_missing_token_fails_closed(self, aiohttp_client):
        client = await aiohttp_client(create_web_app(Config(bot_token="")))
        resp = await client.get(RECEIVER_PATH, params=_signed_query())
        assert resp.status == 401
        assert await resp.json() == {"error": "verification failed"}
