"""Tests for shared/http.py."""

import json

import httpx
import pytest

from aura.shared.exceptions import (
    APIError,
    ConfigurationError,
    NetworkError,
    TokenExpiredError,
    ValidationError,
)
from aura.shared.http import BackendClient, get_backend_client

from tests.conftest import API_BASE


class TestBackendClient:
    @pytest.mark.asyncio
    async def test_unconfigured_fails_before_network(self, backend):
        """A missing base address raises without sending anything."""
        client = backend.client(base_url=None)
        assert client.is_configured is False

        with pytest.raises(ConfigurationError):
            await client.post("/v1/detect", token="t", json={"text": "hi"})
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_blank_base_address_is_unconfigured(self, backend):
        client = backend.client(base_url="  ")
        with pytest.raises(ConfigurationError):
            await client.get("/v1/detections")
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_sends_bearer_json_and_params(self, backend, client):
        """Requests carry the bearer token, JSON body and query params."""
        backend.respond("POST", "/v1/detect", json={"ok": True})
        backend.respond("GET", "/v1/detections", json={"items": []})

        assert await client.post("/v1/detect", token="abc", json={"text": "hi"}) == {"ok": True}
        await client.get("/v1/detections", token="abc", params={"skip": 3, "limit": 3})

        post, get = backend.requests
        assert post.headers["Authorization"] == "Bearer abc"
        assert json.loads(post.content) == {"text": "hi"}
        assert str(post.url) == f"{API_BASE}/v1/detect"
        assert get.url.params["skip"] == "3"
        assert get.url.params["limit"] == "3"

    @pytest.mark.asyncio
    async def test_trailing_slash_in_base_address(self, backend):
        backend.respond("GET", "/v1/dashboard/stats", json={})
        client = backend.client(base_url=f"{API_BASE}/")
        await client.get("/v1/dashboard/stats")
        assert backend.requests[0].url.path == "/v1/dashboard/stats"

    @pytest.mark.asyncio
    async def test_401_is_token_expired(self, backend, client):
        """401 is an authentication problem, never a server fault."""
        backend.respond("POST", "/v1/detect", status=401, json={"detail": "Invalid token"})
        with pytest.raises(TokenExpiredError):
            await client.post("/v1/detect", token="bad")

    @pytest.mark.asyncio
    async def test_error_detail_is_surfaced(self, backend, client):
        backend.respond("POST", "/v1/detect", status=429, json={"detail": "リクエスト上限に達しました。"})
        with pytest.raises(APIError) as exc_info:
            await client.post("/v1/detect", token="t")
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "リクエスト上限に達しました。"

    @pytest.mark.asyncio
    async def test_error_without_detail_uses_status(self, backend, client):
        backend.respond_with("POST", "/v1/detect", lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(APIError) as exc_info:
            await client.post("/v1/detect", token="t")
        assert exc_info.value.detail is None
        assert exc_info.value.message == "APIエラー: 500 Internal Server Error"

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self, backend, client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend.respond_with("GET", "/v1/detections", refuse)
        with pytest.raises(NetworkError):
            await client.get("/v1/detections")

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, backend, client):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        backend.respond_with("GET", "/v1/detections", slow)
        with pytest.raises(NetworkError) as exc_info:
            await client.get("/v1/detections", timeout=0.1)
        assert exc_info.value.reason.startswith("timeout")

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self, backend, client):
        backend.respond_with("DELETE", "/v1/users/me", lambda request: httpx.Response(204))
        assert await client.delete("/v1/users/me", token="t") is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_validation_error(self, backend, client):
        backend.respond_with("GET", "/v1/dashboard/stats", lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ValidationError) as exc_info:
            await client.get("/v1/dashboard/stats")
        assert exc_info.value.field == "body"


class TestGetBackendClient:
    def test_singleton(self):
        assert get_backend_client() is get_backend_client()

    def test_is_backend_client(self):
        assert isinstance(get_backend_client(), BackendClient)
