"""
Shared test fixtures and utilities.

HTTP is faked with httpx.MockTransport through MockBackend; the identity
provider and navigator are in-memory fakes that record what they were
asked to do.
"""

from datetime import datetime, timezone, timedelta
from typing import Any, Callable, Optional
import uuid

import httpx
import jwt  # PyJWT
import pytest

from aura.modules.profiles.models import Plan, Profile
from aura.modules.session.interfaces import ISessionProvider, SessionListener, Unsubscribe
from aura.modules.session.models import AuthEvent, Session
from aura.shared.config import Settings, get_settings
from aura.shared.database import reset_client_cache
from aura.shared.http import BackendClient, reset_backend_client


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

API_BASE = "https://api.aura.test"
TEST_USER_ID = "5f0e3c1a-7b2d-4c8e-9a61-2d4b8f0c7e11"
TEST_USER_EMAIL = "test@example.com"


def create_test_token(
    user_id: str = TEST_USER_ID,
    email: Optional[str] = TEST_USER_EMAIL,
    expired: bool = False,
) -> str:
    """
    Create a Supabase-style access token.

    Args:
        user_id: Subject claim
        email: Email claim (omitted when None)
        expired: If True, the token expired an hour ago
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload: dict[str, Any] = {
        "sub": user_id,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_session(user_id: str = TEST_USER_ID, email: Optional[str] = TEST_USER_EMAIL) -> Session:
    return Session.from_access_token(create_test_token(user_id=user_id, email=email))


def make_detection(index: int = 0, **overrides: Any) -> dict[str, Any]:
    """A detection as the backend serializes it."""
    item = {
        "id": str(uuid.UUID(int=index + 1)),
        "user_id": TEST_USER_ID,
        "input_text": f"Sample text number {index}.",
        "score": 0.42,
        "is_ai": False,
        "created_at": "2025-05-07T10:30:00Z",
        "detailed_analysis": None,
    }
    item.update(overrides)
    return item


class FakeSessionProvider(ISessionProvider):
    """In-memory identity provider; emit() plays the provider's callback."""

    def __init__(self, session: Optional[Session] = None):
        self.session = session
        self.listeners: list[SessionListener] = []
        self.fail_get = False
        self.sign_out_calls = 0
        self.reset_requests: list[tuple[str, str]] = []

    async def get_session(self) -> Optional[Session]:
        if self.fail_get:
            raise RuntimeError("identity provider unreachable")
        return self.session

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def emit(self, event: AuthEvent, session: Optional[Session]) -> None:
        self.session = session
        for listener in list(self.listeners):
            listener(event, session)

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        self.emit(AuthEvent.SIGNED_OUT, None)

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        self.reset_requests.append((email, redirect_to))


class RecordingNavigator:
    """Navigator that remembers every navigation."""

    def __init__(self):
        self.redirects: list[str] = []
        self.replacements: list[str] = []

    def redirect(self, url: str) -> None:
        self.redirects.append(url)

    def replace(self, path: str) -> None:
        self.replacements.append(path)


Responder = Callable[[httpx.Request], Any]


class MockBackend:
    """
    Canned backend behind httpx.MockTransport.

    Routes are keyed by (method, path) and map to a (possibly async)
    callable taking the request. Unrouted requests answer 404. Every
    request is recorded.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=json)

    def respond_with(self, method: str, path: str, handler: Responder) -> None:
        self.routes[(method, path)] = handler

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        response = route(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    def client(self, base_url: Optional[str] = API_BASE) -> BackendClient:
        return BackendClient(base_url, transport=httpx.MockTransport(self.handle))


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and clients before and after each test."""
    get_settings.cache_clear()
    reset_backend_client()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_backend_client()
    reset_client_cache()


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(
        _env_file=None,
        api_endpoint=API_BASE,
        supabase_url="https://project.supabase.test",
        supabase_anon_key="anon-key",
    )


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def client(backend: MockBackend) -> BackendClient:
    return backend.client()


@pytest.fixture
def session() -> Session:
    """A valid, unexpired session."""
    return make_session()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def free_profile() -> Profile:
    return Profile(plan=Plan.FREE, request_count=12)


@pytest.fixture
def premium_profile() -> Profile:
    return Profile(plan=Plan.PREMIUM, request_count=340, stripe_customer_id="cus_123")
