"""
HTTP client for the detection backend.

Wraps httpx with the conventions every backend call shares:
bearer auth, JSON bodies, { detail } error bodies and an explicit
per-call timeout. A missing base address fails before any request.
"""

import logging
from typing import Any, Optional

import httpx

from .config import get_settings
from .exceptions import (
    APIError,
    ConfigurationError,
    NetworkError,
    TokenExpiredError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class BackendClient:
    """
    Thin async client for the detection backend API.

    A fresh httpx.AsyncClient is opened per request, so instances hold
    no connections and can be shared freely.
    """

    def __init__(
        self,
        base_url: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the backend client.

        Args:
            base_url: Backend base address. None or blank means unconfigured.
            timeout: Default timeout in seconds for each call.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self._base_url = base_url.strip().rstrip("/") if base_url else ""
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Whether a backend address is set."""
        return bool(self._base_url)

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path below the base address, e.g. "/v1/detect"
            token: Bearer token, if the call is authenticated
            json: JSON body
            params: Query parameters
            timeout: Overrides the default timeout for this call

        Returns:
            Decoded JSON, or None when the response has no body

        Raises:
            ConfigurationError: No base address configured
            TokenExpiredError: The backend answered 401
            APIError: Any other non-2xx status
            NetworkError: Connection failure or timeout
            ValidationError: The body is not valid JSON
        """
        if not self.is_configured:
            raise ConfigurationError(setting="API_ENDPOINT")

        url = f"{self._base_url}{path}"
        logger.debug(f"{method} {path}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(token),
                    json=json,
                    params=params,
                    timeout=timeout if timeout is not None else self._timeout,
                )
        except httpx.TimeoutException as e:
            raise NetworkError(f"timeout: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(str(e)) from e

        if response.status_code == 401:
            raise TokenExpiredError()

        if not response.is_success:
            raise APIError(
                response.status_code,
                response.reason_phrase,
                detail=_extract_detail(response),
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ValidationError("body", "response is not valid JSON") from e

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)


def _extract_detail(response: httpx.Response) -> Optional[str]:
    """Pull the optional { detail: string } out of an error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"] or None
    return None


# Module-level instance getter
_client_instance: Optional[BackendClient] = None


def get_backend_client() -> BackendClient:
    """Get the backend client singleton built from settings."""
    global _client_instance
    if _client_instance is None:
        settings = get_settings()
        _client_instance = BackendClient(
            settings.api_endpoint,
            timeout=settings.request_timeout,
        )
    return _client_instance


def reset_backend_client() -> None:
    """Reset the backend client singleton (for testing)."""
    global _client_instance
    _client_instance = None
