"""Authenticated JSON transport for Google REST APIs."""

import asyncio
import logging
from typing import Any, Optional, Type, TypeVar

import google.auth
import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

ModelT = TypeVar("ModelT", bound=BaseModel)


class GoogleApiError(Exception):
    """A Google API call failed (transport, credentials, status, or body)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TokenProvider:
    """Interface for obtaining OAuth2 bearer tokens."""

    async def get_token(self) -> str:
        raise NotImplementedError


class StaticTokenProvider(TokenProvider):
    """Returns a fixed, externally supplied token."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def get_token(self) -> str:
        return self._token


class GoogleDefaultTokenProvider(TokenProvider):
    """Application Default Credentials via google-auth."""

    def __init__(self, scopes: Optional[list[str]] = None) -> None:
        self._scopes = scopes or [CLOUD_PLATFORM_SCOPE]

    async def get_token(self) -> str:
        # google-auth is synchronous; keep the metadata/token round trip off the loop
        return await asyncio.to_thread(self._fetch_token)

    def _fetch_token(self) -> str:
        try:
            credentials, _ = google.auth.default(scopes=self._scopes)
            credentials.refresh(Request())
        except GoogleAuthError as exc:
            raise GoogleApiError(f"failed to obtain credentials: {exc}") from exc
        return credentials.token


def _error_message(response: httpx.Response) -> str:
    """Extract the message from a Google error envelope, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text[:200]


class GoogleApiClient:
    """
    Minimal JSON client for googleapis.com endpoints.

    A fresh ``httpx.AsyncClient`` is opened per call; no connection pool is
    shared between requests. ``transport`` is injectable for tests.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token_provider = token_provider
        self._timeout = timeout
        self._transport = transport

    async def get(self, url: str, *, response_model: Type[ModelT]) -> ModelT:
        return await self.request("GET", url, response_model=response_model)

    async def post(
        self,
        url: str,
        body: Any,
        *,
        response_model: Optional[Type[ModelT]] = None,
    ) -> Optional[ModelT]:
        return await self.request("POST", url, json_body=body, response_model=response_model)

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Any = None,
        response_model: Optional[Type[ModelT]] = None,
    ) -> Optional[ModelT]:
        """
        Execute a request and decode the body into ``response_model``.

        Returns None when no ``response_model`` is given; the body is ignored.

        Raises:
            GoogleApiError: on credential, transport, HTTP status, JSON or
                schema failures.
        """
        token = await self._token_provider.get_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, json=json_body, headers=headers)
        except httpx.TimeoutException as exc:
            raise GoogleApiError(f"request timed out: {method} {url}") from exc
        except httpx.RequestError as exc:
            raise GoogleApiError(f"failed to execute request: {exc}") from exc

        if response.status_code >= 300:
            raise GoogleApiError(
                f"bad api response: {response.status_code} {_error_message(response)}",
                status_code=response.status_code,
            )

        if response_model is None:
            return None

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as exc:
            raise GoogleApiError(f"failed to decode json: {exc}") from exc
