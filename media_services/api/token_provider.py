"""
Bearer token acquisition against the access control service.

The provider exchanges the account name and key for a short-lived access
token and caches it until shortly before it expires.
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from media_services.exceptions import (
    APIError,
    AuthenticationError,
    InvalidCredentialsError,
    NetworkError,
)

logger = structlog.get_logger(__name__)

_TOKEN_PATH = "/v2/OAuth2-13"


@dataclass(frozen=True, slots=True)
class AccessToken:
    """Immutable token record for atomic replacement."""

    value: str
    expires_at: float


class AcsTokenProvider:
    """Obtains and caches bearer tokens for one Media Services account."""

    def __init__(
        self,
        account_name: str,
        account_key: str,
        scope: str,
        acs_base_address: str,
        *,
        timeout: float = 30.0,
        refresh_margin: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            account_name: Media Services account name.
            account_key: Media Services account key.
            scope: Authorization scope.
            acs_base_address: Access control service address.
            timeout: Request timeout in seconds.
            refresh_margin: Seconds before expiry at which the token is renewed.
            transport: Optional transport for testing (mock transport).

        Raises:
            ValueError: If a credential is missing or the address is malformed.
        """
        for name, value in (
            ("account_name", account_name),
            ("account_key", account_key),
            ("scope", scope),
            ("acs_base_address", acs_base_address),
        ):
            if not isinstance(value, str) or not value.strip():
                msg = f"{name} must be a non-empty string"
                raise ValueError(msg)

        address = httpx.URL(acs_base_address)
        if address.scheme not in ("http", "https") or not address.host:
            msg = f"acs_base_address must be an absolute http(s) URL: {acs_base_address!r}"
            raise ValueError(msg)

        self._account_name = account_name
        self._account_key = account_key
        self._scope = scope
        self._token_url = acs_base_address.rstrip("/") + _TOKEN_PATH
        self._timeout = timeout
        self._refresh_margin = refresh_margin
        self._transport = transport
        self._token: AccessToken | None = None

    @property
    def account_name(self) -> str:
        return self._account_name

    def invalidate(self) -> None:
        """Forget the cached token so the next call fetches a new one."""
        self._token = None

    async def get_access_token(self) -> str:
        """
        Return a valid bearer token, fetching a new one when needed.

        Returns:
            Access token string.

        Raises:
            InvalidCredentialsError: If the account name or key is rejected.
            AuthenticationError: If the token response is malformed.
            APIError: If the service answers with another error.
            NetworkError: If the service cannot be reached.
        """
        token = self._token  # Capture atomically for consistent reads
        if token is not None and time.monotonic() < token.expires_at - self._refresh_margin:
            return token.value

        token = await self._fetch_token()
        self._token = token
        return token.value

    async def _fetch_token(self) -> AccessToken:
        logger.debug("Requesting access token", account_name=self._account_name)
        form = {
            "grant_type": "client_credentials",
            "client_id": self._account_name,
            "client_secret": self._account_key,
            "scope": self._scope,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self._token_url, data=form)
        except httpx.TransportError as e:
            msg = "Access control service unreachable"
            raise NetworkError(msg, endpoint=self._token_url) from e

        if response.status_code in (httpx.codes.BAD_REQUEST, httpx.codes.UNAUTHORIZED):
            msg = "Access control service rejected the account credentials"
            raise InvalidCredentialsError(msg, account_name=self._account_name)
        if response.is_error:
            msg = "Token request failed"
            raise APIError(msg, code=response.status_code, endpoint=self._token_url)

        try:
            data: dict[str, Any] = response.json()
            value = data["access_token"]
            expires_in = float(data.get("expires_in", 0))
        except (ValueError, KeyError, TypeError) as e:
            msg = "Malformed token response"
            raise AuthenticationError(msg) from e

        logger.debug("Access token acquired", expires_in=expires_in)
        return AccessToken(value=value, expires_at=time.monotonic() + expires_in)
