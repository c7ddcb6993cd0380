"""
A single logical connection to the Media Services data service.

Each connection owns its own HTTP client and change-tracking set, so
connections can be used concurrently without sharing mutable state.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

import httpx
import structlog

from media_services.api.odata import entity_address, unwrap_payload
from media_services.api.token_provider import AcsTokenProvider
from media_services.config import MediaServicesConfig
from media_services.exceptions import (
    APIError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnexpectedResponseError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "client_secret",
        "Checksum",
        "EncryptedContentKey",
        "x509Certificate",
    }
)

_ODATA_JSON = "application/json;odata=verbose"
_REDIRECT_CODES = frozenset({301, 302, 307, 308})


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class ChangeState(Enum):
    """Tracking state of an entity attached to a connection."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    DELETED = "deleted"


@dataclass(slots=True)
class TrackedEntity:
    entity_set: str
    entity: Any
    state: ChangeState


class DataServiceConnection:
    """
    Async connection used for one logical operation.

    Example:
        ```python
        async with factory.create_connection() as connection:
            results = await connection.execute("/Assets")
        ```
    """

    def __init__(
        self,
        api_url: str,
        token_provider: AcsTokenProvider,
        config: MediaServicesConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        on_redirect: Callable[[str], None] | None = None,
    ) -> None:
        """
        Args:
            api_url: Base URL of the REST API, ending with "/".
            token_provider: Source of bearer tokens.
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
            on_redirect: Called with the new base URL when the service redirects.
        """
        self._api_url = api_url
        self._token_provider = token_provider
        self._config = config
        self._transport = transport
        self._on_redirect = on_redirect

        self._client: httpx.AsyncClient | None = None
        self._tracked: dict[int, TrackedEntity] = {}

    async def __aenter__(self) -> Self:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._api_url,
                timeout=self._config.timeout,
                transport=self._transport,
                follow_redirects=False,
                headers={
                    "Accept": _ODATA_JSON,
                    "DataServiceVersion": self._config.data_service_version,
                    "MaxDataServiceVersion": self._config.data_service_version,
                    "x-ms-version": self._config.api_version,
                    "User-Agent": self._config.user_agent,
                },
            )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def api_url(self) -> str:
        return self._api_url

    async def execute(self, uri: str, *, params: dict[str, Any] | None = None) -> list[Any]:
        """
        Execute a query against a relative address.

        Args:
            uri: Relative address, e.g. "/Assets" or "/RebindContentKey?id='...'".
            params: Extra query parameters merged into the address.

        Returns:
            Unwrapped results (entity dicts or primitive values).

        Raises:
            NotFoundError: If the addressed resource does not exist.
            APIError: If the service answers with an error.
            NetworkError: If the request fails at the transport level.
            UnexpectedResponseError: If the body is not valid JSON.
        """
        logger.debug("Executing query", endpoint=_path_of(uri))
        response = await self._request("GET", uri, params=params)
        return unwrap_payload(_decode_json(response, uri))

    def attach_to(self, entity_set: str, entity: Any) -> None:
        """Start tracking an existing entity as unchanged."""
        self._tracked[id(entity)] = TrackedEntity(entity_set, entity, ChangeState.UNCHANGED)

    def add_object(self, entity_set: str, entity: Any) -> None:
        """Track a new entity to be created on the next save."""
        self._tracked[id(entity)] = TrackedEntity(entity_set, entity, ChangeState.ADDED)

    def delete_object(self, entity: Any) -> None:
        """
        Mark a tracked entity for deletion on the next save.

        Raises:
            ValidationError: If the entity is not tracked by this connection.
        """
        tracked = self._tracked.get(id(entity))
        if tracked is None:
            msg = "Entity must be attached before it can be deleted"
            raise ValidationError(msg)
        if tracked.state is ChangeState.ADDED:
            del self._tracked[id(entity)]
            return
        tracked.state = ChangeState.DELETED

    @property
    def pending_changes(self) -> int:
        return sum(1 for t in self._tracked.values() if t.state is not ChangeState.UNCHANGED)

    async def save_changes(self) -> list[dict[str, Any]]:
        """
        Send tracked changes to the service in the order they were made.

        Returns:
            Server representations of the entities that were added.

        Raises:
            APIError: If the service rejects a change.
            NetworkError: If the request fails at the transport level.
        """
        created: list[dict[str, Any]] = []
        try:
            for tracked in list(self._tracked.values()):
                if tracked.state is ChangeState.ADDED:
                    uri = f"/{tracked.entity_set}"
                    payload = tracked.entity.to_payload()
                    logger.debug("Creating entity", endpoint=uri, payload=sanitize_for_log(payload))
                    response = await self._request(
                        "POST",
                        uri,
                        content=json.dumps(payload).encode(),
                        headers={"Content-Type": _ODATA_JSON},
                    )
                    results = unwrap_payload(_decode_json(response, uri))
                    if not results or not isinstance(results[0], dict):
                        msg = "Service did not return the created entity"
                        raise UnexpectedResponseError(msg, endpoint=uri)
                    created.append(results[0])
                elif tracked.state is ChangeState.DELETED:
                    uri = entity_address(tracked.entity_set, tracked.entity.id)
                    logger.debug("Deleting entity", endpoint=uri)
                    await self._request("DELETE", uri)
        finally:
            self._tracked.clear()
        return created

    async def _request(
        self,
        method: str,
        uri: str,
        *,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        allow_redirect: bool = True,
    ) -> httpx.Response:
        if self._client is None:
            msg = "Connection not open. Use 'async with' first."
            raise RuntimeError(msg)

        token = await self._token_provider.get_access_token()
        request_headers = {"Authorization": f"Bearer {token}", **(headers or {})}
        try:
            response = await self._client.request(
                method,
                uri,
                params=params,
                content=content,
                headers=request_headers,
            )
        except httpx.TransportError as e:
            msg = f"{method} request failed"
            raise NetworkError(msg, endpoint=_path_of(uri)) from e

        if response.status_code in _REDIRECT_CODES and "Location" in response.headers:
            if not allow_redirect:
                msg = "Service redirected more than once"
                raise APIError(msg, code=response.status_code, endpoint=_path_of(uri))
            self._rebase(response.headers["Location"])
            return await self._request(
                method,
                uri,
                params=params,
                content=content,
                headers=headers,
                allow_redirect=False,
            )

        if response.is_error:
            self._raise_api_error(response, uri)
        return response

    def _rebase(self, location: str) -> None:
        target = httpx.URL(location)
        new_base = httpx.URL(self._api_url).copy_with(
            scheme=target.scheme, host=target.host, port=target.port
        )
        self._api_url = str(new_base)
        if self._client is not None:
            self._client.base_url = new_base
        logger.debug("Account endpoint redirected", api_url=self._api_url)
        if self._on_redirect is not None:
            self._on_redirect(self._api_url)

    def _raise_api_error(self, response: httpx.Response, uri: str) -> None:
        endpoint = _path_of(uri)
        code = response.status_code
        error_msg = _error_message(response) or response.reason_phrase or "Unknown error"

        if code == httpx.codes.UNAUTHORIZED:
            self._token_provider.invalidate()
            raise UnauthorizedError(error_msg, endpoint=endpoint)
        if code == httpx.codes.NOT_FOUND:
            raise NotFoundError(error_msg, endpoint=endpoint)
        if code >= httpx.codes.INTERNAL_SERVER_ERROR:
            raise ServerError(error_msg, code=code, endpoint=endpoint)

        msg = f"{error_msg} (status={code})"
        raise APIError(msg, code=code, endpoint=endpoint)


def _path_of(uri: str) -> str:
    return uri.split("?", 1)[0]


def _decode_json(response: httpx.Response, uri: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        msg = "Invalid JSON response from service"
        raise UnexpectedResponseError(msg, endpoint=_path_of(uri)) from e


def _error_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error") or data.get("odata.error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if isinstance(message, dict):
        return message.get("value")
    return message
