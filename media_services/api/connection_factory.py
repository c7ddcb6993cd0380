"""Factory producing one data service connection per logical operation."""

import httpx
import structlog

from media_services.api.connection import DataServiceConnection
from media_services.api.token_provider import AcsTokenProvider
from media_services.config import MediaServicesConfig

logger = structlog.get_logger(__name__)


class DataServiceConnectionFactory:
    """
    Builds authenticated connections to the Media Services REST API.

    The factory only holds configuration; every call to
    :meth:`create_connection` returns an independent connection.
    """

    def __init__(
        self,
        api_server: str,
        token_provider: AcsTokenProvider,
        config: MediaServicesConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            api_server: Base URL of the REST API.
            token_provider: Source of bearer tokens.
            config: Client configuration.
            transport: Optional transport for testing (mock transport).

        Raises:
            ValueError: If the API address is not an absolute http(s) URL.
        """
        url = httpx.URL(api_server)
        if url.scheme not in ("http", "https") or not url.host:
            msg = f"api_server must be an absolute http(s) URL: {api_server!r}"
            raise ValueError(msg)

        self._api_url = api_server if api_server.endswith("/") else f"{api_server}/"
        self._token_provider = token_provider
        self._config = config
        self._transport = transport

    @property
    def api_url(self) -> str:
        """Current API base URL, updated after an account redirect."""
        return self._api_url

    @property
    def token_provider(self) -> AcsTokenProvider:
        return self._token_provider

    def create_connection(self) -> DataServiceConnection:
        """Return a new, unopened connection."""
        return DataServiceConnection(
            self._api_url,
            self._token_provider,
            self._config,
            transport=self._transport,
            on_redirect=self._remember_redirect,
        )

    def _remember_redirect(self, api_url: str) -> None:
        if api_url != self._api_url:
            logger.debug("Using account specific endpoint", api_url=api_url)
            self._api_url = api_url
