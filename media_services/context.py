"""
Media Services context.

This is the main entry point for users of the library. A context is created
once per account and exposes every entity collection of that account.
"""

from types import MappingProxyType

import httpx
import structlog

from media_services.api.connection_factory import DataServiceConnectionFactory
from media_services.api.token_provider import AcsTokenProvider
from media_services.collections import (
    AccessPolicyCollection,
    AssetCollection,
    AssetFileCollection,
    ContentKeyCollection,
    EntityCollection,
    IngestManifestAssetCollection,
    IngestManifestCollection,
    IngestManifestFileCollection,
    JobCollection,
    JobTemplateCollection,
    LocatorCollection,
    MediaProcessorCollection,
    NotificationEndPointCollection,
)
from media_services.config import MediaServicesConfig

logger = structlog.get_logger(__name__)

COLLECTION_REGISTRY: MappingProxyType[str, type[EntityCollection]] = MappingProxyType(
    {
        "assets": AssetCollection,
        "files": AssetFileCollection,
        "access_policies": AccessPolicyCollection,
        "content_keys": ContentKeyCollection,
        "jobs": JobCollection,
        "job_templates": JobTemplateCollection,
        "media_processors": MediaProcessorCollection,
        "notification_end_points": NotificationEndPointCollection,
        "locators": LocatorCollection,
        "ingest_manifests": IngestManifestCollection,
        "ingest_manifest_assets": IngestManifestAssetCollection,
        "ingest_manifest_files": IngestManifestFileCollection,
    }
)


class MediaContext:
    """
    Root object giving access to every entity of a Media Services account.

    Collections are built once, when the context is created, and the same
    instances are returned for the lifetime of the context. Collections and
    the entities they return only hold weak references back to the context.

    Example:
        ```python
        context = MediaContext("account", "key")

        for key in context.content_keys:
            print(key.id, key.get_clear_key_value())
        ```

    Args:
        account_name: Account name to authenticate with.
        account_key: Account key to authenticate with.
        api_server: API endpoint, defaults to ``config.api_url``.
        scope: Authorization scope, defaults to ``config.scope``.
        acs_base_address: Access control endpoint, defaults to ``config.acs_base_address``.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing (mock transport).

    Raises:
        ValueError: If a credential or address is missing or malformed.
    """

    def __init__(
        self,
        account_name: str,
        account_key: str,
        *,
        api_server: str | None = None,
        scope: str | None = None,
        acs_base_address: str | None = None,
        config: MediaServicesConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or MediaServicesConfig()

        token_provider = AcsTokenProvider(
            account_name,
            account_key,
            scope or self._config.scope,
            acs_base_address or self._config.acs_base_address,
            timeout=self._config.timeout,
            refresh_margin=self._config.token_refresh_margin,
            transport=transport,
        )
        self._connection_factory = DataServiceConnectionFactory(
            api_server or self._config.api_url,
            token_provider,
            self._config,
            transport=transport,
        )

        self._parallel_transfer_thread_count = self._config.parallel_transfer_thread_count
        self._number_of_concurrent_transfers = self._config.number_of_concurrent_transfers

        self._collections: dict[str, EntityCollection] = {
            name: collection_type(self) for name, collection_type in COLLECTION_REGISTRY.items()
        }
        logger.debug(
            "Context created",
            account_name=account_name,
            api_url=self._connection_factory.api_url,
        )

    @property
    def config(self) -> MediaServicesConfig:
        return self._config

    @property
    def api_server(self) -> str:
        """API endpoint currently in use."""
        return self._connection_factory.api_url

    @property
    def connection_factory(self) -> DataServiceConnectionFactory:
        """Factory creating one connection per logical operation."""
        return self._connection_factory

    @property
    def parallel_transfer_thread_count(self) -> int:
        """Number of threads used for each blob transfer (default 10)."""
        return self._parallel_transfer_thread_count

    @parallel_transfer_thread_count.setter
    def parallel_transfer_thread_count(self, value: int) -> None:
        if value <= 0:
            msg = "parallel_transfer_thread_count must be positive"
            raise ValueError(msg)
        self._parallel_transfer_thread_count = value

    @property
    def number_of_concurrent_transfers(self) -> int:
        """Number of concurrent blob transfers allowed (default 2)."""
        return self._number_of_concurrent_transfers

    @number_of_concurrent_transfers.setter
    def number_of_concurrent_transfers(self, value: int) -> None:
        if value <= 0:
            msg = "number_of_concurrent_transfers must be positive"
            raise ValueError(msg)
        self._number_of_concurrent_transfers = value

    @property
    def assets(self) -> AssetCollection:
        return self._collections["assets"]

    @property
    def files(self) -> AssetFileCollection:
        return self._collections["files"]

    @property
    def access_policies(self) -> AccessPolicyCollection:
        return self._collections["access_policies"]

    @property
    def content_keys(self) -> ContentKeyCollection:
        return self._collections["content_keys"]

    @property
    def jobs(self) -> JobCollection:
        return self._collections["jobs"]

    @property
    def job_templates(self) -> JobTemplateCollection:
        return self._collections["job_templates"]

    @property
    def media_processors(self) -> MediaProcessorCollection:
        return self._collections["media_processors"]

    @property
    def notification_end_points(self) -> NotificationEndPointCollection:
        return self._collections["notification_end_points"]

    @property
    def locators(self) -> LocatorCollection:
        return self._collections["locators"]

    @property
    def ingest_manifests(self) -> IngestManifestCollection:
        return self._collections["ingest_manifests"]

    @property
    def ingest_manifest_assets(self) -> IngestManifestAssetCollection:
        return self._collections["ingest_manifest_assets"]

    @property
    def ingest_manifest_files(self) -> IngestManifestFileCollection:
        return self._collections["ingest_manifest_files"]
