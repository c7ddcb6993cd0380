"""Bulk ingest collections."""

from media_services.collections.base import DeletableEntityCollection, EntityCollection
from media_services.core.sync import run_sync
from media_services.models.ingest import IngestManifest, IngestManifestAsset, IngestManifestFile


class IngestManifestCollection(DeletableEntityCollection[IngestManifest]):
    entity_type = IngestManifest

    async def create_async(
        self,
        name: str,
        storage_account_name: str | None = None,
        *,
        timeout: float | None = None,
    ) -> IngestManifest:
        """
        Create an ingest manifest.

        Args:
            name: Manifest name.
            storage_account_name: Storage account receiving uploads, defaults to the account's.
            timeout: Optional limit in seconds for the round trip.

        Raises:
            ValueError: If the name is empty.
        """
        if not name:
            msg = "name is required"
            raise ValueError(msg)
        manifest = IngestManifest(name=name, storage_account_name=storage_account_name)
        return await self._create_async(manifest, timeout)

    def create(
        self,
        name: str,
        storage_account_name: str | None = None,
        *,
        timeout: float | None = None,
    ) -> IngestManifest:
        """Create an ingest manifest, blocking until done."""
        return run_sync(self.create_async, name, storage_account_name, timeout=timeout)


class IngestManifestAssetCollection(EntityCollection[IngestManifestAsset]):
    entity_type = IngestManifestAsset


class IngestManifestFileCollection(EntityCollection[IngestManifestFile]):
    entity_type = IngestManifestFile
