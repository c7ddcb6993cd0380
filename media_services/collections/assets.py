"""Asset and asset file collections."""

from media_services.collections.base import DeletableEntityCollection, EntityCollection
from media_services.core.sync import run_sync
from media_services.models.asset import Asset, AssetCreationOptions, AssetFile


class AssetCollection(DeletableEntityCollection[Asset]):
    entity_type = Asset

    async def create_async(
        self,
        name: str,
        options: AssetCreationOptions = AssetCreationOptions.NONE,
        *,
        storage_account_name: str | None = None,
        timeout: float | None = None,
    ) -> Asset:
        """
        Create an empty asset.

        Args:
            name: Asset name.
            options: Encryption applied to the asset's files.
            storage_account_name: Storage account holding the asset, defaults to the account's.
            timeout: Optional limit in seconds for the round trip.

        Returns:
            The created asset, bound to this collection's context.

        Raises:
            ValueError: If the name is empty.
        """
        if not name:
            msg = "name is required"
            raise ValueError(msg)
        asset = Asset(name=name, options=options, storage_account_name=storage_account_name)
        return await self._create_async(asset, timeout)

    def create(
        self,
        name: str,
        options: AssetCreationOptions = AssetCreationOptions.NONE,
        *,
        storage_account_name: str | None = None,
        timeout: float | None = None,
    ) -> Asset:
        """Create an empty asset, blocking until done."""
        return run_sync(
            self.create_async,
            name,
            options,
            storage_account_name=storage_account_name,
            timeout=timeout,
        )


class AssetFileCollection(EntityCollection[AssetFile]):
    entity_type = AssetFile
