"""Locator collection."""

from datetime import datetime

from media_services.collections.base import DeletableEntityCollection
from media_services.core.sync import run_sync
from media_services.models.access_policy import AccessPolicy
from media_services.models.asset import Asset
from media_services.models.base import verify_entity
from media_services.models.locator import Locator, LocatorType


class LocatorCollection(DeletableEntityCollection[Locator]):
    entity_type = Locator

    async def create_async(
        self,
        locator_type: LocatorType,
        asset: Asset,
        access_policy: AccessPolicy,
        start_time: datetime | None = None,
        *,
        timeout: float | None = None,
    ) -> Locator:
        """
        Create a locator granting access to an asset.

        Args:
            locator_type: Kind of locator.
            asset: Asset to expose.
            access_policy: Policy limiting the locator's rights and lifetime.
            start_time: When the locator becomes valid, defaults to now.
            timeout: Optional limit in seconds for the round trip.

        Raises:
            ValidationError: If the asset or policy has not been created or is unbound.
        """
        verify_entity(asset, Asset)
        verify_entity(access_policy, AccessPolicy)
        locator = Locator(
            locator_type=locator_type,
            asset_id=asset.id,
            access_policy_id=access_policy.id,
            start_time=start_time,
        )
        return await self._create_async(locator, timeout)

    def create(
        self,
        locator_type: LocatorType,
        asset: Asset,
        access_policy: AccessPolicy,
        start_time: datetime | None = None,
        *,
        timeout: float | None = None,
    ) -> Locator:
        """Create a locator, blocking until done."""
        return run_sync(
            self.create_async, locator_type, asset, access_policy, start_time, timeout=timeout
        )
