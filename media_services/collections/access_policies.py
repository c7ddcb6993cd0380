"""Access policy collection."""

from datetime import timedelta

from media_services.collections.base import DeletableEntityCollection
from media_services.core.sync import run_sync
from media_services.models.access_policy import AccessPermissions, AccessPolicy


class AccessPolicyCollection(DeletableEntityCollection[AccessPolicy]):
    entity_type = AccessPolicy

    async def create_async(
        self,
        name: str,
        duration: timedelta,
        permissions: AccessPermissions,
        *,
        timeout: float | None = None,
    ) -> AccessPolicy:
        """
        Create an access policy.

        Args:
            name: Policy name.
            duration: How long locators using the policy stay valid.
            permissions: Rights granted by the policy.
            timeout: Optional limit in seconds for the round trip.

        Raises:
            ValueError: If the name is empty or the duration is not positive.
        """
        if not name:
            msg = "name is required"
            raise ValueError(msg)
        if duration <= timedelta(0):
            msg = "duration must be positive"
            raise ValueError(msg)
        policy = AccessPolicy(name=name, duration=duration, permissions=permissions)
        return await self._create_async(policy, timeout)

    def create(
        self,
        name: str,
        duration: timedelta,
        permissions: AccessPermissions,
        *,
        timeout: float | None = None,
    ) -> AccessPolicy:
        """Create an access policy, blocking until done."""
        return run_sync(self.create_async, name, duration, permissions, timeout=timeout)
