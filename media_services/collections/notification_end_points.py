"""Notification endpoint collection."""

from media_services.collections.base import DeletableEntityCollection
from media_services.core.sync import run_sync
from media_services.models.notification import NotificationEndPoint, NotificationEndPointType


class NotificationEndPointCollection(DeletableEntityCollection[NotificationEndPoint]):
    entity_type = NotificationEndPoint

    async def create_async(
        self,
        name: str,
        end_point_type: NotificationEndPointType,
        end_point_address: str,
        *,
        timeout: float | None = None,
    ) -> NotificationEndPoint:
        """
        Register a notification endpoint.

        Raises:
            ValueError: If the name or address is empty.
        """
        if not name:
            msg = "name is required"
            raise ValueError(msg)
        if not end_point_address:
            msg = "end_point_address is required"
            raise ValueError(msg)
        end_point = NotificationEndPoint(
            name=name, end_point_type=end_point_type, end_point_address=end_point_address
        )
        return await self._create_async(end_point, timeout)

    def create(
        self,
        name: str,
        end_point_type: NotificationEndPointType,
        end_point_address: str,
        *,
        timeout: float | None = None,
    ) -> NotificationEndPoint:
        """Register a notification endpoint, blocking until done."""
        return run_sync(
            self.create_async, name, end_point_type, end_point_address, timeout=timeout
        )
