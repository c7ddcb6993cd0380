"""Notification endpoint model."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, ClassVar, Self

from media_services.api.odata import parse_datetime
from media_services.models.base import DeletableEntity, enum_value


class NotificationEndPointType(IntEnum):
    NONE = 0
    AZURE_QUEUE = 1


@dataclass(kw_only=True, eq=False)
class NotificationEndPoint(DeletableEntity):
    """Destination for job state change notifications."""

    entity_set: ClassVar[str] = "NotificationEndPoints"

    name: str = ""
    end_point_type: NotificationEndPointType = NotificationEndPointType.AZURE_QUEUE
    end_point_address: str = ""
    created: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            end_point_type=enum_value(
                NotificationEndPointType,
                data.get("EndPointType"),
                NotificationEndPointType.NONE,
            ),
            end_point_address=data.get("EndPointAddress") or "",
            created=parse_datetime(data.get("Created")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "EndPointType": int(self.end_point_type),
            "EndPointAddress": self.end_point_address,
        }
