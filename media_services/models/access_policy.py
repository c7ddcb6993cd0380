"""Access policy model."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntFlag
from typing import Any, ClassVar, Self

from media_services.api.odata import parse_datetime
from media_services.models.base import DeletableEntity


class AccessPermissions(IntFlag):
    """Rights granted by an access policy."""

    NONE = 0
    READ = 1
    WRITE = 2
    DELETE = 4
    LIST = 8


@dataclass(kw_only=True, eq=False)
class AccessPolicy(DeletableEntity):
    """Permissions and duration applied to locators."""

    entity_set: ClassVar[str] = "AccessPolicies"

    name: str = ""
    duration: timedelta = timedelta(0)
    permissions: AccessPermissions = AccessPermissions.NONE
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            duration=timedelta(minutes=float(data.get("DurationInMinutes") or 0)),
            permissions=AccessPermissions(data.get("Permissions") or 0),
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "DurationInMinutes": self.duration.total_seconds() / 60,
            "Permissions": int(self.permissions),
        }
