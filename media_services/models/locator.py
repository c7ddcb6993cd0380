"""Locator model."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, ClassVar, Self

from media_services.api.odata import format_datetime, parse_datetime
from media_services.models.base import DeletableEntity, enum_value


class LocatorType(IntEnum):
    NONE = 0
    SAS = 1
    ON_DEMAND_ORIGIN = 2


@dataclass(kw_only=True, eq=False)
class Locator(DeletableEntity):
    """Time-limited address granting access to an asset."""

    entity_set: ClassVar[str] = "Locators"

    name: str = ""
    locator_type: LocatorType = LocatorType.NONE
    path: str | None = None
    asset_id: str = ""
    access_policy_id: str = ""
    start_time: datetime | None = None
    expiration_time: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            locator_type=enum_value(LocatorType, data.get("Type"), LocatorType.NONE),
            path=data.get("Path"),
            asset_id=data.get("AssetId") or "",
            access_policy_id=data.get("AccessPolicyId") or "",
            start_time=parse_datetime(data.get("StartTime")),
            expiration_time=parse_datetime(data.get("ExpirationDateTime")),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "Type": int(self.locator_type),
            "AssetId": self.asset_id,
            "AccessPolicyId": self.access_policy_id,
        }
        if self.name:
            payload["Name"] = self.name
        if self.start_time is not None:
            payload["StartTime"] = format_datetime(self.start_time)
        return payload
