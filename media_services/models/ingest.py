"""
Bulk ingest models.

An ingest manifest groups assets whose files are uploaded out of band to
a storage container watched by the service.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, ClassVar, Self

from media_services.api.odata import parse_datetime
from media_services.models.base import DeletableEntity, MediaEntity, enum_value


class IngestManifestState(IntEnum):
    INACTIVE = 0
    ACTIVATING = 1
    ACTIVE = 2


class IngestManifestFileState(IntEnum):
    PENDING = 0
    FINISHED = 1
    ERROR = 2


@dataclass(kw_only=True, eq=False)
class IngestManifest(DeletableEntity):
    entity_set: ClassVar[str] = "IngestManifests"

    name: str = ""
    state: IngestManifestState = IngestManifestState.INACTIVE
    blob_storage_uri_for_upload: str | None = None
    storage_account_name: str | None = None
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            state=enum_value(IngestManifestState, data.get("State"), IngestManifestState.INACTIVE),
            blob_storage_uri_for_upload=data.get("BlobStorageUriForUpload"),
            storage_account_name=data.get("StorageAccountName"),
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"Name": self.name}
        if self.storage_account_name is not None:
            payload["StorageAccountName"] = self.storage_account_name
        return payload


@dataclass(kw_only=True, eq=False)
class IngestManifestAsset(MediaEntity):
    entity_set: ClassVar[str] = "IngestManifestAssets"

    parent_ingest_manifest_id: str = ""
    created: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            parent_ingest_manifest_id=data.get("ParentIngestManifestId") or "",
            created=parse_datetime(data.get("Created")),
        )


@dataclass(kw_only=True, eq=False)
class IngestManifestFile(MediaEntity):
    entity_set: ClassVar[str] = "IngestManifestFiles"

    name: str = ""
    parent_ingest_manifest_id: str = ""
    parent_ingest_manifest_asset_id: str = ""
    state: IngestManifestFileState = IngestManifestFileState.PENDING
    error_detail: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            parent_ingest_manifest_id=data.get("ParentIngestManifestId") or "",
            parent_ingest_manifest_asset_id=data.get("ParentIngestManifestAssetId") or "",
            state=enum_value(
                IngestManifestFileState, data.get("State"), IngestManifestFileState.PENDING
            ),
            error_detail=data.get("ErrorDetail"),
        )
