"""
Asset and asset file models.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum, IntFlag
from typing import Any, ClassVar, Self

from media_services.api.odata import parse_datetime
from media_services.models.base import DeletableEntity, MediaEntity, enum_value


class AssetState(IntEnum):
    """Lifecycle state of an asset."""

    INITIALIZED = 0
    PUBLISHED = 1
    DELETED = 2


class AssetCreationOptions(IntFlag):
    """Encryption applied to an asset's files."""

    NONE = 0
    STORAGE_ENCRYPTED = 1
    COMMON_ENCRYPTION_PROTECTED = 2
    ENVELOPE_ENCRYPTION_PROTECTED = 4


@dataclass(kw_only=True, eq=False)
class Asset(DeletableEntity):
    """A set of media files stored together."""

    entity_set: ClassVar[str] = "Assets"

    name: str = ""
    state: AssetState = AssetState.INITIALIZED
    options: AssetCreationOptions = AssetCreationOptions.NONE
    alternate_id: str | None = None
    uri: str | None = None
    storage_account_name: str | None = None
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            state=enum_value(AssetState, data.get("State"), AssetState.INITIALIZED),
            options=AssetCreationOptions(data.get("Options") or 0),
            alternate_id=data.get("AlternateId"),
            uri=data.get("Uri"),
            storage_account_name=data.get("StorageAccountName"),
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"Name": self.name, "Options": int(self.options)}
        if self.alternate_id is not None:
            payload["AlternateId"] = self.alternate_id
        if self.storage_account_name is not None:
            payload["StorageAccountName"] = self.storage_account_name
        return payload


@dataclass(kw_only=True, eq=False)
class AssetFile(MediaEntity):
    """A single file belonging to an asset."""

    entity_set: ClassVar[str] = "Files"

    name: str = ""
    parent_asset_id: str = ""
    content_file_size: int = 0
    mime_type: str | None = None
    is_primary: bool = False
    is_encrypted: bool = False
    encryption_scheme: str | None = None
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            parent_asset_id=data.get("ParentAssetId") or "",
            content_file_size=int(data.get("ContentFileSize") or 0),
            mime_type=data.get("MimeType"),
            is_primary=bool(data.get("IsPrimary")),
            is_encrypted=bool(data.get("IsEncrypted")),
            encryption_scheme=data.get("EncryptionScheme"),
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )
