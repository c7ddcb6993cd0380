"""
Entity models for Media Services.

Entities are mutable dataclasses bound to the context they came from.
"""

from media_services.models.access_policy import AccessPermissions, AccessPolicy
from media_services.models.asset import Asset, AssetCreationOptions, AssetFile, AssetState
from media_services.models.base import DeletableEntity, MediaEntity, verify_entity
from media_services.models.content_key import ContentKey, ContentKeyType, ProtectionKeyType
from media_services.models.ingest import (
    IngestManifest,
    IngestManifestAsset,
    IngestManifestFile,
    IngestManifestFileState,
    IngestManifestState,
)
from media_services.models.job import Job, JobState, JobTemplate, MediaProcessor
from media_services.models.locator import Locator, LocatorType
from media_services.models.notification import NotificationEndPoint, NotificationEndPointType

__all__ = [
    # Base
    "MediaEntity",
    "DeletableEntity",
    "verify_entity",
    # Assets
    "Asset",
    "AssetFile",
    "AssetState",
    "AssetCreationOptions",
    # Access policies
    "AccessPolicy",
    "AccessPermissions",
    # Content keys
    "ContentKey",
    "ContentKeyType",
    "ProtectionKeyType",
    # Jobs
    "Job",
    "JobState",
    "JobTemplate",
    "MediaProcessor",
    # Locators
    "Locator",
    "LocatorType",
    # Notifications
    "NotificationEndPoint",
    "NotificationEndPointType",
    # Ingest
    "IngestManifest",
    "IngestManifestAsset",
    "IngestManifestFile",
    "IngestManifestState",
    "IngestManifestFileState",
]
