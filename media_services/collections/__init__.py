"""
Entity collections exposed by a MediaContext.
"""

from media_services.collections.access_policies import AccessPolicyCollection
from media_services.collections.assets import AssetCollection, AssetFileCollection
from media_services.collections.base import (
    DeletableEntityCollection,
    EntityCollection,
    EntityQuery,
)
from media_services.collections.content_keys import ContentKeyCollection
from media_services.collections.ingest import (
    IngestManifestAssetCollection,
    IngestManifestCollection,
    IngestManifestFileCollection,
)
from media_services.collections.jobs import (
    JobCollection,
    JobTemplateCollection,
    MediaProcessorCollection,
)
from media_services.collections.locators import LocatorCollection
from media_services.collections.notification_end_points import NotificationEndPointCollection

__all__ = [
    "EntityCollection",
    "DeletableEntityCollection",
    "EntityQuery",
    "AccessPolicyCollection",
    "AssetCollection",
    "AssetFileCollection",
    "ContentKeyCollection",
    "IngestManifestCollection",
    "IngestManifestAssetCollection",
    "IngestManifestFileCollection",
    "JobCollection",
    "JobTemplateCollection",
    "MediaProcessorCollection",
    "LocatorCollection",
    "NotificationEndPointCollection",
]
