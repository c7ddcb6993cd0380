"""
Media Services Python Client.

Typed, context-scoped access to the entities of a Media Services account,
with content key retrieval in clear or encrypted to a certificate.

Example:
    ```python
    from media_services import MediaContext

    context = MediaContext("account", "key")

    for asset in context.assets:
        print(asset.name)

    key = context.content_keys.get("nb:kid:UUID:...")
    value = key.get_encrypted_key_value(certificate)
    ```
"""

from media_services.config import MediaServicesConfig
from media_services.context import MediaContext
from media_services.exceptions import (
    APIError,
    AuthenticationError,
    InvalidCredentialsError,
    MediaServicesError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnexpectedResponseError,
    ValidationError,
)
from media_services.models import (
    AccessPermissions,
    AccessPolicy,
    Asset,
    AssetCreationOptions,
    AssetFile,
    ContentKey,
    ContentKeyType,
    Job,
    Locator,
    LocatorType,
    ProtectionKeyType,
)

__version__ = "0.1.0"

__all__ = [
    # Main context
    "MediaContext",
    "MediaServicesConfig",
    # Models
    "AccessPolicy",
    "AccessPermissions",
    "Asset",
    "AssetFile",
    "AssetCreationOptions",
    "ContentKey",
    "ContentKeyType",
    "ProtectionKeyType",
    "Job",
    "Locator",
    "LocatorType",
    # Exceptions
    "MediaServicesError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "APIError",
    "NotFoundError",
    "ServerError",
    "UnauthorizedError",
    "NetworkError",
    "UnexpectedResponseError",
    "ValidationError",
]
