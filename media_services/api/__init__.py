"""
Media Services data service layer.

Provides token acquisition and async OData connections.
"""

from media_services.api.connection import DataServiceConnection, sanitize_for_log
from media_services.api.connection_factory import DataServiceConnectionFactory
from media_services.api.token_provider import AccessToken, AcsTokenProvider

__all__ = [
    "AccessToken",
    "AcsTokenProvider",
    "DataServiceConnection",
    "DataServiceConnectionFactory",
    "sanitize_for_log",
]
