"""
Content keys and the key rebind exchange.

The service never hands out raw key material directly. A "rebind" request
returns the key either in clear or re-encrypted to the public key of a
certificate supplied by the caller; the service does the re-wrapping and
the client only carries certificate bytes out and key bytes back.
"""

import asyncio
import base64
import binascii
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, ClassVar, Self
from urllib.parse import quote

import structlog
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding

from media_services.api.odata import parse_datetime, quote_literal
from media_services.core.sync import run_sync
from media_services.exceptions import UnexpectedResponseError
from media_services.models.base import DeletableEntity, enum_value

logger = structlog.get_logger(__name__)

_REBIND_PATH = "/RebindContentKey"


class ContentKeyType(IntEnum):
    """Purpose of a content key."""

    COMMON_ENCRYPTION = 0
    STORAGE_ENCRYPTION = 1
    CONFIGURATION_ENCRYPTION = 2


class ProtectionKeyType(IntEnum):
    """How the stored key value is protected."""

    X509_CERTIFICATE_THUMBPRINT = 0


def rebind_address(key_id: str, certificate: str = "") -> str:
    """
    Relative address of the rebind action for a key.

    Args:
        key_id: Content key identifier.
        certificate: URL-encoded base64 certificate, or "" for the clear value.

    Example:
        ```python
        rebind_address("abc123")
        # "/RebindContentKey?id='abc123'&x509Certificate=''"
        ```
    """
    return f"{_REBIND_PATH}?id={quote_literal(key_id)}&x509Certificate='{certificate}'"


def encode_certificate(certificate: x509.Certificate) -> str:
    """Export a certificate as DER, base64 it, and URL-encode the result."""
    exported = base64.b64encode(certificate.public_bytes(Encoding.DER)).decode("ascii")
    return quote(exported, safe="")


@dataclass(kw_only=True, eq=False)
class ContentKey(DeletableEntity):
    """
    A key record held by the service.

    Attributes:
        name: Friendly name.
        content_key_type: What the key is used for.
        protection_key_id: Thumbprint of the key protecting the stored value.
        protection_key_type: How the stored value is protected.
        encrypted_content_key: Stored value, encrypted to the protection key.
        checksum: Checksum of the key value.
        created: Creation time.
        last_modified: Last modification time.
    """

    entity_set: ClassVar[str] = "ContentKeys"

    name: str = ""
    content_key_type: ContentKeyType = ContentKeyType.COMMON_ENCRYPTION
    protection_key_id: str = ""
    protection_key_type: ProtectionKeyType = ProtectionKeyType.X509_CERTIFICATE_THUMBPRINT
    encrypted_content_key: str = ""
    checksum: str = ""
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            content_key_type=enum_value(
                ContentKeyType, data.get("ContentKeyType"), ContentKeyType.COMMON_ENCRYPTION
            ),
            protection_key_id=data.get("ProtectionKeyId") or "",
            protection_key_type=enum_value(
                ProtectionKeyType,
                data.get("ProtectionKeyType"),
                ProtectionKeyType.X509_CERTIFICATE_THUMBPRINT,
            ),
            encrypted_content_key=data.get("EncryptedContentKey") or "",
            checksum=data.get("Checksum") or "",
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )

    async def get_clear_key_value_async(self, *, timeout: float | None = None) -> bytes | None:
        """
        Retrieve the key value in clear.

        Args:
            timeout: Optional limit in seconds for the round trip.

        Returns:
            Raw key bytes, or None if the key is not bound to a context.

        Raises:
            APIError: If the service rejects the request.
            UnexpectedResponseError: If the service does not return one base64 value.
            TimeoutError: If the timeout expires.
        """
        if self.context is None:
            return None
        return await self._rebind(rebind_address(self.id), timeout)

    def get_clear_key_value(self, *, timeout: float | None = None) -> bytes | None:
        """Retrieve the key value in clear, blocking until done."""
        return run_sync(self.get_clear_key_value_async, timeout=timeout)

    async def get_encrypted_key_value_async(
        self, certificate: x509.Certificate, *, timeout: float | None = None
    ) -> bytes | None:
        """
        Retrieve the key value encrypted to a certificate's public key.

        Args:
            certificate: Certificate whose public key the service encrypts to.
            timeout: Optional limit in seconds for the round trip.

        Returns:
            Encrypted key bytes, or None if the key is not bound to a context.

        Raises:
            ValueError: If no certificate is given.
            APIError: If the service rejects the request.
            UnexpectedResponseError: If the service does not return one base64 value.
            TimeoutError: If the timeout expires.
        """
        if certificate is None:
            msg = "certificate is required"
            raise ValueError(msg)
        if self.context is None:
            return None
        return await self._rebind(rebind_address(self.id, encode_certificate(certificate)), timeout)

    def get_encrypted_key_value(
        self, certificate: x509.Certificate, *, timeout: float | None = None
    ) -> bytes | None:
        """Retrieve the key value encrypted to a certificate, blocking until done."""
        return run_sync(self.get_encrypted_key_value_async, certificate, timeout=timeout)

    async def _rebind(self, uri: str, timeout: float | None) -> bytes | None:
        context = self.context
        if context is None:
            return None

        logger.debug("Rebinding content key", id=self.id)
        async with asyncio.timeout(timeout):
            async with context.connection_factory.create_connection() as connection:
                results = await connection.execute(uri)

        if len(results) != 1 or not isinstance(results[0], str):
            msg = f"Expected exactly one key value, got {len(results)} result(s)"
            raise UnexpectedResponseError(msg, endpoint=_REBIND_PATH)
        try:
            return base64.b64decode(results[0], validate=True)
        except binascii.Error as e:
            msg = "Key value is not valid base64"
            raise UnexpectedResponseError(msg, endpoint=_REBIND_PATH) from e
