"""Content key collection."""

from typing import Any

from media_services.collections.base import DeletableEntityCollection
from media_services.models.base import verify_entity
from media_services.models.content_key import ContentKey


class ContentKeyCollection(DeletableEntityCollection[ContentKey]):
    """
    Content keys of the account.

    Keys are provisioned on the service side; the client lists them, reads
    their values through :class:`ContentKey` and deletes them.
    """

    entity_type = ContentKey

    @staticmethod
    def verify_content_key(content_key: Any) -> None:
        """
        Check that a content key can be mutated.

        Raises:
            ValidationError: If the key is missing, not a ContentKey, not
                persisted, already deleted, or not bound to a context.
        """
        verify_entity(content_key, ContentKey)
