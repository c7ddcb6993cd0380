"""
Base class shared by every Media Services entity.

Entities keep a weak reference to the context they were retrieved through.
The context owns the collections; entities never keep it alive.
"""

import asyncio
import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Self

import structlog

from media_services.core.sync import run_sync
from media_services.exceptions import ValidationError

if TYPE_CHECKING:
    from media_services.context import MediaContext

logger = structlog.get_logger(__name__)


@dataclass(kw_only=True, eq=False)
class MediaEntity:
    """
    An entity record exposed by the data service.

    Attributes:
        id: Opaque server identifier, empty until the entity is persisted.
    """

    entity_set: ClassVar[str]

    id: str = ""
    _context_ref: "weakref.ref[MediaContext] | None" = field(
        default=None, init=False, repr=False
    )
    _deleted: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        """Build the entity from its OData representation."""
        raise NotImplementedError

    def to_payload(self) -> dict[str, Any]:
        """OData representation sent when the entity is created."""
        msg = f"{type(self).__name__} cannot be created by the client"
        raise NotImplementedError(msg)

    def bind_context(self, context: "MediaContext") -> None:
        """Bind the entity to the context it belongs to."""
        self._context_ref = weakref.ref(context)

    @property
    def context(self) -> "MediaContext | None":
        """The bound context, or None if unbound or no longer alive."""
        if self._context_ref is None:
            return None
        return self._context_ref()

    @property
    def is_deleted(self) -> bool:
        return self._deleted

    def _mark_deleted(self) -> None:
        self._deleted = True
        self._context_ref = None


def verify_entity(entity: Any, kind: type[MediaEntity] = MediaEntity) -> "MediaContext":
    """
    Check that an entity can be sent to the service.

    Args:
        entity: Entity about to be mutated.
        kind: Expected entity class.

    Returns:
        The context the entity is bound to.

    Raises:
        ValidationError: If the entity is missing, of the wrong kind, not
            persisted, already deleted, or not bound to a live context.
    """
    if entity is None:
        msg = f"A {kind.__name__} is required"
        raise ValidationError(msg)
    if not isinstance(entity, kind):
        msg = f"Expected {kind.__name__}, got {type(entity).__name__}"
        raise ValidationError(msg)
    if entity.is_deleted:
        msg = f"{kind.__name__} has already been deleted"
        raise ValidationError(msg, id=entity.id)
    if not entity.id:
        msg = f"{kind.__name__} has not been created on the service"
        raise ValidationError(msg)
    context = entity.context
    if context is None:
        msg = f"{kind.__name__} is not bound to a context"
        raise ValidationError(msg, id=entity.id)
    return context


@dataclass(kw_only=True, eq=False)
class DeletableEntity(MediaEntity):
    """Entity that can be removed from the service."""

    async def delete_async(self, *, timeout: float | None = None) -> None:
        """
        Delete this entity on the service.

        Args:
            timeout: Optional limit in seconds for the round trip.

        Raises:
            ValidationError: If the entity cannot be deleted.
            APIError: If the service rejects the deletion.
            TimeoutError: If the timeout expires.
        """
        context = verify_entity(self, type(self))

        async with asyncio.timeout(timeout):
            async with context.connection_factory.create_connection() as connection:
                connection.attach_to(self.entity_set, self)
                connection.delete_object(self)
                await connection.save_changes()

        logger.debug("Entity deleted", entity_set=self.entity_set, id=self.id)
        self._mark_deleted()

    def delete(self, *, timeout: float | None = None) -> None:
        """Delete this entity on the service, blocking until done."""
        run_sync(self.delete_async, timeout=timeout)


def enum_value(enum_type: type, value: Any, default: Any) -> Any:
    """Convert a raw payload value to ``enum_type``, falling back to ``default``."""
    if value is None:
        return default
    try:
        return enum_type(value)
    except ValueError:
        return default
