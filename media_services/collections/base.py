"""
Context-scoped entity collections.

A collection is a thin view over one entity set. It never caches entities:
iterating it, or any query built from it, runs a fresh remote query, and
each call opens its own connection from the context's factory.
"""

import asyncio
import weakref
from collections.abc import AsyncIterator, Iterator
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar

import structlog

from media_services.api.odata import entity_address
from media_services.core.sync import run_sync
from media_services.exceptions import NotFoundError, ValidationError
from media_services.models.base import DeletableEntity, MediaEntity, verify_entity

if TYPE_CHECKING:
    from media_services.context import MediaContext

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=MediaEntity)
D = TypeVar("D", bound=DeletableEntity)


class EntityQuery(Generic[E]):
    """
    Lazy, restartable query over an entity set.

    Nothing is fetched until iteration starts. Results are fetched page by
    page as iteration proceeds, and every new iteration queries again.

    Example:
        ```python
        query = context.assets.query(filter="startswith(Name, 'trailer')", top=10)
        for asset in query:
            print(asset.name)
        ```
    """

    def __init__(
        self,
        collection: "EntityCollection[E]",
        *,
        filter: str | None = None,
        order_by: str | None = None,
        top: int | None = None,
        timeout: float | None = None,
    ) -> None:
        if top is not None and top < 0:
            msg = "top must be non-negative"
            raise ValueError(msg)
        self._collection = collection
        self._filter = filter
        self._order_by = order_by
        self._top = top
        self._timeout = timeout

    def filter(self, expression: str) -> Self:
        """Return a new query further restricted by an OData filter expression."""
        combined = expression if self._filter is None else f"({self._filter}) and ({expression})"
        return self._replace(filter=combined)

    def order_by(self, expression: str) -> Self:
        """Return a new query sorted by an OData ``$orderby`` expression."""
        return self._replace(order_by=expression)

    def take(self, count: int) -> Self:
        """Return a new query limited to at most ``count`` entities."""
        return self._replace(top=count)

    def __iter__(self) -> Iterator[E]:
        skip = 0
        while (size := self._next_page_size(skip)) > 0:
            page = run_sync(
                self._collection._fetch_page_async, self._params(skip, size), self._timeout
            )
            yield from page[:size]
            if len(page) < size:
                return
            skip += size

    async def __aiter__(self) -> AsyncIterator[E]:
        skip = 0
        while (size := self._next_page_size(skip)) > 0:
            page = await self._collection._fetch_page_async(self._params(skip, size), self._timeout)
            for entity in page[:size]:
                yield entity
            if len(page) < size:
                return
            skip += size

    async def first_async(self, *, timeout: float | None = None) -> E | None:
        """
        Return the first matching entity, or None.

        Args:
            timeout: Optional limit in seconds for the round trip, defaults to the query's.
        """
        if self._next_page_size(0) <= 0:
            return None
        page = await self._collection._fetch_page_async(
            self._params(0, 1), self._timeout if timeout is None else timeout
        )
        return page[0] if page else None

    def first(self, *, timeout: float | None = None) -> E | None:
        """Return the first matching entity, or None, blocking until done."""
        return run_sync(self.first_async, timeout=timeout)

    def _replace(self, **changes: Any) -> Self:
        fields = {
            "filter": self._filter,
            "order_by": self._order_by,
            "top": self._top,
            "timeout": self._timeout,
        }
        return type(self)(self._collection, **(fields | changes))

    def _next_page_size(self, skip: int) -> int:
        page_size = self._collection.context.config.page_size
        if self._top is None:
            return page_size
        return min(page_size, self._top - skip)

    def _params(self, skip: int, size: int) -> dict[str, Any]:
        params: dict[str, Any] = {"$skip": skip, "$top": size}
        if self._filter is not None:
            params["$filter"] = self._filter
        if self._order_by is not None:
            params["$orderby"] = self._order_by
        return params


class EntityCollection(Generic[E]):
    """
    Read access to one entity set, scoped to a context.

    The collection keeps a weak reference to its context; the context owns
    the collection.
    """

    entity_type: ClassVar[type[MediaEntity]]

    def __init__(self, context: "MediaContext") -> None:
        self._context_ref = weakref.ref(context)

    @property
    def context(self) -> "MediaContext":
        """
        The owning context.

        Raises:
            ValidationError: If the context no longer exists.
        """
        context = self._context_ref()
        if context is None:
            msg = f"{type(self).__name__} outlived its context"
            raise ValidationError(msg)
        return context

    @property
    def entity_set(self) -> str:
        return self.entity_type.entity_set

    def __iter__(self) -> Iterator[E]:
        return iter(self.query())

    def __aiter__(self) -> AsyncIterator[E]:
        return self.query().__aiter__()

    def query(
        self,
        *,
        filter: str | None = None,
        order_by: str | None = None,
        top: int | None = None,
        timeout: float | None = None,
    ) -> EntityQuery[E]:
        """
        Build a lazy query over this collection.

        Args:
            filter: OData ``$filter`` expression.
            order_by: OData ``$orderby`` expression.
            top: Maximum number of entities to return.
            timeout: Optional limit in seconds for each page round trip.
        """
        return EntityQuery(self, filter=filter, order_by=order_by, top=top, timeout=timeout)

    async def get_async(self, entity_id: str, *, timeout: float | None = None) -> E | None:
        """
        Look up an entity by identifier.

        Args:
            entity_id: Entity identifier.
            timeout: Optional limit in seconds for the round trip.

        Returns:
            The entity bound to this collection's context, or None if it does not exist.
        """
        if not entity_id:
            msg = "entity_id is required"
            raise ValueError(msg)

        context = self.context
        try:
            async with asyncio.timeout(timeout):
                async with context.connection_factory.create_connection() as connection:
                    results = await connection.execute(entity_address(self.entity_set, entity_id))
        except NotFoundError:
            logger.debug("Entity not found", entity_set=self.entity_set, id=entity_id)
            return None

        return self._bind(results[0]) if results else None

    def get(self, entity_id: str, *, timeout: float | None = None) -> E | None:
        """Look up an entity by identifier, blocking until done."""
        return run_sync(self.get_async, entity_id, timeout=timeout)

    async def _fetch_page_async(
        self, params: dict[str, Any], timeout: float | None = None
    ) -> list[E]:
        context = self.context
        async with asyncio.timeout(timeout):
            async with context.connection_factory.create_connection() as connection:
                results = await connection.execute(f"/{self.entity_set}", params=params)
        logger.debug("Fetched page", entity_set=self.entity_set, count=len(results))
        return [self._bind(data) for data in results]

    async def _create_async(self, entity: E, timeout: float | None) -> E:
        context = self.context
        async with asyncio.timeout(timeout):
            async with context.connection_factory.create_connection() as connection:
                connection.add_object(self.entity_set, entity)
                (payload,) = await connection.save_changes()
        created = self._bind(payload)
        logger.debug("Entity created", entity_set=self.entity_set, id=created.id)
        return created

    def _bind(self, data: dict[str, Any]) -> E:
        entity = self.entity_type.from_payload(data)
        entity.bind_context(self.context)
        return entity


class DeletableEntityCollection(EntityCollection[D]):
    """Collection whose entities can be deleted."""

    async def delete_async(self, entity: D, *, timeout: float | None = None) -> None:
        """
        Delete an entity of this collection's kind.

        Raises:
            ValidationError: If the entity is of another kind or cannot be deleted.
        """
        verify_entity(entity, self.entity_type)
        await entity.delete_async(timeout=timeout)

    def delete(self, entity: D, *, timeout: float | None = None) -> None:
        """Delete an entity of this collection's kind, blocking until done."""
        run_sync(self.delete_async, entity, timeout=timeout)
