"""
Generic REST routers for content types.

A :class:`ContentRouter` turns one :class:`~cosmic_cms.registry.ContentType`
into the full endpoint family (listings, lookups, reads, writes, reorder).
Subclasses add the entity-specific routes.
"""

import logging
from typing import Annotated, Any, Sequence

from cosmic_core.schemas.response import Envelope
from cosmic_db import Model, QuerySet
from fastapi import APIRouter, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from .dependencies import DbSession, Pagination
from .registry import MEDIA, ContentType
from .schemas import (
    BulkDeleteRequest,
    MediaTagsUpdate,
    MenuItemCreate,
    MenuItemOrder,
    MenuItemUpdate,
    ReorderRequest,
)
from .services import content as content_service
from .services import media as media_service
from .services import menus as menu_service
from .services.listing import (
    coerce_filters,
    content_queryset,
    list_content,
    paginate,
    search_condition,
)

logger = logging.getLogger(__name__)


class ContentRouter(APIRouter):
    """
    The endpoint family of one content type.

    Routes with a fixed path segment are registered before the ``/{item_id}``
    routes so ``/active`` or ``/reorder`` never reach the id converter.

    Args:
        content: The content type to serve.
        admin_dependencies: Dependencies guarding admin listings and writes,
            e.g. ``[Depends(require_admin)]``.

    Example:
        >>> router = ContentRouter(CONTENT_TYPES[0])
        >>> app.include_router(router, prefix="/api")
    """

    def __init__(
        self,
        content: ContentType,
        *,
        admin_dependencies: Sequence[Any] = (),
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("tags", [content.key])
        super().__init__(prefix=content.prefix, **kwargs)
        self.content = content
        self.admin_dependencies = list(admin_dependencies)

        self.add_listing_routes()
        self.add_extra_routes()
        self.add_item_routes()

    @property
    def model(self) -> type[Model]:
        return self.content.model

    @property
    def verbose_name(self) -> str:
        return self.model.get_verbose_name()

    def serialize(self, instance: Model) -> dict[str, Any]:
        return self.content.schemas.serialize(instance)

    def serialize_many(self, instances: Any) -> list[dict[str, Any]]:
        return self.content.schemas.serialize_many(instances)

    async def prepare(self, db: AsyncSession, instance: Model) -> Model:
        """Hook run on an instance after a write, before it is serialized."""
        return instance

    def filtered_queryset(
        self, request: Request, *, active: bool | None
    ) -> QuerySet[Any]:
        """Queryset narrowed by the request's field filters and ``search``."""
        filters = coerce_filters(self.model, request.query_params)
        if not self.content.has_active:
            active = None
        qs = content_queryset(self.model, active=active, filters=filters)

        term = request.query_params.get("search")
        if term and self.content.search_fields:
            qs = qs.filter(search_condition(self.content.search_fields, term))
        return qs

    def _route(self, path: str, endpoint: Any, method: str, **kwargs: Any) -> None:
        name = f"{self.content.key}_{endpoint.__name__}"
        self.add_api_route(path, endpoint, methods=[method], name=name, **kwargs)

    # --- Listings ---

    def add_listing_routes(self) -> None:
        content = self.content
        router = self

        async def list_items(
            request: Request, db: DbSession, params: Pagination
        ) -> dict[str, Any]:
            qs = router.filtered_queryset(request, active=None)
            items, meta = await paginate(db, qs, params)
            return Envelope(data=router.serialize_many(items), meta=meta).dump()

        self._route("", list_items, "GET", dependencies=self.admin_dependencies)

        if content.has_active:

            async def list_active(
                request: Request, db: DbSession, params: Pagination
            ) -> dict[str, Any]:
                qs = router.filtered_queryset(request, active=True)
                items, meta = await paginate(
                    db, qs, params, default_sort=",".join(content.ordering)
                )
                return Envelope(data=router.serialize_many(items), meta=meta).dump()

            self._route("/active", list_active, "GET")

        if content.has_featured:

            async def list_featured(
                db: DbSession,
                limit: Annotated[int | None, Query(ge=1)] = None,
            ) -> dict[str, Any]:
                items = await list_content(
                    db,
                    router.model,
                    featured=True,
                    ordering=("order",),
                    limit=limit,
                )
                return Envelope(data=router.serialize_many(items)).dump()

            self._route("/featured", list_featured, "GET")

        if content.search_fields:

            async def search(
                db: DbSession, q: Annotated[str, Query(min_length=1)]
            ) -> dict[str, Any]:
                qs = content_queryset(
                    router.model, active=True if content.has_active else None
                ).filter(search_condition(content.search_fields, q))
                items = await qs.order_by(*content.ordering, router.model.id).fetch(db)
                return Envelope(data=router.serialize_many(items)).dump()

            self._route("/search", search, "GET")

        for segment, column in content.lookups.items():
            self._add_lookup(segment, column)

        if content.has_order:

            async def reorder(
                payload: ReorderRequest, db: DbSession
            ) -> dict[str, Any]:
                items = await content_service.reorder(db, router.model, payload.items)
                return Envelope(
                    data=router.serialize_many(items),
                    message=f"{router.verbose_name} order updated",
                ).dump()

            self._route(
                "/reorder", reorder, "PUT", dependencies=self.admin_dependencies
            )

    def _add_lookup(self, segment: str, column: str) -> None:
        content = self.content
        router = self

        async def lookup(value: str, db: DbSession) -> dict[str, Any]:
            filters = coerce_filters(router.model, {column: value})
            items = await list_content(
                db,
                router.model,
                active=True if content.has_active else None,
                ordering=content.ordering,
                filters=filters,
            )
            return Envelope(data=router.serialize_many(items)).dump()

        lookup.__name__ = f"by_{column}"
        self._route(f"/{segment}/{{value}}", lookup, "GET")

    def add_extra_routes(self) -> None:
        """Entity-specific routes with fixed segments. Override in subclasses."""

    # --- Single items ---

    def add_item_routes(self) -> None:
        content = self.content
        router = self
        create_schema = content.schemas.create
        update_schema = content.schemas.update

        async def get_by_id(item_id: int, db: DbSession) -> dict[str, Any]:
            instance = await router.model.objects.get(db, id=item_id)
            instance = await router.on_read(db, instance)
            return Envelope(data=router.serialize(instance)).dump()

        self._route("/id/{item_id}", get_by_id, "GET")

        if content.has_slug:

            async def get_by_slug(slug: str, db: DbSession) -> dict[str, Any]:
                instance = await router.model.objects.get(db, slug=slug)
                instance = await router.on_read(db, instance)
                return Envelope(data=router.serialize(instance)).dump()

            self._route("/slug/{slug}", get_by_slug, "GET")

        async def create(payload: create_schema, db: DbSession) -> dict[str, Any]:
            values = payload.model_dump(exclude_unset=True)
            if content.unique_title:
                await content_service.ensure_unique_title(db, router.model, values)
            instance = await router.model.objects.create(db, **values)
            instance = await router.prepare(db, instance)
            return Envelope(
                data=router.serialize(instance),
                message=f"{router.verbose_name} created",
            ).dump()

        self._route(
            "",
            create,
            "POST",
            status_code=status.HTTP_201_CREATED,
            dependencies=self.admin_dependencies,
        )

        async def retrieve(item_id: int, db: DbSession) -> dict[str, Any]:
            instance = await router.model.objects.get(db, id=item_id)
            instance = await router.on_read(db, instance)
            return Envelope(data=router.serialize(instance)).dump()

        self._route("/{item_id}", retrieve, "GET")

        async def update(
            item_id: int, payload: update_schema, db: DbSession
        ) -> dict[str, Any]:
            values = payload.model_dump(exclude_unset=True)
            instance = await router.model.objects.update(db, item_id, **values)
            instance = await router.prepare(db, instance)
            return Envelope(
                data=router.serialize(instance),
                message=f"{router.verbose_name} updated",
            ).dump()

        self._route("/{item_id}", update, "PUT", dependencies=self.admin_dependencies)

        async def delete(item_id: int, db: DbSession) -> dict[str, Any]:
            await router.model.objects.delete_by_pk(db, item_id)
            return Envelope(message=f"{router.verbose_name} deleted").dump()

        self._route(
            "/{item_id}", delete, "DELETE", dependencies=self.admin_dependencies
        )

    async def on_read(self, db: AsyncSession, instance: Model) -> Model:
        if self.content.count_views:
            return await content_service.record_view(db, instance)
        return instance


class MenuRouter(ContentRouter):
    """Menus plus the routes editing their embedded items."""

    async def prepare(self, db: AsyncSession, instance: Model) -> Model:
        await db.refresh(instance, attribute_names=["items"])
        return instance

    def add_extra_routes(self) -> None:
        router = self
        admin = self.admin_dependencies

        async def add_item(
            menu_id: int, payload: MenuItemCreate, db: DbSession
        ) -> dict[str, Any]:
            menu = await menu_service.add_item(db, menu_id, payload)
            return Envelope(data=router.serialize(menu), message="Menu item added").dump()

        self._route(
            "/{menu_id}/items",
            add_item,
            "POST",
            status_code=status.HTTP_201_CREATED,
            dependencies=admin,
        )

        async def reorder_items(
            menu_id: int, payload: MenuItemOrder, db: DbSession
        ) -> dict[str, Any]:
            menu = await menu_service.reorder_items(db, menu_id, payload.items)
            return Envelope(
                data=router.serialize(menu), message="Menu items reordered"
            ).dump()

        self._route(
            "/{menu_id}/items/reorder", reorder_items, "PUT", dependencies=admin
        )

        async def update_item(
            menu_id: int, item_id: int, payload: MenuItemUpdate, db: DbSession
        ) -> dict[str, Any]:
            menu = await menu_service.update_item(db, menu_id, item_id, payload)
            return Envelope(
                data=router.serialize(menu), message="Menu item updated"
            ).dump()

        self._route(
            "/{menu_id}/items/{item_id}", update_item, "PUT", dependencies=admin
        )

        async def delete_item(
            menu_id: int, item_id: int, db: DbSession
        ) -> dict[str, Any]:
            menu = await menu_service.delete_item(db, menu_id, item_id)
            return Envelope(
                data=router.serialize(menu), message="Menu item deleted"
            ).dump()

        self._route(
            "/{menu_id}/items/{item_id}", delete_item, "DELETE", dependencies=admin
        )


class MediaRouter(ContentRouter):
    """Media records with public, tagging and bulk routes."""

    def __init__(self, content: ContentType = MEDIA, **kwargs: Any) -> None:
        super().__init__(content, **kwargs)

    def add_extra_routes(self) -> None:
        router = self

        async def list_public(db: DbSession, params: Pagination) -> dict[str, Any]:
            qs = router.model.objects.filter(is_public=True)
            items, meta = await paginate(db, qs, params)
            return Envelope(data=router.serialize_many(items), meta=meta).dump()

        self._route("/public", list_public, "GET")

        async def bulk_delete(
            payload: BulkDeleteRequest, db: DbSession
        ) -> dict[str, Any]:
            deleted = await media_service.bulk_delete(db, payload.ids)
            return Envelope(
                data={"deleted": deleted}, message=f"{deleted} media items deleted"
            ).dump()

        self._route(
            "/bulk-delete", bulk_delete, "POST", dependencies=self.admin_dependencies
        )

        async def update_tags(
            item_id: int, payload: MediaTagsUpdate, db: DbSession
        ) -> dict[str, Any]:
            instance = await router.model.objects.update(db, item_id, tags=payload.tags)
            return Envelope(
                data=router.serialize(instance), message="Media tags updated"
            ).dump()

        self._route(
            "/{item_id}/tags", update_tags, "PUT", dependencies=self.admin_dependencies
        )


class SectionRouter(APIRouter):
    """
    A singleton page section: one active record read by the public site.

    Example:
        >>> app.include_router(SectionRouter(SINGLETON_TYPES[1]), prefix="/api")
        # GET /api/brand-vision, POST /api/brand-vision, PUT/DELETE /api/brand-vision/{id}
    """

    def __init__(
        self,
        content: ContentType,
        *,
        admin_dependencies: Sequence[Any] = (),
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("tags", [content.key])
        super().__init__(prefix=content.prefix, **kwargs)
        model = content.model
        schemas = content.schemas
        admin = list(admin_dependencies)
        verbose_name = model.get_verbose_name()

        async def get_section(db: DbSession) -> dict[str, Any]:
            section = await model.objects.filter(is_active=True).order_by("id").first(db)
            data = schemas.serialize(section) if section is not None else None
            return Envelope(data=data).dump()

        async def create_section(
            payload: schemas.create, db: DbSession
        ) -> dict[str, Any]:
            section = await model.objects.create(
                db, **payload.model_dump(exclude_unset=True)
            )
            return Envelope(
                data=schemas.serialize(section), message=f"{verbose_name} created"
            ).dump()

        async def update_section(
            item_id: int, payload: schemas.update, db: DbSession
        ) -> dict[str, Any]:
            section = await model.objects.update(
                db, item_id, **payload.model_dump(exclude_unset=True)
            )
            return Envelope(
                data=schemas.serialize(section), message=f"{verbose_name} updated"
            ).dump()

        async def delete_section(item_id: int, db: DbSession) -> dict[str, Any]:
            await model.objects.delete_by_pk(db, item_id)
            return Envelope(message=f"{verbose_name} deleted").dump()

        self.add_api_route("", get_section, methods=["GET"])
        self.add_api_route(
            "",
            create_section,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            dependencies=admin,
        )
        self.add_api_route(
            "/{item_id}", update_section, methods=["PUT"], dependencies=admin
        )
        self.add_api_route(
            "/{item_id}", delete_section, methods=["DELETE"], dependencies=admin
        )
