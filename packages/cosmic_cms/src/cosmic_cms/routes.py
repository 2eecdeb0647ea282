"""
Routers that do not follow the generic content shape: settings, contact
submissions, aggregated site pages and the dashboard.
"""

import logging
from typing import Any, Optional, Sequence

from cosmic_core.schemas.response import Envelope
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .dependencies import DbSession, Pagination
from .models import Contact, Setting
from .registry import schemas_for
from .schemas import (
    ContactForm,
    ContactInfoUpdate,
    ContactNotesUpdate,
    ContactStatusUpdate,
    MaintenanceUpdate,
    ScriptsUpdate,
    SeoUpdate,
    SocialMediaUpdate,
)
from .services import contacts as contact_service
from .services import media as media_service
from .services import pages
from .services import settings as settings_service
from .services.dashboard import dashboard_stats
from .services.listing import coerce_filters, paginate, search_condition

logger = logging.getLogger(__name__)

SettingUpdate = schemas_for(Setting).update


class HomepageUpdate(BaseModel):
    """Body of ``POST /frontend/homepage``: ``{"settings": {...}}``."""

    settings: Optional[SettingUpdate] = None


CONTACT_SEARCH_FIELDS = ("full_name", "email", "phone", "message", "city")


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def settings_router(*, admin_dependencies: Sequence[Any] = ()) -> APIRouter:
    router = APIRouter(prefix="/settings", tags=["settings"])
    admin = list(admin_dependencies)

    def envelope(settings: Setting, message: str | None = None) -> dict[str, Any]:
        return Envelope(
            data=settings_service.serialize_settings(settings), message=message
        ).dump()

    @router.get("", dependencies=admin)
    async def get_settings(db: DbSession) -> dict[str, Any]:
        return envelope(await settings_service.get_settings(db))

    @router.get("/public")
    async def get_public_settings(db: DbSession) -> dict[str, Any]:
        settings = await settings_service.get_settings(db)
        data = settings_service.serialize_settings(settings, public=True)
        return Envelope(data=data).dump()

    @router.put("", dependencies=admin)
    async def update_settings(payload: SettingUpdate, db: DbSession) -> dict[str, Any]:
        values = payload.model_dump(exclude_unset=True)
        settings = await settings_service.upsert_settings(db, values)
        return envelope(settings, "Settings updated")

    @router.put("/maintenance", dependencies=admin)
    async def update_maintenance(
        payload: MaintenanceUpdate, db: DbSession
    ) -> dict[str, Any]:
        settings = await settings_service.update_group(db, payload)
        state = "enabled" if settings.maintenance_mode else "disabled"
        return envelope(settings, f"Maintenance mode {state}")

    @router.put("/social-media", dependencies=admin)
    async def update_social_media(
        payload: SocialMediaUpdate, db: DbSession
    ) -> dict[str, Any]:
        settings = await settings_service.update_social_media(db, payload)
        return envelope(settings, "Social media links updated")

    @router.put("/seo", dependencies=admin)
    async def update_seo(payload: SeoUpdate, db: DbSession) -> dict[str, Any]:
        settings = await settings_service.update_group(db, payload)
        return envelope(settings, "SEO settings updated")

    @router.put("/contact", dependencies=admin)
    async def update_contact_info(
        payload: ContactInfoUpdate, db: DbSession
    ) -> dict[str, Any]:
        settings = await settings_service.update_group(db, payload)
        return envelope(settings, "Contact information updated")

    @router.put("/scripts", dependencies=admin)
    async def update_scripts(payload: ScriptsUpdate, db: DbSession) -> dict[str, Any]:
        settings = await settings_service.update_group(db, payload)
        return envelope(settings, "Scripts updated")

    return router


def contacts_router(*, admin_dependencies: Sequence[Any] = ()) -> APIRouter:
    router = APIRouter(tags=["contacts"])
    admin = list(admin_dependencies)
    schemas = schemas_for(Contact)

    @router.post("/contacts", status_code=status.HTTP_201_CREATED)
    async def submit_contact(
        payload: ContactForm, request: Request, db: DbSession
    ) -> dict[str, Any]:
        contact = await contact_service.submit_contact(
            db, payload, ip_address=_client_ip(request)
        )
        return Envelope(
            data=schemas.serialize(contact),
            message="Thank you for contacting us. We will get back to you soon.",
        ).dump()

    @router.get("/contacts", dependencies=admin)
    async def list_contacts(
        request: Request, db: DbSession, params: Pagination
    ) -> dict[str, Any]:
        qs = Contact.objects.filter(**coerce_filters(Contact, request.query_params))
        term = request.query_params.get("search")
        if term:
            qs = qs.filter(search_condition(CONTACT_SEARCH_FIELDS, term))
        items, meta = await paginate(db, qs, params)
        return Envelope(data=schemas.serialize_many(items), meta=meta).dump()

    @router.get("/contacts/unread", dependencies=admin)
    async def list_unread(db: DbSession, params: Pagination) -> dict[str, Any]:
        items, meta = await paginate(db, Contact.objects.filter(is_read=False), params)
        return Envelope(data=schemas.serialize_many(items), meta=meta).dump()

    @router.get("/contacts/status/{contact_status}", dependencies=admin)
    async def list_by_status(
        contact_status: str, db: DbSession, params: Pagination
    ) -> dict[str, Any]:
        contact_service.check_status(contact_status)
        qs = Contact.objects.filter(status=contact_status)
        items, meta = await paginate(db, qs, params)
        return Envelope(data=schemas.serialize_many(items), meta=meta).dump()

    @router.get("/contacts-stats", dependencies=admin)
    async def get_contact_stats(db: DbSession) -> dict[str, Any]:
        return Envelope(data=await contact_service.contact_stats(db)).dump()

    @router.get("/contacts/{contact_id}", dependencies=admin)
    async def get_contact(contact_id: int, db: DbSession) -> dict[str, Any]:
        contact = await Contact.objects.get_by_pk(db, contact_id)
        return Envelope(data=schemas.serialize(contact)).dump()

    @router.put("/contacts/{contact_id}/read", dependencies=admin)
    async def mark_read(contact_id: int, db: DbSession) -> dict[str, Any]:
        contact = await Contact.objects.update(db, contact_id, is_read=True)
        return Envelope(
            data=schemas.serialize(contact), message="Contact marked as read"
        ).dump()

    @router.put("/contacts/{contact_id}/status", dependencies=admin)
    async def update_status(
        contact_id: int, payload: ContactStatusUpdate, db: DbSession
    ) -> dict[str, Any]:
        contact = await Contact.objects.update(db, contact_id, status=payload.status)
        return Envelope(
            data=schemas.serialize(contact), message="Contact status updated"
        ).dump()

    @router.put("/contacts/{contact_id}/notes", dependencies=admin)
    async def update_notes(
        contact_id: int, payload: ContactNotesUpdate, db: DbSession
    ) -> dict[str, Any]:
        contact = await Contact.objects.update(db, contact_id, notes=payload.notes)
        return Envelope(
            data=schemas.serialize(contact), message="Contact notes updated"
        ).dump()

    @router.delete("/contacts/{contact_id}", dependencies=admin)
    async def delete_contact(contact_id: int, db: DbSession) -> dict[str, Any]:
        await Contact.objects.delete_by_pk(db, contact_id)
        return Envelope(message="Contact deleted").dump()

    return router


def frontend_router(*, admin_dependencies: Sequence[Any] = ()) -> APIRouter:
    """
    Aggregated payloads rendered by the public site.
    """
    router = APIRouter(prefix="/frontend", tags=["frontend"])
    admin = list(admin_dependencies)

    async def homepage_response(db: DbSession) -> Any:
        try:
            data = await pages.homepage(db)
        except Exception:
            logger.exception("Failed to build homepage data")
            return JSONResponse(
                Envelope.fail().dump(), status_code=status.HTTP_400_BAD_REQUEST
            )
        return Envelope(data=data).dump()

    @router.get("/homepage")
    async def get_homepage(db: DbSession) -> Any:
        return await homepage_response(db)

    @router.post("/homepage", dependencies=admin)
    async def update_homepage(payload: HomepageUpdate, db: DbSession) -> Any:
        if payload.settings is not None:
            await settings_service.upsert_settings(
                db, payload.settings.model_dump(exclude_unset=True)
            )
        return await homepage_response(db)

    @router.get("/about")
    async def get_about(db: DbSession) -> dict[str, Any]:
        return Envelope(data=await pages.about_page(db)).dump()

    @router.get("/company-culture")
    async def get_company_culture(db: DbSession) -> dict[str, Any]:
        return Envelope(data=await pages.company_culture_page(db)).dump()

    @router.post("/contact", status_code=status.HTTP_201_CREATED)
    async def submit_contact(
        payload: ContactForm, request: Request, db: DbSession
    ) -> dict[str, Any]:
        contact = await contact_service.submit_contact(
            db, payload, ip_address=_client_ip(request)
        )
        return Envelope(
            data=schemas_for(Contact).serialize(contact),
            message="Thank you for contacting us. We will get back to you soon.",
        ).dump()

    return router


def dashboard_router(*, admin_dependencies: Sequence[Any] = ()) -> APIRouter:
    router = APIRouter(tags=["dashboard"])
    admin = list(admin_dependencies)

    @router.get("/dashboard-stats", dependencies=admin)
    async def get_dashboard_stats(db: DbSession) -> dict[str, Any]:
        return Envelope(data=await dashboard_stats(db)).dump()

    @router.get("/media-folders", dependencies=admin)
    async def get_media_folders(db: DbSession) -> dict[str, Any]:
        return Envelope(data=await media_service.folders(db)).dump()

    return router
