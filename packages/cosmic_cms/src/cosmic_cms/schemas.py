"""
Request and response schemas.

Most are generated from the models by :class:`cosmic_db.SchemaGenerator`;
the hand-written ones cover request bodies that do not map onto one table.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Optional

from cosmic_db import Model, SchemaConfig, SchemaGenerator
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
    model_validator,
)

from .models import (
    CONTACT_STATUSES,
    LINK_TARGETS,
    PRODUCT_STATUSES,
    Hero,
    Menu,
    MenuItem,
    Product,
)


@dataclass(frozen=True)
class ResourceSchemas:
    """The create / update / response trio of one model."""

    create: type[BaseModel]
    update: type[BaseModel]
    response: type[BaseModel]

    def serialize(self, instance: Model) -> dict[str, Any]:
        return self.response.model_validate(instance).model_dump(mode="json")

    def serialize_many(self, instances: Any) -> list[dict[str, Any]]:
        return [self.serialize(instance) for instance in instances]


def build_schemas(
    model: type[Model],
    config: SchemaConfig | None = None,
    *,
    create: type[BaseModel] | None = None,
    update: type[BaseModel] | None = None,
) -> ResourceSchemas:
    generator = SchemaGenerator(model, config)
    return ResourceSchemas(
        create=create or generator.create_schema(),
        update=update or generator.update_schema(),
        response=generator.response_schema(),
    )


def _check_title_lines(value: list[str]) -> list[str]:
    if len(value) != 2:
        raise ValueError("Title must have exactly two lines")
    return value


def _check_product_status(value: list[str]) -> list[str]:
    for status in value:
        if status not in PRODUCT_STATUSES:
            raise ValueError(
                f"Invalid status '{status}'. Must be one of: "
                f"{', '.join(PRODUCT_STATUSES)}"
            )
    return value


TitleLines = Annotated[list[str], AfterValidator(_check_title_lines)]
ProductStatus = Annotated[list[str], AfterValidator(_check_product_status)]

_hero = SchemaGenerator(Hero)


class HeroCreate(_hero.create_schema()):
    title_lines: TitleLines


class HeroUpdate(_hero.update_schema()):
    title_lines: Optional[TitleLines] = None


_product = SchemaGenerator(Product)


class ProductCreate(_product.create_schema()):
    status: Optional[ProductStatus] = None


class ProductUpdate(_product.update_schema()):
    status: Optional[ProductStatus] = None


MenuItemResponse = SchemaGenerator(MenuItem).response_schema()

MENU_SCHEMAS = build_schemas(
    Menu,
    SchemaConfig(response_extra={"items": Optional[list[MenuItemResponse]]}),
)


class MenuItemCreate(BaseModel):
    """
    A menu entry. ``url`` is accepted in place of ``path``.

    >>> MenuItemCreate(title="Home", url="/").path
    '/'
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    icon: Optional[str] = None
    target: str = "_self"
    parent_id: Optional[int] = None
    order: Optional[int] = None
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _path_from_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("path") and data.get("url"):
            data = {**data, "path": data["url"]}
        return data

    @field_validator("target")
    @classmethod
    def _check_target(cls, value: str) -> str:
        if value not in LINK_TARGETS:
            raise ValueError(f"Invalid target. Must be one of: {', '.join(LINK_TARGETS)}")
        return value


class MenuItemUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, min_length=1)
    path: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    target: Optional[str] = None
    parent_id: Optional[int] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _path_from_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and "path" not in data and data.get("url"):
            data = {**data, "path": data["url"]}
        return data

    @field_validator("target")
    @classmethod
    def _check_target(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in LINK_TARGETS:
            raise ValueError(f"Invalid target. Must be one of: {', '.join(LINK_TARGETS)}")
        return value


class MenuItemOrder(BaseModel):
    """New order of a menu's items, as a list of item ids."""

    items: list[int] = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _accept_objects(cls, data: Any) -> Any:
        # Dashboard clients send [{"id": 3}, ...] as well as [3, ...]
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            data = {
                **data,
                "items": [
                    item.get("id") if isinstance(item, dict) else item
                    for item in data["items"]
                ],
            }
        return data


class ReorderItem(BaseModel):
    id: int
    order: int


class ReorderRequest(BaseModel):
    """
    Body of the reorder endpoints. Hero clients send ``slides``.

    >>> ReorderRequest.model_validate({"slides": [{"id": 1, "order": 2}]}).items[0].order
    2
    """

    items: list[ReorderItem] = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _slides_alias(cls, data: Any) -> Any:
        if isinstance(data, dict) and "items" not in data and "slides" in data:
            data = {**data, "items": data["slides"]}
        return data


class ContactForm(BaseModel):
    """
    Public contact submission.

    The site forms send ``name`` and ``whatsapp``; the dashboard sends
    ``full_name`` and ``phone``. Either spelling is accepted.
    """

    model_config = ConfigDict(extra="ignore")

    full_name: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    system_type: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    requirements: Optional[str] = None

    @model_validator(mode="after")
    def _require_name_and_phone(self) -> "ContactForm":
        if not (self.full_name or self.name) or not (self.phone or self.whatsapp):
            raise ValueError("Name and phone number are required")
        return self

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump(exclude={"name", "whatsapp"}, exclude_none=True)
        record["full_name"] = self.full_name or self.name
        record["phone"] = self.phone or self.whatsapp
        return record


class ContactStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: str) -> str:
        if value not in CONTACT_STATUSES:
            raise ValueError(
                f"Invalid status. Must be one of: {', '.join(CONTACT_STATUSES)}"
            )
        return value


class ContactNotesUpdate(BaseModel):
    notes: str


class MediaTagsUpdate(BaseModel):
    tags: list[str]


class BulkDeleteRequest(BaseModel):
    ids: list[int] = Field(..., min_length=1)


class MaintenanceUpdate(BaseModel):
    maintenance_mode: StrictBool
    maintenance_message: Optional[str] = None


class SocialMediaUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None
    youtube: Optional[str] = None


class SeoUpdate(BaseModel):
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    google_analytics_id: Optional[str] = None


class ContactInfoUpdate(BaseModel):
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None


class ScriptsUpdate(BaseModel):
    header_scripts: Optional[str] = None
    footer_scripts: Optional[str] = None
