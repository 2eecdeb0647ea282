"""
Content records of the Cosmic Energy website.

Every listable entity carries ``order`` and ``is_active``; the slugged ones
derive their slug through :class:`cosmic_db.SlugMixin`.
"""

from datetime import datetime
from typing import Any, Optional

from cosmic_db import (
    ActiveMixin,
    FeaturedMixin,
    ListableMixin,
    Model,
    SlugMixin,
    TimestampMixin,
)
from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    false,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

PRODUCT_CATEGORIES = ("solar-panels", "inverters", "batteries", "accessories")
PRODUCT_STATUSES = ("Sale", "Sold", "New")
CAREER_TYPES = ("full-time", "part-time", "contract", "internship", "remote")
CATEGORY_TYPES = ("blog", "product", "project", "faq")
TAG_TYPES = ("blog", "product", "project", "media")
MENU_LOCATIONS = ("header", "footer", "sidebar", "mobile", "other")
LINK_TARGETS = ("_self", "_blank", "_parent", "_top")
MEDIA_TYPES = ("image", "video", "document", "audio", "other")
CONTACT_STATUSES = ("new", "in-progress", "completed", "spam")


def choice(name: str, values: tuple[str, ...]) -> Enum:
    """A VARCHAR column restricted to ``values``."""
    return Enum(*values, name=name, native_enum=False, validate_strings=True)


NON_EMPTY = {"min_length": 1}


class Hero(Model, TimestampMixin, ListableMixin):
    __tablename__ = "heroes"
    verbose_name = "Hero slide"

    key: Mapped[str] = mapped_column(String(100), unique=True, info=NON_EMPTY)
    num: Mapped[str] = mapped_column(String(20))
    rail_title: Mapped[str] = mapped_column(String(255))
    subtitle: Mapped[str] = mapped_column(String(255))
    title_lines: Mapped[list[str]] = mapped_column(JSON)
    body: Mapped[str] = mapped_column(Text)
    img: Mapped[str] = mapped_column(String(500))
    icon: Mapped[str] = mapped_column(Text)
    # Hero slides are featured unless switched off
    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )


class EnergySolution(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "energy_solutions"
    verbose_name = "Energy solution"

    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    img: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[str] = mapped_column(Text)


class Product(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "products"

    title: Mapped[str] = mapped_column(String(255), unique=True, info=NON_EMPTY)
    old_price: Mapped[Optional[float]] = mapped_column(
        Float, nullable=True, info={"ge": 0}
    )
    new_price: Mapped[float] = mapped_column(Float, info={"ge": 0})
    status: Mapped[list[str]] = mapped_column(
        JSON, default=lambda: ["New"], nullable=False
    )
    image: Mapped[str] = mapped_column(String(500))
    hover_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    rating: Mapped[float] = mapped_column(
        Float, default=0, nullable=False, info={"ge": 0, "le": 5}
    )
    category: Mapped[str] = mapped_column(
        choice("product_category", PRODUCT_CATEGORIES)
    )
    specifications: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, nullable=False
    )
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    description: Mapped[str] = mapped_column(Text)
    additional_images: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    stock: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False, info={"ge": 0}
    )


class Project(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    client: Mapped[str] = mapped_column(String(255))
    location: Mapped[str] = mapped_column(String(255))
    completion_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    category: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text)
    challenge: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    solution: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    results: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str] = mapped_column(String(500))
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    specifications: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, nullable=False
    )
    testimonial: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)


class Testimonial(Model, TimestampMixin, ListableMixin, FeaturedMixin):
    __tablename__ = "testimonials"

    name: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    position: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    quote: Mapped[str] = mapped_column(Text, info=NON_EMPTY)
    rating: Mapped[int] = mapped_column(
        Integer, default=5, nullable=False, info={"ge": 1, "le": 5}
    )
    project_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class TeamMember(Model, TimestampMixin, ListableMixin, FeaturedMixin):
    __tablename__ = "team_members"
    verbose_name = "Team member"

    name: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    position: Mapped[str] = mapped_column(String(255))
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    social_media: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, nullable=False
    )
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)


class BlogPost(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "blog_posts"
    verbose_name = "Blog post"

    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    excerpt: Mapped[str] = mapped_column(Text)
    content: Mapped[str] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    author: Mapped[str] = mapped_column(String(255))
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    categories: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    publish_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), nullable=False
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class Faq(Model, TimestampMixin, ListableMixin):
    __tablename__ = "faqs"
    verbose_name = "FAQ"

    question: Mapped[str] = mapped_column(Text, info=NON_EMPTY)
    answer: Mapped[str] = mapped_column(Text, info=NON_EMPTY)
    category: Mapped[str] = mapped_column(
        String(100), default="general", nullable=False
    )


class Career(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "careers"

    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    department: Mapped[str] = mapped_column(String(100))
    location: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(
        choice("career_type", CAREER_TYPES), default="full-time", nullable=False
    )
    description: Mapped[str] = mapped_column(Text)
    responsibilities: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    qualifications: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    benefits: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    salary: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    application_email: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True
    )
    application_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    application_deadline: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    publish_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), nullable=False
    )


class SolarSolution(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "solar_solutions"
    verbose_name = "Solar solution"

    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    description: Mapped[str] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class Category(Model, TimestampMixin, ListableMixin, FeaturedMixin, SlugMixin):
    __tablename__ = "categories"
    __slug_source__ = "name"

    name: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        choice("category_type", CATEGORY_TYPES), default="blog", nullable=False
    )
    # Plain id of another category; not enforced by the database
    parent_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Tag(Model, TimestampMixin, ActiveMixin, SlugMixin):
    __tablename__ = "tags"
    __slug_source__ = "name"

    name: Mapped[str] = mapped_column(String(100), info=NON_EMPTY)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        choice("tag_type", TAG_TYPES), default="blog", nullable=False
    )
    color: Mapped[str] = mapped_column(String(20), default="#3498db", nullable=False)
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class Menu(Model, TimestampMixin, ActiveMixin, SlugMixin):
    __tablename__ = "menus"
    __slug_source__ = "name"

    name: Mapped[str] = mapped_column(String(100), unique=True, info=NON_EMPTY)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(
        choice("menu_location", MENU_LOCATIONS), default="header", nullable=False
    )

    items: Mapped[list["MenuItem"]] = relationship(
        "MenuItem",
        back_populates="menu",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MenuItem.order",
        lazy="selectin",
    )


class MenuItem(Model, ListableMixin):
    __tablename__ = "menu_items"
    verbose_name = "Menu item"

    menu_id: Mapped[int] = mapped_column(
        ForeignKey("menus.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    path: Mapped[str] = mapped_column(String(500), info=NON_EMPTY)
    icon: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    target: Mapped[str] = mapped_column(
        choice("link_target", LINK_TARGETS), default="_self", nullable=False
    )
    # Plain id of another item of the same menu; not enforced by the database
    parent_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    menu: Mapped["Menu"] = relationship("Menu", back_populates="items")


class Client(Model, TimestampMixin, ListableMixin):
    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    logo: Mapped[str] = mapped_column(String(500))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    industry: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class TimelineEntry(Model, TimestampMixin, ListableMixin):
    __tablename__ = "timeline_entries"
    verbose_name = "Timeline entry"

    year: Mapped[str] = mapped_column(String(20), info=NON_EMPTY)
    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    description: Mapped[str] = mapped_column(Text)
    background_image: Mapped[Optional[str]] = mapped_column(
        String(500), nullable=True
    )


class CoreValue(Model, TimestampMixin, ListableMixin):
    __tablename__ = "core_values"
    verbose_name = "Core value"

    title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    description: Mapped[str] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class Media(Model, TimestampMixin):
    __tablename__ = "media"

    name: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    original_name: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(
        choice("media_type", MEDIA_TYPES), default="image", nullable=False
    )
    mime_type: Mapped[str] = mapped_column(String(100))
    size: Mapped[int] = mapped_column(Integer, info={"ge": 0})
    url: Mapped[str] = mapped_column(String(500))
    full_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    path: Mapped[str] = mapped_column(String(500))
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    duration: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    alt: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    folder: Mapped[str] = mapped_column(
        String(100), default="uploads", nullable=False, index=True
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )


class Contact(Model, TimestampMixin):
    __tablename__ = "contacts"
    verbose_name = "Contact submission"

    full_name: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(String(50), info=NON_EMPTY)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    system_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pincode: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        choice("contact_status", CONTACT_STATUSES), default="new", nullable=False
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)


class Setting(Model, TimestampMixin):
    __tablename__ = "settings"
    verbose_name = "Settings"

    site_title: Mapped[str] = mapped_column(String(255), info=NON_EMPTY)
    tagline: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    logo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    favicon: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    social_media: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, nullable=False
    )
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    google_analytics_id: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    footer_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    header_scripts: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    footer_scripts: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    maintenance_mode: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    maintenance_message: Mapped[str] = mapped_column(
        Text,
        default="We are currently performing maintenance. Please check back soon.",
        nullable=False,
    )


class AboutHero(Model, TimestampMixin, ActiveMixin):
    __tablename__ = "about_heroes"
    verbose_name = "About hero"

    title: Mapped[str] = mapped_column(String(255), default="About", nullable=False)
    video_url: Mapped[str] = mapped_column(
        String(500), default="/aboutvideo.mp4", nullable=False
    )
    breadcrumb_home: Mapped[str] = mapped_column(
        String(100), default="Home", nullable=False
    )
    breadcrumb_current: Mapped[str] = mapped_column(
        String(100), default="About", nullable=False
    )


class BrandVision(Model, TimestampMixin, ActiveMixin):
    __tablename__ = "brand_visions"
    verbose_name = "Brand vision"

    title: Mapped[str] = mapped_column(
        String(255), default="Brand Vision & Strategy", nullable=False
    )
    highlight_text: Mapped[str] = mapped_column(
        String(255), default="Brand Vision & Strategy", nullable=False
    )
    description1: Mapped[str] = mapped_column(
        Text,
        default=(
            "To make our future more vibrant and sustainable by using green "
            "energy to save the earth."
        ),
        nullable=False,
    )
    description2: Mapped[str] = mapped_column(
        Text,
        default=(
            "We are also committed to maintain our leadership position in the "
            "manufacture of solar products, delivering higher efficiency to the "
            "global photovoltaic industry."
        ),
        nullable=False,
    )
    description3: Mapped[str] = mapped_column(
        Text,
        default=(
            "To achieve 8 GW production capacity by 2025 to serve green energy "
            "demand internationally."
        ),
        nullable=False,
    )
    cta_text: Mapped[str] = mapped_column(
        String(100), default="Join Our Mission", nullable=False
    )
    cta_link: Mapped[str] = mapped_column(
        String(255), default="/contact", nullable=False
    )
    video_url: Mapped[str] = mapped_column(
        String(500), default="/company-culture.mp4", nullable=False
    )


class WorkEnvironment(Model, TimestampMixin, ActiveMixin):
    __tablename__ = "work_environments"
    verbose_name = "Work environment"

    title: Mapped[str] = mapped_column(String(255), default="Our Work", nullable=False)
    highlight_text: Mapped[str] = mapped_column(
        String(255), default="Environment", nullable=False
    )
    description1: Mapped[str] = mapped_column(
        Text,
        default=(
            "We foster a collaborative, inclusive, and innovative workplace where "
            "every team member can thrive."
        ),
        nullable=False,
    )
    description2: Mapped[str] = mapped_column(
        Text,
        default=(
            "We believe in work-life balance and offer flexible scheduling options "
            "to accommodate our employees' needs."
        ),
        nullable=False,
    )
    description3: Mapped[str] = mapped_column(
        Text,
        default=(
            "Professional development is a priority, with ongoing training "
            "opportunities and clear career advancement paths for all employees."
        ),
        nullable=False,
    )
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    image_alt: Mapped[str] = mapped_column(
        String(255), default="Collaborative work environment", nullable=False
    )


class JoinTeamCta(Model, TimestampMixin, ActiveMixin):
    __tablename__ = "join_team_ctas"
    verbose_name = "Join team call to action"

    title: Mapped[str] = mapped_column(String(255), default="Join Our", nullable=False)
    highlight_text: Mapped[str] = mapped_column(
        String(255), default="Team", nullable=False
    )
    description: Mapped[str] = mapped_column(
        Text,
        default=(
            "We're always looking for talented individuals who share our passion "
            "for renewable energy and sustainability."
        ),
        nullable=False,
    )
    cta_text: Mapped[str] = mapped_column(
        String(100), default="View Career Opportunities", nullable=False
    )
    cta_link: Mapped[str] = mapped_column(
        String(255), default="/careers", nullable=False
    )
    background_color: Mapped[str] = mapped_column(
        String(20), default="#f9fafb", nullable=False
    )
