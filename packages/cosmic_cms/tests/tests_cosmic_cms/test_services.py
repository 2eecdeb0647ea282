import pytest
from cosmic_cms import CONTENT_TYPES, SINGLETON_TYPES
from cosmic_cms.models import Contact, Faq, Menu, MenuItem, Product, Setting
from cosmic_cms.registry import content_type
from cosmic_cms.schemas import ContactForm, MenuItemCreate
from cosmic_cms.seed import STARTER_CONTENT, seed_content
from cosmic_cms.services import contacts, menus, pages
from cosmic_cms.services import settings as settings_service
from cosmic_cms.services.content import DuplicateError, ensure_unique_title
from cosmic_cms.services.listing import coerce_filters, list_content
from pydantic import ValidationError


def product(title: str, **fields):
    values = {
        "title": title,
        "new_price": 100.0,
        "image": "/p.jpg",
        "category": "solar-panels",
        "description": "d",
    }
    values.update(fields)
    return values


class TestListContent:
    async def test_featured_listing_is_active_featured_and_capped(self, db_session):
        for i in range(7):
            await Product.objects.create(
                db_session, **product(f"Featured {i}", is_featured=True, order=7 - i)
            )
        await Product.objects.create(
            db_session, **product("Inactive", is_featured=True, is_active=False)
        )
        await Product.objects.create(db_session, **product("Plain", order=-5))

        items = await list_content(db_session, Product, featured=True, limit=5)

        assert len(items) == 5
        assert all(p.is_active and p.is_featured for p in items)
        assert [p.order for p in items] == [1, 2, 3, 4, 5]

    async def test_ties_fall_back_to_insertion_order(self, db_session):
        for question in ("first", "second", "third"):
            await Faq.objects.create(db_session, question=question, answer="a")

        items = await list_content(db_session, Faq)
        assert [f.question for f in items] == ["first", "second", "third"]

    async def test_offset_and_filters(self, db_session):
        for i in range(4):
            await Faq.objects.create(
                db_session,
                question=f"q{i}",
                answer="a",
                order=i,
                category="billing" if i % 2 else "general",
            )

        items = await list_content(
            db_session, Faq, offset=1, filters={"category": "general"}
        )
        assert [f.question for f in items] == ["q2"]

    async def test_inactive_only(self, db_session):
        await Faq.objects.create(db_session, question="on", answer="a")
        await Faq.objects.create(db_session, question="off", answer="a", is_active=False)

        items = await list_content(db_session, Faq, active=False)
        assert [f.question for f in items] == ["off"]


class TestCoerceFilters:
    def test_values_follow_column_types(self):
        query = {
            "stock__gte": "3",
            "is_featured": "true",
            "category__in": "inverters,batteries",
            "title__icontains": "Panel",
            "page": "2",
            "sort": "-order",
        }

        assert coerce_filters(Product, query) == {
            "stock__gte": 3,
            "is_featured": True,
            "category__in": ["inverters", "batteries"],
            "title__icontains": "Panel",
        }

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="unknown field 'colour'"):
            coerce_filters(Product, {"colour": "red"})

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            coerce_filters(Product, {"category": "windmills"})


class TestUniqueTitle:
    async def test_duplicate_title_or_slug(self, db_session):
        await Product.objects.create(db_session, **product("Panel", slug="panel-x"))

        with pytest.raises(DuplicateError, match="already exists"):
            await ensure_unique_title(db_session, Product, {"title": "Panel"})
        with pytest.raises(DuplicateError):
            await ensure_unique_title(
                db_session, Product, {"title": "Other", "slug": "panel-x"}
            )
        await ensure_unique_title(db_session, Product, {"title": "Other"})


class TestPages:
    async def test_homepage_shape(self, db_session):
        data = await pages.homepage(db_session)

        assert set(data) == {section.key for section in pages.HOMEPAGE_SECTIONS} | {
            "settings"
        }
        assert all(data[key] == [] for key in data if key != "settings")
        assert data["settings"] is None

    async def test_homepage_after_seed(self, db_session):
        await seed_content(db_session)

        data = await pages.homepage(db_session)

        assert len(data["heroes"]) == len(STARTER_CONTENT[pages.Hero])
        assert data["settings"]["site_title"] == "Cosmic Energy Solutions"
        assert all(hero["is_featured"] for hero in data["heroes"])

    async def test_company_culture_defaults(self, db_session):
        data = await pages.company_culture_page(db_session)
        assert data == {
            "about_hero": None,
            "brand_vision": None,
            "work_environment": None,
            "join_team_cta": None,
            "core_values": [],
        }


class TestSettingsService:
    async def test_single_row(self, db_session):
        first = await settings_service.get_settings(db_session)
        second = await settings_service.get_settings(db_session)

        assert first.id == second.id
        assert await Setting.objects.count(db_session) == 1
        assert first.footer_text.endswith("Cosmic Energy Solutions. All rights reserved.")

    async def test_read_without_creating(self, db_session):
        assert await settings_service.get_settings(db_session, create_default=False) is None
        assert await Setting.objects.count(db_session) == 0

    async def test_public_serialization(self, db_session):
        settings = await settings_service.upsert_settings(
            db_session, {"footer_scripts": "<script/>"}
        )

        public = settings_service.serialize_settings(settings, public=True)
        assert set(public) <= settings_service.PUBLIC_FIELDS
        assert "footer_scripts" not in public
        assert settings_service.serialize_settings(None) is None


class TestContactsService:
    async def test_submission_and_stats(self, db_session):
        form = ContactForm(name="Ravi", whatsapp="999", system_type="on-grid")
        contact = await contacts.submit_contact(db_session, form, ip_address="10.0.0.1")

        assert contact.full_name == "Ravi"
        assert contact.phone == "999"
        assert contact.ip_address == "10.0.0.1"

        await Contact.objects.update(db_session, contact.id, status="spam", is_read=True)
        stats = await contacts.contact_stats(db_session)
        assert stats == {
            "total": 1,
            "unread": 0,
            "by_status": {"new": 0, "in-progress": 0, "completed": 0, "spam": 1},
        }

    def test_form_requires_name_and_phone(self):
        with pytest.raises(ValidationError, match="Name and phone number are required"):
            ContactForm(name="Ravi")

    def test_check_status(self):
        assert contacts.check_status("completed") == "completed"
        with pytest.raises(ValueError, match="Invalid status"):
            contacts.check_status("archived")


class TestMenusService:
    async def test_deleting_a_menu_removes_its_items(self, db_session):
        menu = await Menu.objects.create(db_session, name="Footer")
        await menus.add_item(db_session, menu.id, MenuItemCreate(title="A", url="/a"))
        await menus.add_item(db_session, menu.id, MenuItemCreate(title="B", url="/b"))
        assert await MenuItem.objects.filter(menu_id=menu.id).count(db_session) == 2

        await Menu.objects.delete_by_pk(db_session, menu.id)

        assert await MenuItem.objects.filter(menu_id=menu.id).count(db_session) == 0

    async def test_explicit_item_order(self, db_session):
        menu = await Menu.objects.create(db_session, name="Header")
        menu = await menus.add_item(
            db_session, menu.id, MenuItemCreate(title="Last", url="/z", order=9)
        )
        menu = await menus.add_item(
            db_session, menu.id, MenuItemCreate(title="First", url="/a", order=0)
        )
        assert [item.title for item in menu.items] == ["First", "Last"]


class TestSeed:
    async def test_seed_is_idempotent(self, db_session):
        created = await seed_content(db_session)
        assert created["heroes"] == len(STARTER_CONTENT[pages.Hero])

        assert await seed_content(db_session) == {}
        assert await Setting.objects.count(db_session) == 1


class TestRegistry:
    def test_prefixes_are_unique(self):
        prefixes = [c.prefix for c in (*CONTENT_TYPES, *SINGLETON_TYPES)]
        assert len(prefixes) == len(set(prefixes))

    def test_flags(self):
        by_key = {c.key: c for c in CONTENT_TYPES}
        assert by_key["blog_posts"].count_views
        assert by_key["products"].unique_title
        assert by_key["tags"].has_slug and not by_key["tags"].has_order
        assert not by_key["testimonials"].has_slug
        assert by_key["team_members"].prefix == "/team"

    def test_unknown_search_field_is_rejected(self):
        with pytest.raises(TypeError, match="no column 'colour'"):
            content_type("faqs", Faq, search_fields=("colour",))
