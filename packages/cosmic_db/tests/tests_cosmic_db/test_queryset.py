import pytest
from cosmic_db import F, Q

from .models import Article, Label


async def _articles(db_session):
    rows = [
        {"title": "Panels", "order": 2, "rating": 5, "is_featured": True},
        {"title": "Inverters", "order": 1, "rating": 3},
        {"title": "Batteries", "order": 3, "rating": 4, "is_active": False},
        {"title": "Cables", "order": 0, "rating": 1, "kind": "guide"},
    ]
    return [await Article.objects.create(db_session, **row) for row in rows]


class TestFiltering:
    async def test_keyword_lookups(self, db_session):
        await _articles(db_session)
        qs = Article.objects.filter(rating__gte=4).order_by("title")
        assert [a.title for a in await qs.fetch(db_session)] == ["Batteries", "Panels"]

        qs = Article.objects.filter(title__in=["Cables", "Panels"]).order_by("title")
        assert [a.title for a in await qs.fetch(db_session)] == ["Cables", "Panels"]

        assert await Article.objects.filter(title__icontains="PAN").count(db_session) == 1
        assert await Article.objects.filter(body__isnull=True).count(db_session) == 4

    async def test_exclude(self, db_session):
        await _articles(db_session)
        qs = Article.objects.exclude(kind="guide").exclude(is_active=False)
        assert sorted(a.title for a in await qs.fetch(db_session)) == [
            "Inverters",
            "Panels",
        ]

    async def test_q_objects(self, db_session):
        await _articles(db_session)
        qs = Article.objects.filter(Q(rating=1) | Q(is_featured=True)).order_by("id")
        assert [a.title for a in await qs.fetch(db_session)] == ["Panels", "Cables"]

        qs = Article.objects.filter(~Q(is_active=True))
        assert [a.title for a in await qs.fetch(db_session)] == ["Batteries"]

        qs = Article.objects.filter(Q.any_of(title__icontains="cab", body__icontains="cab"))
        assert [a.title for a in await qs.fetch(db_session)] == ["Cables"]

    async def test_unknown_field_raises(self, db_session):
        with pytest.raises(ValueError, match="not found"):
            Article.objects.filter(colour="red")

    async def test_unsupported_lookup_raises(self, db_session):
        with pytest.raises(ValueError, match="Unsupported lookup"):
            Article.objects.filter(title__regex="x")


class TestOrderingAndSlicing:
    async def test_order_by_strings(self, db_session):
        await _articles(db_session)
        asc = await Article.objects.order_by("order").fetch(db_session)
        assert [a.order for a in asc] == [0, 1, 2, 3]
        desc = await Article.objects.order_by("-order").fetch(db_session)
        assert [a.order for a in desc] == [3, 2, 1, 0]

    async def test_order_by_instructions(self, db_session):
        await _articles(db_session)
        qs = Article.objects.all().order_by_instructions([("rating", "desc")])
        assert [a.rating for a in await qs.fetch(db_session)] == [5, 4, 3, 1]

    async def test_unknown_sort_field_raises(self):
        with pytest.raises(ValueError, match="unknown field 'colour'"):
            Article.objects.order_by("-colour")

    async def test_limit_offset_and_count(self, db_session):
        await _articles(db_session)
        qs = Article.objects.order_by("order").offset(1).limit(2)
        assert [a.order for a in await qs.fetch(db_session)] == [1, 2]
        # count ignores the page window
        assert await qs.count(db_session) == 4

    async def test_none_limit_is_unbounded(self, db_session):
        await _articles(db_session)
        assert len(await Article.objects.all().limit(None).fetch(db_session)) == 4

    async def test_first_and_exists(self, db_session):
        await _articles(db_session)
        first = await Article.objects.order_by("-rating").first(db_session)
        assert first.title == "Panels"
        assert await Article.objects.filter(title="Cables").exists(db_session)
        assert not await Article.objects.filter(title="Nope").exists(db_session)

    async def test_values_list(self, db_session):
        await _articles(db_session)
        kinds = await Article.objects.order_by("kind").values_list(
            db_session, "kind", distinct=True
        )
        assert kinds == ["guide", "news"]

    async def test_querysets_are_immutable(self):
        base = Article.objects.all()
        filtered = base.filter(rating=5)
        assert base is not filtered
        assert base.statement.whereclause is None


class TestBulkWrites:
    async def test_update_with_f_expression(self, db_session):
        article = await Article.objects.create(db_session, title="Counted")
        rows = await Article.objects.filter(id=article.id).update(
            db_session, views=F("views") + 1
        )
        assert rows == 1
        await db_session.refresh(article)
        assert article.views == 1

    async def test_delete_filtered(self, db_session):
        await _articles(db_session)
        deleted = await Article.objects.filter(is_active=False).delete(db_session)
        assert deleted == 1
        assert await Article.objects.count(db_session) == 3

    async def test_unfiltered_writes_are_refused(self, db_session):
        await Label.objects.create(db_session, name="Keep")
        with pytest.raises(ValueError, match="without filters"):
            await Label.objects.all().delete(db_session)
        with pytest.raises(ValueError, match="without filters"):
            await Label.objects.all().update(db_session, name="x")
        assert await Label.objects.count(db_session) == 1
