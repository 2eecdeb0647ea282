from unittest.mock import patch

import pytest
from cosmic_db import DoesNotExistError, MultipleObjectsReturnedError, WriteError
from sqlalchemy.exc import OperationalError

from .models import Article, Label


class TestModelManager:
    """Single-record operations of the ModelManager."""

    async def test_create_and_retrieve(self, db_session):
        article = await Article.objects.create(db_session, title="Manager Test")
        fetched = await Article.objects.get(db_session, id=article.id)
        assert fetched.title == "Manager Test"

    async def test_get_accepts_expressions_and_lookups(self, db_session):
        await Article.objects.create(db_session, title="Lookup", rating=4)
        assert await Article.objects.get(db_session, Article.rating == 4)
        assert await Article.objects.get(db_session, title__iexact="LOOKUP")

    async def test_get_raises_not_found_with_verbose_name(self, db_session):
        with pytest.raises(DoesNotExistError, match="Label not found") as exc_info:
            await Label.objects.get(db_session, name="missing")
        assert exc_info.value.model_name == "Label"

    async def test_not_found_is_a_value_error(self, db_session):
        with pytest.raises(ValueError):
            await Article.objects.get_by_pk(db_session, 999)

    async def test_get_raises_when_multiple_match(self, db_session):
        await Article.objects.create(db_session, title="Duo One", body="same")
        await Article.objects.create(db_session, title="Duo Two", body="same")
        with pytest.raises(MultipleObjectsReturnedError, match="more than one"):
            await Article.objects.get(db_session, body="same")

    async def test_get_or_none(self, db_session):
        assert await Article.objects.get_or_none(db_session, title="nope") is None

    async def test_update_changes_fields(self, db_session):
        article = await Article.objects.create(db_session, title="Old", rating=2)
        updated = await Article.objects.update(db_session, article.id, rating=5)
        assert updated.rating == 5
        assert updated.updated_at is not None

    async def test_update_missing_record_raises(self, db_session):
        with pytest.raises(DoesNotExistError):
            await Article.objects.update(db_session, 404, title="Ghost")

    async def test_update_or_create(self, db_session):
        label, created = await Label.objects.update_or_create(
            db_session, name="Inverters", defaults={"slug": "inv"}
        )
        assert created is True
        assert label.slug == "inv"

        again, created = await Label.objects.update_or_create(
            db_session, name="Inverters", defaults={"slug": "inverters"}
        )
        assert created is False
        assert again.id == label.id
        assert again.slug == "inverters"

    async def test_delete_by_pk(self, db_session):
        article = await Article.objects.create(db_session, title="To Delete")
        assert await Article.objects.delete_by_pk(db_session, article.id) == 1
        assert not await Article.objects.filter(id=article.id).exists(db_session)

    async def test_delete_missing_record(self, db_session):
        with pytest.raises(DoesNotExistError):
            await Article.objects.delete_by_pk(db_session, 12345)
        assert (
            await Article.objects.delete_by_pk(
                db_session, 12345, raise_if_missing=False
            )
            == 0
        )

    async def test_first_and_count(self, db_session):
        assert await Label.objects.first(db_session) is None
        first = await Label.objects.create(db_session, name="A")
        await Label.objects.create(db_session, name="B")
        assert (await Label.objects.first(db_session)).id == first.id
        assert await Label.objects.count(db_session) == 2

    async def test_write_errors_roll_back(self, db_session):
        """Driver failures are wrapped in WriteError after a rollback."""
        error = OperationalError("INSERT", {}, Exception("database is locked"))
        with (
            patch.object(
                db_session, "rollback", wraps=db_session.rollback
            ) as spied_rollback,
            patch.object(db_session, "commit", side_effect=error),
            pytest.raises(WriteError, match="database is locked"),
        ):
            await Article.objects.create(db_session, title="Locked")

        spied_rollback.assert_awaited_once()
