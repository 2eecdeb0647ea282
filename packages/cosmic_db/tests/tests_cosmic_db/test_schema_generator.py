import pytest
from cosmic_db import SchemaConfig, SchemaGenerator
from pydantic import ValidationError

from .models import Article, Label


class TestCreateSchema:
    def test_required_and_optional_fields(self):
        schema = SchemaGenerator(Article).create_schema()
        fields = schema.model_fields

        assert fields["title"].is_required()
        # slug is filled by the model hook when omitted
        assert not fields["slug"].is_required()
        assert not fields["body"].is_required()
        assert not fields["rating"].is_required()
        assert "id" not in fields
        assert "created_at" not in fields
        assert "updated_at" not in fields

    def test_omitted_fields_stay_unset(self):
        schema = SchemaGenerator(Article).create_schema()
        payload = schema(title="Solar 101")
        assert payload.model_dump(exclude_unset=True) == {"title": "Solar 101"}

    def test_enum_columns_accept_only_their_values(self):
        schema = SchemaGenerator(Article).create_schema()
        assert schema(title="x", kind="guide").kind == "guide"
        with pytest.raises(ValidationError):
            schema(title="x", kind="opinion")

    def test_column_info_constraints(self):
        schema = SchemaGenerator(Article).create_schema()
        with pytest.raises(ValidationError):
            schema(title="")
        with pytest.raises(ValidationError):
            schema(title="x", rating=6)
        assert schema(title="x", rating=1).rating == 1

    def test_unknown_keys_are_ignored(self):
        schema = SchemaGenerator(Label).create_schema()
        payload = schema(name="Inverters", colour="red")
        assert not hasattr(payload, "colour")

    def test_create_fields_whitelist(self):
        config = SchemaConfig(create_fields={"name"})
        schema = SchemaGenerator(Label, config).create_schema()
        assert set(schema.model_fields) == {"name"}

    def test_schema_name(self):
        assert SchemaGenerator(Label).create_schema().__name__ == "LabelCreate"


class TestUpdateSchema:
    def test_every_field_is_optional(self):
        schema = SchemaGenerator(Article).update_schema()
        assert all(not f.is_required() for f in schema.model_fields.values())
        assert schema().model_dump(exclude_unset=True) == {}

    def test_constraints_still_apply(self):
        schema = SchemaGenerator(Article).update_schema()
        with pytest.raises(ValidationError):
            schema(rating=0)


class TestResponseSchema:
    async def test_serializes_instances(self, db_session):
        article = await Article.objects.create(
            db_session, title="Net Metering", extra={"kw": 5}
        )
        schema = SchemaGenerator(Article).response_schema()
        data = schema.model_validate(article).model_dump(mode="json")

        assert data["id"] == article.id
        assert data["slug"] == "net-metering"
        assert data["extra"] == {"kw": 5}
        assert data["body"] is None
        assert isinstance(data["created_at"], str)

    def test_excluded_fields(self):
        config = SchemaConfig(exclude={"body"})
        schema = SchemaGenerator(Article, config).response_schema()
        assert "body" not in schema.model_fields

    def test_response_extra(self):
        config = SchemaConfig(response_extra={"labels": list[str] | None})
        schema = SchemaGenerator(Label, config).response_schema()
        assert "labels" in schema.model_fields
        assert not schema.model_fields["labels"].is_required()
