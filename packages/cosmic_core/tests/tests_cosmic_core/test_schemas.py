from cosmic_core import Envelope, PageMeta, PaginationParams, cosmic_settings
from cosmic_core.schemas.parameter import RESERVED_QUERY_KEYS


def test_pagination_defaults():
    """An empty query means page 1 of the default size, newest first."""
    params = PaginationParams.model_validate({})
    assert params.page == 1
    assert params.limit == cosmic_settings.DEFAULT_PAGE_SIZE
    assert params.get_offset() == 0
    assert params.get_ordering() == [("created_at", "desc")]


def test_pagination_from_query_strings():
    """Query string values are coerced and extra filter keys ignored."""
    params = PaginationParams.model_validate(
        {"page": "3", "limit": "5", "category": "inverters"}
    )
    assert params.page == 3
    assert params.limit == 5
    assert params.get_offset() == 10


def test_pagination_limit_is_clamped():
    assert PaginationParams.model_validate({"limit": 9999}).limit == 100
    assert PaginationParams.model_validate({"limit": 0}).limit == 1
    assert PaginationParams.model_validate({"page": -4}).page == 1


def test_sort_parsing():
    params = PaginationParams.model_validate({"sort": ",,-order, ,title,"})
    assert params.get_ordering() == [("order", "desc"), ("title", "asc")]


def test_direction_overrides_every_sort_field():
    params = PaginationParams.model_validate(
        {"sort": "-order,title", "direction": "asc"}
    )
    assert params.get_ordering() == [("order", "asc"), ("title", "asc")]

    params = PaginationParams.model_validate({"direction": "desc"})
    assert params.get_ordering("order") == [("order", "desc")]


def test_reserved_keys_cover_listing_controls():
    assert {"page", "limit", "sort", "direction", "search", "q"} <= RESERVED_QUERY_KEYS


def test_page_meta_build():
    meta = PageMeta.build(count=10, total=42, page=1, limit=10)
    assert meta.total_pages == 5
    assert PageMeta.build(count=0, total=0, page=1, limit=10).total_pages == 0


def test_envelope_dump_drops_empty_top_level_keys():
    """Only the top-level optional keys are dropped; nested nulls survive."""
    dumped = Envelope(data={"slug": "x", "icon": None}).dump()
    assert dumped == {"success": True, "data": {"slug": "x", "icon": None}}


def test_envelope_failure():
    assert Envelope.fail("Product not found").dump() == {
        "success": False,
        "message": "Product not found",
    }
    assert Envelope.fail().dump() == {"success": False}


def test_envelope_with_meta():
    meta = PageMeta.build(count=1, total=1, page=1, limit=10)
    dumped = Envelope(data=[1], meta=meta).dump()
    assert dumped["meta"] == {
        "count": 1,
        "total": 1,
        "page": 1,
        "limit": 10,
        "total_pages": 1,
    }
