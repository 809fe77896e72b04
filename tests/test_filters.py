import pytest

from icon_catalog.errors import QueryValidationError, ValidationError
from icon_catalog.query import Exact, GreaterThanOrEqual, IconFilter, LessThanOrEqual, Range, parse_filter_params
from icon_catalog.schemas.enums import Category, IconStatus, OrderColumn, OrderDirection, Ternary


def test_defaults():
    query = IconFilter()
    assert query.published is Ternary.TRUE
    assert query.order is OrderColumn.NAME
    assert query.dir is OrderDirection.ASC
    assert not query.has_clauses()


def test_builder_produces_immutable_value():
    builder = IconFilter.builder().name("cube*").status([IconStatus.IMPLEMENTED])
    first = builder.build()
    second = builder.tags(["box"]).build()
    assert first.tags is None
    assert second.tags == frozenset({"box"})
    assert second.name == "cube*"
    with pytest.raises(AttributeError):
        first.name = "other"


def test_has_clauses():
    assert IconFilter.builder().name("cube").build().has_clauses()
    assert IconFilter.builder().published(Ternary.ANY).build().has_clauses()
    assert not IconFilter.builder().tags([]).build().has_clauses()


def test_parse_all_params():
    query = parse_filter_params(
        name="*cube*",
        released="1.5..2.0",
        updated="..1.4",
        deprecated="2.0..",
        published="any",
        status="Implemented, Designed",
        category="Design,Games",
        tags="box, 3d,",
        order="release",
        dir="desc",
    )
    assert query.name == "*cube*"
    assert query.released == Range(1.5, 2.0)
    assert query.updated == LessThanOrEqual(1.4)
    assert query.deprecated == GreaterThanOrEqual(2.0)
    assert query.published is Ternary.ANY
    assert query.status == frozenset({IconStatus.IMPLEMENTED, IconStatus.DESIGNED})
    assert query.category == frozenset({Category.DESIGN, Category.GAMES})
    assert query.tags == frozenset({"box", "3d"})
    assert query.order is OrderColumn.RELEASE
    assert query.dir is OrderDirection.DESC


def test_parse_without_params_is_default_filter():
    assert parse_filter_params() == IconFilter()


def test_published_is_case_insensitive():
    assert parse_filter_params(published="FALSE").published is Ternary.FALSE
    assert parse_filter_params(released="2.1").released == Exact(2.1)


@pytest.mark.parametrize(
    "params, field",
    [
        ({"released": "1.x"}, "released"),
        ({"updated": "abc"}, "updated"),
        ({"published": "maybe"}, "published"),
        ({"status": "Implemented,Archived"}, "status"),
        ({"category": "Unknownish"}, "category"),
        ({"order": "size"}, "order"),
        ({"dir": "up"}, "dir"),
    ],
)
def test_invalid_params_raise_query_validation_error(params, field):
    with pytest.raises(QueryValidationError) as exc_info:
        parse_filter_params(**params)
    assert exc_info.value.field == field
    assert isinstance(exc_info.value, ValidationError)
