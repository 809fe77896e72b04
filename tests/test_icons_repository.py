import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from icon_catalog.errors import StoreError
from icon_catalog.query import IconFilter
from icon_catalog.repositories import IconsRepository, SvgsRepository
from icon_catalog.repositories.icons_repository import build_upsert
from icon_catalog.repositories.svgs_repository import build_svg_upsert
from icon_catalog.schemas.enums import Category, IconStatus, IconWeight
from icon_catalog.schemas.icons import IconRecord


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def make_record(**overrides):
    data = dict(
        rid="96cR4kqjHO16pBVCiXg_Ep",
        name="cube",
        code=57818,
        status=IconStatus.IMPLEMENTED,
        search_categories=[Category.DESIGN],
        tags=["square", "box"],
        released_at=1.0,
        published=True,
    )
    data.update(overrides)
    return IconRecord(**data)


def make_session(result=None):
    db = AsyncMock()
    db.execute.return_value = result if result is not None else MagicMock()
    return db


def test_upsert_statement_conflicts_on_rid_and_never_touches_keys():
    sql = _sql(build_upsert(make_record()))
    assert "ON CONFLICT (rid) DO UPDATE SET" in sql
    set_clause = sql.split("DO UPDATE SET", 1)[1].split("RETURNING", 1)[0]
    assert "name = excluded.name" in set_clause
    assert "published = excluded.published" in set_clause
    assert not re.search(r"\bid = ", set_clause)
    assert not re.search(r"\brid = ", set_clause)
    assert "RETURNING" in sql


def test_upsert_statement_flattens_enums_to_labels():
    params = build_upsert(make_record()).compile(dialect=postgresql.dialect()).params
    assert params["status"] == "Implemented"
    assert params["search_categories"] == ["Design"]
    assert params["category"] == "Unknown"


async def test_upsert_commits_and_returns_id():
    result = MagicMock()
    result.scalar_one.return_value = 7
    db = make_session(result)

    icon_id = await IconsRepository(db).upsert(make_record())

    assert icon_id == 7
    db.execute.assert_awaited_once()
    db.commit.assert_awaited_once()
    db.rollback.assert_not_awaited()


async def test_upsert_failure_rolls_back_and_raises_store_error():
    db = make_session()
    db.execute.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key value"))

    with pytest.raises(StoreError):
        await IconsRepository(db).upsert(make_record())

    db.rollback.assert_awaited_once()
    db.commit.assert_not_awaited()


async def test_list_icons_wraps_connection_errors():
    db = make_session()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

    with pytest.raises(StoreError):
        await IconsRepository(db).list_icons(IconFilter())


async def test_count_icons_returns_scalar():
    result = MagicMock()
    result.scalar_one.return_value = 3
    db = make_session(result)

    assert await IconsRepository(db).count_icons(IconFilter()) == 3


async def test_library_info_defaults_when_empty():
    result = MagicMock()
    result.one.return_value = MagicMock(count=0, version=None)
    db = make_session(result)

    info = await IconsRepository(db).library_info()

    assert info.count == 0
    assert info.version == 0.0


def test_svg_upsert_conflicts_on_icon_and_weight():
    sql = _sql(build_svg_upsert(1, IconWeight.BOLD, "<svg/>"))
    assert "ON CONFLICT (icon_id, weight) DO UPDATE SET src = excluded.src" in sql


async def test_weights_for_icon_keys_by_weight():
    svgs = [MagicMock(weight="bold", src="<svg b/>"), MagicMock(weight="regular", src="<svg r/>")]
    result = MagicMock()
    result.scalars.return_value.all.return_value = svgs
    db = make_session(result)

    weights = await SvgsRepository(db).weights_for_icon(1)

    assert set(weights) == {IconWeight.BOLD, IconWeight.REGULAR}
    assert weights[IconWeight.BOLD].src == "<svg b/>"


def test_upsert_without_code_keeps_stored_code():
    """Sem codepoint na linha, o upsert não sobrescreve o código já atribuído."""
    set_clause = _sql(build_upsert(make_record(code=None))).split("DO UPDATE SET", 1)[1].split("RETURNING", 1)[0]
    assert not re.search(r"\bcode = ", set_clause)
    assert "name = excluded.name" in set_clause
    assert "published = excluded.published" in set_clause


def test_upsert_with_code_overwrites_it():
    set_clause = _sql(build_upsert(make_record(code=57818))).split("DO UPDATE SET", 1)[1].split("RETURNING", 1)[0]
    assert "code = excluded.code" in set_clause


async def test_get_by_rid_returns_first_match():
    icon = MagicMock(rid="96cR4kqjHO16pBVCiXg_Ep")
    result = MagicMock()
    result.scalars.return_value.first.return_value = icon
    db = make_session(result)

    assert await IconsRepository(db).get_by_rid("96cR4kqjHO16pBVCiXg_Ep") is icon
    stmt = db.execute.await_args.args[0]
    assert "public.icons.rid = " in _sql(stmt)


async def test_delete_by_rid_commits_and_returns_rowcount():
    result = MagicMock(rowcount=1)
    db = make_session(result)

    assert await IconsRepository(db).delete_by_rid("96cR4kqjHO16pBVCiXg_Ep") == 1
    sql = _sql(db.execute.await_args.args[0])
    assert sql.startswith("DELETE FROM public.icons")
    assert "public.icons.rid = " in sql
    db.commit.assert_awaited_once()


async def test_delete_by_rid_failure_rolls_back():
    db = make_session()
    db.execute.side_effect = OperationalError("DELETE", {}, Exception("connection refused"))

    with pytest.raises(StoreError):
        await IconsRepository(db).delete_by_rid("96cR4kqjHO16pBVCiXg_Ep")

    db.rollback.assert_awaited_once()
