"""
Compile an ``IconFilter`` into a SQLAlchemy predicate and ordering.

Functions here only build expressions; they never touch a session, so they
can run on any thread and be reused by the count and list queries alike.
Every user-supplied value ends up as a bound parameter.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import ColumnElement, Select, and_, func, select, true

from icon_catalog.models.icons import Icon
from icon_catalog.query.filters import IconFilter
from icon_catalog.query.ranges import Exact, GreaterThanOrEqual, LessThanOrEqual, Range, VersionRange
from icon_catalog.schemas.enums import OrderColumn, OrderDirection, Ternary

WILDCARD = "*"

ORDER_COLUMNS = {
    OrderColumn.NAME: Icon.name,
    OrderColumn.STATUS: Icon.status,
    OrderColumn.RELEASE: Icon.released_at,
    OrderColumn.CODE: Icon.code,
}

# Desempate estável quando a coluna principal tem valores repetidos
TIE_BREAK_COLUMN = Icon.rid


@dataclass(frozen=True)
class CompiledQuery:
    predicate: ColumnElement[bool]
    order_by: List[ColumnElement]


def _name_condition(name: str) -> Optional[ColumnElement[bool]]:
    leading = name.startswith(WILDCARD)
    trailing = name.endswith(WILDCARD)
    if not (leading or trailing):
        return Icon.name == name

    term = name.strip(WILDCARD)
    if not term:
        # Apenas "*": sem restrição
        return None
    if leading and trailing:
        return Icon.name.contains(term, autoescape=True)
    if trailing:
        return Icon.name.startswith(term, autoescape=True)
    return Icon.name.endswith(term, autoescape=True)


def _version_condition(column, version: VersionRange) -> ColumnElement[bool]:
    if isinstance(version, Exact):
        return column == version.value
    if isinstance(version, Range):
        return column.between(version.low, version.high)
    if isinstance(version, LessThanOrEqual):
        return column <= version.value
    if isinstance(version, GreaterThanOrEqual):
        return column >= version.value
    raise TypeError(f"Unsupported version range: {version!r}")


def compile_conditions(query: IconFilter) -> List[ColumnElement[bool]]:
    """Uma condição por dimensão presente no filtro, na ordem dos campos."""
    conditions: List[ColumnElement[bool]] = []

    if query.name is not None:
        condition = _name_condition(query.name)
        if condition is not None:
            conditions.append(condition)

    if query.published is Ternary.TRUE:
        conditions.append(Icon.published == True)
    elif query.published is Ternary.FALSE:
        conditions.append(Icon.published == False)

    if query.released is not None:
        conditions.append(_version_condition(Icon.released_at, query.released))
    if query.updated is not None:
        conditions.append(_version_condition(Icon.last_updated_at, query.updated))
    if query.deprecated is not None:
        conditions.append(_version_condition(Icon.deprecated_at, query.deprecated))

    if query.status:
        conditions.append(Icon.status.in_(sorted(s.value for s in query.status)))

    # Sobreposição: basta uma das categorias informadas
    if query.category:
        conditions.append(Icon.search_categories.overlap(sorted(c.value for c in query.category)))

    if query.tags:
        conditions.append(Icon.tags.overlap(sorted(query.tags)))

    return conditions


def compile_predicate(query: IconFilter) -> ColumnElement[bool]:
    conditions = compile_conditions(query)
    if not conditions:
        return true()
    return and_(*conditions)


def compile_order(query: IconFilter) -> List[ColumnElement]:
    column = ORDER_COLUMNS[query.order]
    primary = column.desc() if query.dir is OrderDirection.DESC else column.asc()
    return [primary, TIE_BREAK_COLUMN.asc()]


def compile_query(query: IconFilter) -> CompiledQuery:
    return CompiledQuery(predicate=compile_predicate(query), order_by=compile_order(query))


def build_select(query: IconFilter) -> Select:
    compiled = compile_query(query)
    return select(Icon).where(compiled.predicate).order_by(*compiled.order_by)


def build_count(query: IconFilter) -> Select:
    return select(func.count(Icon.id)).where(compile_predicate(query))
