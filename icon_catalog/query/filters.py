"""Immutable filter describing every search dimension of an icon query."""

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List, Optional, Type, TypeVar

from icon_catalog.errors import QueryValidationError, RangeParseError
from icon_catalog.query.ranges import VersionRange, parse_version_range
from icon_catalog.schemas.enums import (
    Category,
    IconStatus,
    LabeledEnum,
    OrderColumn,
    OrderDirection,
    Ternary,
)

E = TypeVar("E", bound=LabeledEnum)


@dataclass(frozen=True)
class IconFilter:
    """
    Filtro de busca de ícones.

    Todas as dimensões presentes são combinadas com AND pelo compilador.
    ``name`` aceita ``*`` no início e/ou no fim como curinga.
    """
    name: Optional[str] = None
    published: Ternary = Ternary.TRUE
    released: Optional[VersionRange] = None
    updated: Optional[VersionRange] = None
    deprecated: Optional[VersionRange] = None
    status: Optional[FrozenSet[IconStatus]] = None
    category: Optional[FrozenSet[Category]] = None
    tags: Optional[FrozenSet[str]] = None
    order: OrderColumn = OrderColumn.NAME
    dir: OrderDirection = OrderDirection.ASC

    @classmethod
    def builder(cls) -> "IconFilterBuilder":
        return IconFilterBuilder()

    def has_clauses(self) -> bool:
        """True when any dimension other than the published default narrows the query."""
        return any((
            self.name is not None,
            self.published is not Ternary.TRUE,
            self.released is not None,
            self.updated is not None,
            self.deprecated is not None,
            bool(self.status),
            bool(self.category),
            bool(self.tags),
        ))


class IconFilterBuilder:
    """Constrói um ``IconFilter`` passo a passo; ``build()`` devolve o valor imutável."""

    def __init__(self) -> None:
        self._filter = IconFilter()

    def _set(self, **changes) -> "IconFilterBuilder":
        self._filter = replace(self._filter, **changes)
        return self

    def name(self, name: str) -> "IconFilterBuilder":
        return self._set(name=name)

    def published(self, published: Ternary) -> "IconFilterBuilder":
        return self._set(published=published)

    def released(self, released: VersionRange) -> "IconFilterBuilder":
        return self._set(released=released)

    def updated(self, updated: VersionRange) -> "IconFilterBuilder":
        return self._set(updated=updated)

    def deprecated(self, deprecated: VersionRange) -> "IconFilterBuilder":
        return self._set(deprecated=deprecated)

    def status(self, status: Iterable[IconStatus]) -> "IconFilterBuilder":
        return self._set(status=frozenset(status))

    def category(self, category: Iterable[Category]) -> "IconFilterBuilder":
        return self._set(category=frozenset(category))

    def tags(self, tags: Iterable[str]) -> "IconFilterBuilder":
        return self._set(tags=frozenset(tags))

    def order(self, order: OrderColumn) -> "IconFilterBuilder":
        return self._set(order=order)

    def direction(self, direction: OrderDirection) -> "IconFilterBuilder":
        return self._set(dir=direction)

    def build(self) -> IconFilter:
        return self._filter


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_enum(enum_cls: Type[E], value: str, param: str) -> E:
    try:
        return enum_cls.parse(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise QueryValidationError(
            f"Invalid value {value!r} for '{param}'; expected one of: {allowed}", field=param
        ) from None


def _parse_enum_csv(enum_cls: Type[E], value: str, param: str) -> FrozenSet[E]:
    return frozenset(_parse_enum(enum_cls, item, param) for item in _split_csv(value))


def _parse_range(value: str, param: str) -> VersionRange:
    try:
        return parse_version_range(value)
    except RangeParseError as e:
        raise QueryValidationError(str(e), field=param) from e


def parse_filter_params(
    name: Optional[str] = None,
    released: Optional[str] = None,
    updated: Optional[str] = None,
    deprecated: Optional[str] = None,
    published: Optional[str] = None,
    status: Optional[str] = None,
    category: Optional[str] = None,
    tags: Optional[str] = None,
    order: Optional[str] = None,
    dir: Optional[str] = None,
) -> IconFilter:
    """
    Converte os parâmetros brutos da query string em um ``IconFilter``.

    Listas chegam separadas por vírgula. Valores de enum são comparados
    exatamente (``published=any``, ``status=Implemented``, ``order=release``).

    Raises:
        QueryValidationError: faixa de versão ou valor de enum inválido
    """
    builder = IconFilter.builder()
    if name is not None:
        builder.name(name)
    if released is not None:
        builder.released(_parse_range(released, "released"))
    if updated is not None:
        builder.updated(_parse_range(updated, "updated"))
    if deprecated is not None:
        builder.deprecated(_parse_range(deprecated, "deprecated"))
    if published is not None:
        builder.published(_parse_enum(Ternary, published.lower(), "published"))
    if status is not None:
        builder.status(_parse_enum_csv(IconStatus, status, "status"))
    if category is not None:
        builder.category(_parse_enum_csv(Category, category, "category"))
    if tags is not None:
        builder.tags(_split_csv(tags))
    if order is not None:
        builder.order(_parse_enum(OrderColumn, order, "order"))
    if dir is not None:
        builder.direction(_parse_enum(OrderDirection, dir, "dir"))
    return builder.build()
