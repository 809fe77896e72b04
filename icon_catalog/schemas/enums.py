"""Closed enums for the icon taxonomies and the query options.

Values are the labels used by the inventory table and stored in the database.
Every taxonomy that comes from the table has a sentinel member that unknown
labels map to, so decoding never fails on an unexpected label.
"""

from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound="LabeledEnum")


class LabeledEnum(str, Enum):
    """Enum with a total label mapping and an optional sentinel member."""

    @classmethod
    def sentinel(cls: Type[E]) -> Optional[E]:
        return None

    @classmethod
    def from_label(cls: Type[E], label: Optional[str]) -> E:
        """Exact, case-sensitive lookup; unknown labels map to the sentinel."""
        if label is not None:
            for member in cls:
                if member.value == label:
                    return member
        sentinel = cls.sentinel()
        if sentinel is None:
            raise ValueError(f"Invalid {cls.__name__}: {label!r}")
        return sentinel

    @classmethod
    def parse(cls: Type[E], label: str) -> E:
        """Strict lookup used for user input; rejects unknown labels."""
        for member in cls:
            if member.value == label:
                return member
        raise ValueError(f"Invalid {cls.__name__}: {label!r}")

    def __str__(self) -> str:
        return self.value


class IconStatus(LabeledEnum):
    """Estado de implementação do ícone no processo de design."""
    BACKLOG = "Backlog"
    DESIGNING = "Designing"
    DESIGNED = "Designed"
    IMPLEMENTED = "Implemented"
    DEPRECATED = "Deprecated"
    NONE = "None"

    @classmethod
    def sentinel(cls) -> "IconStatus":
        return cls.NONE


class FigmaCategory(LabeledEnum):
    """Categoria de exibição na biblioteca Figma (não usada em filtros)."""
    ARROWS = "Arrows"
    BRANDS = "Brands"
    COMMERCE = "Commerce"
    COMMUNICATION = "Communication"
    DESIGN = "Design"
    DEVELOPMENT = "Development"
    EDUCATION = "Education"
    GAMES = "Games"
    HEALTH_AND_WELLNESS = "Health & Wellness"
    MAPS_AND_TRAVEL = "Maps & Travel"
    MATH_AND_FINANCE = "Math & Finance"
    MEDIA = "Media"
    OFFICE_AND_EDITING = "Office & Editing"
    PEOPLE = "People"
    SECURITY_AND_WARNINGS = "Security & Warnings"
    SYSTEM_AND_DEVICES = "System & Devices"
    TIME = "Time"
    WEATHER_AND_NATURE = "Weather & Nature"
    UNKNOWN = "Unknown"

    @classmethod
    def sentinel(cls) -> "FigmaCategory":
        return cls.UNKNOWN


class Category(LabeledEnum):
    """Categoria de busca; um ícone pode ter várias."""
    ARROWS = "Arrows"
    BRAND = "Brand"
    COMMERCE = "Commerce"
    COMMUNICATION = "Communication"
    DESIGN = "Design"
    DEVELOPMENT = "Development"
    EDITOR = "Editor"
    FINANCE = "Finance"
    GAMES = "Games"
    OFFICE = "Office"
    HEALTH = "Health"
    MAP = "Map"
    MEDIA = "Media"
    NATURE = "Nature"
    OBJECTS = "Objects"
    PEOPLE = "People"
    SYSTEM = "System"
    WEATHER = "Weather"
    UNKNOWN = "Unknown"

    @classmethod
    def sentinel(cls) -> "Category":
        return cls.UNKNOWN


class IconWeight(LabeledEnum):
    """Variante visual (peso) de um mesmo glifo."""
    THIN = "thin"
    LIGHT = "light"
    REGULAR = "regular"
    BOLD = "bold"
    FILL = "fill"
    DUOTONE = "duotone"

    @classmethod
    def sentinel(cls) -> "IconWeight":
        return cls.REGULAR


class Ternary(LabeledEnum):
    TRUE = "true"
    FALSE = "false"
    ANY = "any"


class OrderColumn(LabeledEnum):
    NAME = "name"
    STATUS = "status"
    RELEASE = "release"
    CODE = "code"


class OrderDirection(LabeledEnum):
    ASC = "asc"
    DESC = "desc"
