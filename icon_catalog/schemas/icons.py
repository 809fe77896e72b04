from typing import Dict, List, Optional

from pydantic import Field

from icon_catalog.schemas.base import BaseSchema
from icon_catalog.schemas.enums import Category, FigmaCategory, IconStatus, IconWeight


class IconRecord(BaseSchema):
    """
    Campos de negócio de um ícone, como decodificados da tabela externa.

    Não contém ``id``: a chave substituta é sempre atribuída pelo banco.
    """
    rid: str
    name: str
    alias: Optional[str] = None
    code: Optional[int] = None
    status: IconStatus = IconStatus.NONE
    category: FigmaCategory = FigmaCategory.UNKNOWN
    search_categories: List[Category] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    released_at: Optional[float] = None
    last_updated_at: Optional[float] = None
    deprecated_at: Optional[float] = None
    published: bool = False

    def to_row(self) -> Dict[str, object]:
        """Column values for the ``icons`` table, enums flattened to their labels."""
        return {
            "rid": self.rid,
            "name": self.name,
            "alias": self.alias,
            "code": self.code,
            "status": self.status.value,
            "category": self.category.value,
            "search_categories": [c.value for c in self.search_categories],
            "tags": list(self.tags),
            "notes": self.notes,
            "released_at": self.released_at,
            "last_updated_at": self.last_updated_at,
            "deprecated_at": self.deprecated_at,
            "published": self.published,
        }


class IconSchema(IconRecord):
    """Esquema para representação de ícones na API."""
    id: int


class IconList(BaseSchema):
    icons: List[IconSchema]
    count: int


class IconCount(BaseSchema):
    count: int


class LibraryInfo(BaseSchema):
    """Versão atual da biblioteca e número de ícones publicados."""
    version: float = 0.0
    count: int = 0


class IconWeights(BaseSchema):
    icon_id: int
    weights: Dict[IconWeight, str]
