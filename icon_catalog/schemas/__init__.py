from .base import BaseSchema
from .enums import Category, FigmaCategory, IconStatus, IconWeight, OrderColumn, OrderDirection, Ternary
from .icons import IconCount, IconList, IconRecord, IconSchema, IconWeights, LibraryInfo

__all__ = [
    "BaseSchema",
    "Category", "FigmaCategory", "IconStatus", "IconWeight", "OrderColumn", "OrderDirection", "Ternary",
    "IconCount", "IconList", "IconRecord", "IconSchema", "IconWeights", "LibraryInfo",
]
