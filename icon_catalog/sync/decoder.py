"""
Decode rows of the "Icon Inventory" table into ``IconRecord`` values.

Only ``Row ID`` and ``Name`` are required; every other column degrades to its
default when the cell is missing or has an unexpected shape.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from icon_catalog.errors import CoercionWarning, ValidationError
from icon_catalog.schemas.enums import Category, FigmaCategory, IconStatus
from icon_catalog.schemas.icons import IconRecord
from icon_catalog.sync.cells import (
    NULL,
    Cell,
    CoercionLog,
    to_bool,
    to_enum,
    to_enum_list,
    to_optional_float,
    to_optional_int,
    to_optional_str,
    to_str_list,
)

logger = logging.getLogger("uvicorn")

# Rótulos das colunas na tabela externa
COL_RID = "Row ID"
COL_NAME = "Name"
COL_ALIAS = "Alias"
COL_CODE = "Codepoint"
COL_STATUS = "Status"
COL_SEARCH_CATEGORIES = "Search Categories"
COL_CATEGORY = "Category"
COL_TAGS = "Tags"
COL_NOTES = "Notes"
COL_RELEASE = "Release"
COL_LAST_UPDATED = "Last Updated"
COL_DEPRECATED = "Deprecated"
COL_PUBLISHED = "Published"

# Faixas de uso privado do Unicode onde os codepoints são atribuídos
PRIVATE_USE_RANGES = ((0xE000, 0xF8FF), (0xF0000, 0xFFFFD))


@dataclass
class DecodedRow:
    record: IconRecord
    warnings: List[CoercionWarning] = field(default_factory=list)


@dataclass
class DecodeBatch:
    records: List[IconRecord] = field(default_factory=list)
    rejected: List[Tuple[int, ValidationError]] = field(default_factory=list)
    warnings: List[CoercionWarning] = field(default_factory=list)


def _cell(row: Mapping[str, Any], column: str) -> Cell:
    if column not in row:
        return NULL
    return Cell.of(row[column])


def _required(row: Mapping[str, Any], column: str, log: CoercionLog) -> str:
    value = to_optional_str(_cell(row, column), column, log)
    if value is None or not value.strip():
        raise ValidationError(f"Row is missing required column '{column}'", field=column)
    return value.strip()


def is_assignable_code_point(code: int) -> bool:
    """Par e dentro de uma das faixas de uso privado (mesma regra de ``ck_icons_code_private_use``)."""
    return code % 2 == 0 and any(low <= code <= high for low, high in PRIVATE_USE_RANGES)


def _code_point(row: Mapping[str, Any], log: CoercionLog) -> Optional[int]:
    code = to_optional_int(_cell(row, COL_CODE), COL_CODE, log)
    if code is not None and not is_assignable_code_point(code):
        log.warn(COL_CODE, f"{code:#x} is not an even private-use code point")
        return None
    return code


def decode_row(row: Mapping[str, Any]) -> DecodedRow:
    """
    Converte uma linha da tabela em um ``IconRecord``.

    Raises:
        ValidationError: se ``Row ID`` ou ``Name`` estiver ausente ou vazio
    """
    log = CoercionLog()
    rid = _required(row, COL_RID, log)
    log.context = f"rid={rid}"
    name = _required(row, COL_NAME, log)

    record = IconRecord(
        rid=rid,
        name=name,
        alias=to_optional_str(_cell(row, COL_ALIAS), COL_ALIAS, log),
        code=_code_point(row, log),
        status=to_enum(_cell(row, COL_STATUS), IconStatus, COL_STATUS, log),
        category=to_enum(_cell(row, COL_CATEGORY), FigmaCategory, COL_CATEGORY, log),
        search_categories=to_enum_list(_cell(row, COL_SEARCH_CATEGORIES), Category, COL_SEARCH_CATEGORIES, log),
        tags=to_str_list(_cell(row, COL_TAGS), COL_TAGS, log),
        notes=to_optional_str(_cell(row, COL_NOTES), COL_NOTES, log),
        released_at=to_optional_float(_cell(row, COL_RELEASE), COL_RELEASE, log),
        last_updated_at=to_optional_float(_cell(row, COL_LAST_UPDATED), COL_LAST_UPDATED, log),
        deprecated_at=to_optional_float(_cell(row, COL_DEPRECATED), COL_DEPRECATED, log),
        published=to_bool(_cell(row, COL_PUBLISHED), COL_PUBLISHED, log),
    )
    return DecodedRow(record=record, warnings=log.warnings)


def decode_rows(rows: Sequence[Mapping[str, Any]]) -> DecodeBatch:
    """Decodifica um lote; linhas rejeitadas são registradas e excluídas."""
    batch = DecodeBatch()
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            error = ValidationError(f"Row {index} is not an object")
            batch.rejected.append((index, error))
            logger.warning("[RowDecoder] Rejected row %d: %s", index, error)
            continue
        try:
            decoded = decode_row(row)
        except ValidationError as e:
            batch.rejected.append((index, e))
            logger.warning("[RowDecoder] Rejected row %d: %s", index, e)
            continue
        batch.records.append(decoded.record)
        batch.warnings.extend(decoded.warnings)
    return batch
