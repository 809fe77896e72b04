"""
Typed view of the loosely-typed cells returned by the inventory table.

A ``Cell`` is one of five kinds (string, number, bool, list, null). Each
coercion function below is total: on a kind or parse mismatch it returns the
field's default and records a ``CoercionWarning`` instead of raising.
"""

import logging
import math
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Type, TypeVar

from icon_catalog.errors import CoercionWarning
from icon_catalog.schemas.enums import LabeledEnum

logger = logging.getLogger("uvicorn")

LIST_DELIMITER = ", "
INT4_MIN = -(2 ** 31)
INT4_MAX = 2 ** 31 - 1

E = TypeVar("E", bound=LabeledEnum)


class CellKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    LIST = "list"
    NULL = "null"


class Cell(NamedTuple):
    kind: CellKind
    value: Any = None

    @classmethod
    def of(cls, raw: Any) -> "Cell":
        """Classifica um valor JSON bruto. Objetos e tipos desconhecidos viram NULL."""
        # bool é subclasse de int: testar antes de número
        if isinstance(raw, bool):
            return cls(CellKind.BOOL, raw)
        if isinstance(raw, (int, float)):
            if isinstance(raw, float) and not math.isfinite(raw):
                return cls(CellKind.NULL)
            return cls(CellKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(CellKind.STRING, raw)
        if isinstance(raw, (list, tuple)):
            return cls(CellKind.LIST, [cls.of(item) for item in raw])
        return cls(CellKind.NULL)

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL


NULL = Cell(CellKind.NULL)


class CoercionLog:
    """Coleta os avisos de coerção de uma linha."""

    def __init__(self, context: str = "") -> None:
        self.context = context
        self.warnings: List[CoercionWarning] = []

    def warn(self, field: str, message: str) -> None:
        warning = CoercionWarning(field, message)
        self.warnings.append(warning)
        logger.warning("[RowDecoder] %s%s", f"{self.context} " if self.context else "", warning)


def to_optional_str(cell: Cell, field: str, log: CoercionLog) -> Optional[str]:
    if cell.kind is CellKind.STRING:
        return cell.value or None
    if cell.kind is CellKind.NUMBER:
        return str(cell.value)
    if cell.kind is CellKind.BOOL:
        return "Y" if cell.value else "N"
    if cell.kind is CellKind.LIST:
        log.warn(field, "expected a string, got a list")
    return None


def to_optional_int(cell: Cell, field: str, log: CoercionLog) -> Optional[int]:
    """Inteiro de 32 bits com sinal (coluna ``INTEGER``); fora da faixa vira None com aviso."""
    if cell.kind is CellKind.NUMBER:
        value = int(cell.value)
    elif cell.kind is CellKind.STRING:
        text = cell.value.strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError:
            log.warn(field, f"expected an integer, got {cell.value!r}")
            return None
    else:
        if not cell.is_null:
            log.warn(field, f"expected an integer, got a {cell.kind.value}")
        return None
    if not INT4_MIN <= value <= INT4_MAX:
        log.warn(field, f"integer {value} does not fit in 32 bits")
        return None
    return value


def to_optional_float(cell: Cell, field: str, log: CoercionLog) -> Optional[float]:
    if cell.kind is CellKind.NUMBER:
        return float(cell.value)
    if cell.kind is CellKind.STRING:
        text = cell.value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            log.warn(field, f"expected a number, got {cell.value!r}")
            return None
        if not math.isfinite(value):
            log.warn(field, f"expected a finite number, got {cell.value!r}")
            return None
        return value
    if not cell.is_null:
        log.warn(field, f"expected a number, got a {cell.kind.value}")
    return None


def to_bool(cell: Cell, field: str, log: CoercionLog) -> bool:
    """``"Y"`` é verdadeiro, ``"N"`` ou vazio é falso; qualquer outra coisa vira falso com aviso."""
    if cell.kind is CellKind.BOOL:
        return cell.value
    if cell.is_null:
        return False
    if cell.kind is CellKind.STRING:
        flag = cell.value.upper()
        if flag == "Y":
            return True
        if flag in ("N", ""):
            return False
        log.warn(field, f"expected 'Y' or 'N', got {cell.value!r}")
        return False
    log.warn(field, f"expected 'Y' or 'N', got a {cell.kind.value}")
    return False


def to_enum(cell: Cell, enum_cls: Type[E], field: str, log: CoercionLog) -> E:
    label = cell.value if cell.kind is CellKind.STRING else None
    member = enum_cls.from_label(label)
    if label and member is enum_cls.sentinel() and member.value != label:
        log.warn(field, f"unknown {enum_cls.__name__} label {label!r}")
    return member


def to_str_list(cell: Cell, field: str, log: CoercionLog) -> List[str]:
    """LIST é lida elemento a elemento; STRING é separada em ``", "``."""
    if cell.kind is CellKind.LIST:
        values = []
        for item in cell.value:
            text = to_optional_str(item, field, log)
            if text is not None:
                values.append(text)
        return values
    if cell.kind is CellKind.STRING:
        if not cell.value:
            return []
        return cell.value.split(LIST_DELIMITER)
    if not cell.is_null:
        log.warn(field, f"expected a list, got a {cell.kind.value}")
    return []


def to_enum_list(cell: Cell, enum_cls: Type[E], field: str, log: CoercionLog) -> List[E]:
    members = []
    for label in to_str_list(cell, field, log):
        member = enum_cls.from_label(label)
        if member is enum_cls.sentinel() and member.value != label:
            log.warn(field, f"unknown {enum_cls.__name__} label {label!r}")
        members.append(member)
    return members
