"""
Version range expressions used to filter icons by release, update and
deprecation version.

Grammar (versions are ``<major>.<minor>`` floats)::

    "1.5..2.0"  -> Range(1.5, 2.0)        inclusive on both ends
    "..1.4"     -> LessThanOrEqual(1.4)
    "2.0.."     -> GreaterThanOrEqual(2.0)
    "2.1"       -> Exact(2.1)
"""

import math
import re
from dataclasses import dataclass
from typing import Union

from icon_catalog.errors import RangeParseError

RANGE_SEPARATOR = ".."
VERSION_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Exact:
    value: float


@dataclass(frozen=True)
class Range:
    low: float
    high: float


@dataclass(frozen=True)
class LessThanOrEqual:
    value: float


@dataclass(frozen=True)
class GreaterThanOrEqual:
    value: float


VersionRange = Union[Exact, Range, LessThanOrEqual, GreaterThanOrEqual]


def _parse_version(token: str, expression: str) -> float:
    # float() também aceita "1_0", "nan" e "inf"; só números decimais simples são versões
    if not VERSION_NUMBER.fullmatch(token):
        raise RangeParseError(token, expression)
    value = float(token)
    if not math.isfinite(value):
        raise RangeParseError(token, expression)
    return value


def parse_version_range(expression: str) -> VersionRange:
    """
    Converte uma expressão de faixa de versões em uma das quatro variantes.

    Raises:
        RangeParseError: se algum dos tokens não for um número
    """
    if RANGE_SEPARATOR not in expression:
        return Exact(_parse_version(expression.strip(), expression))

    low, high = (part.strip() for part in expression.split(RANGE_SEPARATOR, 1))
    if not low and not high:
        raise RangeParseError(RANGE_SEPARATOR, expression)
    if not low:
        return LessThanOrEqual(_parse_version(high, expression))
    if not high:
        return GreaterThanOrEqual(_parse_version(low, expression))
    return Range(_parse_version(low, expression), _parse_version(high, expression))
