from .compiler import CompiledQuery, build_count, build_select, compile_conditions, compile_order, compile_predicate, compile_query
from .filters import IconFilter, IconFilterBuilder, parse_filter_params
from .ranges import Exact, GreaterThanOrEqual, LessThanOrEqual, Range, VersionRange, parse_version_range

__all__ = [
    "CompiledQuery", "build_count", "build_select", "compile_conditions", "compile_order",
    "compile_predicate", "compile_query",
    "IconFilter", "IconFilterBuilder", "parse_filter_params",
    "Exact", "GreaterThanOrEqual", "LessThanOrEqual", "Range", "VersionRange", "parse_version_range",
]
