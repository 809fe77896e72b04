"""Exceptions raised by the query compiler, the row decoder and the sync pipeline."""

from typing import Optional


class CatalogError(Exception):
    """Base de todos os erros do catálogo."""


class RangeParseError(CatalogError, ValueError):
    """A version range expression contains a token that is not a number."""

    def __init__(self, token: str, expression: str):
        self.token = token
        self.expression = expression
        super().__init__(f"Invalid version number {token!r} in range {expression!r}")


class ValidationError(CatalogError, ValueError):
    """A required field is missing or unusable."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class QueryValidationError(ValidationError):
    """Inbound query parameters could not be turned into a filter."""


class CoercionWarning(UserWarning):
    """A cell could not be coerced and its field fell back to a default."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class StoreError(CatalogError):
    """Falha de conexão ou de constraint no banco de dados."""


class SourceError(CatalogError):
    """The external inventory table could not be read."""


class ReconciliationError(CatalogError):
    """An upsert failed and the rest of the sync batch was abandoned."""

    def __init__(self, rid: str, applied: int, cause: BaseException):
        self.rid = rid
        self.applied = applied
        self.cause = cause
        super().__init__(
            f"Failed to upsert icon rid={rid!r} after {applied} applied record(s): {cause}"
        )


class SyncInProgressError(CatalogError):
    """A sync pass was requested while another one is still running."""
