from .assets import AssetIngestor, AssetReport
from .decoder import DecodeBatch, DecodedRow, decode_row, decode_rows
from .reconciler import CatalogReconciler, SyncReport
from .table_client import RowPage, TableClient

__all__ = [
    "AssetIngestor", "AssetReport",
    "DecodeBatch", "DecodedRow", "decode_row", "decode_rows",
    "CatalogReconciler", "SyncReport",
    "RowPage", "TableClient",
]
