"""
Full-snapshot reconciliation of the inventory table into the ``icons`` table.

Every pass reads all pages into memory, decodes them and upserts each record
by ``rid``. Records are committed one by one: when an upsert fails the pass
stops with ``ReconciliationError`` and the records applied before it stay.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
import logging

from icon_catalog.errors import ReconciliationError, SourceError, StoreError, SyncInProgressError
from icon_catalog.schemas.icons import IconRecord
from icon_catalog.sync.decoder import decode_rows
from icon_catalog.sync.table_client import RowPage

logger = logging.getLogger("uvicorn")


class RowSource(Protocol):
    async def fetch_page(self, page_token: Optional[str] = None) -> RowPage: ...


class IconStore(Protocol):
    async def upsert(self, record: IconRecord) -> int: ...


@dataclass
class SyncReport:
    pages: int = 0
    fetched: int = 0
    decoded: int = 0
    rejected: int = 0
    upserted: int = 0
    warnings: int = 0


class CatalogReconciler:
    """
    Executa uma sincronização completa da tabela externa para o banco.

    A fonte e o repositório são injetados. Execuções sobrepostas na mesma
    instância são recusadas com ``SyncInProgressError``.

    O lock é por instância: reconciliadores distintos (a sincronização de
    startup em ``main.py`` e o script ``scripts/sync_catalog.py``, que roda
    em outro processo) não se bloqueiam. Nesse caso os dois passes fazem os
    mesmos upserts por ``rid`` e o último a gravar prevalece.
    """

    def __init__(self, source: RowSource, repository: IconStore):
        self.source = source
        self.repository = repository
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def fetch_all(self) -> List[RowPage]:
        """Lê todas as páginas em sequência até o token de continuação vir vazio."""
        pages: List[RowPage] = []
        seen_tokens = set()
        token: Optional[str] = None
        while True:
            page = await self.source.fetch_page(token)
            pages.append(page)
            logger.info("[CatalogReconciler] Page %d: %d row(s)", len(pages), len(page.rows))
            token = page.next_page_token
            if not token:
                break
            if token in seen_tokens:
                raise SourceError(f"Inventory table repeated page token {token!r}")
            seen_tokens.add(token)
        return pages

    async def apply(self, records: List[IconRecord]) -> int:
        applied = 0
        for record in records:
            try:
                await self.repository.upsert(record)
            except StoreError as e:
                logger.error(
                    "[CatalogReconciler] Failed to upsert icon rid=%s name=%s: %s", record.rid, record.name, e
                )
                raise ReconciliationError(record.rid, applied, e) from e
            applied += 1
        return applied

    async def run(self) -> SyncReport:
        if self._lock.locked():
            raise SyncInProgressError("A catalog sync is already running")
        async with self._lock:
            logger.info("[CatalogReconciler] Syncing inventory table via %r", self.source)
            pages = await self.fetch_all()
            rows: List[Dict[str, Any]] = [row for page in pages for row in page.rows]
            batch = decode_rows(rows)
            report = SyncReport(
                pages=len(pages),
                fetched=len(rows),
                decoded=len(batch.records),
                rejected=len(batch.rejected),
                warnings=len(batch.warnings),
            )
            report.upserted = await self.apply(batch.records)
            logger.info(
                "[CatalogReconciler] Sync finished: %d fetched, %d upserted, %d rejected, %d warning(s)",
                report.fetched, report.upserted, report.rejected, report.warnings,
            )
            return report
