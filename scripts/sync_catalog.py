#!/usr/bin/env python3
"""
Executa uma sincronização do catálogo fora do servidor HTTP.

Usage:
  python scripts/sync_catalog.py [table|assets|all]

``table`` lê a tabela de inventário e faz upsert dos ícones; ``assets`` lê os
SVGs de ASSETS_DIR; ``all`` (padrão) executa os dois, nessa ordem.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Adicionar o diretório raiz ao sys.path
root_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root_dir))

from icon_catalog.config import get_settings
from icon_catalog.db import SessionLocal, engine
from icon_catalog.errors import CatalogError
from icon_catalog.repositories import IconsRepository, SvgsRepository
from icon_catalog.sync import AssetIngestor, CatalogReconciler, TableClient

TARGETS = ("table", "assets", "all")


async def run(target: str) -> int:
    settings = get_settings()
    try:
        async with SessionLocal() as db:
            if target in ("table", "all"):
                reconciler = CatalogReconciler(TableClient.from_settings(settings), IconsRepository(db))
                report = await reconciler.run()
                print(f"✅ Tabela: {report.upserted} ícones sincronizados "
                      f"({report.rejected} rejeitados, {report.warnings} avisos, {report.pages} páginas)")
            if target in ("assets", "all"):
                ingestor = AssetIngestor(IconsRepository(db), SvgsRepository(db), settings.assets_dir)
                assets = await ingestor.run()
                print(f"✅ Assets: {assets.upserted}/{assets.files} SVGs sincronizados")
                if assets.missing:
                    print(f"⚠️  Ícones não encontrados: {len(assets.missing)}")
    except CatalogError as e:
        print(f"❌ ERRO: {e}")
        return 1
    finally:
        await engine.dispose()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    arg = sys.argv[1] if len(sys.argv) > 1 else "all"
    if arg not in TARGETS:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(run(arg)))
