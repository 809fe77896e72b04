"""
Ingestão dos arquivos SVG de ``<assets_dir>/<weight>/*.svg``.

O nome do ícone vem do arquivo: ``cube-bold.svg`` em ``bold/`` é o ícone
``cube``; no peso regular o arquivo é apenas ``cube.svg``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple
import logging

import anyio

from icon_catalog.repositories import IconsRepository, SvgsRepository
from icon_catalog.schemas.enums import IconWeight

logger = logging.getLogger("uvicorn")

SVG_SUFFIX = ".svg"


@dataclass
class AssetReport:
    files: int = 0
    upserted: int = 0
    missing: List[str] = field(default_factory=list)


def icon_name_from_file(file_name: str, weight: IconWeight) -> str:
    """``cube-duotone.svg`` -> ``cube``; the weight suffix is only stripped for non-regular weights."""
    stem = file_name[: -len(SVG_SUFFIX)] if file_name.endswith(SVG_SUFFIX) else file_name
    suffix = f"-{weight.value}"
    if weight is not IconWeight.REGULAR and stem.endswith(suffix):
        stem = stem[: -len(suffix)]
    return stem


class AssetIngestor:
    def __init__(self, icons: IconsRepository, svgs: SvgsRepository, assets_dir: str):
        self.icons = icons
        self.svgs = svgs
        self.assets_dir = Path(assets_dir)

    async def _list_files(self) -> List[Tuple[anyio.Path, IconWeight]]:
        files: List[Tuple[anyio.Path, IconWeight]] = []
        for weight in IconWeight:
            directory = anyio.Path(self.assets_dir / weight.value)
            if not await directory.is_dir():
                logger.warning("[AssetIngestor] Missing weight directory %s", directory)
                continue
            async for entry in directory.iterdir():
                if entry.name.endswith(SVG_SUFFIX) and await entry.is_file():
                    files.append((entry, weight))
        files.sort(key=lambda item: (item[1].value, item[0].name))
        return files

    async def run(self) -> AssetReport:
        logger.info("[AssetIngestor] Syncing assets from %s", self.assets_dir)
        report = AssetReport()
        for path, weight in await self._list_files():
            report.files += 1
            name = icon_name_from_file(path.name, weight)
            icon = await self.icons.get_by_name(name)
            if icon is None:
                logger.warning("[AssetIngestor] Icon not found in database: %s", name)
                report.missing.append(name)
                continue
            src = await path.read_text(encoding="utf-8")
            await self.svgs.upsert(icon.id, weight, src)
            report.upserted += 1
            logger.debug("[AssetIngestor] Upserted SVG: %s - %s", name, weight.value)
        logger.info(
            "[AssetIngestor] Assets synced: %d file(s), %d upserted, %d without icon",
            report.files, report.upserted, len(report.missing),
        )
        return report
