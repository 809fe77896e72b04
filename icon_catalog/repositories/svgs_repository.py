from typing import Dict
import logging

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from icon_catalog.errors import StoreError
from icon_catalog.models import Svg
from icon_catalog.schemas.enums import IconWeight

logger = logging.getLogger("uvicorn")


def build_svg_upsert(icon_id: int, weight: IconWeight, src: str):
    stmt = insert(Svg).values(icon_id=icon_id, weight=weight.value, src=src)
    return stmt.on_conflict_do_update(
        index_elements=[Svg.icon_id, Svg.weight],
        set_={"src": stmt.excluded.src},
    ).returning(Svg.id)


class SvgsRepository:
    """Repositório dos SVGs de cada peso de um ícone."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.model = Svg

    async def weights_for_icon(self, icon_id: int) -> Dict[IconWeight, Svg]:
        try:
            result = await self.db.execute(select(self.model).where(self.model.icon_id == icon_id))
        except SQLAlchemyError as e:
            logger.error("[SvgsRepository] weights_for_icon failed: %s", e)
            raise StoreError("Failed to read icon weights") from e
        return {IconWeight.from_label(svg.weight): svg for svg in result.scalars().all()}

    async def upsert(self, icon_id: int, weight: IconWeight, src: str) -> int:
        try:
            result = await self.db.execute(build_svg_upsert(icon_id, weight, src))
            svg_id = int(result.scalar_one())
            await self.db.commit()
            return svg_id
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to upsert svg icon_id={icon_id} weight={weight.value}") from e
