from typing import List, Optional
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from icon_catalog.errors import StoreError
from icon_catalog.models import Icon
from icon_catalog.query import IconFilter, build_count, build_select
from icon_catalog.schemas.icons import IconRecord, LibraryInfo

logger = logging.getLogger("uvicorn")


def build_upsert(record: IconRecord):
    """
    INSERT ... ON CONFLICT (rid) DO UPDATE para um registro decodificado.

    Todas as colunas de negócio são sobrescritas; ``id`` nunca é alterado.
    Sem ``code`` no registro, o codepoint já gravado é mantido: o trigger
    ``assign_code_point`` preenche ``EXCLUDED.code`` com o próximo livre.
    """
    stmt = insert(Icon).values(**record.to_row())
    columns = Icon.MUTABLE_COLUMNS
    if record.code is None:
        columns = tuple(column for column in columns if column != "code")
    return stmt.on_conflict_do_update(
        index_elements=[Icon.rid],
        set_={column: stmt.excluded[column] for column in columns},
    ).returning(Icon.id)


class IconsRepository:
    """
    Repositório para operações com ícones.

    Recebe a sessão por injeção; nenhuma operação depende de estado global.
    Erros do SQLAlchemy são convertidos em ``StoreError``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.model = Icon

    async def list_icons(self, query: IconFilter) -> List[Icon]:
        try:
            result = await self.db.execute(build_select(query))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("[IconsRepository] list_icons failed: %s", e)
            raise StoreError("Failed to list icons") from e

    async def count_icons(self, query: IconFilter) -> int:
        try:
            result = await self.db.execute(build_count(query))
            return int(result.scalar_one())
        except SQLAlchemyError as e:
            logger.error("[IconsRepository] count_icons failed: %s", e)
            raise StoreError("Failed to count icons") from e

    async def _one_by(self, column, value) -> Optional[Icon]:
        try:
            result = await self.db.execute(select(self.model).where(column == value))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("[IconsRepository] lookup by %s failed: %s", column.key, e)
            raise StoreError(f"Failed to look up icon by {column.key}") from e

    async def get_by_id(self, id: int) -> Optional[Icon]:
        return await self._one_by(self.model.id, id)

    async def get_by_name(self, name: str) -> Optional[Icon]:
        return await self._one_by(self.model.name, name)

    async def get_by_rid(self, rid: str) -> Optional[Icon]:
        return await self._one_by(self.model.rid, rid)

    async def get_by_code(self, code: int) -> Optional[Icon]:
        return await self._one_by(self.model.code, code)

    async def upsert(self, record: IconRecord) -> int:
        """
        Insere ou atualiza um ícone pelo ``rid`` e confirma a transação.

        Returns:
            ID do ícone (o mesmo de antes, em caso de atualização)
        """
        try:
            result = await self.db.execute(build_upsert(record))
            icon_id = int(result.scalar_one())
            await self.db.commit()
            return icon_id
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to upsert icon rid={record.rid!r}: {e}") from e

    async def delete_by_rid(self, rid: str) -> int:
        try:
            result = await self.db.execute(delete(self.model).where(self.model.rid == rid))
            await self.db.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to delete icon rid={rid!r}") from e

    async def list_tags(self) -> List[str]:
        """Todas as tags distintas, em ordem alfabética."""
        tag = func.unnest(self.model.tags).label("tag")
        stmt = select(tag).distinct().order_by(tag)
        try:
            result = await self.db.execute(stmt)
            return [row for row in result.scalars().all() if row]
        except SQLAlchemyError as e:
            logger.error("[IconsRepository] list_tags failed: %s", e)
            raise StoreError("Failed to list tags") from e

    async def library_info(self) -> LibraryInfo:
        """Versão atual (maior ``released_at``) e total de ícones publicados."""
        stmt = select(
            func.count(self.model.id).label("count"),
            func.max(self.model.released_at).label("version"),
        ).where(self.model.published == True)
        try:
            row = (await self.db.execute(stmt)).one()
        except SQLAlchemyError as e:
            logger.error("[IconsRepository] library_info failed: %s", e)
            raise StoreError("Failed to read library info") from e
        return LibraryInfo(count=row.count or 0, version=row.version or 0.0)
