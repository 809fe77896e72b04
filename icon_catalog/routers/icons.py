from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from icon_catalog.db import get_db
from icon_catalog.query import parse_filter_params
from icon_catalog.repositories import IconsRepository, SvgsRepository
from icon_catalog.schemas import IconCount, IconList, IconSchema, IconWeights, LibraryInfo

router = APIRouter(
    prefix="/v1",
    tags=["icons"],
)


async def icon_filter(
    name: Optional[str] = Query(None, description="Nome kebab-case; aceita `*` no início e/ou no fim."),
    v: Optional[str] = Query(None, description="Versão ou faixa de lançamento: `2.1`, `..1.4`, `2.0..`, `1.5..2.0`."),
    released: Optional[str] = Query(None, description="Alias de `v`."),
    updated: Optional[str] = Query(None),
    deprecated: Optional[str] = Query(None),
    published: Optional[str] = Query(None, description="`true` (padrão), `false` ou `any`."),
    status: Optional[str] = Query(None, description="Status separados por vírgula."),
    category: Optional[str] = Query(None, description="Categorias separadas por vírgula."),
    tags: Optional[str] = Query(None, description="Tags separadas por vírgula."),
    order: Optional[str] = Query(None, description="`name`, `status`, `release` ou `code`."),
    dir: Optional[str] = Query(None, description="`asc` ou `desc`."),
):
    return parse_filter_params(
        name=name,
        released=v if v is not None else released,
        updated=updated,
        deprecated=deprecated,
        published=published,
        status=status,
        category=category,
        tags=tags,
        order=order,
        dir=dir,
    )


@router.get("/icons", response_model=IconList)
async def list_icons(
    query=Depends(icon_filter),
    db: AsyncSession = Depends(get_db),
):
    repo = IconsRepository(db)
    icons = await repo.list_icons(query)
    return IconList(icons=[IconSchema.model_validate(i) for i in icons], count=len(icons))


@router.get("/icons/count", response_model=IconCount)
async def count_icons(
    query=Depends(icon_filter),
    db: AsyncSession = Depends(get_db),
):
    repo = IconsRepository(db)
    return IconCount(count=await repo.count_icons(query))


@router.get("/icons/name/{name}", response_model=IconSchema)
async def get_icon_by_name(name: str, db: AsyncSession = Depends(get_db)):
    icon = await IconsRepository(db).get_by_name(name)
    if not icon:
        raise HTTPException(status_code=404, detail="Icon not found")
    return IconSchema.model_validate(icon)


@router.get("/icons/code/{code}", response_model=IconSchema)
async def get_icon_by_code(code: int, db: AsyncSession = Depends(get_db)):
    icon = await IconsRepository(db).get_by_code(code)
    if not icon:
        raise HTTPException(status_code=404, detail="Icon not found")
    return IconSchema.model_validate(icon)


@router.get("/icons/{id}", response_model=IconSchema)
async def get_icon(id: int, db: AsyncSession = Depends(get_db)):
    icon = await IconsRepository(db).get_by_id(id)
    if not icon:
        raise HTTPException(status_code=404, detail="Icon not found")
    return IconSchema.model_validate(icon)


@router.get("/icons/{id}/weights", response_model=IconWeights)
async def get_icon_weights(id: int, db: AsyncSession = Depends(get_db)):
    icon = await IconsRepository(db).get_by_id(id)
    if not icon:
        raise HTTPException(status_code=404, detail="Icon not found")
    svgs = await SvgsRepository(db).weights_for_icon(id)
    return IconWeights(icon_id=id, weights={weight: svg.src for weight, svg in svgs.items()})


@router.get("/tags", response_model=List[str])
async def list_tags(db: AsyncSession = Depends(get_db)):
    return await IconsRepository(db).list_tags()


@router.get("/info", response_model=LibraryInfo)
async def library_info(db: AsyncSession = Depends(get_db)):
    return await IconsRepository(db).library_info()
