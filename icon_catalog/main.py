from datetime import datetime
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import get_settings
from .db import SessionLocal, masked_database_url, ping_database
from .errors import CatalogError, QueryValidationError, StoreError
from .repositories import IconsRepository, SvgsRepository
from .routers import icons_router
from .sync import AssetIngestor, CatalogReconciler, TableClient
from .version import read_version


SETTINGS = get_settings()
APP_VERSION = read_version()
logger = logging.getLogger("uvicorn")

# Inicializar a aplicação FastAPI
app = FastAPI(
    title="Icon Catalog API",
    description="Catálogo de ícones com filtros estruturados e sincronização com a tabela de inventário",
    version=APP_VERSION
)

# Configurar CORS (API pública, somente leitura)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(QueryValidationError)
async def _query_validation_error(request: Request, exc: QueryValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(StoreError)
async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
    # Detalhes ficam no log; o cliente recebe uma resposta opaca
    logger.error("Store error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Backend unavailable"},
    )


# Incluir routers
app.include_router(icons_router)


async def sync_table() -> None:
    async with SessionLocal() as db:
        reconciler = CatalogReconciler(TableClient.from_settings(SETTINGS), IconsRepository(db))
        await reconciler.run()


async def sync_assets() -> None:
    async with SessionLocal() as db:
        ingestor = AssetIngestor(IconsRepository(db), SvgsRepository(db), SETTINGS.assets_dir)
        await ingestor.run()


@app.on_event("startup")
async def _startup() -> None:
    logger.info("🚀 Icon Catalog API starting - version=%s environment=%s", APP_VERSION, SETTINGS.environment)
    logger.info("📊 Database URL: %s", masked_database_url(SETTINGS.database_url))

    logger.info("TABLE_SYNC=%s", SETTINGS.table_sync)
    if SETTINGS.table_sync:
        try:
            await sync_table()
        except CatalogError as e:
            logger.error("Failed to sync inventory table: %s", e)

    logger.info("ASSETS_SYNC=%s", SETTINGS.assets_sync)
    if SETTINGS.assets_sync:
        try:
            await sync_assets()
        except (CatalogError, OSError) as e:
            logger.error("Failed to sync assets: %s", e)


@app.get("/health")
async def health() -> dict:
    """Basic health check: API is up and the database answers."""
    db_ok = await ping_database()
    return {
        "status": "ok" if db_ok else "degraded",
        "version": APP_VERSION,
        "database": db_ok,
        "time": datetime.now().isoformat(),
    }
