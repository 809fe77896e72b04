"""Database engine and async session management for SQLAlchemy."""

from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
import logging

from .config import get_settings

logger = logging.getLogger("uvicorn")
settings = get_settings()


def masked_database_url(url: str) -> str:
    """Return the database URL with the password hidden, for logs."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "(URL format not recognized)"


# Engine assíncrono com pool de conexões (psycopg 3)
engine = create_async_engine(
    settings.database_url,
    pool_size=5,
    max_overflow=10,
    pool_timeout=30,
    pool_recycle=1800,  # Recycle connections after 30 minutes
    pool_pre_ping=True,
    echo=settings.environment == "development",
)

# Create session factory
SessionLocal = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

# Base class for all models
Base = declarative_base()


async def ping_database() -> bool:
    """Executa um SELECT 1 para verificar a conexão com o banco."""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception as e:
        logger.error("Database connection error (%s): %s", masked_database_url(settings.database_url), e)
        return False


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency for FastAPI routes that need database access.

    Usage:
        @router.get("/icons")
        async def read_icons(db: AsyncSession = Depends(get_db)):
            return await IconsRepository(db).list_icons(IconFilter())
    """
    async with SessionLocal() as db:
        yield db
