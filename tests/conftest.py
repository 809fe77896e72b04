import pytest
from sqlalchemy import create_engine, select, text

from icon_catalog.models import Icon
from icon_catalog.query import IconFilter, compile_order, compile_predicate


# Subconjunto escalar da tabela icons; as colunas ARRAY só existem no PostgreSQL
SQLITE_ICONS_DDL = """
CREATE TABLE public.icons (
    id INTEGER PRIMARY KEY,
    rid TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL UNIQUE,
    status TEXT NOT NULL,
    code INTEGER,
    released_at FLOAT,
    last_updated_at FLOAT,
    deprecated_at FLOAT,
    published BOOLEAN NOT NULL
)
"""

SAMPLE_ICONS = [
    # id, rid, name, status, code, released_at, last_updated_at, deprecated_at, published
    (1, "r-cube", "cube", "Implemented", 57818, 1.0, 2.0, None, True),
    (2, "r-cube-outline", "cube-outline", "Implemented", 57820, 1.4, None, None, True),
    (3, "r-cube-fill", "cube-fill", "Designed", 57822, 2.0, 2.1, None, True),
    (4, "r-mega-cube", "mega-cube", "Designing", None, None, None, None, False),
    (5, "r-arrow", "arrow-left", "Deprecated", 57824, 1.0, 1.5, 2.0, True),
    (6, "r-50_percent", "50_percent", "Backlog", None, 2.1, None, None, False),
    (7, "r-50xpercent", "50xpercent", "Backlog", None, None, None, None, False),
]


@pytest.fixture
def sqlite_icons():
    """Conexão SQLite com a tabela public.icons populada com SAMPLE_ICONS."""
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        conn.execute(text("ATTACH DATABASE ':memory:' AS public"))
        conn.execute(text(SQLITE_ICONS_DDL))
        for row in SAMPLE_ICONS:
            conn.execute(
                text(
                    "INSERT INTO public.icons (id, rid, name, status, code, released_at, "
                    "last_updated_at, deprecated_at, published) "
                    "VALUES (:id, :rid, :name, :status, :code, :released_at, "
                    ":last_updated_at, :deprecated_at, :published)"
                ),
                dict(zip(
                    ("id", "rid", "name", "status", "code", "released_at",
                     "last_updated_at", "deprecated_at", "published"),
                    row,
                )),
            )
        yield conn
    engine.dispose()


@pytest.fixture
def run_filter(sqlite_icons):
    """Executa um IconFilter no SQLite e devolve os nomes na ordem retornada."""
    def _run(query: IconFilter):
        stmt = select(Icon.name).where(compile_predicate(query)).order_by(*compile_order(query))
        return list(sqlite_icons.execute(stmt).scalars().all())
    return _run
