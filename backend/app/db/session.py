from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from backend.app.core.config import get_settings


def make_engine(url: str, *, echo: bool = False, sqlite_timeout: float = 30.0) -> Engine:
    """
    Engine unique pour l'API, les scripts et les tests.

    SQLite (dev / tests) : chaque transaction ouvre un BEGIN IMMEDIATE,
    les écritures concurrentes sont donc sérialisées au lieu d'échouer
    en "database is locked" lors de l'escalade de verrou.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    engine = create_engine(
        url,
        echo=echo,
        connect_args={"check_same_thread": False, "timeout": sqlite_timeout},
    )

    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        # le driver ne doit plus émettre ses propres BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


settings = get_settings()

engine = make_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    sqlite_timeout=settings.SQLITE_BUSY_TIMEOUT,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
