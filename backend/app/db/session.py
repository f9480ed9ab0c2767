from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from backend.app.core.config import settings

DATABASE_URL = settings.DATABASE_URL


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_unicode_lower(engine: Engine) -> None:
    """
    Remplace lower() de SQLite (ASCII seulement) par str.lower.

    PostgreSQL gère déjà la casse Unicode : rien à faire hors SQLite.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)
register_unicode_lower(engine)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
