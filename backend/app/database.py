from pathlib import Path
from typing import Generator

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.config import settings

DATABASE_URL = settings.database_url

_is_sqlite = DATABASE_URL.startswith("sqlite")
_is_memory = _is_sqlite and DATABASE_URL in ("sqlite://", "sqlite:///:memory:")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}

_engine_kwargs = {}
if _is_memory:
    # Every session must see the same in-memory database.
    _engine_kwargs["poolclass"] = StaticPool
elif _is_sqlite:
    db_path = DATABASE_URL.replace("sqlite:///", "", 1)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

engine: Engine = create_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    connect_args=_connect_args,
    **_engine_kwargs,
)


def get_session() -> Generator[Session, None, None]:
    """Get database session"""
    with Session(engine) as session:
        yield session


def init_db(target: Engine = engine) -> None:
    """Apply the schema and seed default data on ``target``.

    Schema failures propagate (startup must abort); seeding failures are
    logged by ``seed_if_empty`` and swallowed there.
    """
    from app.schema import ensure_schema, seed_if_empty

    ensure_schema(target)
    seed_if_empty(target)
