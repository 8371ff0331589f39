from __future__ import annotations

import logging
from typing import Dict, List, Set, Tuple

from sqlalchemy import func, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from app.errors import SchemaInitError
from app.models.message import Message
from app.models.service import Service
from app.models.user import User
from app.services.security import hash_password

logger = logging.getLogger(__name__)

TABLES = (User.__table__, Service.__table__, Message.__table__)

# Columns added after the first deployments of the "messages" table.
# (name, sqlite_type, postgres_type)
REQUIRED_MESSAGE_COLUMNS: List[Tuple[str, str, str]] = [
    ("topics", "TEXT NOT NULL DEFAULT ''", "TEXT NOT NULL DEFAULT ''"),
]

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "Admin*1234"
DEFAULT_ADMIN_NAME = "Administrador"

# (title, price, summary)
DEFAULT_SERVICES: List[Tuple[str, str, str]] = [
    ("Hosting Web Compartido", "Desde $5.99 Anual", "Plan rápido, seguro y económico para iniciar tu sitio."),
    ("Servidores VPS", "Desde $8.99 Mensual", "Control total, rendimiento dedicado y escalabilidad."),
    ("Correo Corporativo", "Incluido 1er año", "Dominios y cuentas corporativas con soporte 24/7."),
]


def _is_sqlite(engine: Engine) -> bool:
    return engine.dialect.name.lower() == "sqlite"


def _is_file_sqlite(engine: Engine) -> bool:
    return _is_sqlite(engine) and engine.url.database not in (None, "", ":memory:")


def table_names(engine: Engine) -> Set[str]:
    """Names of the tables currently present in the database."""
    return set(inspect(engine).get_table_names())


def _get_existing_columns(engine: Engine, table_name: str) -> Dict[str, str]:
    # PRAGMA table_info / information_schema both sit behind the inspector.
    return {str(col["name"]): str(col["type"]) for col in inspect(engine).get_columns(table_name)}


def _ensure_message_columns(engine: Engine) -> None:
    table = Message.__table__.name
    existing = _get_existing_columns(engine, table)
    with engine.begin() as conn:
        for name, sqlite_type, pg_type in REQUIRED_MESSAGE_COLUMNS:
            if name in existing:
                continue
            if _is_sqlite(engine):
                # SQLite supports ADD COLUMN without IF NOT EXISTS
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {sqlite_type};"))
            else:
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN IF NOT EXISTS {name} {pg_type};"))
            logger.info(f"Added missing column {table}.{name}")


def ensure_schema(engine: Engine) -> None:
    """
    Idempotently create the users, services and messages tables.
    Safe to run at every startup: existing tables and rows are left as they are.

    Raises:
        SchemaInitError: if the storage layer fails or a table is still missing
    """
    try:
        if _is_file_sqlite(engine):
            with engine.begin() as conn:
                conn.execute(text("PRAGMA journal_mode = WAL;"))

        SQLModel.metadata.create_all(engine, tables=list(TABLES), checkfirst=True)
        _ensure_message_columns(engine)

        missing = {t.name for t in TABLES} - table_names(engine)
    except SQLAlchemyError as e:
        raise SchemaInitError(f"Failed to apply schema: {e}") from e

    if missing:
        raise SchemaInitError(f"Tables missing after schema creation: {', '.join(sorted(missing))}")
    logger.info("Schema verified/applied.")


def seed_if_empty(engine: Engine) -> bool:
    """
    Insert the default admin user and services when the users table is empty.

    Runs at most once per database: any existing user, even with no services
    or messages, means the database has already been seeded. A failure is
    logged and rolled back so the app can still start without seed data.

    Returns:
        True if the seed rows were inserted, False otherwise
    """
    with Session(engine) as session:
        try:
            user_count = session.exec(select(func.count()).select_from(User)).one()
            if user_count:
                logger.debug("Users present; skipping seed.")
                return False

            session.add(
                User(
                    username=DEFAULT_ADMIN_USERNAME,
                    password_hash=hash_password(DEFAULT_ADMIN_PASSWORD),
                    name=DEFAULT_ADMIN_NAME,
                )
            )
            for title, price, summary in DEFAULT_SERVICES:
                session.add(Service(title=title, price=price, summary=summary))
            session.commit()
        except (SQLAlchemyError, ValueError):
            session.rollback()
            logger.exception("Seeding default data failed; continuing without seed data.")
            return False

    logger.info(f"Database seeded with user '{DEFAULT_ADMIN_USERNAME}' and {len(DEFAULT_SERVICES)} services.")
    return True
