"""
Tests for schema creation and first-run seeding.

Verifies that:
- ensure_schema can run any number of times without errors or data loss
- seed_if_empty inserts the admin user and three services exactly once
- a populated users table blocks re-seeding even with no services
- seeding failures are swallowed, schema failures are not
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, func, select

from app.database import engine
from app.errors import SchemaInitError
from app.main import app
from app.models.message import Message
from app.models.service import Service
from app.models.user import User
from app.schema import (
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    DEFAULT_SERVICES,
    ensure_schema,
    seed_if_empty,
    table_names,
)
from app.services.security import verify_password


def _columns(table: str):
    return [(c["name"], str(c["type"]), c["nullable"]) for c in inspect(engine).get_columns(table)]


def _count(session: Session, model) -> int:
    return session.exec(select(func.count()).select_from(model)).one()


def test_ensure_schema_creates_all_tables():
    assert not {"users", "services", "messages"} & table_names(engine)

    ensure_schema(engine)

    assert {"users", "services", "messages"} <= table_names(engine)


def test_ensure_schema_is_idempotent():
    ensure_schema(engine)
    before = {t: _columns(t) for t in ("users", "services", "messages")}

    ensure_schema(engine)

    after = {t: _columns(t) for t in ("users", "services", "messages")}
    assert before == after


def test_ensure_schema_keeps_existing_rows(session: Session):
    session.add(Service(title="Custom", price="$1", summary="Kept"))
    session.commit()

    ensure_schema(engine)

    assert session.exec(select(Service.title)).all() == ["Custom"]


def test_ensure_schema_adds_topics_to_legacy_messages_table():
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE messages ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, email TEXT NOT NULL, "
                "message TEXT NOT NULL, created_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
            )
        )
        conn.execute(text("INSERT INTO messages (name, email, message) VALUES ('Ana', 'a@x.com', 'hola')"))

    ensure_schema(engine)

    assert "topics" in {c[0] for c in _columns("messages")}
    with Session(engine) as session:
        legacy = session.exec(select(Message)).one()
        assert legacy.topics == ""


def test_ensure_schema_failure_raises_schema_init_error(monkeypatch):
    def broken_create_all(*args, **kwargs):
        raise OperationalError("CREATE TABLE users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SQLModel.metadata, "create_all", broken_create_all)

    with pytest.raises(SchemaInitError):
        ensure_schema(engine)


def test_app_startup_aborts_when_schema_fails(monkeypatch):
    def broken_create_all(*args, **kwargs):
        raise OperationalError("CREATE TABLE users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SQLModel.metadata, "create_all", broken_create_all)

    with pytest.raises(SchemaInitError):
        with TestClient(app):
            pass

    assert not {"users", "services", "messages"} & table_names(engine)


def test_seed_inserts_admin_and_services(session: Session):
    assert seed_if_empty(engine) is True

    users = session.exec(select(User)).all()
    assert len(users) == 1
    admin = users[0]
    assert admin.username == DEFAULT_ADMIN_USERNAME
    assert admin.name == DEFAULT_ADMIN_NAME
    assert admin.password_hash != DEFAULT_ADMIN_PASSWORD
    assert verify_password(DEFAULT_ADMIN_PASSWORD, admin.password_hash)

    services = session.exec(select(Service).order_by(Service.id)).all()
    assert [(s.title, s.price, s.summary) for s in services] == DEFAULT_SERVICES


def test_seed_runs_once(session: Session):
    assert seed_if_empty(engine) is True
    assert seed_if_empty(engine) is False

    assert _count(session, User) == 1
    assert _count(session, Service) == len(DEFAULT_SERVICES)


def test_seed_skipped_when_any_user_exists_even_without_services(session: Session):
    session.add(User(username="someone", password_hash="x", name="Someone"))
    session.commit()

    assert seed_if_empty(engine) is False

    assert _count(session, User) == 1
    assert _count(session, Service) == 0


def test_seed_failure_is_logged_not_raised(caplog):
    # No schema applied: the users table does not exist.
    assert seed_if_empty(engine) is False
    assert "Seeding default data failed" in caplog.text
