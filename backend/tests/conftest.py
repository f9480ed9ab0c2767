import os

# Avant tout import "backend.*" : pas de Postgres ni de clé SendGrid en test
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("SENDGRID_API_KEY", None)

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.app.api.deps import get_db, get_email_sender  # noqa: E402
from backend.app.db.base import Base  # noqa: E402
from backend.app.db.session import register_unicode_lower  # noqa: E402
from backend.app.db.models.models_v1 import (  # noqa: E402
    Category,
    Dispensary,
    Medication,
    Supplier,
)
from backend.app.main import app  # noqa: E402


class Outbox:
    """Transport email de test : enregistre au lieu d'envoyer."""

    def __init__(self, result: bool = True):
        self.result = result
        self.sent: list[tuple[str, str, str]] = []

    def __call__(self, to: str, subject: str, html_body: str) -> bool:
        self.sent.append((to, subject, html_body))
        return self.result

    def to(self, email: str) -> list[str]:
        return [body for dest, _, body in self.sent if dest == email]


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Session DB isolée par test.

    SQLite en mémoire (StaticPool : une seule connexion partagée),
    schéma recréé pour chaque test, rien ne survit au test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_unicode_lower(engine)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def outbox() -> Outbox:
    return Outbox()


@pytest.fixture
def client(db_session, outbox):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_email_sender] = lambda: outbox
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ---------- Fabriques ----------
@pytest.fixture
def make_category(db_session):
    def _make(label: str) -> Category:
        c = Category(label=label)
        db_session.add(c)
        db_session.flush()
        return c

    return _make


@pytest.fixture
def make_supplier(db_session):
    def _make(name: str, email: str | None = None, categories: tuple[Category, ...] = ()) -> Supplier:
        s = Supplier(name=name, email=email or f"{name.lower()}@test.sn")
        s.categories.extend(categories)
        db_session.add(s)
        db_session.flush()
        return s

    return _make


@pytest.fixture
def make_medication(db_session):
    def _make(
        name: str,
        category: Category,
        stock: int,
        threshold: int,
        unavailable: bool = False,
        price: str = "1.00",
    ) -> Medication:
        m = Medication(
            name=name,
            category=category,
            units_in_stock=stock,
            reorder_threshold=threshold,
            unavailable=unavailable,
            unit_price=Decimal(price),
        )
        db_session.add(m)
        db_session.flush()
        return m

    return _make


@pytest.fixture
def dispensary(db_session) -> Dispensary:
    d = Dispensary(code="DSP01", name="Dispensaire Central", address="12 avenue Senghor", city="Dakar")
    db_session.add(d)
    db_session.flush()
    return d
