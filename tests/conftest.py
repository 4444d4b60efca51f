# tests/conftest.py
import os

# settings are read at import time; keep the suite off Postgres
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app import models  # noqa: F401
from app.database import get_session
from app.main import app
from app.models.address import Address
from app.models.kv_entry import KVEntry
from app.models.product import Product
from app.models.user import User
from app.services.order_service import ensure_order_counter
from app.services.promo_rules import PROMO_CODES_KEY
from app.utils.token import create_access_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        ensure_order_counter(session)
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session, email="shopper@example.com", role="user"):
    user = User(first_name="Sam", last_name="Shopper", email=email, role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_headers(user):
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


def add_address(session, user, **overrides):
    values = dict(
        user_id=user.id,
        full_name="Sam Shopper",
        phone="555-0100",
        line1="1 Main St",
        city="Springfield",
        state="IL",
        postal_code="62701",
        country="US",
    )
    values.update(overrides)
    address = Address(**values)
    session.add(address)
    session.commit()
    session.refresh(address)
    return address


def store_promos(session, raw):
    entry = session.get(KVEntry, PROMO_CODES_KEY) or KVEntry(key=PROMO_CODES_KEY)
    entry.value = raw
    session.add(entry)
    session.commit()


@pytest.fixture
def products(session):
    rows = [
        Product(id="k001", name="Axo Keychain", slug="axo-keychain", category="keychains", price_usd=5),
        Product(id="t001", name="Caliper Card", slug="caliper-card", category="tools", price_usd=3),
        Product(id="b010", name="Gear Box", slug="gear-box", category="tools", price_usd=10),
        Product(id="f025", name="Figure Stand", slug="figure-stand", category="fanboys", price_usd=25),
    ]
    for row in rows:
        session.add(row)
    session.commit()
    return {p.id: p for p in rows}


@pytest.fixture
def user(session):
    return make_user(session)


@pytest.fixture
def admin(session):
    return make_user(session, email="owner@example.com", role="admin")


@pytest.fixture
def address(session, user):
    return add_address(session, user, is_default=True)
