# tests/test_order_counter.py
from concurrent.futures import ThreadPoolExecutor

from sqlmodel import Session, SQLModel, create_engine

from app.config import settings
from app.models.order_counter import OrderCounter
from app.services.order_service import (
    ORDER_COUNTER_NAME,
    ensure_order_counter,
    format_order_number,
    next_order_sequence,
)


def test_order_number_format():
    assert format_order_number(1) == "CD-0000001"
    assert format_order_number(1234567) == "CD-1234567"
    assert format_order_number(12345678) == "CD-12345678"


def test_order_number_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "order_number_prefix", "SO-")
    monkeypatch.setattr(settings, "order_number_width", 4)
    assert format_order_number(42) == "SO-0042"


def test_first_sequence_creates_counter_row(engine):
    with Session(engine) as session:
        assert next_order_sequence(session) == 1
        session.commit()
        assert next_order_sequence(session) == 2
        session.commit()

        assert session.get(OrderCounter, ORDER_COUNTER_NAME).value == 2


def test_rolled_back_increment_is_not_kept(session):
    assert next_order_sequence(session) == 1
    session.rollback()

    assert next_order_sequence(session) == 1


def test_concurrent_increments_never_collide(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'counter.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        ensure_order_counter(session)

    def take():
        with Session(engine) as session:
            value = next_order_sequence(session)
            session.commit()
            return value

    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda _: take(), range(40)))

    assert sorted(values) == list(range(1, 41))
    engine.dispose()
