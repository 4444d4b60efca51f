from sqlmodel import SQLModel, create_engine, Session, select
from app.config import settings
import logging

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # checks dead connections
        "pool_recycle": 1800,    # refresh every 30 min
    }


engine = create_engine(
    settings.database_url,
    echo=False,
    **_engine_options(settings.database_url),
)


def create_db_and_tables():
    from app.models import Product  # registers every table on SQLModel.metadata
    from app.data.catalog import DEFAULT_PRODUCTS
    from app.services.order_service import ensure_order_counter

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        ensure_order_counter(session)

        if session.exec(select(Product)).first() is None:
            for row in DEFAULT_PRODUCTS:
                session.add(Product(**row))
            session.commit()
            logger.info(f"Seeded catalog with {len(DEFAULT_PRODUCTS)} products")


def get_session():
    with Session(engine) as session:
        yield session
