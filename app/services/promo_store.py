# app/services/promo_store.py
from datetime import datetime
from typing import List

from sqlmodel import Session

from app.models.kv_entry import KVEntry
from app.schemas.promo_schemas import PromoRule
from app.services.promo_rules import (
    PROMO_CODES_KEY,
    normalize_promo_records,
    sort_promos,
    with_promo_defaults,
)
import logging

logger = logging.getLogger(__name__)


def load_raw_promos(session: Session):
    entry = session.get(KVEntry, PROMO_CODES_KEY)
    return entry.value if entry else None


def load_promo_rules(session: Session) -> List[PromoRule]:
    """Fresh read on every call, defaults when the store holds nothing usable."""
    return with_promo_defaults(normalize_promo_records(load_raw_promos(session)))


def save_promo_rules(session: Session, records: List[PromoRule]) -> List[PromoRule]:
    """Replace the whole collection, sorted by code."""
    ordered = sort_promos(records)

    entry = session.get(KVEntry, PROMO_CODES_KEY)
    if not entry:
        entry = KVEntry(key=PROMO_CODES_KEY)

    entry.value = [rule.to_store() for rule in ordered]
    entry.updated_at = datetime.utcnow()

    session.add(entry)
    session.commit()

    logger.info(f"Saved {len(ordered)} promo codes")
    return ordered
