from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session
from datetime import datetime

from app.database import get_session
from app.models.kv_entry import KVEntry
from app.models.order_counter import OrderCounter
from app.services.order_service import ORDER_COUNTER_NAME
from app.services.promo_rules import PROMO_CODES_KEY

router = APIRouter()


@router.get("/check")
def health_check(session: Session = Depends(get_session)):
    try:
        session.execute(text("SELECT 1"))
    except Exception:
        return {
            "status": "degraded",
            "database": "failed",
            "timestamp": datetime.utcnow().isoformat(),
        }

    return {
        "status": "ok",
        "database": "ok",
        # false means checkout is running on the built-in promo codes
        "promo_store": session.get(KVEntry, PROMO_CODES_KEY) is not None,
        "order_counter": session.get(OrderCounter, ORDER_COUNTER_NAME) is not None,
        "timestamp": datetime.utcnow().isoformat(),
    }
