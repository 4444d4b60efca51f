from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.database import get_session
from app.schemas.promo_schemas import PublicPromo
from app.services.promo_store import load_promo_rules

router = APIRouter()


@router.get("")
def list_active_promos(session: Session = Depends(get_session)):
    promos = [
        PublicPromo(
            code=rule.code,
            label=rule.label,
            description=rule.description,
            type=rule.type,
            value=rule.value,
            min_subtotal=rule.min_subtotal,
            max_discount=rule.max_discount,
        )
        for rule in load_promo_rules(session)
        if rule.active
    ]
    return {"promos": promos}
