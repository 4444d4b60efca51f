# -------- ADMIN PROMO CODES --------
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from app.database import get_session
from app.dependencies.admin import require_admin
from app.schemas.promo_schemas import PromoInput, PromoRule
from app.services.promo_rules import (
    as_number,
    as_text,
    normalize_promo_code,
    sanitize_type,
    sort_promos,
    utc_now_iso,
)
from app.services.promo_store import load_promo_rules, save_promo_rules

router = APIRouter()


@router.get("")
def list_promos(
    session: Session = Depends(get_session),
    _=Depends(require_admin)
):
    return {"promos": sort_promos(load_promo_rules(session))}


@router.post("")
def create_promo(
    data: PromoInput,
    session: Session = Depends(get_session),
    _=Depends(require_admin)
):
    code = normalize_promo_code(data.code)
    if not code:
        raise HTTPException(400, "Code is required")

    current = load_promo_rules(session)
    if any(rule.code == code for rule in current):
        raise HTTPException(400, "Promo code already exists")

    now = utc_now_iso()
    promo = PromoRule(
        code=code,
        label=as_text(data.label) or code,
        description=as_text(data.description),
        active=data.active is not False,
        type=sanitize_type(data.type),
        value=max(0.0, as_number(data.value, 0)),
        min_subtotal=max(0.0, as_number(data.min_subtotal, 0)),
        max_discount=max(0.0, as_number(data.max_discount, 0)),
        created_at=now,
        updated_at=now,
    )

    save_promo_rules(session, [*current, promo])
    return {"ok": True, "promo": promo}


@router.put("/{code}")
def update_promo(
    code: str,
    data: PromoInput,
    session: Session = Depends(get_session),
    _=Depends(require_admin)
):
    code = normalize_promo_code(code)
    if not code:
        raise HTTPException(400, "Code is required")

    current = load_promo_rules(session)
    index = next((i for i, rule in enumerate(current) if rule.code == code), None)
    if index is None:
        raise HTTPException(404, "Promo code not found")

    existing = current[index]
    updated = existing.model_copy(update={
        "label": as_text(data.label) or existing.label,
        # description is replaced wholesale, omitted means cleared
        "description": as_text(data.description),
        "active": existing.active if data.active is None else data.active,
        "type": sanitize_type(existing.type if data.type is None else data.type),
        "value": max(0.0, as_number(data.value, existing.value)),
        "min_subtotal": max(0.0, as_number(data.min_subtotal, existing.min_subtotal)),
        "max_discount": max(0.0, as_number(data.max_discount, existing.max_discount)),
        "updated_at": utc_now_iso(),
    })

    current[index] = updated
    save_promo_rules(session, current)
    return {"ok": True, "promo": updated}


@router.delete("/{code}")
def delete_promo(
    code: str,
    session: Session = Depends(get_session),
    _=Depends(require_admin)
):
    code = normalize_promo_code(code)
    if not code:
        raise HTTPException(400, "Code is required")

    current = load_promo_rules(session)
    remaining = [rule for rule in current if rule.code != code]
    if len(remaining) == len(current):
        raise HTTPException(404, "Promo code not found")

    save_promo_rules(session, remaining)
    return {"ok": True}
