# -------- ADMIN ORDERS --------
from datetime import date, timedelta
from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlmodel import Session, select
from app.database import get_session
from app.dependencies.admin import require_admin
from app.models.order import Order
from app.models.user import User
from app.utils.pagination import paginate

router = APIRouter()


def _admin_row(row) -> dict:
    order, user = row
    address = order.address or {}
    return {
        "id": order.id,
        "order_number": order.order_number,
        "status": order.status,
        "created_at": order.created_at,
        "subtotal_usd": order.subtotal_usd,
        "shipping_usd": order.shipping_usd,
        "discount_usd": order.discount_usd,
        "total_usd": order.total_usd,
        "promo_code": order.promo_code or "",
        "items_count": sum(i.quantity for i in order.items),
        "user": {
            "id": user.id,
            "full_name": f"{user.first_name} {user.last_name}".strip(),
            "email": user.email,
        },
        "address": {
            "full_name": address.get("full_name", ""),
            "phone": address.get("phone", ""),
            "line1": address.get("line1", ""),
            "city": address.get("city", ""),
            "state": address.get("state", ""),
            "postal_code": address.get("postal_code", ""),
            "country": address.get("country", ""),
        },
    }


@router.get("")
def list_orders(
    page: int = 1,
    limit: int = 20,
    search: Optional[str] = None,
    promo_code: Optional[str] = None,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    session: Session = Depends(get_session),
    _=Depends(require_admin)
):
    query = (
        select(Order, User)
        .join(User, User.id == Order.user_id)
    )

    if search:
        query = query.where(
            (User.first_name.ilike(f"%{search}%")) |
            (User.last_name.ilike(f"%{search}%")) |
            (User.email.ilike(f"%{search}%")) |
            (Order.order_number.ilike(f"%{search}%"))
        )

    if promo_code:
        query = query.where(Order.promo_code == promo_code.strip().upper())

    if start_date:
        query = query.where(Order.created_at >= start_date)

    if end_date:
        query = query.where(Order.created_at < end_date + timedelta(days=1))

    query = query.order_by(Order.created_at.desc(), Order.id.desc())

    return paginate(
        session=session,
        query=query,
        page=page,
        limit=limit,
        serialize=_admin_row,
    )
