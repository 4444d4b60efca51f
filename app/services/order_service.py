# app/services/order_service.py
from datetime import datetime
from typing import List

from sqlalchemy import update
from sqlmodel import Session, select

from app.config import settings
from app.models.order import Order
from app.models.order_counter import OrderCounter
from app.models.order_item import OrderItem
from app.models.user import User
from app.schemas.checkout_schemas import CheckoutRequest
from app.services.address_service import load_addresses, select_shipping_address
from app.services.catalog import resolve_cart_lines
from app.services.exceptions import EmptyCart
from app.services.pricing import normalize_cart_lines, price_lines
from app.services.promo_rules import as_text
from app.services.promo_store import load_promo_rules
import logging

logger = logging.getLogger(__name__)

ORDER_COUNTER_NAME = "orders"


def ensure_order_counter(session: Session):
    if not session.get(OrderCounter, ORDER_COUNTER_NAME):
        session.add(OrderCounter(name=ORDER_COUNTER_NAME, value=0))
        session.commit()


def next_order_sequence(session: Session) -> int:
    """
    Single atomic increment, never max(existing) + 1.

    Runs inside the caller's transaction so a failed insert rolls the
    counter back with it.
    """
    value = session.execute(
        update(OrderCounter)
        .where(OrderCounter.name == ORDER_COUNTER_NAME)
        .values(value=OrderCounter.value + 1)
        .returning(OrderCounter.value)
    ).scalar_one_or_none()

    if value is None:
        # first order ever; a concurrent first insert fails on the primary key
        session.add(OrderCounter(name=ORDER_COUNTER_NAME, value=1))
        session.flush()
        value = 1

    return value


def format_order_number(sequence: int) -> str:
    return f"{settings.order_number_prefix}{str(sequence).zfill(settings.order_number_width)}"


def place_order(session: Session, user: User, data: CheckoutRequest) -> Order:
    lines = normalize_cart_lines(data.items)
    if not lines:
        raise EmptyCart()

    address = select_shipping_address(load_addresses(session, user.id), as_text(data.address_id))

    priced = resolve_cart_lines(session, lines)
    result = price_lines(priced, data.promo_code, load_promo_rules(session))

    try:
        order_number = format_order_number(next_order_sequence(session))

        order = Order(
            order_number=order_number,
            user_id=user.id,
            address_id=address.id,
            address=address.snapshot(),
            subtotal_usd=result.subtotal_usd,
            discount_usd=result.discount_usd,
            shipping_usd=result.shipping_usd,
            total_usd=result.total_usd,
            promo_code=result.applied_code or None,
            status="pending",
            created_at=datetime.utcnow(),
        )
        session.add(order)
        session.flush()

        for line in result.items:
            session.add(
                OrderItem(
                    order_id=order.id,
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price_usd=line.unit_price_usd,
                    line_total_usd=line.line_total_usd,
                )
            )

        session.commit()
        session.refresh(order)

    except Exception as e:
        logger.error(f"Error placing order for user {user.id}: {e}")
        session.rollback()
        raise

    logger.info(
        f"Order {order.order_number} placed for user {user.id}: "
        f"total {order.total_usd} (promo {order.promo_code or '-'})"
    )
    return order


def list_user_orders(session: Session, user_id: int) -> List[Order]:
    return session.exec(
        select(Order)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    ).all()


def serialize_order(order: Order) -> dict:
    return {
        "id": order.id,
        "order_number": order.order_number,
        "status": order.status,
        "created_at": order.created_at,
        "subtotal_usd": order.subtotal_usd,
        "discount_usd": order.discount_usd,
        "shipping_usd": order.shipping_usd,
        "total_usd": order.total_usd,
        "promo_code": order.promo_code,
        "address": order.address,
        "items": [
            {
                "product_id": i.product_id,
                "name": i.name,
                "quantity": i.quantity,
                "unit_price_usd": i.unit_price_usd,
                "line_total_usd": i.line_total_usd,
            }
            for i in order.items
        ],
    }
