# app/services/catalog.py
from typing import Dict, Iterable, List

from sqlmodel import Session, select

from app.models.product import Product
from app.schemas.checkout_schemas import CartLine, PricedLine
from app.services.exceptions import UnresolvedProduct
import logging

logger = logging.getLogger(__name__)


def load_products(session: Session, product_ids: Iterable[str]) -> Dict[str, Product]:
    ids = sorted(set(product_ids))
    if not ids:
        return {}

    products = session.exec(
        select(Product).where(Product.id.in_(ids))
    ).all()
    return {p.id: p for p in products}


def resolve_cart_lines(session: Session, lines: List[CartLine]) -> List[PricedLine]:
    """
    Price every line against the live catalog.

    All or nothing: one unknown product id rejects the whole cart.
    """
    by_id = load_products(session, (line.product_id for line in lines))

    priced = []
    for line in lines:
        product = by_id.get(line.product_id)
        if not product:
            logger.warning(f"Unresolved product in cart: {line.product_id}")
            raise UnresolvedProduct(line.product_id)

        unit_price = product.price_usd or 0.0
        priced.append(
            PricedLine(
                product_id=product.id,
                name=product.name,
                quantity=line.quantity,
                unit_price_usd=unit_price,
                line_total_usd=unit_price * line.quantity,
            )
        )

    return priced
