# app/services/pricing.py
import math
from typing import Any, List, Optional

from sqlmodel import Session

from app.config import settings
from app.schemas.checkout_schemas import CartLine, CartLineIn, PriceResult, PricedLine
from app.schemas.promo_schemas import PromoRule
from app.services.catalog import resolve_cart_lines
from app.services.exceptions import EmptyCart
from app.services.promo_rules import apply_promo_rule, as_number, as_text
from app.services.promo_store import load_promo_rules


def as_quantity(value: Any) -> int:
    # numeric strings are not numbers here
    return max(1, math.floor(as_number(value, 1)))


def _line_field(item: Any, name: str, alias: str) -> Any:
    if isinstance(item, CartLineIn):
        return getattr(item, name)
    return item.get(alias, item.get(name))


def normalize_cart_lines(raw: Any) -> List[CartLine]:
    """
    Reduce the posted items to clean cart lines.

    Anything that is not a list yields no lines. Entries that are not
    objects, or whose product id is not a non-blank string, are dropped.
    A missing or non-numeric quantity counts as 1.
    """
    if not isinstance(raw, list):
        return []

    lines = []
    for item in raw:
        if not isinstance(item, (CartLineIn, dict)):
            continue
        product_id = as_text(_line_field(item, "product_id", "productId"))
        if not product_id:
            continue
        quantity = as_quantity(_line_field(item, "quantity", "quantity"))
        lines.append(CartLine(product_id=product_id, quantity=quantity))
    return lines


def base_shipping(subtotal_usd: float) -> float:
    # never charge shipping on an empty order
    return settings.flat_shipping_usd if subtotal_usd > 0 else 0.0


def price_lines(
    lines: List[PricedLine],
    promo_code: Optional[str],
    records: List[PromoRule],
) -> PriceResult:
    subtotal_usd = sum(line.line_total_usd for line in lines)
    base_shipping_usd = base_shipping(subtotal_usd)

    promo = apply_promo_rule(
        subtotal_usd=subtotal_usd,
        shipping_usd=base_shipping_usd,
        promo_code=promo_code,
        records=records,
    )

    shipping_usd = (
        base_shipping_usd
        if promo.shipping_override_usd is None
        else promo.shipping_override_usd
    )

    return PriceResult(
        items=lines,
        subtotal_usd=subtotal_usd,
        base_shipping_usd=base_shipping_usd,
        discount_usd=promo.discount_usd,
        shipping_usd=shipping_usd,
        total_usd=subtotal_usd - promo.discount_usd + shipping_usd,
        applied_code=promo.applied_code,
    )


def price_cart(session: Session, lines: List[CartLine], promo_code: Optional[str]) -> PriceResult:
    """Checkout preview: resolve, price and return, nothing is written."""
    if not lines:
        raise EmptyCart()

    priced = resolve_cart_lines(session, lines)
    return price_lines(priced, promo_code, load_promo_rules(session))
