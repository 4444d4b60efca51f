from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.database import get_session
from app.schemas.checkout_schemas import CheckoutRequest, PriceResult
from app.services.pricing import normalize_cart_lines, price_cart

router = APIRouter()


# Checkout page summary: same pricing as order placement, nothing is stored
@router.post("/preview", response_model=PriceResult)
def checkout_preview(
    data: CheckoutRequest,
    session: Session = Depends(get_session),
):
    return price_cart(session, normalize_cart_lines(data.items), data.promo_code)
