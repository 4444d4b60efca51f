from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.database import get_session
from app.models.user import User
from app.schemas.checkout_schemas import CheckoutRequest
from app.schemas.orders_schemas import OrderHistoryResponse, PlaceOrderResponse
from app.services.order_service import list_user_orders, place_order, serialize_order
from app.utils.token import get_current_user

router = APIRouter()


@router.get("", response_model=OrderHistoryResponse)
def my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    orders = list_user_orders(session, current_user.id)
    return {"orders": [serialize_order(o) for o in orders]}


@router.post("", response_model=PlaceOrderResponse)
def create_order(
    data: CheckoutRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    # pricing errors surface as 400 {"error": ...} via the app exception handler
    order = place_order(session, current_user, data)
    return {"ok": True, "order": serialize_order(order)}
