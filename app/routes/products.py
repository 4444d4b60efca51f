from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from app.database import get_session
from app.models.product import Product

router = APIRouter()


@router.get("", summary="List catalog products")
def list_products(
    category: Optional[str] = None,
    is_new: Optional[bool] = None,
    session: Session = Depends(get_session)
):
    query = select(Product)

    if category:
        query = query.where(Product.category == category)

    if is_new is not None:
        query = query.where(Product.is_new == is_new)

    products = session.exec(query.order_by(Product.id)).all()

    return {
        "total": len(products),
        "results": products
    }


@router.get("/{product_id}")
def get_product(product_id: str, session: Session = Depends(get_session)):
    product = session.get(Product, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product
