from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.database import create_db_and_tables
from app.config import settings
from app.routes import (
    addresses,
    admin_orders,
    admin_promocodes,
    checkout,
    health,
    orders,
    products,
    promocodes,
)
from app.services.exceptions import PricingError
import logging
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="Storefront API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PricingError)
async def pricing_error_handler(request: Request, exc: PricingError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


app.include_router(products.router, prefix="/products", tags=["Catalog"])
app.include_router(promocodes.router, prefix="/promocodes", tags=["Promo Codes"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(addresses.router, prefix="/addresses", tags=["Addresses"])
app.include_router(admin_promocodes.router, prefix="/admin/promocodes", tags=["Admin Promo Codes"])
app.include_router(admin_orders.router, prefix="/admin/orders", tags=["Admin Orders"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "catalog": ["/products", "/products/{product_id}"],
        "checkout": ["/promocodes", "/checkout/preview"],
        "orders": ["/orders"],
        "addresses": ["/addresses", "/addresses/{address_id}"],
        "admin": ["/admin/promocodes", "/admin/promocodes/{code}", "/admin/orders"],
    }
