# tests/test_pricing.py
import pytest

from app.schemas.checkout_schemas import CartLine, CartLineIn
from app.services.catalog import resolve_cart_lines
from app.services.exceptions import EmptyCart, UnresolvedProduct
from app.services.pricing import (
    as_quantity,
    base_shipping,
    normalize_cart_lines,
    price_cart,
)
from tests.conftest import store_promos


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1), (0, 1), (-3, 1), (1, 1), (2.9, 2), (7, 7), (float("nan"), 1)],
)
def test_quantity_is_floored_and_clamped(raw, expected):
    assert as_quantity(raw) == expected


def test_blank_product_ids_are_dropped():
    lines = normalize_cart_lines([
        CartLineIn(product_id=" k001 ", quantity=2),
        CartLineIn(product_id="   ", quantity=4),
        CartLineIn(productId="t001"),
    ])
    assert lines == [
        CartLine(product_id="k001", quantity=2),
        CartLine(product_id="t001", quantity=1),
    ]


@pytest.mark.parametrize("raw", ["3", "two", [2], {"n": 2}, True, 10**400])
def test_non_numeric_quantity_counts_as_one(raw):
    assert as_quantity(raw) == 1


def test_non_string_product_ids_and_non_object_lines_are_dropped():
    lines = normalize_cart_lines([
        {"productId": 5, "quantity": 2},
        {"productId": None},
        "k001",
        ["t001", 1],
        {"productId": "b010", "quantity": "two"},
        CartLineIn(product_id=7, quantity=3),
    ])
    assert lines == [CartLine(product_id="b010", quantity=1)]


@pytest.mark.parametrize("raw", [None, "k001", {"productId": "k001"}])
def test_items_that_are_not_a_list_yield_no_lines(raw):
    assert normalize_cart_lines(raw) == []


def test_preview_drops_non_string_product_id(client, products):
    res = client.post("/checkout/preview", json={"items": [{"productId": 5, "quantity": 1}]})
    assert res.status_code == 400
    assert res.json() == {"error": "Cart is empty"}


def test_preview_treats_word_quantity_as_one(client, products):
    res = client.post("/checkout/preview", json={
        "items": [{"productId": "b010", "quantity": "two"}],
    })
    assert res.status_code == 200
    assert res.json()["items"][0]["quantity"] == 1
    assert res.json()["subtotal_usd"] == 10


def test_shipping_is_flat_unless_subtotal_is_zero():
    assert base_shipping(0) == 0
    assert base_shipping(0.01) == 5
    assert base_shipping(500) == 5


def test_resolve_uses_live_catalog_prices(session, products):
    products["k001"].price_usd = 7
    session.add(products["k001"])
    session.commit()

    [line] = resolve_cart_lines(session, [CartLine(product_id="k001", quantity=3)])
    assert line.unit_price_usd == 7
    assert line.line_total_usd == 21
    assert line.name == "Axo Keychain"


def test_resolve_rejects_whole_cart_on_unknown_product(session, products):
    with pytest.raises(UnresolvedProduct) as exc:
        resolve_cart_lines(session, [
            CartLine(product_id="k001", quantity=1),
            CartLine(product_id="gone", quantity=1),
        ])
    assert exc.value.message == "Product not found: gone"


def test_price_cart_without_code(session, products):
    result = price_cart(session, [
        CartLine(product_id="k001", quantity=2),
        CartLine(product_id="t001", quantity=1),
    ], None)

    assert result.subtotal_usd == 13
    assert result.base_shipping_usd == 5
    assert result.discount_usd == 0
    assert result.shipping_usd == 5
    assert result.total_usd == 18
    assert result.applied_code == ""


def test_price_cart_rejects_empty_cart(session):
    with pytest.raises(EmptyCart):
        price_cart(session, [], "CD10")


def test_price_cart_reads_rules_fresh(session, products):
    lines = [CartLine(product_id="f025", quantity=2)]

    assert price_cart(session, lines, "CD10").discount_usd == pytest.approx(5.0)

    store_promos(session, [{"code": "CD10", "type": "fixed", "value": 1}])
    assert price_cart(session, lines, "CD10").discount_usd == 1


# ---------- preview endpoint ----------

def test_preview_returns_priced_summary(client, products):
    res = client.post("/checkout/preview", json={
        "items": [{"productId": "b010", "quantity": 3}],
        "promoCode": "cd10",
    })

    assert res.status_code == 200
    data = res.json()
    assert data["subtotal_usd"] == 30
    assert data["discount_usd"] == pytest.approx(3.0)
    assert data["shipping_usd"] == 5
    assert data["total_usd"] == pytest.approx(32.0)
    assert data["applied_code"] == "CD10"
    assert data["items"][0]["line_total_usd"] == 30


def test_preview_surfaces_exact_promo_message(client, products):
    res = client.post("/checkout/preview", json={
        "items": [{"productId": "k001", "quantity": 1}, {"productId": "t001", "quantity": 1}],
        "promoCode": "SAVE5",
    })

    assert res.status_code == 400
    assert res.json() == {"error": "Promo code requires at least $20 subtotal"}


def test_preview_of_empty_cart_is_rejected(client):
    res = client.post("/checkout/preview", json={"items": []})
    assert res.status_code == 400
    assert res.json() == {"error": "Cart is empty"}


def test_public_promo_list_hides_inactive_codes(client, session):
    store_promos(session, [
        {"code": "LIVE", "type": "fixed", "value": 2},
        {"code": "HIDDEN", "active": False},
    ])

    res = client.get("/promocodes")
    assert res.status_code == 200
    assert [p["code"] for p in res.json()["promos"]] == ["LIVE"]


def test_public_promo_list_falls_back_to_defaults(client):
    res = client.get("/promocodes")
    assert [p["code"] for p in res.json()["promos"]] == ["CD10", "SAVE5"]
