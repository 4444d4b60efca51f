# tests/test_addresses.py
from tests.conftest import add_address, auth_headers, make_user

VALID = {
    "full_name": "Sam Shopper",
    "phone": "555-0100",
    "line1": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "postal_code": "62701",
    "country": "US",
}


def test_create_address_validates_required_fields(client, user):
    res = client.post("/addresses", headers=auth_headers(user), json={**VALID, "phone": "  "})
    assert res.status_code == 400
    assert res.json()["detail"] == "Phone is required"


def test_first_address_is_reported_as_default(client, user):
    client.post("/addresses", headers=auth_headers(user), json=VALID)

    [address] = client.get("/addresses", headers=auth_headers(user)).json()["addresses"]
    assert address["is_default"] is True
    assert address["label"] == "Address"


def test_new_default_clears_previous_default(client, session, user, address):
    res = client.post("/addresses", headers=auth_headers(user), json={
        **VALID, "label": "Work", "is_default": True,
    })
    new_id = res.json()["address"]["id"]

    listed = client.get("/addresses", headers=auth_headers(user)).json()["addresses"]
    defaults = [a["id"] for a in listed if a["is_default"]]
    assert defaults == [new_id]


def test_update_address(client, user, address):
    res = client.put(
        f"/addresses/{address.id}",
        headers=auth_headers(user),
        json={**VALID, "city": "Shelbyville", "is_default": True},
    )
    assert res.status_code == 200
    assert res.json()["address"]["city"] == "Shelbyville"


def test_cannot_touch_another_users_address(client, session, user):
    other = make_user(session, email="other@example.com")
    foreign = add_address(session, other)

    res = client.delete(f"/addresses/{foreign.id}", headers=auth_headers(user))
    assert res.status_code == 404


def test_delete_address(client, user, address):
    res = client.delete(f"/addresses/{address.id}", headers=auth_headers(user))
    assert res.status_code == 200
    assert client.get("/addresses", headers=auth_headers(user)).json()["addresses"] == []
