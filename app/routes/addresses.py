from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from app.database import get_session
from app.models.address import Address
from app.models.user import User
from app.schemas.address_schemas import AddressCreate
from app.services.address_service import (
    clear_other_defaults,
    default_address,
    load_addresses,
    serialize_address,
)
from app.utils.token import get_current_user

router = APIRouter()

REQUIRED_FIELDS = [
    ("full_name", "Full name is required"),
    ("phone", "Phone is required"),
    ("line1", "Address line 1 is required"),
    ("city", "City is required"),
    ("state", "State/Province is required"),
    ("postal_code", "Postal code is required"),
    ("country", "Country is required"),
]


def _clean(data: AddressCreate) -> dict:
    values = {
        field: (value.strip() if isinstance(value, str) else value)
        for field, value in data.model_dump().items()
    }
    values["label"] = values.get("label") or "Address"
    return values


def validate_address_input(values: dict) -> Optional[str]:
    for field, message in REQUIRED_FIELDS:
        if not values.get(field):
            return message
    return None


def _get_owned(session: Session, user: User, address_id: str) -> Address:
    address = session.get(Address, address_id)
    if not address or address.user_id != user.id:
        raise HTTPException(404, "Address not found")
    return address


@router.get("")
def list_addresses(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    addresses = load_addresses(session, current_user.id)
    default = default_address(addresses)
    default_id = default.id if default else None
    return {"addresses": [serialize_address(a, default_id) for a in addresses]}


@router.post("")
def create_address(
    data: AddressCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    values = _clean(data)
    error = validate_address_input(values)
    if error:
        raise HTTPException(400, error)

    address = Address(user_id=current_user.id, **values)
    session.add(address)
    session.flush()

    if address.is_default:
        clear_other_defaults(session, current_user.id, address.id)

    session.commit()
    session.refresh(address)

    return {"ok": True, "address": serialize_address(address, address.id if address.is_default else None)}


@router.put("/{address_id}")
def update_address(
    address_id: str,
    data: AddressCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    values = _clean(data)
    error = validate_address_input(values)
    if error:
        raise HTTPException(400, error)

    address = _get_owned(session, current_user, address_id)
    for field, value in values.items():
        setattr(address, field, value)
    address.updated_at = datetime.utcnow()
    session.add(address)

    if address.is_default:
        clear_other_defaults(session, current_user.id, address.id)

    session.commit()
    session.refresh(address)

    return {"ok": True, "address": serialize_address(address, address.id if address.is_default else None)}


@router.delete("/{address_id}")
def delete_address(
    address_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    address = _get_owned(session, current_user, address_id)
    session.delete(address)
    session.commit()
    return {"ok": True}
