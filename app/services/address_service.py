# app/services/address_service.py
from typing import List, Optional

from sqlmodel import Session, select

from app.models.address import Address
from app.services.exceptions import NoAddress


def load_addresses(session: Session, user_id: int) -> List[Address]:
    return list(
        session.exec(
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.created_at)
        ).all()
    )


def default_address(addresses: List[Address]) -> Optional[Address]:
    """The flagged default, or the first address when none is flagged."""
    for address in addresses:
        if address.is_default:
            return address
    return addresses[0] if addresses else None


def clear_other_defaults(session: Session, user_id: int, keep_id: str):
    others = session.exec(
        select(Address).where(
            Address.user_id == user_id,
            Address.id != keep_id,
            Address.is_default == True,  # noqa: E712
        )
    ).all()

    for other in others:
        other.is_default = False
        session.add(other)


def select_shipping_address(addresses: List[Address], address_id: Optional[str]) -> Address:
    """Requested address, else the default one, else the first on file."""
    if not addresses:
        raise NoAddress()

    if address_id:
        for address in addresses:
            if address.id == address_id:
                return address

    return default_address(addresses)


def serialize_address(address: Address, default_id: Optional[str]) -> dict:
    data = address.snapshot()
    data["is_default"] = address.id == default_id
    data["created_at"] = address.created_at
    data["updated_at"] = address.updated_at
    return data
