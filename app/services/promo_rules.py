# app/services/promo_rules.py
"""
Promo rule normalization and application.

Everything here is pure: no session, no settings, no clock except the
fallback timestamp given to records stored without one.
"""
import math
from datetime import datetime
from typing import Any, List, Optional

from app.schemas.promo_schemas import PromoApplyResult, PromoRule, PromoType
from app.services.exceptions import InvalidPromoCode, MinSubtotalNotMet

PROMO_CODES_KEY = "admin:promocodes"

DEFAULT_PROMOS: List[PromoRule] = [
    PromoRule(
        code="CD10",
        label="10% Off",
        description="10% discount on subtotal (min $10).",
        active=True,
        type="percent",
        value=10,
        min_subtotal=10,
        max_discount=0,
        created_at="2026-01-01T00:00:00.000Z",
        updated_at="2026-01-01T00:00:00.000Z",
    ),
    PromoRule(
        code="SAVE5",
        label="$5 Off",
        description="$5 discount on subtotal (min $20).",
        active=True,
        type="fixed",
        value=5,
        min_subtotal=20,
        max_discount=0,
        created_at="2026-01-01T00:00:00.000Z",
        updated_at="2026-01-01T00:00:00.000Z",
    ),
]


def utc_now_iso() -> str:
    return datetime.utcnow().isoformat(timespec="milliseconds") + "Z"


def as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def as_number(value: Any, fallback: float = 0.0) -> float:
    # bool is an int subclass, keep it out
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    try:
        number = float(value)
    except OverflowError:
        return fallback
    if not math.isfinite(number):
        return fallback
    return number


def as_boolean(value: Any, fallback: bool = False) -> bool:
    return value if isinstance(value, bool) else fallback


def sanitize_type(value: Any) -> PromoType:
    return value if value in ("fixed", "free_shipping") else "percent"


def normalize_promo_code(value: Any) -> str:
    return as_text(value).upper()


def _field(record: dict, camel: str, snake: str) -> Any:
    return record[camel] if camel in record else record.get(snake)


def normalize_promo_records(raw: Any) -> List[PromoRule]:
    """
    Turn whatever sits under the promo store key into typed rules.

    Malformed fields degrade to safe values (a bad type becomes a
    percent rule, bad numbers become 0, a missing active flag means
    active). Entries that are not mappings or have no code are dropped.
    """
    if not isinstance(raw, list):
        return []

    records: List[PromoRule] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue

        code = normalize_promo_code(entry.get("code"))
        if not code:
            continue

        created_at = as_text(_field(entry, "createdAt", "created_at")) or utc_now_iso()
        updated_at = as_text(_field(entry, "updatedAt", "updated_at")) or created_at

        records.append(
            PromoRule(
                code=code,
                label=as_text(entry.get("label")) or code,
                description=as_text(entry.get("description")),
                active=as_boolean(entry.get("active"), True),
                type=sanitize_type(entry.get("type")),
                value=max(0.0, as_number(entry.get("value"), 0)),
                min_subtotal=max(0.0, as_number(_field(entry, "minSubtotal", "min_subtotal"), 0)),
                max_discount=max(0.0, as_number(_field(entry, "maxDiscount", "max_discount"), 0)),
                created_at=created_at,
                updated_at=updated_at,
            )
        )

    return records


def with_promo_defaults(
    records: List[PromoRule],
    defaults: Optional[List[PromoRule]] = None,
) -> List[PromoRule]:
    if records:
        return records
    if defaults is None:
        defaults = DEFAULT_PROMOS
    return [rule.model_copy() for rule in defaults]


def find_active_rule(code: str, records: List[PromoRule]) -> Optional[PromoRule]:
    for rule in records:
        if rule.code == code and rule.active:
            return rule
    return None


def apply_promo_rule(
    *,
    subtotal_usd: float,
    shipping_usd: float,
    promo_code: Optional[str],
    records: List[PromoRule],
) -> PromoApplyResult:
    code = normalize_promo_code(promo_code)
    if not code:
        return PromoApplyResult(discount_usd=0.0, shipping_override_usd=None, applied_code="")

    # a disabled rule answers exactly like an unknown one
    rule = find_active_rule(code, records)
    if rule is None:
        raise InvalidPromoCode(code)

    if rule.min_subtotal > 0 and subtotal_usd < rule.min_subtotal:
        raise MinSubtotalNotMet(rule.code, rule.min_subtotal)

    if rule.type == "free_shipping":
        return PromoApplyResult(
            discount_usd=0.0,
            shipping_override_usd=0.0,
            applied_code=rule.code,
        )

    if rule.type == "percent":
        discount_usd = subtotal_usd * rule.value / 100
    else:
        discount_usd = rule.value

    discount_usd = max(0.0, min(subtotal_usd, discount_usd))
    if rule.max_discount > 0:
        discount_usd = min(discount_usd, rule.max_discount)

    return PromoApplyResult(
        discount_usd=discount_usd,
        shipping_override_usd=shipping_usd,
        applied_code=rule.code,
    )


def sort_promos(records: List[PromoRule]) -> List[PromoRule]:
    return sorted(records, key=lambda rule: rule.code)
