"""
Form normalization — turns user-entered values into store rows.

Validation here happens before any store call: a missing name, SKU or
code, a non-numeric quantity or an unknown enum value raises
WarehouseError and nothing is written.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from smartstock.conf import smartstock_settings
from smartstock.exceptions import WarehouseError
from smartstock.models.enums import LocationType, Unit

ZERO = Decimal('0')


def text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return '' if value is None else str(value).strip()


def to_decimal(value, field: str) -> Decimal:
    """
    Parse a user-entered number.

    Raises:
        WarehouseError('INVALID_VALUE'): If value is not a finite number
    """
    if isinstance(value, bool):
        raise WarehouseError('INVALID_VALUE', field=field, value=value)
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise WarehouseError('INVALID_VALUE', field=field, value=value) from None
    if not number.is_finite():
        raise WarehouseError('INVALID_VALUE', field=field, value=value)
    return number


def optional_amount(data: Mapping[str, Any], key: str, negative_code: str = 'INVALID_VALUE') -> Decimal:
    """Blank means 0; negatives raise negative_code."""
    raw = data.get(key)
    if raw is None or raw == '':
        return ZERO
    number = to_decimal(raw, key)
    if number < 0:
        raise WarehouseError(negative_code, field=key, value=raw)
    return number


def required_amount(value, field: str, missing_code: str) -> Decimal:
    """A count or pick quantity: must be entered and non-negative."""
    if value is None or value == '':
        raise WarehouseError(missing_code, field=field)
    number = to_decimal(value, field)
    if number < 0:
        raise WarehouseError('INVALID_QUANTITY', field=field, requested=number)
    return number


def product_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Build a products row from form data.

    SKU is stripped and uppercased; blank category falls back to
    DEFAULT_CATEGORY, blank unit to piece, blank numbers to 0.

    Raises:
        WarehouseError: NAME_REQUIRED, SKU_REQUIRED, INVALID_UNIT, INVALID_VALUE
    """
    name = text(data, 'name')
    sku = text(data, 'sku').upper()
    if not name:
        raise WarehouseError('NAME_REQUIRED')
    if not sku:
        raise WarehouseError('SKU_REQUIRED')

    unit = data.get('unit') or Unit.PIECE
    if unit not in Unit.values:
        raise WarehouseError('INVALID_UNIT', unit=unit)

    return {
        'sku': sku,
        'name': name,
        'category': text(data, 'category') or smartstock_settings.DEFAULT_CATEGORY,
        'unit': Unit(unit).value,
        'min_stock': optional_amount(data, 'min_stock'),
        'price': optional_amount(data, 'price'),
    }


def location_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Build a storage_locations row from form data.

    Code is stripped and uppercased; blank type falls back to STORAGE,
    blank product to no product, blank quantity to 0.

    Raises:
        WarehouseError: CODE_REQUIRED, INVALID_TYPE, INVALID_QUANTITY, INVALID_VALUE
    """
    code = text(data, 'code').upper()
    if not code:
        raise WarehouseError('CODE_REQUIRED')

    location_type = data.get('type') or LocationType.STORAGE
    if location_type not in LocationType.values:
        raise WarehouseError('INVALID_TYPE', type=location_type)

    product_id = data.get('product_id') or None
    return {
        'code': code,
        'type': LocationType(location_type).value,
        'product_id': str(product_id) if product_id is not None else None,
        'quantity': optional_amount(data, 'quantity', negative_code='INVALID_QUANTITY'),
    }
