"""
Shared helpers for SmartStock management commands.
"""

from django.core.management.base import CommandError

from smartstock.exceptions import WarehouseError
from smartstock.service import Warehouse, get_warehouse


def error_message(error: WarehouseError) -> str:
    detail = error.data.get('error')
    return f"{error.message}: {detail}" if detail else error.message


def load_warehouse() -> Warehouse:
    """Fresh warehouse snapshot, or CommandError when the store is unreachable."""
    try:
        return get_warehouse(refresh=True)
    except WarehouseError as e:
        raise CommandError(error_message(e)) from e


def resolve_location(warehouse: Warehouse, code: str):
    location = warehouse.snapshot.location_by_code(code)
    if location is None:
        raise CommandError(f"Endereço não encontrado: {code}")
    return location
