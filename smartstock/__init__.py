"""
SmartStock — Warehouse inventory with cycle counts and AI suggestions.

Usage:
    from smartstock import get_warehouse, WarehouseError

    warehouse = get_warehouse()
    warehouse.complete_picking(location_id, 5)
    warehouse.execute_audit(location_id, 7)
    warehouse.snapshot.stock_of(product_id)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'Warehouse':
        from smartstock.service import Warehouse
        return Warehouse
    elif name == 'get_warehouse':
        from smartstock.service import get_warehouse
        return get_warehouse
    elif name == 'WarehouseError':
        from smartstock.exceptions import WarehouseError
        return WarehouseError
    elif name == 'Product':
        from smartstock.models.product import Product
        return Product
    elif name == 'StorageLocation':
        from smartstock.models.location import StorageLocation
        return StorageLocation
    elif name == 'InventoryAudit':
        from smartstock.models.audit import InventoryAudit
        return InventoryAudit
    elif name == 'Unit':
        from smartstock.models.enums import Unit
        return Unit
    elif name == 'LocationType':
        from smartstock.models.enums import LocationType
        return LocationType
    elif name == 'AuditStatus':
        from smartstock.models.enums import AuditStatus
        return AuditStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'Warehouse',
    'get_warehouse',
    'WarehouseError',
    'Product',
    'StorageLocation',
    'InventoryAudit',
    'Unit',
    'LocationType',
    'AuditStatus',
]

__version__ = '0.1.0'
