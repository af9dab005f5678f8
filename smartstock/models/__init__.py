"""
SmartStock Models.

The three collections behind the record store:
- Product: Catalog entry (unique SKU, min stock threshold)
- StorageLocation: Addressable slot holding zero or one product line
- InventoryAudit: Immutable ledger of cycle counts
"""

from smartstock.models.audit import InventoryAudit
from smartstock.models.enums import AuditStatus, LocationType, Unit
from smartstock.models.location import StorageLocation
from smartstock.models.product import Product

__all__ = [
    'Unit',
    'LocationType',
    'AuditStatus',
    'Product',
    'StorageLocation',
    'InventoryAudit',
]
