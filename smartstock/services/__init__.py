"""
Warehouse services — modular organization of warehouse operations.

    from smartstock.services import CatalogOperations, StockMovements, Snapshot
"""

from smartstock.services.catalog import CatalogOperations
from smartstock.services.movements import StockMovements
from smartstock.services.projection import Snapshot, load_snapshot

__all__ = [
    'CatalogOperations',
    'StockMovements',
    'Snapshot',
    'load_snapshot',
]
