"""
Warehouse Service — The single public interface for all warehouse operations.

Usage:
    from smartstock import get_warehouse, WarehouseError

    warehouse = get_warehouse()
    location = warehouse.snapshot.location_by_code('A-01-02')
    warehouse.adjust_stock(location.id, -1)
    warehouse.complete_picking(location.id, 5)
    warehouse.snapshot.stock_of(location.product_id)
"""

import logging
import threading
from typing import Any, Mapping

from smartstock.adapters import get_record_store, get_text_generator
from smartstock.conf import smartstock_settings
from smartstock.exceptions import WarehouseError
from smartstock.protocols.generator import TextGenerator
from smartstock.protocols.store import RecordStore
from smartstock.services.catalog import CatalogOperations
from smartstock.services.guards import InFlight
from smartstock.services.movements import StockMovements
from smartstock.services.projection import (
    AuditEntry,
    LocationEntry,
    ProductEntry,
    Snapshot,
    load_snapshot,
)
from smartstock.services.suggestions import (
    Insight,
    PlacementSuggestion,
    request_insights,
    request_placements,
)

logger = logging.getLogger('smartstock')


class Warehouse:
    """
    Single interface for all warehouse operations.

    Holds one immutable Snapshot of the store. Every operation follows
    validate → write → reload: after a successful write the snapshot is
    replaced as a whole by a fresh load, never patched in place.

    A failed load puts the warehouse in a failed state; reading the
    snapshot or running any operation raises NOT_LOADED until reload()
    succeeds.
    """

    def __init__(self, store: RecordStore | None = None,
                 generator: TextGenerator | None = None,
                 audit_limit: int | None = None):
        self.store = store if store is not None else get_record_store()
        self._generator = generator
        self.audit_limit = (
            smartstock_settings.AUDIT_HISTORY_LIMIT if audit_limit is None else audit_limit
        )
        self.in_flight = InFlight()
        self._snapshot: Snapshot | None = None
        self.load_error: str | None = None

    # ══════════════════════════════════════════════════════════════
    # STATE
    # ══════════════════════════════════════════════════════════════

    @property
    def generator(self) -> TextGenerator:
        if self._generator is None:
            self._generator = get_text_generator()
        return self._generator

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None and self.load_error is None

    @property
    def snapshot(self) -> Snapshot:
        """
        Current snapshot.

        Raises:
            WarehouseError('NOT_LOADED'): Before the first successful load
                or after a failed one
        """
        return self._require_loaded()

    def _require_loaded(self) -> Snapshot:
        if not self.loaded:
            raise WarehouseError('NOT_LOADED', load_error=self.load_error)
        return self._snapshot

    def reload(self) -> Snapshot:
        """
        Replace the snapshot with a fresh load from the store.

        Raises:
            WarehouseError('LOAD_FAILED'): If any collection fails to load
        """
        try:
            snapshot = load_snapshot(self.store, self.audit_limit)
        except WarehouseError as e:
            self._snapshot = None
            self.load_error = e.data.get('error') or e.message
            raise

        self._snapshot = snapshot
        self.load_error = None
        return snapshot

    # ══════════════════════════════════════════════════════════════
    # CATALOG
    # ══════════════════════════════════════════════════════════════

    def save_product(self, data: Mapping[str, Any], product_id: str | None = None) -> ProductEntry:
        """
        Create (product_id=None) or update a product.

        Raises:
            WarehouseError: NAME_REQUIRED, SKU_REQUIRED, INVALID_UNIT,
                INVALID_VALUE, PRODUCT_NOT_FOUND, STORE_ERROR (e.g. duplicate SKU)
        """
        self._require_loaded()
        with self.in_flight.claim('save_product', product_id):
            saved_id = CatalogOperations.save_product(self.store, data, product_id)
            return self.reload().product(saved_id)

    def delete_product(self, product_id: str, confirm: bool = False) -> None:
        """
        Delete a product; locations holding it become empty.

        Raises:
            WarehouseError('CONFIRMATION_REQUIRED'): If confirm is False
            WarehouseError('STORE_ERROR'): If any write fails (nothing is kept)
        """
        snapshot = self.snapshot
        if not confirm:
            raise WarehouseError('CONFIRMATION_REQUIRED', product_id=product_id)
        with self.in_flight.claim('delete_product', product_id):
            CatalogOperations.delete_product(self.store, snapshot, product_id)
            self.reload()

    def save_location(self, data: Mapping[str, Any], location_id: str | None = None) -> LocationEntry:
        """
        Create (location_id=None) or update a storage location.

        Raises:
            WarehouseError: CODE_REQUIRED, INVALID_TYPE, INVALID_QUANTITY,
                INVALID_VALUE, LOCATION_NOT_FOUND, STORE_ERROR
        """
        self._require_loaded()
        with self.in_flight.claim('save_location', location_id):
            saved_id = CatalogOperations.save_location(self.store, data, location_id)
            return self.reload().location(saved_id)

    def delete_location(self, location_id: str, confirm: bool = False) -> None:
        """
        Delete a storage location. Its audits stay in the ledger.

        Raises:
            WarehouseError('CONFIRMATION_REQUIRED'): If confirm is False
            WarehouseError('STORE_ERROR'): If the delete fails
        """
        self._require_loaded()
        if not confirm:
            raise WarehouseError('CONFIRMATION_REQUIRED', location_id=location_id)
        with self.in_flight.claim('delete_location', location_id):
            CatalogOperations.delete_location(self.store, location_id)
            self.reload()

    # ══════════════════════════════════════════════════════════════
    # MOVEMENTS
    # ══════════════════════════════════════════════════════════════

    def adjust_stock(self, location_id: str, delta) -> LocationEntry | None:
        """
        Add delta to a location's quantity, never going below zero.

        Returns:
            The updated location, or None when the location is not in the
            snapshot (no write, no reload).
        """
        snapshot = self.snapshot
        with self.in_flight.claim('adjust_stock', location_id):
            new_qty = StockMovements.adjust(self.store, snapshot, location_id, delta)
            if new_qty is None:
                return None
            return self.reload().location(location_id)

    def execute_audit(self, location_id: str, counted) -> AuditEntry:
        """
        Record a cycle count; correct the location when it differs.

        Raises:
            WarehouseError: LOCATION_REQUIRED, COUNT_REQUIRED, INVALID_QUANTITY,
                LOCATION_NOT_FOUND, STORE_ERROR (audit and correction both undone)
        """
        snapshot = self.snapshot
        with self.in_flight.claim('execute_audit', location_id):
            audit = StockMovements.audit(self.store, snapshot, location_id, counted)
            self.reload()
            return audit

    def complete_picking(self, location_id: str, quantity) -> LocationEntry:
        """
        Withdraw quantity from a location.

        Raises:
            WarehouseError('INSUFFICIENT_QUANTITY'): If quantity exceeds the
                location's quantity (nothing is written)
        """
        snapshot = self.snapshot
        with self.in_flight.claim('complete_picking', location_id):
            StockMovements.pick(self.store, snapshot, location_id, quantity)
            return self.reload().location(location_id)

    # ══════════════════════════════════════════════════════════════
    # SUGGESTIONS (read-only)
    # ══════════════════════════════════════════════════════════════

    def insights(self) -> list[Insight]:
        """Findings about the current snapshot; [] when the backend fails."""
        return request_insights(self.generator, self.snapshot)

    def placement_suggestions(self, product: Mapping[str, Any]) -> list[PlacementSuggestion]:
        """
        Suggested locations for a product being created.

        Raises:
            WarehouseError: NAME_REQUIRED, CATEGORY_REQUIRED
        """
        return request_placements(self.generator, product, self.snapshot)


# Process-wide instance
_lock = threading.Lock()
_warehouse: Warehouse | None = None


def get_warehouse(refresh: bool = False) -> Warehouse:
    """
    Return the shared Warehouse built from settings.

    Loads it on first use, when the last load failed, or when refresh=True.

    Raises:
        WarehouseError('LOAD_FAILED'): If loading fails
    """
    global _warehouse

    if _warehouse is None:
        with _lock:
            if _warehouse is None:  # double-checked
                _warehouse = Warehouse()

    if refresh or not _warehouse.loaded:
        _warehouse.reload()
    return _warehouse


def reset_warehouse() -> None:
    """Drop the shared Warehouse. Useful for testing."""
    global _warehouse
    _warehouse = None
