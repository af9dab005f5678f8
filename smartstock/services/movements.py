"""
Stock movements — quantity-changing operations (adjust, audit, pick).

Each method validates against the given snapshot, then writes to the
store. Writes that belong together run under store.atomic(). Reloading
the snapshot afterwards is the caller's job (see Warehouse).
"""

import logging
from decimal import Decimal

from django.utils import timezone

from smartstock.exceptions import WarehouseError
from smartstock.models.enums import AuditStatus
from smartstock.protocols.store import AUDITS, LOCATIONS, RecordStore, StoreResult
from smartstock.services.forms import ZERO, required_amount, to_decimal
from smartstock.services.projection import AuditEntry, Snapshot, audit_from_row

logger = logging.getLogger('smartstock')


def check_result(result: StoreResult, operation: str) -> StoreResult:
    """
    Raise the store's error message verbatim.

    Raises:
        WarehouseError('STORE_ERROR'): If the result carries an error
    """
    if not result.ok:
        logger.warning(
            "warehouse.store_error",
            extra={"operation": operation, "error": result.error},
        )
        raise WarehouseError('STORE_ERROR', message=result.error, operation=operation)
    return result


class StockMovements:
    """Quantity-changing methods."""

    @classmethod
    def adjust(cls, store: RecordStore, snapshot: Snapshot,
               location_id: str, delta) -> Decimal | None:
        """
        Manual +/- adjustment, floored at zero.

        new_quantity = max(0, quantity + delta)

        Returns:
            The new quantity, or None when the location is not in the
            snapshot (nothing is written).
        """
        location = snapshot.location(location_id)
        if location is None:
            logger.debug("warehouse.adjust_stock.skipped", extra={"location_id": location_id})
            return None

        delta = to_decimal(delta, 'delta')
        new_qty = max(ZERO, location.quantity + delta)

        check_result(
            store.update(LOCATIONS, location.id, {'quantity': new_qty}),
            'adjust_stock',
        )
        logger.info(
            "warehouse.adjust_stock",
            extra={
                "location_id": location.id,
                "delta": str(delta),
                "old_qty": str(location.quantity),
                "new_qty": str(new_qty),
            },
        )
        return new_qty

    @classmethod
    def audit(cls, store: RecordStore, snapshot: Snapshot,
              location_id: str, counted) -> AuditEntry:
        """
        Cycle count.

        Records expected (current) vs counted quantity. When they differ
        the location is corrected to the count in the same atomic unit,
        so the ledger and the live quantity never diverge.

        Raises:
            WarehouseError('LOCATION_REQUIRED'): If no location was selected
            WarehouseError('COUNT_REQUIRED'): If no count was entered
            WarehouseError('INVALID_QUANTITY'): If the count is negative
            WarehouseError('LOCATION_NOT_FOUND'): If the location is unknown
        """
        if not location_id:
            raise WarehouseError('LOCATION_REQUIRED')
        counted = required_amount(counted, 'actual_qty', 'COUNT_REQUIRED')

        location = snapshot.location(location_id)
        if location is None:
            raise WarehouseError('LOCATION_NOT_FOUND', location_id=location_id)

        expected = location.quantity
        status = AuditStatus.MATCHED if expected == counted else AuditStatus.ADJUSTED
        row = {
            'date': timezone.now(),
            'location_id': location.id,
            'product_id': location.product_id,
            'expected_qty': expected,
            'actual_qty': counted,
            'status': status.value,
        }

        with store.atomic():
            inserted = check_result(store.insert(AUDITS, [row]), 'execute_audit')
            if status == AuditStatus.ADJUSTED:
                check_result(
                    store.update(LOCATIONS, location.id, {'quantity': counted}),
                    'execute_audit',
                )

        logger.info(
            "warehouse.execute_audit",
            extra={
                "location_id": location.id,
                "expected_qty": str(expected),
                "actual_qty": str(counted),
                "status": status.value,
            },
        )
        return audit_from_row(inserted.data[0])

    @classmethod
    def pick(cls, store: RecordStore, snapshot: Snapshot,
             location_id: str, quantity) -> Decimal:
        """
        Pick confirmation.

        Raises:
            WarehouseError('LOCATION_NOT_FOUND'): If the location is unknown
            WarehouseError('INVALID_QUANTITY'): If quantity <= 0
            WarehouseError('INSUFFICIENT_QUANTITY'): If quantity > location quantity
        """
        location = snapshot.location(location_id)
        if location is None:
            raise WarehouseError('LOCATION_NOT_FOUND', location_id=location_id)

        quantity = required_amount(quantity, 'quantity', 'INVALID_QUANTITY')
        if quantity <= 0:
            raise WarehouseError('INVALID_QUANTITY', requested=quantity)

        if quantity > location.quantity:
            raise WarehouseError(
                'INSUFFICIENT_QUANTITY',
                available=location.quantity,
                requested=quantity,
            )

        new_qty = location.quantity - quantity
        check_result(
            store.update(LOCATIONS, location.id, {'quantity': new_qty}),
            'complete_picking',
        )
        logger.info(
            "warehouse.complete_picking",
            extra={
                "location_id": location.id,
                "qty": str(quantity),
                "new_qty": str(new_qty),
            },
        )
        return new_qty
