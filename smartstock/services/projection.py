"""
Domain projection — raw store rows to entities, plus derived views.

A Snapshot is an immutable picture of the three collections taken by
load_snapshot(). Every derived view (stock per product, low-stock set,
picking queue, ...) is computed on demand from the snapshot and never
cached or written back.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from django.utils.dateparse import parse_datetime

from smartstock.exceptions import WarehouseError
from smartstock.models.enums import AuditStatus, LocationType, Unit
from smartstock.protocols.store import AUDITS, LOCATIONS, PRODUCTS, RecordStore

logger = logging.getLogger('smartstock')

ZERO = Decimal('0')
EMPTY_LABEL = 'Vazio'
MISSING_LABEL = 'N/A'


# ══════════════════════════════════════════════════════════════
# ENTITIES
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ProductEntry:
    id: str
    sku: str
    name: str
    category: str
    unit: Unit
    min_stock: Decimal
    price: Decimal


@dataclass(frozen=True)
class LocationEntry:
    id: str
    code: str
    type: LocationType
    product_id: str | None
    quantity: Decimal

    @property
    def is_empty(self) -> bool:
        """No product assigned (quantity is not checked)."""
        return self.product_id is None


@dataclass(frozen=True)
class AuditEntry:
    id: str
    date: datetime | None
    location_id: str
    product_id: str | None
    expected_qty: Decimal
    actual_qty: Decimal
    status: AuditStatus

    @property
    def difference(self) -> Decimal:
        return self.actual_qty - self.expected_qty


@dataclass(frozen=True)
class InventorySummary:
    """Dashboard figures."""

    sku_count: int
    total_stock: Decimal
    low_stock_count: int
    occupied_locations: int
    total_locations: int


@dataclass(frozen=True)
class AuditLine:
    """Audit resolved against the current snapshot for display."""

    audit: AuditEntry
    location_code: str
    product_name: str


# ══════════════════════════════════════════════════════════════
# ROW MAPPING
# ══════════════════════════════════════════════════════════════


def _decimal(value) -> Decimal:
    if value is None or value == '':
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return ZERO


def _ref(value) -> str | None:
    if value is None or value == '':
        return None
    return str(value)


def _datetime(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return parse_datetime(str(value))


def _choice(enum_class, value, default):
    try:
        return enum_class(value)
    except ValueError:
        return default


def product_from_row(row: dict[str, Any]) -> ProductEntry:
    return ProductEntry(
        id=str(row['id']),
        sku=row.get('sku') or '',
        name=row.get('name') or '',
        category=row.get('category') or '',
        unit=_choice(Unit, row.get('unit'), Unit.PIECE),
        min_stock=_decimal(row.get('min_stock')),
        price=_decimal(row.get('price')),
    )


def location_from_row(row: dict[str, Any]) -> LocationEntry:
    return LocationEntry(
        id=str(row['id']),
        code=row.get('code') or '',
        type=_choice(LocationType, row.get('type'), LocationType.STORAGE),
        product_id=_ref(row.get('product_id')),
        quantity=_decimal(row.get('quantity')),
    )


def audit_from_row(row: dict[str, Any]) -> AuditEntry:
    expected = _decimal(row.get('expected_qty'))
    actual = _decimal(row.get('actual_qty'))
    default_status = AuditStatus.MATCHED if expected == actual else AuditStatus.ADJUSTED
    return AuditEntry(
        id=str(row['id']),
        date=_datetime(row.get('date')),
        location_id=str(row.get('location_id')),
        product_id=_ref(row.get('product_id')),
        expected_qty=expected,
        actual_qty=actual,
        status=_choice(AuditStatus, row.get('status'), default_status),
    )


# ══════════════════════════════════════════════════════════════
# SNAPSHOT
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable view of products, locations and recent audits.

    Products are ordered by name, locations by code, audits newest first
    (the order load_snapshot() asks the store for).
    """

    products: tuple[ProductEntry, ...] = ()
    locations: tuple[LocationEntry, ...] = ()
    audits: tuple[AuditEntry, ...] = ()

    @classmethod
    def from_rows(cls, product_rows: Iterable[dict], location_rows: Iterable[dict],
                  audit_rows: Iterable[dict] = ()) -> 'Snapshot':
        return cls(
            products=tuple(product_from_row(r) for r in product_rows),
            locations=tuple(location_from_row(r) for r in location_rows),
            audits=tuple(audit_from_row(r) for r in audit_rows),
        )

    # --- lookups ---------------------------------------------------

    def product(self, product_id: str | None) -> ProductEntry | None:
        if product_id is None:
            return None
        return next((p for p in self.products if p.id == str(product_id)), None)

    def location(self, location_id: str | None) -> LocationEntry | None:
        if location_id is None:
            return None
        return next((l for l in self.locations if l.id == str(location_id)), None)

    def location_by_code(self, code: str) -> LocationEntry | None:
        wanted = (code or '').strip().upper()
        return next((l for l in self.locations if l.code.upper() == wanted), None)

    def locations_of(self, product_id: str) -> list[LocationEntry]:
        return [l for l in self.locations if l.product_id == product_id]

    # --- derived views ---------------------------------------------

    def stock_of(self, product_id: str) -> Decimal:
        """Sum of quantity over every location referencing the product."""
        return sum((l.quantity for l in self.locations_of(product_id)), ZERO)

    def is_low_stock(self, product: ProductEntry) -> bool:
        return self.stock_of(product.id) < product.min_stock

    def low_stock_products(self) -> list[ProductEntry]:
        return [p for p in self.products if self.is_low_stock(p)]

    def empty_locations(self) -> list[LocationEntry]:
        return [l for l in self.locations if l.is_empty]

    def picking_queue(self, include_depleted: bool = True) -> list[LocationEntry]:
        """
        Occupied PICKING locations.

        Args:
            include_depleted: Keep locations whose quantity is 0. The
                default keeps them: the queue is "slots with a product
                assigned", not "slots with stock to pick".
        """
        return [
            l for l in self.locations
            if l.type == LocationType.PICKING
            and not l.is_empty
            and (include_depleted or l.quantity > 0)
        ]

    def filtered_products(self, term: str | None) -> list[ProductEntry]:
        """Products whose name or SKU contains term, case-insensitively."""
        if not term:
            return list(self.products)
        needle = term.casefold()
        return [
            p for p in self.products
            if needle in p.name.casefold() or needle in p.sku.casefold()
        ]

    def total_stock(self) -> Decimal:
        return sum((l.quantity for l in self.locations), ZERO)

    def occupancy(self) -> tuple[int, int]:
        """(occupied, total) locations."""
        occupied = sum(1 for l in self.locations if not l.is_empty)
        return occupied, len(self.locations)

    def summary(self) -> InventorySummary:
        occupied, total = self.occupancy()
        return InventorySummary(
            sku_count=len(self.products),
            total_stock=self.total_stock(),
            low_stock_count=len(self.low_stock_products()),
            occupied_locations=occupied,
            total_locations=total,
        )

    # --- display helpers --------------------------------------------

    def location_label(self, location: LocationEntry) -> str:
        """'A-01-02 (SKU-1)' or 'A-01-02 (Vazio)'."""
        product = self.product(location.product_id)
        if location.is_empty:
            return f"{location.code} ({EMPTY_LABEL})"
        return f"{location.code} ({product.sku if product else MISSING_LABEL})"

    def audit_history(self) -> list[AuditLine]:
        lines = []
        for audit in self.audits:
            location = self.location(audit.location_id)
            product = self.product(audit.product_id)
            lines.append(AuditLine(
                audit=audit,
                location_code=location.code if location else MISSING_LABEL,
                product_name=product.name if product else EMPTY_LABEL,
            ))
        return lines


# ══════════════════════════════════════════════════════════════
# LOADING
# ══════════════════════════════════════════════════════════════


def load_snapshot(store: RecordStore, audit_limit: int = 50) -> Snapshot:
    """
    Fetch all three collections and build a Snapshot.

    Raises:
        WarehouseError('LOAD_FAILED'): If any select returns an error
    """
    results = {
        PRODUCTS: store.select(PRODUCTS, order_by='name'),
        LOCATIONS: store.select(LOCATIONS, order_by='code'),
        AUDITS: store.select(AUDITS, order_by='date', descending=True, limit=audit_limit),
    }

    for collection, result in results.items():
        if not result.ok:
            logger.warning(
                "warehouse.load_failed",
                extra={"collection": collection, "error": result.error},
            )
            raise WarehouseError('LOAD_FAILED', collection=collection, error=result.error)

    return Snapshot.from_rows(results[PRODUCTS].data, results[LOCATIONS].data, results[AUDITS].data)
