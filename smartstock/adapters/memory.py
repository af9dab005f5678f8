"""
In-memory Record Store — Stub adapter for development and testing.

Implements the RecordStore protocol with plain dicts:
- ids are generated UUID strings
- SKU (products) and code (locations) are unique
- inventory_audits is append-only; its dates are kept as aware datetimes
- atomic() restores every table if the block raises

Usage in settings.py:
    SMARTSTOCK = {
        "RECORD_STORE": "smartstock.adapters.memory.InMemoryRecordStore",
    }

WARNING: Do NOT use in production. Data lives only as long as the process.
"""

from __future__ import annotations

import copy
import uuid
from contextlib import contextmanager
from datetime import timezone as dt_timezone
from typing import Any

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from smartstock.protocols.store import (
    APPEND_ONLY,
    AUDITS,
    COLLECTIONS,
    LOCATIONS,
    PRODUCTS,
    StoreResult,
)

UNIQUE_COLUMNS = {
    PRODUCTS: 'sku',
    LOCATIONS: 'code',
}

# Timestamp columns stored as aware datetimes, whatever form they arrive in
DATETIME_COLUMNS = {
    AUDITS: 'date',
}


class InMemoryRecordStore:
    """
    Dict-backed record store.

    Every successful write is appended to ``journal`` as
    ``(operation, collection, record_id)``, which lets tests assert
    that an operation issued no write at all.
    """

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = {name: [] for name in COLLECTIONS}
        self.journal: list[tuple[str, str, str]] = []
        for collection, rows in (initial or {}).items():
            result = self.insert(collection, rows)
            if not result.ok:
                raise ValueError(result.error)
        self.journal.clear()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def select(self, collection, *, order_by=None, descending=False, limit=None) -> StoreResult:
        if collection not in self.tables:
            return StoreResult.failure(f"Unknown collection: {collection}")

        rows = [dict(row) for row in self.tables[collection]]
        if order_by:
            # None sorts first ascending, last descending
            rows.sort(
                key=lambda r: (r.get(order_by) is not None, r.get(order_by)),
                reverse=descending,
            )
        if limit is not None:
            rows = rows[:limit]
        return StoreResult(data=rows)

    def find(self, collection: str, record_id: str) -> dict[str, Any] | None:
        """Return a copy of one row, or None."""
        for row in self.tables.get(collection, []):
            if row['id'] == record_id:
                return dict(row)
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, collection, rows) -> StoreResult:
        if collection not in self.tables:
            return StoreResult.failure(f"Unknown collection: {collection}")

        table = self.tables[collection]
        staged = []
        for row in rows:
            new_row = dict(row)
            new_row.setdefault('id', str(uuid.uuid4()))
            error = (
                self._normalize_datetime(collection, new_row)
                or self._check_unique(collection, new_row, table + staged)
            )
            if error:
                return StoreResult.failure(error)
            staged.append(new_row)

        table.extend(staged)
        for row in staged:
            self.journal.append(('insert', collection, row['id']))
        return StoreResult(data=[dict(row) for row in staged])

    def update(self, collection, record_id, values) -> StoreResult:
        if collection not in self.tables:
            return StoreResult.failure(f"Unknown collection: {collection}")
        if collection in APPEND_ONLY:
            return StoreResult.failure(f"{collection} is append-only")

        table = self.tables[collection]
        for index, row in enumerate(table):
            if row['id'] == record_id:
                updated = {**row, **values, 'id': record_id}
                others = table[:index] + table[index + 1:]
                error = self._check_unique(collection, updated, others)
                if error:
                    return StoreResult.failure(error)
                table[index] = updated
                self.journal.append(('update', collection, record_id))
                return StoreResult(data=[dict(updated)])
        return StoreResult()

    def delete(self, collection, record_id) -> StoreResult:
        if collection not in self.tables:
            return StoreResult.failure(f"Unknown collection: {collection}")
        if collection in APPEND_ONLY:
            return StoreResult.failure(f"{collection} is append-only")

        table = self.tables[collection]
        for index, row in enumerate(table):
            if row['id'] == record_id:
                del table[index]
                self.journal.append(('delete', collection, record_id))
                return StoreResult(data=[dict(row)])
        return StoreResult()

    @contextmanager
    def atomic(self):
        saved_tables = copy.deepcopy(self.tables)
        saved_journal = list(self.journal)
        try:
            yield self
        except BaseException:
            self.tables = saved_tables
            self.journal = saved_journal
            raise

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _normalize_datetime(self, collection, row) -> str | None:
        column = DATETIME_COLUMNS.get(collection)
        if column is None:
            return None

        value = row.get(column)
        if value is None:
            row[column] = timezone.now()
            return None
        if isinstance(value, str):
            try:
                parsed = parse_datetime(value)
            except ValueError:
                parsed = None
            if parsed is None:
                return f"invalid input syntax for type timestamp: \"{value}\""
            value = parsed
        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt_timezone.utc)
        row[column] = value
        return None

    def _check_unique(self, collection, row, others) -> str | None:
        column = UNIQUE_COLUMNS.get(collection)
        if column is None or row.get(column) is None:
            return None
        for other in others:
            if other.get(column) == row[column]:
                return f'duplicate key value violates unique constraint "{collection}_{column}_key"'
        return None
