"""
Record Store Protocol — Interface for the table store behind SmartStock.

SmartStock defines this protocol; the Django ORM (or any hosted table
store) implements it. Adapters never raise for data errors: every call
returns a StoreResult carrying either data or an error message.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

PRODUCTS = 'products'
LOCATIONS = 'storage_locations'
AUDITS = 'inventory_audits'

COLLECTIONS = (PRODUCTS, LOCATIONS, AUDITS)

# Collections whose rows are written once and never changed
APPEND_ONLY = frozenset({AUDITS})


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store call: data or error, never both."""

    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str) -> StoreResult:
        return cls(data=[], error=error)


@runtime_checkable
class RecordStore(Protocol):
    """
    Protocol for the record store.

    Rows are flat dicts keyed by column name (snake_case), identified
    by an opaque ``id``.
    """

    def select(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> StoreResult:
        """
        Select all rows of a collection.

        Args:
            collection: Collection name
            order_by: Column to order by (None = store order)
            descending: Reverse the ordering
            limit: Maximum rows (None = all)

        Returns:
            StoreResult with the rows
        """
        ...

    def insert(self, collection: str, rows: list[dict[str, Any]]) -> StoreResult:
        """
        Insert one or many rows.

        Returns:
            StoreResult with the inserted rows (ids filled in)
        """
        ...

    def update(self, collection: str, record_id: str, values: dict[str, Any]) -> StoreResult:
        """
        Update columns of the row with the given id.

        Returns:
            StoreResult with the updated row (empty when no row matched)
        """
        ...

    def delete(self, collection: str, record_id: str) -> StoreResult:
        """
        Delete the row with the given id.

        Returns:
            StoreResult with the deleted row (empty when no row matched)
        """
        ...

    def atomic(self) -> AbstractContextManager:
        """
        Group writes so they commit or roll back together.

        An exception raised inside the block undoes every write made in it.
        """
        ...
