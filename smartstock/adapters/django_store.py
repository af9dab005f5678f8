"""
Django Record Store — RecordStore backed by the SmartStock models.

Each collection maps to one model whose table carries the collection
name. Rows are validated with full_clean() so uniqueness, choices and
non-negative numbers surface as error results instead of exceptions.

Usage in settings.py:
    SMARTSTOCK = {
        "RECORD_STORE": "smartstock.adapters.django_store.DjangoRecordStore",
    }
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from smartstock.models import InventoryAudit, Product, StorageLocation
from smartstock.protocols.store import APPEND_ONLY, AUDITS, LOCATIONS, PRODUCTS, StoreResult

logger = logging.getLogger(__name__)

MODELS = {
    PRODUCTS: Product,
    LOCATIONS: StorageLocation,
    AUDITS: InventoryAudit,
}


def _to_row(obj) -> dict[str, Any]:
    """Flatten a model instance into a row keyed by column attname."""
    return {f.attname: getattr(obj, f.attname) for f in obj._meta.concrete_fields}


def _valid_pk(model, record_id) -> bool:
    """False when record_id cannot be a primary key of model (no row can match)."""
    try:
        model._meta.pk.to_python(record_id)
    except ValidationError:
        return False
    return True


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return '; '.join(exc.messages)
    return str(exc)


class DjangoRecordStore:
    """RecordStore implementation over the Django ORM."""

    def _model(self, collection: str):
        try:
            return MODELS[collection]
        except KeyError:
            return None

    def select(self, collection, *, order_by=None, descending=False, limit=None) -> StoreResult:
        model = self._model(collection)
        if model is None:
            return StoreResult.failure(f"Unknown collection: {collection}")

        qs = model.objects.all()
        if order_by:
            qs = qs.order_by(f"-{order_by}" if descending else order_by)
        if limit is not None:
            qs = qs[:limit]

        try:
            return StoreResult(data=[_to_row(obj) for obj in qs])
        except DatabaseError as e:
            logger.warning("store.select failed", extra={"collection": collection, "error": str(e)})
            return StoreResult.failure(str(e))

    def insert(self, collection, rows) -> StoreResult:
        model = self._model(collection)
        if model is None:
            return StoreResult.failure(f"Unknown collection: {collection}")

        try:
            with transaction.atomic():
                created = []
                for row in rows:
                    obj = model(**row)
                    obj.full_clean()
                    obj.save(force_insert=True)
                    created.append(_to_row(obj))
        except (ValidationError, DatabaseError, TypeError, ValueError) as e:
            return StoreResult.failure(_error_message(e))

        return StoreResult(data=created)

    def update(self, collection, record_id, values) -> StoreResult:
        model = self._model(collection)
        if model is None:
            return StoreResult.failure(f"Unknown collection: {collection}")
        if collection in APPEND_ONLY:
            return StoreResult.failure(f"{collection} is append-only")

        if not _valid_pk(model, record_id):
            return StoreResult()

        try:
            with transaction.atomic():
                obj = model.objects.select_for_update().filter(pk=record_id).first()
                if obj is None:
                    return StoreResult()
                for key, value in values.items():
                    setattr(obj, key, value)
                obj.full_clean()
                obj.save()
        except (ValidationError, DatabaseError, TypeError, ValueError) as e:
            return StoreResult.failure(_error_message(e))

        return StoreResult(data=[_to_row(obj)])

    def delete(self, collection, record_id) -> StoreResult:
        model = self._model(collection)
        if model is None:
            return StoreResult.failure(f"Unknown collection: {collection}")
        if collection in APPEND_ONLY:
            return StoreResult.failure(f"{collection} is append-only")

        if not _valid_pk(model, record_id):
            return StoreResult()

        try:
            with transaction.atomic():
                obj = model.objects.filter(pk=record_id).first()
                if obj is None:
                    return StoreResult()
                row = _to_row(obj)
                obj.delete()
        except (DatabaseError, ValidationError, ValueError) as e:
            return StoreResult.failure(_error_message(e))

        return StoreResult(data=[row])

    def atomic(self):
        return transaction.atomic()
