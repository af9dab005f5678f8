"""
Catalog maintenance — create, update and delete products and locations.
"""

import logging
from typing import Any, Mapping

from smartstock.exceptions import WarehouseError
from smartstock.protocols.store import LOCATIONS, PRODUCTS, RecordStore
from smartstock.services.forms import location_payload, product_payload
from smartstock.services.movements import check_result
from smartstock.services.projection import Snapshot

logger = logging.getLogger('smartstock')


class CatalogOperations:
    """Product and location CRUD."""

    @classmethod
    def save_product(cls, store: RecordStore, data: Mapping[str, Any],
                     product_id: str | None = None) -> str:
        """
        Insert (product_id=None) or update a product.

        Duplicate SKUs are rejected by the store and surface as
        WarehouseError('STORE_ERROR') carrying the store's message.

        Returns:
            The product id
        """
        payload = product_payload(data)

        if product_id:
            result = check_result(store.update(PRODUCTS, product_id, payload), 'save_product')
            if not result.data:
                raise WarehouseError('PRODUCT_NOT_FOUND', product_id=product_id)
        else:
            result = check_result(store.insert(PRODUCTS, [payload]), 'save_product')

        saved_id = str(result.data[0]['id'])
        logger.info(
            "warehouse.save_product",
            extra={"product_id": saved_id, "sku": payload['sku'], "created": not product_id},
        )
        return saved_id

    @classmethod
    def delete_product(cls, store: RecordStore, snapshot: Snapshot, product_id: str) -> None:
        """
        Delete a product after clearing it from every location holding it.

        Both steps run in one atomic unit. Location quantities are kept.
        """
        cleared = snapshot.locations_of(str(product_id))

        with store.atomic():
            for location in cleared:
                check_result(
                    store.update(LOCATIONS, location.id, {'product_id': None}),
                    'delete_product',
                )
            check_result(store.delete(PRODUCTS, product_id), 'delete_product')

        logger.info(
            "warehouse.delete_product",
            extra={
                "product_id": str(product_id),
                "cleared_locations": [l.code for l in cleared],
            },
        )

    @classmethod
    def save_location(cls, store: RecordStore, data: Mapping[str, Any],
                      location_id: str | None = None) -> str:
        """
        Insert (location_id=None) or update a storage location.

        Returns:
            The location id
        """
        payload = location_payload(data)

        if location_id:
            result = check_result(store.update(LOCATIONS, location_id, payload), 'save_location')
            if not result.data:
                raise WarehouseError('LOCATION_NOT_FOUND', location_id=location_id)
        else:
            result = check_result(store.insert(LOCATIONS, [payload]), 'save_location')

        saved_id = str(result.data[0]['id'])
        logger.info(
            "warehouse.save_location",
            extra={"location_id": saved_id, "code": payload['code'], "created": not location_id},
        )
        return saved_id

    @classmethod
    def delete_location(cls, store: RecordStore, location_id: str) -> None:
        """
        Delete a location.

        Audits referring to it stay in the ledger untouched.
        """
        check_result(store.delete(LOCATIONS, location_id), 'delete_location')
        logger.info("warehouse.delete_location", extra={"location_id": str(location_id)})
