"""
Pytest fixtures for SmartStock tests.
"""

from decimal import Decimal

import pytest

from smartstock.adapters import reset_adapters
from smartstock.adapters.memory import InMemoryRecordStore
from smartstock.models import Product, StorageLocation
from smartstock.models.enums import LocationType
from smartstock.protocols.store import LOCATIONS, PRODUCTS
from smartstock.service import Warehouse, reset_warehouse
from smartstock.tests.seed import EMPTY_ID, PICKING_ID, PRODUCT_ID, STORAGE_ID, FakeGenerator


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Cached adapters and the shared warehouse never leak between tests."""
    reset_adapters()
    reset_warehouse()
    yield
    reset_adapters()
    reset_warehouse()


@pytest.fixture
def store():
    """
    In-memory store with one product P (minStock 5) and three locations:
    A-01-01 picking with 10 of P, A-01-02 storage with 3 of P, B-01-01 empty.
    """
    return InMemoryRecordStore({
        PRODUCTS: [{
            'id': PRODUCT_ID,
            'sku': 'PAR-M8',
            'name': 'Parafuso M8',
            'category': 'Ferragens',
            'unit': 'UN',
            'min_stock': Decimal('5'),
            'price': Decimal('0.50'),
        }],
        LOCATIONS: [
            {
                'id': PICKING_ID,
                'code': 'A-01-01',
                'type': 'PICKING',
                'product_id': PRODUCT_ID,
                'quantity': Decimal('10'),
            },
            {
                'id': STORAGE_ID,
                'code': 'A-01-02',
                'type': 'STORAGE',
                'product_id': PRODUCT_ID,
                'quantity': Decimal('3'),
            },
            {
                'id': EMPTY_ID,
                'code': 'B-01-01',
                'type': 'STORAGE',
                'product_id': None,
                'quantity': Decimal('0'),
            },
        ],
    })


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def warehouse(store, generator):
    """Loaded warehouse over the seeded in-memory store."""
    warehouse = Warehouse(store=store, generator=generator)
    warehouse.reload()
    return warehouse


@pytest.fixture
def db_product(db):
    """Product persisted through the ORM."""
    return Product.objects.create(
        sku='CAB-10',
        name='Cabo Flexível 10mm',
        category='Elétrica',
        min_stock=Decimal('20'),
        price=Decimal('12.90'),
    )


@pytest.fixture
def db_picking(db, db_product):
    return StorageLocation.objects.create(
        code='C-02-01',
        type=LocationType.PICKING,
        product=db_product,
        quantity=Decimal('15'),
    )


@pytest.fixture
def db_empty(db):
    return StorageLocation.objects.create(code='C-02-02')
