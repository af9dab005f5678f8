"""
Tests for the Warehouse service API.
"""

from decimal import Decimal

import pytest

from smartstock.adapters.memory import InMemoryRecordStore
from smartstock.exceptions import WarehouseError
from smartstock.models.enums import AuditStatus, LocationType, Unit
from smartstock.protocols.store import AUDITS, LOCATIONS, PRODUCTS, StoreResult
from smartstock.service import Warehouse
from smartstock.tests.seed import EMPTY_ID, PICKING_ID, PRODUCT_ID, STORAGE_ID, FakeGenerator


def fail_writes(monkeypatch, store, method, collection, error='write rejected'):
    """Make one store method fail for one collection."""
    original = getattr(store, method)

    def patched(target, *args, **kwargs):
        if target == collection:
            return StoreResult.failure(error)
        return original(target, *args, **kwargs)

    monkeypatch.setattr(store, method, patched)


class TestAdjustStock:
    """Tests for warehouse.adjust_stock()."""

    def test_adds_delta(self, warehouse):
        location = warehouse.adjust_stock(PICKING_ID, 5)

        assert location.quantity == Decimal('15')
        assert warehouse.snapshot.location(PICKING_ID).quantity == Decimal('15')

    def test_floors_at_zero(self, warehouse):
        """10 + (-20) becomes 0, not -10."""
        location = warehouse.adjust_stock(PICKING_ID, -20)

        assert location.quantity == Decimal('0')

    def test_accepts_text_delta(self, warehouse):
        assert warehouse.adjust_stock(STORAGE_ID, '-1.5').quantity == Decimal('1.5')

    def test_unknown_location_is_a_noop(self, warehouse, store):
        before = warehouse.snapshot

        assert warehouse.adjust_stock('missing', 5) is None
        assert store.journal == []
        assert warehouse.snapshot is before

    def test_invalid_delta(self, warehouse, store):
        with pytest.raises(WarehouseError) as exc:
            warehouse.adjust_stock(PICKING_ID, 'abc')

        assert exc.value.code == 'INVALID_VALUE'
        assert store.journal == []

    def test_snapshot_replaced_not_mutated(self, warehouse):
        before = warehouse.snapshot

        warehouse.adjust_stock(PICKING_ID, 1)

        assert before.location(PICKING_ID).quantity == Decimal('10')
        assert warehouse.snapshot is not before

    def test_adjustment_flips_low_stock(self):
        """P (min 5) alone in L with 10 is not low; after -8 it is."""
        store = InMemoryRecordStore({
            PRODUCTS: [{'id': 'p', 'sku': 'P', 'name': 'P', 'min_stock': Decimal('5')}],
            LOCATIONS: [{'id': 'l', 'code': 'L', 'product_id': 'p', 'quantity': Decimal('10')}],
        })
        warehouse = Warehouse(store=store, generator=FakeGenerator())
        warehouse.reload()
        product = warehouse.snapshot.product('p')

        assert warehouse.snapshot.stock_of('p') == Decimal('10')
        assert not warehouse.snapshot.is_low_stock(product)

        location = warehouse.adjust_stock('l', -8)

        assert location.quantity == Decimal('2')
        assert warehouse.snapshot.stock_of('p') == Decimal('2')
        assert warehouse.snapshot.is_low_stock(product)
        assert warehouse.snapshot.low_stock_products() == [product]


class TestExecuteAudit:
    """Tests for warehouse.execute_audit()."""

    def test_matching_count_records_matched(self, warehouse, store):
        audit = warehouse.execute_audit(PICKING_ID, 10)

        assert audit.status == AuditStatus.MATCHED
        assert audit.expected_qty == Decimal('10')
        assert audit.actual_qty == Decimal('10')
        assert store.journal == [('insert', AUDITS, audit.id)]

    def test_divergent_count_adjusts_location(self, warehouse, store):
        audit = warehouse.execute_audit(PICKING_ID, 7)

        assert audit.status == AuditStatus.ADJUSTED
        assert audit.expected_qty == Decimal('10')
        assert audit.actual_qty == Decimal('7')
        assert audit.product_id == PRODUCT_ID
        assert warehouse.snapshot.location(PICKING_ID).quantity == Decimal('7')
        assert [op for op, _, _ in store.journal] == ['insert', 'update']

    def test_audit_appears_in_history(self, warehouse):
        warehouse.execute_audit(STORAGE_ID, 2)

        line = warehouse.snapshot.audit_history()[0]

        assert line.location_code == 'A-01-02'
        assert line.product_name == 'Parafuso M8'
        assert line.audit.difference == Decimal('-1')

    def test_count_on_empty_location(self, warehouse):
        audit = warehouse.execute_audit(EMPTY_ID, 0)

        assert audit.product_id is None
        assert audit.status == AuditStatus.MATCHED

    @pytest.mark.parametrize('location_id,counted,code', [
        ('', 5, 'LOCATION_REQUIRED'),
        (PICKING_ID, '', 'COUNT_REQUIRED'),
        (PICKING_ID, None, 'COUNT_REQUIRED'),
        (PICKING_ID, -1, 'INVALID_QUANTITY'),
        (PICKING_ID, 'dez', 'INVALID_VALUE'),
        ('missing', 5, 'LOCATION_NOT_FOUND'),
    ])
    def test_validation(self, warehouse, store, location_id, counted, code):
        with pytest.raises(WarehouseError) as exc:
            warehouse.execute_audit(location_id, counted)

        assert exc.value.code == code
        assert store.journal == []

    def test_failed_correction_rolls_back_audit(self, warehouse, store, monkeypatch):
        """Audit insert and location update commit together or not at all."""
        fail_writes(monkeypatch, store, 'update', LOCATIONS, 'timeout')

        with pytest.raises(WarehouseError) as exc:
            warehouse.execute_audit(PICKING_ID, 7)

        assert exc.value.code == 'STORE_ERROR'
        assert exc.value.message == 'timeout'
        assert store.tables[AUDITS] == []
        assert store.find(LOCATIONS, PICKING_ID)['quantity'] == Decimal('10')
        assert store.journal == []

    def test_audit_after_iso_dated_history(self, warehouse, store):
        """Stored ISO timestamps and new audits sort together on reload."""
        store.insert(AUDITS, [{
            'date': '2020-01-01T10:00:00+00:00',
            'location_id': PICKING_ID,
            'product_id': PRODUCT_ID,
            'expected_qty': Decimal('10'),
            'actual_qty': Decimal('10'),
            'status': 'MATCHED',
        }])
        warehouse.reload()

        audit = warehouse.execute_audit(PICKING_ID, 7)

        assert warehouse.loaded
        assert warehouse.snapshot.location(PICKING_ID).quantity == Decimal('7')
        assert [a.id for a in warehouse.snapshot.audits][0] == audit.id
        assert warehouse.snapshot.audits[1].date.year == 2020

    def test_unparseable_audit_date_is_rejected(self, store):
        result = store.insert(AUDITS, [{
            'date': 'ontem',
            'location_id': PICKING_ID,
            'expected_qty': Decimal('1'),
            'actual_qty': Decimal('1'),
            'status': 'MATCHED',
        }])

        assert not result.ok
        assert store.tables[AUDITS] == []


class TestCompletePicking:
    """Tests for warehouse.complete_picking()."""

    def test_subtracts_quantity(self, warehouse):
        location = warehouse.complete_picking(PICKING_ID, 4)

        assert location.quantity == Decimal('6')

    def test_picking_everything_keeps_slot_in_queue(self, warehouse):
        location = warehouse.complete_picking(PICKING_ID, 10)

        assert location.quantity == Decimal('0')
        assert location.product_id == PRODUCT_ID
        assert [l.id for l in warehouse.snapshot.picking_queue()] == [PICKING_ID]

    def test_insufficient_quantity(self, warehouse, store):
        with pytest.raises(WarehouseError) as exc:
            warehouse.complete_picking(PICKING_ID, 11)

        assert exc.value.code == 'INSUFFICIENT_QUANTITY'
        assert exc.value.available == Decimal('10')
        assert exc.value.requested == Decimal('11')
        assert store.journal == []
        assert warehouse.snapshot.location(PICKING_ID).quantity == Decimal('10')

    @pytest.mark.parametrize('quantity', [0, -2, ''])
    def test_non_positive_quantity(self, warehouse, store, quantity):
        with pytest.raises(WarehouseError) as exc:
            warehouse.complete_picking(PICKING_ID, quantity)

        assert exc.value.code == 'INVALID_QUANTITY'
        assert store.journal == []

    def test_unknown_location(self, warehouse):
        with pytest.raises(WarehouseError) as exc:
            warehouse.complete_picking('missing', 1)

        assert exc.value.code == 'LOCATION_NOT_FOUND'

    def test_store_error_is_reported_verbatim(self, warehouse, store, monkeypatch):
        fail_writes(monkeypatch, store, 'update', LOCATIONS, 'permission denied for table')

        with pytest.raises(WarehouseError) as exc:
            warehouse.complete_picking(PICKING_ID, 1)

        assert exc.value.code == 'STORE_ERROR'
        assert str(exc.value) == 'permission denied for table'


class TestProducts:
    """Tests for save_product() / delete_product()."""

    def test_create_normalizes_fields(self, warehouse):
        product = warehouse.save_product({
            'name': '  Arruela  ',
            'sku': ' arr-8 ',
            'min_stock': '4',
            'price': '0.10',
        })

        assert product.sku == 'ARR-8'
        assert product.name == 'Arruela'
        assert product.category == 'Geral'
        assert product.unit == Unit.PIECE
        assert product.min_stock == Decimal('4')
        assert product.price == Decimal('0.10')
        assert warehouse.snapshot.is_low_stock(product)

    def test_update(self, warehouse):
        product = warehouse.save_product(
            {'name': 'Parafuso M8 Inox', 'sku': 'PAR-M8', 'unit': 'CX', 'category': 'Ferragens'},
            product_id=PRODUCT_ID,
        )

        assert product.id == PRODUCT_ID
        assert product.name == 'Parafuso M8 Inox'
        assert product.unit == Unit.BOX

    def test_update_unknown_product(self, warehouse):
        with pytest.raises(WarehouseError) as exc:
            warehouse.save_product({'name': 'X', 'sku': 'X'}, product_id='missing')

        assert exc.value.code == 'PRODUCT_NOT_FOUND'

    def test_duplicate_sku(self, warehouse):
        with pytest.raises(WarehouseError) as exc:
            warehouse.save_product({'name': 'Outro', 'sku': 'par-m8'})

        assert exc.value.code == 'STORE_ERROR'
        assert 'duplicate key' in exc.value.message
        assert len(warehouse.snapshot.products) == 1

    @pytest.mark.parametrize('data,code', [
        ({'sku': 'X'}, 'NAME_REQUIRED'),
        ({'name': 'X', 'sku': '  '}, 'SKU_REQUIRED'),
        ({'name': 'X', 'sku': 'X', 'unit': 'TON'}, 'INVALID_UNIT'),
        ({'name': 'X', 'sku': 'X', 'price': 'caro'}, 'INVALID_VALUE'),
    ])
    def test_validation(self, warehouse, store, data, code):
        with pytest.raises(WarehouseError) as exc:
            warehouse.save_product(data)

        assert exc.value.code == code
        assert store.journal == []

    def test_delete_requires_confirmation(self, warehouse, store):
        with pytest.raises(WarehouseError) as exc:
            warehouse.delete_product(PRODUCT_ID)

        assert exc.value.code == 'CONFIRMATION_REQUIRED'
        assert store.journal == []

    def test_delete_empties_its_locations(self, warehouse):
        warehouse.delete_product(PRODUCT_ID, confirm=True)
        snapshot = warehouse.snapshot

        assert snapshot.products == ()
        assert snapshot.location(PICKING_ID).product_id is None
        assert snapshot.location(PICKING_ID).quantity == Decimal('10')
        assert snapshot.picking_queue() == []

    def test_failed_delete_keeps_location_references(self, warehouse, store, monkeypatch):
        fail_writes(monkeypatch, store, 'delete', PRODUCTS)

        with pytest.raises(WarehouseError):
            warehouse.delete_product(PRODUCT_ID, confirm=True)

        assert store.find(LOCATIONS, PICKING_ID)['product_id'] == PRODUCT_ID
        assert store.find(PRODUCTS, PRODUCT_ID) is not None


class TestLocations:
    """Tests for save_location() / delete_location()."""

    def test_create(self, warehouse):
        location = warehouse.save_location({
            'code': 'c-03-01',
            'type': 'PICKING',
            'product_id': PRODUCT_ID,
            'quantity': '8',
        })

        assert location.code == 'C-03-01'
        assert location.type == LocationType.PICKING
        assert warehouse.snapshot.stock_of(PRODUCT_ID) == Decimal('21')

    def test_defaults(self, warehouse):
        location = warehouse.save_location({'code': 'D-01'})

        assert location.type == LocationType.STORAGE
        assert location.product_id is None
        assert location.quantity == Decimal('0')

    def test_duplicate_code(self, warehouse):
        with pytest.raises(WarehouseError) as exc:
            warehouse.save_location({'code': 'a-01-01'})

        assert exc.value.code == 'STORE_ERROR'

    @pytest.mark.parametrize('data,code', [
        ({'code': ''}, 'CODE_REQUIRED'),
        ({'code': 'X', 'type': 'DOCK'}, 'INVALID_TYPE'),
        ({'code': 'X', 'quantity': '-1'}, 'INVALID_QUANTITY'),
    ])
    def test_validation(self, warehouse, store, data, code):
        with pytest.raises(WarehouseError) as exc:
            warehouse.save_location(data)

        assert exc.value.code == code
        assert store.journal == []

    def test_delete_keeps_audits(self, warehouse):
        warehouse.execute_audit(EMPTY_ID, 0)

        warehouse.delete_location(EMPTY_ID, confirm=True)

        assert warehouse.snapshot.location(EMPTY_ID) is None
        assert warehouse.snapshot.audit_history()[0].location_code == 'N/A'

    def test_delete_requires_confirmation(self, warehouse):
        with pytest.raises(WarehouseError) as exc:
            warehouse.delete_location(EMPTY_ID)

        assert exc.value.code == 'CONFIRMATION_REQUIRED'


class TestInFlight:
    """Duplicate submissions of the same operation are rejected."""

    def test_same_operation_same_location_rejected(self, warehouse, store):
        with warehouse.in_flight.claim('complete_picking', PICKING_ID):
            with pytest.raises(WarehouseError) as exc:
                warehouse.complete_picking(PICKING_ID, 1)

        assert exc.value.code == 'OPERATION_IN_PROGRESS'
        assert store.journal == []

    def test_other_location_proceeds(self, warehouse):
        with warehouse.in_flight.claim('complete_picking', PICKING_ID):
            location = warehouse.complete_picking(STORAGE_ID, 1)

        assert location.quantity == Decimal('2')

    def test_token_released_after_failure(self, warehouse):
        with pytest.raises(WarehouseError):
            warehouse.complete_picking(PICKING_ID, 99)

        assert not warehouse.in_flight.is_running('complete_picking', PICKING_ID)
        assert warehouse.complete_picking(PICKING_ID, 1).quantity == Decimal('9')


class TestLoadState:
    """Tests for the loaded / failed-load lifecycle."""

    def test_not_loaded_before_reload(self, store):
        warehouse = Warehouse(store=store)

        with pytest.raises(WarehouseError) as exc:
            warehouse.snapshot

        assert exc.value.code == 'NOT_LOADED'

    def test_failed_reload_blocks_operations(self, warehouse, store, monkeypatch):
        original = store.select
        monkeypatch.setattr(store, 'select', lambda *a, **kw: StoreResult.failure('offline'))

        with pytest.raises(WarehouseError) as exc:
            warehouse.reload()

        assert exc.value.code == 'LOAD_FAILED'
        assert warehouse.load_error == 'offline'
        assert not warehouse.loaded

        with pytest.raises(WarehouseError) as exc:
            warehouse.complete_picking(PICKING_ID, 1)

        assert exc.value.code == 'NOT_LOADED'
        assert store.journal == []

        monkeypatch.setattr(store, 'select', original)
        warehouse.reload()

        assert warehouse.loaded
        assert warehouse.load_error is None

    def test_zero_audit_limit_keeps_no_history(self, store):
        warehouse = Warehouse(store=store, generator=FakeGenerator(), audit_limit=0)
        warehouse.reload()

        warehouse.execute_audit(PICKING_ID, 10)

        assert warehouse.audit_limit == 0
        assert warehouse.snapshot.audits == ()
        assert len(store.tables[AUDITS]) == 1


class TestSuggestions:
    """Tests for insights() and placement_suggestions()."""

    def test_insights(self, warehouse, generator):
        generator.answer = '[{"title": "Reabastecer", "description": "A-01-02 com 3 un."}]'

        insights = warehouse.insights()

        assert [i.title for i in insights] == ['Reabastecer']
        assert len(generator.calls) == 1

    def test_insights_degrade_on_backend_error(self, warehouse, generator):
        generator.error = RuntimeError('quota exceeded')

        assert warehouse.insights() == []

    def test_placements(self, warehouse, generator):
        generator.answer = '[{"locationCode": "B-01-01", "reason": "Vazio", "score": 87}]'

        suggestions = warehouse.placement_suggestions({'name': 'Porca', 'category': 'Ferragens'})

        assert suggestions[0].location_code == 'B-01-01'
        assert suggestions[0].score == 87.0

    def test_placements_require_category(self, warehouse, generator):
        with pytest.raises(WarehouseError) as exc:
            warehouse.placement_suggestions({'name': 'Porca', 'category': ''})

        assert exc.value.code == 'CATEGORY_REQUIRED'
        assert generator.calls == []
