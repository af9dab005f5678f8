"""
SmartStock Admin.

Direct access to the three store collections for back-office work:
- Product: list + edit, with total stock and low-stock flag
- StorageLocation: list + edit
- InventoryAudit: read-only ledger (timestamp, expected, counted, status)
"""

from decimal import Decimal

from django.contrib import admin
from django.db.models import F, Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

from smartstock.models import InventoryAudit, Product, StorageLocation


# =========================================================================
# PRODUCT ADMIN
# =========================================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product admin — editable, with stock summed across locations."""

    list_display = ['sku', 'name', 'category', 'unit', 'min_stock', 'price',
                    'total_stock_display', 'is_low_stock_display']
    list_filter = ['category', 'unit']
    search_fields = ['sku', 'name']
    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _total_stock=Coalesce(Sum('locations__quantity'), Decimal('0')),
        )

    @admin.display(description=_('Estoque Total'), ordering='_total_stock')
    def total_stock_display(self, obj):
        return obj._total_stock

    @admin.display(description=_('Abaixo do mínimo'), boolean=True)
    def is_low_stock_display(self, obj):
        return obj._total_stock < obj.min_stock


# =========================================================================
# STORAGE LOCATION ADMIN
# =========================================================================

@admin.register(StorageLocation)
class StorageLocationAdmin(admin.ModelAdmin):
    """StorageLocation admin — editable."""

    list_display = ['code', 'type', 'product', 'quantity']
    list_filter = ['type']
    search_fields = ['code', 'product__sku', 'product__name']
    list_select_related = ['product']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# INVENTORY AUDIT ADMIN (read-only ledger)
# =========================================================================

@admin.register(InventoryAudit)
class InventoryAuditAdmin(admin.ModelAdmin):
    """InventoryAudit admin — read-only. Audits are immutable."""

    list_display = ['date', 'location_display', 'expected_qty', 'actual_qty',
                    'difference_display', 'status']
    list_filter = ['status', 'date']
    readonly_fields = ['date', 'location_id', 'product_id', 'expected_qty',
                       'actual_qty', 'status']
    date_hierarchy = 'date'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _difference=F('actual_qty') - F('expected_qty'),
        )

    @admin.display(description=_('Endereço'))
    def location_display(self, obj):
        location = StorageLocation.objects.filter(pk=obj.location_id).first()
        return location.code if location else 'N/A'

    @admin.display(description=_('Diferença'), ordering='_difference')
    def difference_display(self, obj):
        return obj._difference
