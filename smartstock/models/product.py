"""
Product model — What is stored.
"""

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from smartstock.models.enums import Unit


class Product(models.Model):
    """
    Catalog entry, identified by a unique SKU.

    Stock is not stored here: a product's total stock is the sum of the
    quantities of the storage locations that reference it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sku = models.CharField(
        unique=True,
        max_length=64,
        verbose_name=_('SKU'),
    )
    name = models.CharField(
        max_length=200,
        verbose_name=_('Nome'),
    )
    category = models.CharField(
        max_length=100,
        blank=True,
        default='Geral',
        verbose_name=_('Categoria'),
    )
    unit = models.CharField(
        max_length=2,
        choices=Unit.choices,
        default=Unit.PIECE,
        verbose_name=_('Unidade'),
    )
    min_stock = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name=_('Estoque mínimo'),
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name=_('Preço'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        verbose_name = _('Produto')
        verbose_name_plural = _('Produtos')
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.sku} — {self.name}"
