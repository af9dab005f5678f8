"""
StorageLocation model — Where stock exists.
"""

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from smartstock.models.enums import LocationType


class StorageLocation(models.Model):
    """
    Addressable slot holding zero or one product line.

    Examples:
        StorageLocation.objects.create(code='A-01-02', type=LocationType.PICKING)
        StorageLocation.objects.create(code='R-10-01', product=parafuso, quantity=120)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(
        unique=True,
        max_length=50,
        verbose_name=_('Código'),
        help_text=_('Corredor-Nível-Posição (ex: A-01-02)'),
    )
    type = models.CharField(
        max_length=10,
        choices=LocationType.choices,
        default=LocationType.STORAGE,
        verbose_name=_('Tipo'),
    )
    product = models.ForeignKey(
        'smartstock.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='locations',
        verbose_name=_('Produto'),
        help_text=_('Vazio = endereço livre'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name=_('Quantidade'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'storage_locations'
        verbose_name = _('Endereço')
        verbose_name_plural = _('Endereços')
        ordering = ['code']
        indexes = [
            models.Index(fields=['type', 'product'], name='storage_loc_type_product_idx'),
        ]

    def __str__(self) -> str:
        return self.code
