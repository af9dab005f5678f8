"""
Enums for SmartStock models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Unit(models.TextChoices):
    """Unit of measure of a product."""
    PIECE = 'UN', _('Unidade')
    KILOGRAM = 'KG', _('Quilograma')
    LITER = 'LT', _('Litro')
    BOX = 'CX', _('Caixa')


class LocationType(models.TextChoices):
    """
    Kind of storage slot.

    PICKING: Front slot that feeds order picking. Occupied PICKING slots
             form the picking queue.
    STORAGE: Reserve slot (pallet rack, back stock).
    """
    PICKING = 'PICKING', _('Picking (Separação)')
    STORAGE = 'STORAGE', _('Armazenagem')


class AuditStatus(models.TextChoices):
    """Outcome of a cycle count."""
    MATCHED = 'MATCHED', _('Conforme')   # Counted == expected
    ADJUSTED = 'ADJUSTED', _('Ajustado') # Location corrected to the count
