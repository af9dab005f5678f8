"""
InventoryAudit model — Immutable ledger of cycle counts.
"""

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from smartstock.models.enums import AuditStatus


class InventoryAudit(models.Model):
    """
    Immutable record of a physical count.

    Rules:
    - NEVER update() or delete()
    - expected_qty is the location quantity before the count
    - Location and product are plain ids, not foreign keys: the ledger
      outlives the slots and products it refers to.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))
    location_id = models.UUIDField(db_index=True, verbose_name=_('Endereço'))
    product_id = models.UUIDField(null=True, blank=True, verbose_name=_('Produto'))
    expected_qty = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Esperado'),
    )
    actual_qty = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Contado'),
    )
    status = models.CharField(
        max_length=10,
        choices=AuditStatus.choices,
        verbose_name=_('Status'),
    )

    class Meta:
        db_table = 'inventory_audits'
        verbose_name = _('Auditoria')
        verbose_name_plural = _('Auditorias')
        ordering = ['-date']

    def save(self, *args, **kwargs):
        """Save audit once; existing rows are immutable."""
        if not self._state.adding:
            raise ValueError(
                "Auditorias são imutáveis. "
                "Para corrigir, registre uma nova contagem."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — audits are immutable."""
        raise ValueError("Auditorias são imutáveis e não podem ser excluídas.")

    def __str__(self) -> str:
        return f"{self.date:%d/%m/%y %H:%M} | {self.expected_qty} → {self.actual_qty} ({self.status})"
