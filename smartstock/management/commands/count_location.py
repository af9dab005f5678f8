"""
Management command to record a cycle count.

Usage:
    python manage.py count_location A-01-02 7
"""

from django.core.management.base import BaseCommand, CommandError

from smartstock.exceptions import WarehouseError
from smartstock.management.commands._helpers import error_message, load_warehouse, resolve_location
from smartstock.models.enums import AuditStatus


class Command(BaseCommand):
    """Cycle count command."""

    help = 'Registra a contagem física de um endereço'

    def add_arguments(self, parser):
        parser.add_argument('code', help='Código do endereço')
        parser.add_argument('counted', help='Quantidade real contada')

    def handle(self, *args, **options):
        warehouse = load_warehouse()
        location = resolve_location(warehouse, options['code'])

        try:
            audit = warehouse.execute_audit(location.id, options['counted'])
        except WarehouseError as e:
            raise CommandError(error_message(e)) from e

        if audit.status == AuditStatus.MATCHED:
            self.stdout.write(self.style.SUCCESS('Contagem OK! Sem divergências.'))
        else:
            self.stdout.write(self.style.WARNING(
                f'Estoque ajustado: {location.code} {audit.expected_qty} → {audit.actual_qty}'
            ))
