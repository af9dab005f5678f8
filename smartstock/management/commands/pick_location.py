"""
Management command to confirm a pick.

Usage:
    python manage.py pick_location A-01-02 5
"""

from django.core.management.base import BaseCommand, CommandError

from smartstock.exceptions import WarehouseError
from smartstock.management.commands._helpers import error_message, load_warehouse, resolve_location


class Command(BaseCommand):
    """Pick confirmation command."""

    help = 'Confirma a separação de uma quantidade de um endereço'

    def add_arguments(self, parser):
        parser.add_argument('code', help='Código do endereço')
        parser.add_argument('quantity', help='Quantidade separada')

    def handle(self, *args, **options):
        warehouse = load_warehouse()
        location = resolve_location(warehouse, options['code'])

        try:
            updated = warehouse.complete_picking(location.id, options['quantity'])
        except WarehouseError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                raise CommandError(
                    f'{e.message}: disponível {e.available}, solicitado {e.requested}'
                ) from e
            raise CommandError(error_message(e)) from e

        self.stdout.write(
            self.style.SUCCESS(f'{updated.code}: restam {updated.quantity}')
        )
