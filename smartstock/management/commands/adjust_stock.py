"""
Management command to adjust a location's quantity.

Usage:
    python manage.py adjust_stock A-01-02 5
    python manage.py adjust_stock A-01-02 -- -3
"""

from django.core.management.base import BaseCommand, CommandError

from smartstock.exceptions import WarehouseError
from smartstock.management.commands._helpers import error_message, load_warehouse, resolve_location


class Command(BaseCommand):
    """Adjust stock command."""

    help = 'Ajusta a quantidade de um endereço (nunca abaixo de zero)'

    def add_arguments(self, parser):
        parser.add_argument('code', help='Código do endereço')
        parser.add_argument('delta', help='Variação (positiva ou negativa)')

    def handle(self, *args, **options):
        warehouse = load_warehouse()
        location = resolve_location(warehouse, options['code'])

        try:
            updated = warehouse.adjust_stock(location.id, options['delta'])
        except WarehouseError as e:
            raise CommandError(error_message(e)) from e

        self.stdout.write(
            self.style.SUCCESS(f'{updated.code}: {location.quantity} → {updated.quantity}')
        )
