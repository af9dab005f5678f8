"""
Management command to print the warehouse dashboard.

Usage:
    python manage.py warehouse_report
    python manage.py warehouse_report --search parafuso
    python manage.py warehouse_report --low-stock
"""

from django.core.management.base import BaseCommand

from smartstock.management.commands._helpers import load_warehouse


class Command(BaseCommand):
    """Warehouse report command."""

    help = 'Exibe o resumo do armazém, produtos e fila de separação'

    def add_arguments(self, parser):
        parser.add_argument(
            '--search',
            default='',
            help='Filtra produtos por nome ou SKU',
        )
        parser.add_argument(
            '--low-stock',
            action='store_true',
            help='Lista apenas produtos abaixo do estoque mínimo',
        )

    def handle(self, *args, **options):
        snapshot = load_warehouse().snapshot
        summary = snapshot.summary()

        self.stdout.write(self.style.MIGRATE_HEADING('Resumo'))
        self.stdout.write(f'  SKUs: {summary.sku_count}')
        self.stdout.write(f'  Estoque total: {summary.total_stock}')
        self.stdout.write(f'  Abaixo do mínimo: {summary.low_stock_count}')
        self.stdout.write(
            f'  Ocupação: {summary.occupied_locations}/{summary.total_locations}'
        )

        products = snapshot.filtered_products(options['search'])
        if options['low_stock']:
            products = [p for p in products if snapshot.is_low_stock(p)]

        self.stdout.write(self.style.MIGRATE_HEADING('Produtos'))
        if not products:
            self.stdout.write('  Nenhum produto encontrado.')
        for product in products:
            line = (
                f'  {product.sku}  {product.name}  '
                f'{snapshot.stock_of(product.id)} {product.unit} (mín. {product.min_stock})'
            )
            if snapshot.is_low_stock(product):
                self.stdout.write(self.style.WARNING(f'{line}  [BAIXO]'))
            else:
                self.stdout.write(line)

        self.stdout.write(self.style.MIGRATE_HEADING('Fila de separação'))
        queue = snapshot.picking_queue()
        if not queue:
            self.stdout.write('  Nenhum endereço de picking ocupado.')
        for location in queue:
            product = snapshot.product(location.product_id)
            name = product.name if product else 'N/A'
            self.stdout.write(f'  {location.code}  {name}  {location.quantity}')
