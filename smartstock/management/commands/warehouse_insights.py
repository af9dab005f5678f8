"""
Management command to ask the text generator for warehouse suggestions.

Usage:
    python manage.py warehouse_insights
    python manage.py warehouse_insights --suggest-for "Parafuso M8" --category Ferragens
"""

from django.core.management.base import BaseCommand, CommandError

from smartstock.exceptions import WarehouseError
from smartstock.management.commands._helpers import error_message, load_warehouse


class Command(BaseCommand):
    """Warehouse insights command."""

    help = 'Gera análises do estoque ou sugestões de endereço para um produto'

    def add_arguments(self, parser):
        parser.add_argument(
            '--suggest-for',
            dest='suggest_for',
            help='Nome do produto para sugerir endereços',
        )
        parser.add_argument(
            '--category',
            default='',
            help='Categoria do produto (obrigatória com --suggest-for)',
        )

    def handle(self, *args, **options):
        warehouse = load_warehouse()

        if options['suggest_for'] is not None:
            product = {'name': options['suggest_for'], 'category': options['category']}
            try:
                suggestions = warehouse.placement_suggestions(product)
            except WarehouseError as e:
                raise CommandError(error_message(e)) from e

            if not suggestions:
                self.stdout.write(self.style.WARNING('Nenhuma sugestão disponível.'))
                return
            for suggestion in suggestions:
                self.stdout.write(
                    f'{suggestion.location_code} ({suggestion.score:g}): {suggestion.reason}'
                )
            return

        insights = warehouse.insights()
        if not insights:
            self.stdout.write(self.style.WARNING('Nenhuma análise disponível.'))
            return
        for insight in insights:
            self.stdout.write(self.style.SUCCESS(insight.title))
            self.stdout.write(f'  {insight.description}')
