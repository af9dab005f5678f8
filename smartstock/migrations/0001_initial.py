"""
Initial migration for SmartStock models.
"""

from decimal import Decimal
import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create SmartStock models: Product, StorageLocation, InventoryAudit."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sku', models.CharField(max_length=64, unique=True, verbose_name='SKU')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('category', models.CharField(blank=True, default='Geral', max_length=100, verbose_name='Categoria')),
                ('unit', models.CharField(choices=[('UN', 'Unidade'), ('KG', 'Quilograma'), ('LT', 'Litro'), ('CX', 'Caixa')], default='UN', max_length=2, verbose_name='Unidade')),
                ('min_stock', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='Estoque mínimo')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='Preço')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'db_table': 'products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='StorageLocation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(help_text='Corredor-Nível-Posição (ex: A-01-02)', max_length=50, unique=True, verbose_name='Código')),
                ('type', models.CharField(choices=[('PICKING', 'Picking (Separação)'), ('STORAGE', 'Armazenagem')], default='STORAGE', max_length=10, verbose_name='Tipo')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='Quantidade')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(blank=True, help_text='Vazio = endereço livre', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='locations', to='smartstock.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Endereço',
                'verbose_name_plural': 'Endereços',
                'db_table': 'storage_locations',
                'ordering': ['code'],
                'indexes': [models.Index(fields=['type', 'product'], name='storage_loc_type_product_idx')],
            },
        ),
        migrations.CreateModel(
            name='InventoryAudit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('location_id', models.UUIDField(db_index=True, verbose_name='Endereço')),
                ('product_id', models.UUIDField(blank=True, null=True, verbose_name='Produto')),
                ('expected_qty', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Esperado')),
                ('actual_qty', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Contado')),
                ('status', models.CharField(choices=[('MATCHED', 'Conforme'), ('ADJUSTED', 'Ajustado')], max_length=10, verbose_name='Status')),
            ],
            options={
                'verbose_name': 'Auditoria',
                'verbose_name_plural': 'Auditorias',
                'db_table': 'inventory_audits',
                'ordering': ['-date'],
            },
        ),
    ]
