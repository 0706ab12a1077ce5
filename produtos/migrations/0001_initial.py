import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("filial", "0001_initial"),
        ("marcas", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Produto",
            fields=[
                ("ativo", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("nome", models.CharField(max_length=120)),
                (
                    "codigo",
                    models.CharField(blank=True, default="", help_text="Código interno/SKU do produto.", max_length=40),
                ),
                ("descricao", models.TextField(blank=True, default="")),
                (
                    "categoria",
                    models.CharField(
                        choices=[
                            ("FRAME", "Armação"),
                            ("LENS", "Lente"),
                            ("SUNGLASSES", "Óculos de sol"),
                            ("CONTACT_LENS", "Lente de contato"),
                            ("ACCESSORY", "Acessório"),
                        ],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("preco_custo", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("preco_venda", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("estoque", models.PositiveIntegerField(default=0)),
                ("estoque_minimo", models.PositiveIntegerField(default=0)),
                (
                    "atualizado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "criado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "filial",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="produtos",
                        to="filial.filial",
                    ),
                ),
                (
                    "marca",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="produtos",
                        to="marcas.marca",
                    ),
                ),
            ],
            options={
                "verbose_name": "Produto",
                "verbose_name_plural": "Produtos",
                "ordering": ["nome"],
                "indexes": [models.Index(fields=["filial", "categoria"], name="idx_produto_filial_cat")],
            },
        ),
    ]
