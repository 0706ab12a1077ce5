import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("clientes", "0001_initial"),
        ("filial", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Receita",
            fields=[
                ("ativo", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("data_receita", models.DateField()),
                ("nome_medico", models.CharField(blank=True, default="", max_length=120)),
                ("crm", models.CharField(blank=True, default="", max_length=20)),
                ("od_esferico", models.CharField(blank=True, default="", max_length=10)),
                ("od_cilindrico", models.CharField(blank=True, default="", max_length=10)),
                ("od_eixo", models.CharField(blank=True, default="", max_length=10)),
                ("od_dnp", models.CharField(blank=True, default="", max_length=10)),
                ("oe_esferico", models.CharField(blank=True, default="", max_length=10)),
                ("oe_cilindrico", models.CharField(blank=True, default="", max_length=10)),
                ("oe_eixo", models.CharField(blank=True, default="", max_length=10)),
                ("oe_dnp", models.CharField(blank=True, default="", max_length=10)),
                ("adicao_od", models.CharField(blank=True, default="", max_length=10)),
                ("adicao_oe", models.CharField(blank=True, default="", max_length=10)),
                ("centro_otico_od", models.CharField(blank=True, default="", max_length=10)),
                ("centro_otico_oe", models.CharField(blank=True, default="", max_length=10)),
                ("observacoes", models.TextField(blank=True, default="")),
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
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="receitas",
                        to="clientes.cliente",
                    ),
                ),
                (
                    "filial",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="receitas",
                        to="filial.filial",
                    ),
                ),
            ],
            options={
                "verbose_name": "Receita",
                "verbose_name_plural": "Receitas",
                "ordering": ["-data_receita", "-created_at"],
            },
        ),
    ]
