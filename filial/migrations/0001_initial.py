import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Filial",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("razao_social", models.CharField(max_length=120)),
                ("nome_fantasia", models.CharField(max_length=120)),
                (
                    "cnpj",
                    models.CharField(
                        help_text="CNPJ da filial (somente números, 14 dígitos).",
                        max_length=14,
                        unique=True,
                        validators=[django.core.validators.MinLengthValidator(14)],
                    ),
                ),
                ("telefone", models.CharField(blank=True, default="", max_length=20)),
                ("logradouro", models.CharField(blank=True, default="", max_length=120)),
                ("numero", models.CharField(blank=True, default="", max_length=10)),
                ("bairro", models.CharField(blank=True, default="", max_length=60)),
                ("cidade", models.CharField(blank=True, default="", max_length=60)),
                ("uf", models.CharField(blank=True, default="", max_length=2)),
                ("cep", models.CharField(blank=True, default="", max_length=8)),
                ("ativo", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Filial",
                "verbose_name_plural": "Filiais",
                "ordering": ["razao_social"],
                "indexes": [models.Index(fields=["ativo"], name="idx_filial_ativo")],
            },
        ),
    ]
