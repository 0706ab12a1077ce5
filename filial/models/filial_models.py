import uuid

from django.core.validators import MinLengthValidator
from django.db import models


class Filial(models.Model):
    """
    Loja da ótica (filial). Vive dentro do schema do tenant; clientes,
    produtos, vendas e pagamentos são sempre escopados por filial.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    razao_social = models.CharField(max_length=120)
    nome_fantasia = models.CharField(max_length=120)

    cnpj = models.CharField(
        max_length=14,
        unique=True,
        validators=[MinLengthValidator(14)],
        help_text="CNPJ da filial (somente números, 14 dígitos).",
    )

    telefone = models.CharField(max_length=20, blank=True, default="")

    logradouro = models.CharField(max_length=120, blank=True, default="")
    numero = models.CharField(max_length=10, blank=True, default="")
    bairro = models.CharField(max_length=60, blank=True, default="")
    cidade = models.CharField(max_length=60, blank=True, default="")
    uf = models.CharField(max_length=2, blank=True, default="")
    cep = models.CharField(max_length=8, blank=True, default="")

    ativo = models.BooleanField(
        default=True,
        db_index=True,
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
    )
    updated_at = models.DateTimeField(
        auto_now=True,
    )

    class Meta:
        verbose_name = "Filial"
        verbose_name_plural = "Filiais"
        ordering = ["razao_social"]
        indexes = [
            models.Index(fields=["ativo"], name="idx_filial_ativo"),
        ]

    def __str__(self):
        return f"{self.nome_fantasia} ({self.cnpj})"

    @property
    def endereco_resumido(self) -> str:
        partes = [self.logradouro, self.numero, self.bairro, self.cidade, self.uf]
        return ", ".join(p for p in partes if p)
