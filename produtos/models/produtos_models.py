# produtos/models/produtos_models.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from commons.models import BaseModel


class CategoriaProduto(models.TextChoices):
    FRAME = "FRAME", "Armação"
    LENS = "LENS", "Lente"
    SUNGLASSES = "SUNGLASSES", "Óculos de sol"
    CONTACT_LENS = "CONTACT_LENS", "Lente de contato"
    ACCESSORY = "ACCESSORY", "Acessório"


class Produto(BaseModel):
    """
    Cadastro de produtos da ótica (armações, lentes, óculos de sol,
    lentes de contato e acessórios).

    - Estoque é controlado por filial; a venda baixa e o cancelamento
      devolve (ver vendas.services.vendas).
    - Preço de custo é opcional; preço de venda é obrigatório.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    filial = models.ForeignKey(
        "filial.Filial",
        on_delete=models.PROTECT,
        related_name="produtos",
    )

    marca = models.ForeignKey(
        "marcas.Marca",
        on_delete=models.PROTECT,
        related_name="produtos",
        null=True,
        blank=True,
    )

    nome = models.CharField(max_length=120)
    codigo = models.CharField(
        max_length=40,
        blank=True,
        default="",
        help_text="Código interno/SKU do produto.",
    )
    descricao = models.TextField(blank=True, default="")

    categoria = models.CharField(
        max_length=20,
        choices=CategoriaProduto.choices,
        db_index=True,
    )

    preco_custo = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    preco_venda = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    estoque = models.PositiveIntegerField(default=0)
    estoque_minimo = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ["nome"]
        indexes = [
            models.Index(fields=["filial", "categoria"], name="idx_produto_filial_cat"),
        ]

    def __str__(self):
        return self.nome

    @property
    def estoque_baixo(self) -> bool:
        return self.estoque <= self.estoque_minimo

    def clean(self):
        """
        Regras básicas de consistência de cadastro.
        """
        super().clean()

        if self.preco_venda is not None and self.preco_venda < 0:
            raise ValidationError({"preco_venda": "Preço de venda não pode ser negativo."})

        if self.preco_custo is not None and self.preco_custo < 0:
            raise ValidationError({"preco_custo": "Preço de custo não pode ser negativo."})
