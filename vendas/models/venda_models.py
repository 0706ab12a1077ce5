import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from commons.models import BaseModel


class Venda(BaseModel):
    """
    Venda da ótica.

    - Cada venda possui exatamente um Pagamento ativo, criado junto com
      a venda (status PENDING, sem métodos).
    - Totais: subtotal = soma dos itens; total = subtotal - desconto.
    - Exclusão é lógica (ativo=False) e devolve o estoque.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    filial = models.ForeignKey(
        "filial.Filial",
        on_delete=models.PROTECT,
        related_name="vendas",
    )

    cliente = models.ForeignKey(
        "clientes.Cliente",
        on_delete=models.PROTECT,
        related_name="vendas",
    )

    receita = models.ForeignKey(
        "receitas.Receita",
        on_delete=models.SET_NULL,
        related_name="vendas",
        null=True,
        blank=True,
    )

    subtotal = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    desconto = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    observacoes = models.TextField(blank=True, default="")

    class Meta:
        verbose_name = "Venda"
        verbose_name_plural = "Vendas"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["filial", "created_at"], name="idx_venda_filial_data"),
        ]

    def __str__(self):
        return f"Venda {self.id} - {self.total}"

    @property
    def pagamento(self):
        """Pagamento ativo da venda (ou None)."""
        return self.pagamentos.filter(ativo=True).first()

    def clean(self):
        super().clean()

        if self.desconto < 0:
            raise ValidationError({"desconto": "Desconto não pode ser negativo."})

        if self.desconto > self.subtotal:
            raise ValidationError({"desconto": "Desconto não pode ser maior que o subtotal."})
