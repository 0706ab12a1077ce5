import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class VendaItem(models.Model):
    """
    Item de produto da venda. O preço unitário é um snapshot do
    preço de venda do produto no momento da venda.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    venda = models.ForeignKey(
        "vendas.Venda",
        on_delete=models.CASCADE,
        related_name="itens",
    )
    produto = models.ForeignKey(
        "produtos.Produto",
        on_delete=models.PROTECT,
        related_name="itens_venda",
    )

    quantidade = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    preco_unitario = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Item da Venda"
        verbose_name_plural = "Itens da Venda"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.quantidade}x {self.produto_id}"

    @property
    def total_item(self) -> Decimal:
        return (self.preco_unitario * self.quantidade).quantize(Decimal("0.01"))
