import uuid
from decimal import Decimal

from django.db import models

from commons.models import BaseModel


class StatusPagamento(models.TextChoices):
    PENDING = "PENDING", "Pendente"
    CONFIRMED = "CONFIRMED", "Confirmado"
    CANCELED = "CANCELED", "Cancelado"


class MetodoPagamentoTipo(models.TextChoices):
    PIX = "PIX", "Pix"
    MONEY = "MONEY", "Dinheiro"
    DEBIT = "DEBIT", "Cartão de débito"
    CREDIT = "CREDIT", "Cartão de crédito"
    INSTALLMENT = "INSTALLMENT", "Crediário (carnê)"


class Pagamento(BaseModel):
    """
    Pagamento (agregado) de uma venda.

    - total/desconto vêm da venda.
    - valor_pago, parcelas_pagas, ultimo_pagamento_em e status são
      campos derivados, recalculados a partir dos métodos e parcelas
      (ver vendas.services.pagamentos.integridade_service).
    - No máximo um pagamento ativo por venda.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    venda = models.ForeignKey(
        "vendas.Venda",
        on_delete=models.CASCADE,
        related_name="pagamentos",
    )
    filial = models.ForeignKey(
        "filial.Filial",
        on_delete=models.PROTECT,
        related_name="pagamentos",
    )

    total = models.DecimalField(max_digits=12, decimal_places=2)
    desconto = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    valor_pago = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    parcelas_pagas = models.PositiveIntegerField(default=0)

    status = models.CharField(
        max_length=10,
        choices=StatusPagamento.choices,
        default=StatusPagamento.PENDING,
        db_index=True,
    )

    ultimo_pagamento_em = models.DateTimeField(null=True, blank=True)
    motivo_cancelamento = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        verbose_name = "Pagamento"
        verbose_name_plural = "Pagamentos"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["venda"],
                condition=models.Q(ativo=True),
                name="uniq_pagamento_ativo_por_venda",
            ),
        ]

    def __str__(self):
        return f"Pagamento {self.id} ({self.status})"

    @property
    def valor_restante(self) -> Decimal:
        return max(self.total - self.desconto - self.valor_pago, Decimal("0.00"))


class PagamentoMetodoItem(BaseModel):
    """
    Forma de pagamento usada em um Pagamento.

    - Método à vista (parcelas vazio ou 0): quitado como um todo via
      pago/pago_em.
    - Método parcelado (parcelas > 0): gera PagamentoParcela 1..N a
      partir de primeiro_vencimento.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    pagamento = models.ForeignKey(
        Pagamento,
        on_delete=models.CASCADE,
        related_name="metodos",
    )

    metodo = models.CharField(
        max_length=12,
        choices=MetodoPagamentoTipo.choices,
    )
    valor = models.DecimalField(max_digits=12, decimal_places=2)

    parcelas = models.PositiveSmallIntegerField(null=True, blank=True)
    primeiro_vencimento = models.DateField(null=True, blank=True)

    pago = models.BooleanField(default=False)
    pago_em = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Método do Pagamento"
        verbose_name_plural = "Métodos do Pagamento"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.metodo} {self.valor}"

    @property
    def parcelado(self) -> bool:
        return bool(self.parcelas and self.parcelas > 0)


class PagamentoParcela(BaseModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    metodo_item = models.ForeignKey(
        PagamentoMetodoItem,
        on_delete=models.CASCADE,
        related_name="itens_parcela",
    )

    sequencia = models.PositiveSmallIntegerField()
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    valor_pago = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    data_vencimento = models.DateField(null=True, blank=True, db_index=True)
    pago_em = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Parcela"
        verbose_name_plural = "Parcelas"
        ordering = ["sequencia"]
        constraints = [
            models.UniqueConstraint(
                fields=["metodo_item", "sequencia"],
                name="uniq_parcela_sequencia_por_metodo",
            ),
        ]

    def __str__(self):
        return f"Parcela {self.sequencia} - {self.valor}"

    @property
    def valor_restante(self) -> Decimal:
        return self.valor - self.valor_pago
