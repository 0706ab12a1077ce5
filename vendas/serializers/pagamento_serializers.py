# vendas/serializers/pagamento_serializers.py

from rest_framework import serializers

from vendas.models import (
    MetodoPagamentoTipo,
    Pagamento,
    PagamentoMetodoItem,
    PagamentoParcela,
    StatusPagamento,
)
from vendas.services.pagamentos import calculos


# --- Saída -----------------------------------------------------------------

class PagamentoParcelaSerializer(serializers.ModelSerializer):
    metodo_item_id = serializers.UUIDField(source="metodo_item.id", read_only=True)

    class Meta:
        model = PagamentoParcela
        fields = [
            "id",
            "metodo_item_id",
            "sequencia",
            "valor",
            "valor_pago",
            "data_vencimento",
            "pago_em",
            "ativo",
        ]


class PagamentoMetodoItemSerializer(serializers.ModelSerializer):
    metodo_desc = serializers.CharField(source="get_metodo_display", read_only=True)
    itens_parcela = serializers.SerializerMethodField()

    class Meta:
        model = PagamentoMetodoItem
        fields = [
            "id",
            "metodo",
            "metodo_desc",
            "valor",
            "parcelas",
            "primeiro_vencimento",
            "pago",
            "pago_em",
            "itens_parcela",
        ]

    def get_itens_parcela(self, obj):
        parcelas = [p for p in obj.itens_parcela.all() if p.ativo]
        return PagamentoParcelaSerializer(parcelas, many=True).data


class PagamentoSerializer(serializers.ModelSerializer):
    venda_id = serializers.UUIDField(source="venda.id", read_only=True)
    filial_id = serializers.UUIDField(source="filial.id", read_only=True)
    cliente_id = serializers.UUIDField(source="venda.cliente_id", read_only=True)
    cliente_nome = serializers.CharField(source="venda.cliente.nome", read_only=True)
    status_desc = serializers.CharField(source="get_status_display", read_only=True)
    metodos = serializers.SerializerMethodField()

    class Meta:
        model = Pagamento
        fields = [
            "id",
            "venda_id",
            "filial_id",
            "cliente_id",
            "cliente_nome",
            "total",
            "desconto",
            "valor_pago",
            "parcelas_pagas",
            "status",
            "status_desc",
            "ultimo_pagamento_em",
            "motivo_cancelamento",
            "metodos",
            "created_at",
            "updated_at",
        ]

    def get_metodos(self, obj):
        metodos = [m for m in obj.metodos.all() if m.ativo]
        return PagamentoMetodoItemSerializer(metodos, many=True).data


# --- Entrada ---------------------------------------------------------------

class MetodoItemEntradaSerializer(serializers.Serializer):
    metodo = serializers.ChoiceField(choices=MetodoPagamentoTipo.choices)
    valor = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    parcelas = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=calculos.MAX_PARCELAS
    )
    primeiro_vencimento = serializers.DateField(required=False, allow_null=True)


class MetodoItemAtualizarSerializer(serializers.Serializer):
    metodo = serializers.ChoiceField(choices=MetodoPagamentoTipo.choices, required=False)
    valor = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    parcelas = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=calculos.MAX_PARCELAS
    )
    primeiro_vencimento = serializers.DateField(required=False, allow_null=True)


class PagamentoCriarSerializer(serializers.Serializer):
    venda_id = serializers.UUIDField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    desconto = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    metodos = MetodoItemEntradaSerializer(many=True, required=False)


class PagamentoAtualizarSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    desconto = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=StatusPagamento.choices, required=False)
    motivo_cancelamento = serializers.CharField(required=False, allow_blank=True, max_length=255)
    metodos = MetodoItemEntradaSerializer(many=True, required=False)


class StatusPagamentoSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=StatusPagamento.choices)
    motivo = serializers.CharField(required=False, allow_blank=True, max_length=255)


class PagarParcelaSerializer(serializers.Serializer):
    valor_pago = serializers.DecimalField(max_digits=12, decimal_places=2)
    pago_em = serializers.DateTimeField(required=False, allow_null=True)


class PagarMetodoSerializer(serializers.Serializer):
    pago_em = serializers.DateTimeField(required=False, allow_null=True)


class ParcelaAtualizarSerializer(serializers.Serializer):
    valor = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    data_vencimento = serializers.DateField(required=False)
    sequencia = serializers.IntegerField(required=False, min_value=1)


class FiltrosPagamentoSerializer(serializers.Serializer):
    """Querystring de GET /pagamentos/."""

    status = serializers.ChoiceField(choices=StatusPagamento.choices, required=False)
    metodo = serializers.ChoiceField(choices=MetodoPagamentoTipo.choices, required=False)
    data_inicio = serializers.DateField(required=False)
    data_fim = serializers.DateField(required=False)
    cliente_id = serializers.UUIDField(required=False)
    cliente_nome = serializers.CharField(required=False)
    com_parcelas_vencidas = serializers.BooleanField(required=False, default=False)
    parcialmente_pago = serializers.BooleanField(required=False, default=False)
    vencimento_em_dias = serializers.IntegerField(required=False, min_value=0)
