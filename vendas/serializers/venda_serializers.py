# vendas/serializers/venda_serializers.py

from rest_framework import serializers

from vendas.models import Venda, VendaItem


class VendaItemSerializer(serializers.ModelSerializer):
    produto_id = serializers.UUIDField(source="produto.id", read_only=True)
    produto_nome = serializers.CharField(source="produto.nome", read_only=True)
    total_item = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = VendaItem
        fields = [
            "id",
            "produto_id",
            "produto_nome",
            "quantidade",
            "preco_unitario",
            "total_item",
        ]


class VendaSerializer(serializers.ModelSerializer):
    filial_id = serializers.UUIDField(source="filial.id", read_only=True)
    cliente_id = serializers.UUIDField(source="cliente.id", read_only=True)
    cliente_nome = serializers.CharField(source="cliente.nome", read_only=True)
    receita_id = serializers.UUIDField(read_only=True, allow_null=True)
    itens = VendaItemSerializer(many=True, read_only=True)
    pagamento = serializers.SerializerMethodField()

    class Meta:
        model = Venda
        fields = [
            "id",
            "filial_id",
            "cliente_id",
            "cliente_nome",
            "receita_id",
            "subtotal",
            "desconto",
            "total",
            "observacoes",
            "itens",
            "pagamento",
            "created_at",
            "updated_at",
        ]

    def get_pagamento(self, obj):
        pagamento = obj.pagamento
        if pagamento is None:
            return None
        return {
            "id": str(pagamento.id),
            "status": pagamento.status,
            "valor_pago": f"{pagamento.valor_pago:.2f}",
        }


class ItemVendaEntradaSerializer(serializers.Serializer):
    produto_id = serializers.UUIDField()
    quantidade = serializers.IntegerField(min_value=1)


class VendaCriarSerializer(serializers.Serializer):
    cliente_id = serializers.UUIDField()
    receita_id = serializers.UUIDField(required=False, allow_null=True)
    desconto = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    observacoes = serializers.CharField(required=False, allow_blank=True)
    itens = ItemVendaEntradaSerializer(many=True, allow_empty=True)


class VendaAtualizarSerializer(serializers.Serializer):
    cliente_id = serializers.UUIDField(required=False)
    receita_id = serializers.UUIDField(required=False, allow_null=True)
    desconto = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    observacoes = serializers.CharField(required=False, allow_blank=True)
    itens = ItemVendaEntradaSerializer(many=True, required=False, allow_empty=True)


class FiltrosVendaSerializer(serializers.Serializer):
    cliente_id = serializers.UUIDField(required=False)
    data_inicio = serializers.DateField(required=False)
    data_fim = serializers.DateField(required=False)
