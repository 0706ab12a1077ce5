from rest_framework import serializers

from clientes.models import Cliente
from receitas.models import Receita

CAMPOS_GRAU = [
    "od_esferico",
    "od_cilindrico",
    "od_eixo",
    "od_dnp",
    "oe_esferico",
    "oe_cilindrico",
    "oe_eixo",
    "oe_dnp",
    "adicao_od",
    "adicao_oe",
    "centro_otico_od",
    "centro_otico_oe",
]


class ReceitaSerializer(serializers.ModelSerializer):
    cliente = serializers.PrimaryKeyRelatedField(queryset=Cliente.objects.filter(ativo=True))
    cliente_nome = serializers.CharField(source="cliente.nome", read_only=True)

    class Meta:
        model = Receita
        fields = [
            "id",
            "filial",
            "cliente",
            "cliente_nome",
            "data_receita",
            "nome_medico",
            "crm",
            *CAMPOS_GRAU,
            "observacoes",
            "ativo",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "filial", "ativo", "created_at", "updated_at"]

    def validate(self, attrs):
        for campo in CAMPOS_GRAU:
            if campo in attrs:
                attrs[campo] = (attrs[campo] or "").strip().replace(",", ".")

        eixos = ("od_eixo", "oe_eixo")
        for campo in eixos:
            valor = attrs.get(campo)
            if not valor:
                continue
            try:
                eixo = int(valor)
            except ValueError:
                raise serializers.ValidationError({campo: "Eixo deve ser um número inteiro."})
            if not 0 <= eixo <= 180:
                raise serializers.ValidationError({campo: "Eixo deve estar entre 0 e 180."})
        return attrs
