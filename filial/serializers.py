from rest_framework import serializers

from filial.models import Filial


class FilialSerializer(serializers.ModelSerializer):
    endereco_resumido = serializers.CharField(read_only=True)

    class Meta:
        model = Filial
        fields = [
            "id",
            "razao_social",
            "nome_fantasia",
            "cnpj",
            "telefone",
            "logradouro",
            "numero",
            "bairro",
            "cidade",
            "uf",
            "cep",
            "endereco_resumido",
            "ativo",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "ativo", "created_at", "updated_at"]

    def validate_cnpj(self, value):
        digits = "".join(ch for ch in value if ch.isdigit())
        if len(digits) != 14:
            raise serializers.ValidationError("CNPJ deve ter 14 dígitos.")
        return digits

    def validate_uf(self, value):
        return (value or "").upper()
