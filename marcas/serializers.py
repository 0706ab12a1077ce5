from rest_framework import serializers

from marcas.models import Marca


class MarcaSerializer(serializers.ModelSerializer):
    class Meta:
        model = Marca
        fields = ["id", "filial", "nome", "descricao", "ativo", "created_at", "updated_at"]
        read_only_fields = ["id", "filial", "ativo", "created_at", "updated_at"]

    def validate_nome(self, value):
        nome = value.strip()
        if not nome:
            raise serializers.ValidationError("Nome da marca é obrigatório.")
        return nome
