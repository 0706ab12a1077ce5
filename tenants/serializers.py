# tenants/serializers.py
from rest_framework import serializers


class FilialCreateSerializer(serializers.Serializer):
    """
    Dados da loja (filial) inicial informados no provisionamento.
    """
    razao_social = serializers.CharField(max_length=120)
    nome_fantasia = serializers.CharField(max_length=120)
    cnpj = serializers.CharField(min_length=14, max_length=14)
    telefone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    logradouro = serializers.CharField(max_length=120, required=False, allow_blank=True)
    numero = serializers.CharField(max_length=10, required=False, allow_blank=True)
    bairro = serializers.CharField(max_length=60, required=False, allow_blank=True)
    cidade = serializers.CharField(max_length=60, required=False, allow_blank=True)
    uf = serializers.CharField(max_length=2, required=False, allow_blank=True)
    cep = serializers.CharField(max_length=8, required=False, allow_blank=True)

    def validate_cnpj(self, value):
        if not value.isdigit():
            raise serializers.ValidationError("CNPJ deve conter apenas dígitos.")
        return value


class TenantCreateSerializer(serializers.Serializer):
    cnpj_raiz = serializers.CharField(min_length=14, max_length=14)
    nome = serializers.CharField(max_length=150)
    domain = serializers.CharField(max_length=255)

    admin_username = serializers.CharField(max_length=150, required=False)
    admin_password = serializers.CharField(
        min_length=8, required=False, write_only=True
    )

    filial = FilialCreateSerializer()

    def validate_cnpj_raiz(self, value):
        if not value.isdigit():
            raise serializers.ValidationError("CNPJ raiz deve conter apenas dígitos.")
        return value
