from rest_framework import serializers

from clientes.models import Cliente


class ClienteSerializer(serializers.ModelSerializer):
    # aceita CPF formatado (000.000.000-00); gravado só com dígitos
    cpf = serializers.CharField(max_length=14, required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Cliente
        fields = [
            "id",
            "filial",
            "nome",
            "cpf",
            "email",
            "telefone",
            "data_nascimento",
            "endereco",
            "observacoes",
            "ativo",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "filial", "ativo", "created_at", "updated_at"]
        # a unicidade (filial, cpf) é checada em validate_cpf, pois a
        # filial só é conhecida no contexto da requisição
        validators = []

    def validate_cpf(self, value):
        if not value:
            return None
        digits = "".join(ch for ch in value if ch.isdigit())
        if len(digits) != 11:
            raise serializers.ValidationError("CPF deve ter 11 dígitos.")

        qs = Cliente.objects.filter(cpf=digits, ativo=True)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk).filter(filial_id=self.instance.filial_id)
        else:
            filial_id = self.context.get("filial_id")
            if filial_id:
                qs = qs.filter(filial_id=filial_id)
        if qs.exists():
            raise serializers.ValidationError("Já existe cliente com este CPF.")
        return digits
