# produtos/serializers/produto_serializers.py

from rest_framework import serializers

from marcas.models import Marca
from produtos.models import Produto


class ProdutoSerializer(serializers.ModelSerializer):
    marca = serializers.PrimaryKeyRelatedField(
        queryset=Marca.objects.filter(ativo=True),
        required=False,
        allow_null=True,
    )
    marca_nome = serializers.CharField(source="marca.nome", read_only=True)
    categoria_desc = serializers.CharField(source="get_categoria_display", read_only=True)
    estoque_baixo = serializers.BooleanField(read_only=True)

    class Meta:
        model = Produto
        fields = [
            "id",
            "filial",
            "nome",
            "codigo",
            "descricao",
            "categoria",
            "categoria_desc",
            "marca",
            "marca_nome",
            "preco_custo",
            "preco_venda",
            "estoque",
            "estoque_minimo",
            "estoque_baixo",
            "ativo",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "filial", "ativo", "created_at", "updated_at"]

    def validate(self, attrs):
        """
        Reaproveita as validações de model.clean().
        """
        campos = {k: v for k, v in attrs.items() if k != "marca"}
        instance = Produto(**campos)
        instance.clean()
        return attrs
