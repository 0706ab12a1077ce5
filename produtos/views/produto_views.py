# produtos/views/produto_views.py

from django.db.models import F

from commons.viewsets import CadastroFilialViewSet
from produtos.models import Produto
from produtos.serializers.produto_serializers import ProdutoSerializer


class ProdutoViewSet(CadastroFilialViewSet):
    """
    CRUD de produtos da filial.

    Filtros: ?categoria=LENS, ?marca=<uuid> e ?estoque_baixo=true.
    """

    serializer_class = ProdutoSerializer
    queryset = Produto.objects.select_related("marca")
    filterset_fields = ["categoria", "marca"]
    search_fields = ["nome", "codigo", "descricao", "marca__nome"]

    def get_queryset(self):
        qs = super().get_queryset()
        if self.request.query_params.get("estoque_baixo") in ("1", "true", "True"):
            qs = qs.filter(estoque__lte=F("estoque_minimo"))
        return qs
