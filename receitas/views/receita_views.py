# receitas/views/receita_views.py

from commons.viewsets import CadastroFilialViewSet
from receitas.models import Receita
from receitas.serializers import ReceitaSerializer


class ReceitaViewSet(CadastroFilialViewSet):
    """
    CRUD de receitas. Aceita ?cliente=<uuid> para listar o histórico
    de um cliente.
    """

    serializer_class = ReceitaSerializer
    queryset = Receita.objects.select_related("cliente")
    filterset_fields = ["cliente"]
    search_fields = ["cliente__nome", "nome_medico", "crm"]
