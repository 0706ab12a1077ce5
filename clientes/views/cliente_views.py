# clientes/views/cliente_views.py

from commons.contexto import contexto_da_requisicao
from commons.viewsets import CadastroFilialViewSet
from clientes.models import Cliente
from clientes.serializers import ClienteSerializer


class ClienteViewSet(CadastroFilialViewSet):
    """
    CRUD de clientes da filial. Busca por nome, CPF, e-mail ou telefone.
    """

    serializer_class = ClienteSerializer
    queryset = Cliente.objects.all()
    search_fields = ["nome", "cpf", "email", "telefone"]

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        if self.request is not None and self.request.user.is_authenticated:
            ctx["filial_id"] = contexto_da_requisicao(self.request).filial_id
        return ctx
