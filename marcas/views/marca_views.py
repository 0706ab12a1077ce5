# marcas/views/marca_views.py

from commons.viewsets import CadastroFilialViewSet
from marcas.models import Marca
from marcas.serializers import MarcaSerializer


class MarcaViewSet(CadastroFilialViewSet):
    """
    CRUD de marcas (armações, lentes, óculos de sol).
    """

    serializer_class = MarcaSerializer
    queryset = Marca.objects.all()
    search_fields = ["nome"]
