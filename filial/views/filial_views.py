# filial/views/filial_views.py

import logging

from django.apps import apps
from rest_framework import viewsets, permissions, filters
from rest_framework.exceptions import PermissionDenied

from filial.models import Filial
from filial.serializers import FilialSerializer

logger = logging.getLogger(__name__)


class FilialViewSet(viewsets.ModelViewSet):
    """
    CRUD de filiais do tenant.

    Usuário comum enxerga apenas as filiais vinculadas a ele; somente
    ADMIN cadastra novas filiais (e fica vinculado a elas).
    """

    serializer_class = FilialSerializer
    permission_classes = [permissions.IsAuthenticated]
    queryset = Filial.objects.all()
    filter_backends = [filters.SearchFilter]
    search_fields = ["razao_social", "nome_fantasia", "cnpj", "cidade"]

    def get_queryset(self):
        qs = super().get_queryset().filter(ativo=True)
        user = self.request.user
        if user.is_superuser:
            return qs
        return qs.filter(id__in=user.filiais_ids())

    def _exigir_admin(self):
        user = self.request.user
        if not (user.is_superuser or user.papel == user.Papel.ADMIN):
            raise PermissionDenied("Apenas administradores podem alterar filiais.")

    def perform_create(self, serializer):
        self._exigir_admin()
        filial = serializer.save()

        UserFilial = apps.get_model("usuario", "UserFilial")
        UserFilial.objects.get_or_create(user=self.request.user, filial_id=filial.id)

        logger.info(
            "filial_criada",
            extra={"event": "filial_criada", "filial_id": str(filial.id)},
        )

    def perform_update(self, serializer):
        self._exigir_admin()
        serializer.save()

    def perform_destroy(self, instance):
        self._exigir_admin()
        instance.ativo = False
        instance.save(update_fields=["ativo", "updated_at"])
