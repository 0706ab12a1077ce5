# commons/viewsets.py

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, permissions, filters
from rest_framework.exceptions import PermissionDenied, ValidationError

from commons.contexto import contexto_da_requisicao, usuario_tem_acesso_filial

logger = logging.getLogger(__name__)


class CadastroFilialViewSet(viewsets.ModelViewSet):
    """
    Base dos cadastros escopados por filial (marcas, clientes, produtos,
    receitas).

    - Lista apenas registros ativos das filiais do usuário.
    - No create, carimba a filial do contexto e o usuário responsável.
    - DELETE é exclusão lógica (ativo=False).
    """

    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]

    def get_queryset(self):
        qs = super().get_queryset().filter(ativo=True)
        user = self.request.user
        if user.is_superuser:
            return qs
        return qs.filter(filial_id__in=user.filiais_ids())

    def perform_create(self, serializer):
        contexto = contexto_da_requisicao(self.request)
        if contexto.filial_id is None:
            raise ValidationError({"filial": "Filial não identificada para o usuário."})
        if not usuario_tem_acesso_filial(contexto.usuario, contexto.filial_id):
            raise PermissionDenied("Usuário sem acesso à filial informada.")

        instance = serializer.save(
            filial_id=contexto.filial_id,
            criado_por=contexto.usuario,
            atualizado_por=contexto.usuario,
        )
        logger.info(
            "cadastro_criado",
            extra={
                "event": "cadastro_criado",
                "modelo": instance._meta.label,
                "id": str(instance.pk),
                "filial_id": str(contexto.filial_id),
            },
        )

    def perform_update(self, serializer):
        serializer.save(atualizado_por=self.request.user)

    def perform_destroy(self, instance):
        instance.ativo = False
        campos = instance.carimbar_auditoria(self.request.user, atualizacao=True)
        instance.save(update_fields=["ativo", *campos])
        logger.info(
            "cadastro_inativado",
            extra={
                "event": "cadastro_inativado",
                "modelo": instance._meta.label,
                "id": str(instance.pk),
            },
        )
