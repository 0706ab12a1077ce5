# tenants/permissions.py
import hmac
import logging

from django.conf import settings
from django.db import connection
from django_tenants.utils import get_public_schema_name
from rest_framework.permissions import BasePermission

logger = logging.getLogger(__name__)

HEADER_TOKEN = "X-Tenant-Provisioning-Token"


class PublicProvisioningPermission(BasePermission):
    """
    Libera o cadastro de novas óticas (tenants) pelo domínio público.

    A chamada precisa chegar no schema público e trazer no header
    X-Tenant-Provisioning-Token o mesmo valor de
    settings.TENANT_PROVISIONING_TOKEN. Token vazio no settings desliga
    o provisionamento.
    """

    message = "Provisionamento de ótica não autorizado."

    def _negar(self, request, motivo: str, nivel: int = logging.WARNING, **extra) -> bool:
        logger.log(
            nivel,
            "provisionamento_negado",
            extra={
                "event": "provisionamento_negado",
                "motivo": motivo,
                "path": request.path,
                "method": request.method,
                **extra,
            },
        )
        return False

    def has_permission(self, request, view) -> bool:
        schema_atual = getattr(connection, "schema_name", None)
        if schema_atual != get_public_schema_name():
            return self._negar(request, "schema_nao_publico", schema=schema_atual)

        esperado = getattr(settings, "TENANT_PROVISIONING_TOKEN", "") or ""
        if not esperado:
            return self._negar(request, "token_nao_configurado", nivel=logging.ERROR)

        recebido = request.headers.get(HEADER_TOKEN) or ""
        if not recebido:
            return self._negar(request, "token_ausente")

        if not hmac.compare_digest(recebido.encode(), esperado.encode()):
            return self._negar(request, "token_invalido")

        logger.info(
            "provisionamento_autorizado",
            extra={"event": "provisionamento_autorizado", "path": request.path},
        )
        return True
