# commons/contexto.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from django.db import connection


@dataclass(frozen=True)
class ContextoRequisicao:
    """
    Quem está operando e em qual filial.

    O tenant não precisa ser carregado aqui: o isolamento é feito pelo
    schema ativo (django-tenants). A filial é resolvida, nesta ordem, por:
      1) claim 'filial_id' do JWT;
      2) cabeçalho X-Filial-ID;
      3) única filial vinculada ao usuário (UserFilial).
    """

    usuario: object
    filial_id: Optional[uuid.UUID]
    schema: str
    request_id: Optional[str] = None

    @property
    def usuario_id(self):
        return getattr(self.usuario, "pk", None)


def _como_uuid(valor) -> Optional[uuid.UUID]:
    if not valor:
        return None
    try:
        return uuid.UUID(str(valor))
    except (TypeError, ValueError):
        return None


def contexto_da_requisicao(request) -> ContextoRequisicao:
    usuario = request.user
    token = getattr(request, "auth", None)

    filial_id = None
    if token is not None and hasattr(token, "get"):
        filial_id = _como_uuid(token.get("filial_id"))

    if filial_id is None:
        filial_id = _como_uuid(request.headers.get("X-Filial-ID"))

    if filial_id is None and getattr(usuario, "is_authenticated", False):
        vinculos = list(
            usuario.userfilial_set.values_list("filial_id", flat=True)[:2]
        )
        if len(vinculos) == 1:
            filial_id = vinculos[0]

    return ContextoRequisicao(
        usuario=usuario,
        filial_id=filial_id,
        schema=getattr(connection, "schema_name", "public"),
        request_id=getattr(request, "request_id", None),
    )


def usuario_tem_acesso_filial(usuario, filial_id) -> bool:
    """
    Superusuário acessa todas as filiais do tenant; demais usuários apenas
    as filiais vinculadas em UserFilial.
    """
    if usuario is None or not getattr(usuario, "is_authenticated", False):
        return False
    if usuario.is_superuser:
        return True
    return usuario.userfilial_set.filter(filial_id=filial_id).exists()
