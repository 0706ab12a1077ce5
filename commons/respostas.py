# commons/respostas.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings
from django.utils import timezone
from rest_framework.response import Response


@dataclass
class RespostaServico:
    """
    Resultado padronizado de um service.

    Services de negócio não levantam exceção para falhas esperadas
    (validação, não encontrado, permissão, conflito): devolvem uma
    RespostaServico com status HTTP e mensagem. A view apenas converte
    para Response.
    """

    status: int
    mensagem: str
    dados: Any = None

    @classmethod
    def sucesso(cls, mensagem: str, dados: Any = None, status: int = 200) -> "RespostaServico":
        return cls(status=status, mensagem=mensagem, dados=dados)

    @classmethod
    def erro(cls, mensagem: str, status: int = 400, dados: Any = None) -> "RespostaServico":
        return cls(status=status, mensagem=mensagem, dados=dados)

    @classmethod
    def paginada(
        cls,
        mensagem: str,
        itens: list,
        pagina: int,
        limite: int,
        total: int,
        stats: Optional[dict] = None,
    ) -> "RespostaServico":
        dados = {
            "pagina_atual": pagina,
            "total_paginas": math.ceil(total / limite) if limite else 0,
            "total_elementos": total,
            "limite": limite,
            "conteudo": itens,
        }
        if stats:
            dados["stats"] = stats
        return cls(status=200, mensagem=mensagem, dados=dados)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def como_dict(self, path: str = "") -> dict:
        return envelope(self.status, self.mensagem, self.dados, path)

    def para_response(self, request) -> Response:
        return Response(self.como_dict(request.get_full_path()), status=self.status)


def envelope(status: int, mensagem: str, dados: Any = None, path: str = "") -> dict:
    corpo = {
        "status": status,
        "message": mensagem,
        "timestamp": timezone.now().isoformat(),
        "path": path,
    }
    if dados is not None:
        corpo["data"] = dados
    return corpo


@dataclass
class Paginacao:
    """
    Página/limite normalizados a partir da querystring
    (?pagina=1&limite=10), com limite máximo configurável.
    """

    pagina: int = 1
    limite: int = 10
    offset: int = field(init=False)

    def __post_init__(self):
        maximo = getattr(settings, "PAGINACAO_LIMITE_MAXIMO", 100)
        self.pagina = max(int(self.pagina or 1), 1)
        self.limite = min(max(int(self.limite or 1), 1), maximo)
        self.offset = (self.pagina - 1) * self.limite

    @classmethod
    def da_query(cls, query_params) -> "Paginacao":
        padrao = getattr(settings, "PAGINACAO_LIMITE_PADRAO", 10)
        try:
            pagina = int(query_params.get("pagina", 1))
            limite = int(query_params.get("limite", padrao))
        except (TypeError, ValueError):
            pagina, limite = 1, padrao
        return cls(pagina=pagina, limite=limite)
