# commons/exceptions.py

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from commons.respostas import envelope

logger = logging.getLogger(__name__)


def _mensagem_de(dados) -> str:
    if isinstance(dados, dict):
        if "detail" in dados:
            return str(dados["detail"])
        return "Dados inválidos."
    if isinstance(dados, list) and dados:
        return str(dados[0])
    return str(dados)


def tratar_excecao(exc, context):
    """
    EXCEPTION_HANDLER do DRF.

    - Exceções conhecidas do DRF (validação 400, auth 401, permissão 403,
      404, throttle 429) ganham o envelope padrão com 'message'.
    - ValidationError do Django (model.clean) vira 400.
    - Qualquer outra exceção é registrada e devolvida como 500 genérico.
    """
    request = context.get("request")
    path = request.get_full_path() if request is not None else ""

    if isinstance(exc, DjangoValidationError):
        dados = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        return Response(
            envelope(status.HTTP_400_BAD_REQUEST, _mensagem_de(dados), dados, path),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)

    if response is not None:
        dados = response.data
        response.data = envelope(response.status_code, _mensagem_de(dados), dados, path)
        return response

    view = context.get("view")
    logger.exception(
        "erro_inesperado",
        extra={
            "event": "erro_inesperado",
            "view": view.__class__.__name__ if view is not None else None,
            "path": path,
            "request_id": getattr(request, "request_id", None),
        },
    )
    return Response(
        envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Erro interno no servidor.",
            None,
            path,
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
