# vendas/services/pagamentos/parcela_pagar_service.py

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from commons.contexto import ContextoRequisicao
from commons.respostas import RespostaServico
from vendas.models import StatusPagamento
from vendas.services.pagamentos import calculos
from vendas.services.pagamentos.acesso import carregar_parcela
from vendas.services.pagamentos.integridade_service import recalcular_status_pagamento
from vendas.services.pagamentos.parcela_service import enriquecer_parcela

logger = logging.getLogger(__name__)


@transaction.atomic
def pagar_parcela(parcela_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Registra pagamento (total ou parcial) de uma parcela.

    - Parcela quitada, pagamento cancelado, valor <= 0 ou valor acima do
      restante são recusados sem alterar nada.
    - pago_em só é preenchido quando a parcela fica totalmente quitada.
    - Ao final, recalcula o agregado do pagamento.
    """
    parcela, erro = carregar_parcela(parcela_id, contexto, para_atualizar=True)
    if erro:
        return erro

    pagamento = parcela.metodo_item.pagamento

    if parcela.pago_em is not None:
        return RespostaServico.erro("Esta parcela já foi paga completamente.")

    if pagamento.status == StatusPagamento.CANCELED:
        return RespostaServico.erro("Não é possível pagar parcela de um pagamento cancelado.")

    valor = calculos.arredondar(dados.get("valor_pago") or Decimal("0"))
    if valor <= 0:
        return RespostaServico.erro("O valor pago deve ser maior que zero.")

    restante = calculos.arredondar(parcela.valor - parcela.valor_pago)
    if valor > restante:
        return RespostaServico.erro(
            f"O valor pago ({valor}) não pode ser maior que o valor restante "
            f"da parcela ({restante:.2f})."
        )

    parcela.valor_pago = calculos.arredondar(parcela.valor_pago + valor)
    quitada = parcela.valor_pago >= parcela.valor
    if quitada:
        parcela.pago_em = dados.get("pago_em") or timezone.now()

    campos = parcela.carimbar_auditoria(contexto.usuario, atualizacao=True)
    parcela.save(update_fields=["valor_pago", "pago_em", *campos])

    pagamento = recalcular_status_pagamento(pagamento, contexto.usuario)

    logger.info(
        "parcela_paga",
        extra={
            "event": "parcela_paga",
            "parcela_id": str(parcela.id),
            "pagamento_id": str(pagamento.id),
            "valor": str(valor),
            "quitada": quitada,
            "status_pagamento": pagamento.status,
        },
    )

    restante_final = parcela.valor - parcela.valor_pago
    return RespostaServico.sucesso(
        "Pagamento da parcela registrado com sucesso.",
        {
            "parcela": enriquecer_parcela(parcela, timezone.localdate()),
            "pagamento": {
                "id": str(pagamento.id),
                "status": pagamento.status,
                "valor_pago": calculos.como_texto(pagamento.valor_pago),
                "parcelas_pagas": pagamento.parcelas_pagas,
            },
            "mensagem": (
                "Parcela paga completamente."
                if quitada
                else f"Pagamento parcial registrado. Restante: R$ {restante_final:.2f}"
            ),
        },
    )
