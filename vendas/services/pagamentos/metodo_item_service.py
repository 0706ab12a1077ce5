# vendas/services/pagamentos/metodo_item_service.py

from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from commons.contexto import ContextoRequisicao
from commons.respostas import RespostaServico
from vendas.models import PagamentoMetodoItem, StatusPagamento
from vendas.services.pagamentos import calculos
from vendas.services.pagamentos.acesso import carregar_metodo_item, carregar_pagamento
from vendas.services.pagamentos.integridade_service import (
    gerar_parcelas,
    recalcular_status_pagamento,
)
from vendas.services.pagamentos.pagamento_service import (
    criar_metodos,
    serializar_pagamento,
    validar_metodo_entrada,
    validar_soma_com_novo_valor,
)

logger = logging.getLogger(__name__)


def _erro_pagamento_fechado(pagamento) -> Optional[RespostaServico]:
    if pagamento.status == StatusPagamento.CANCELED:
        return RespostaServico.erro("Não é possível modificar um pagamento cancelado.")
    if pagamento.status == StatusPagamento.CONFIRMED:
        return RespostaServico.erro("Não é possível alterar métodos de um pagamento confirmado.")
    return None


def _possui_pagamento_registrado(metodo_item) -> bool:
    if metodo_item.pago:
        return True
    return metodo_item.itens_parcela.filter(pago_em__isnull=False).exists()


@transaction.atomic
def adicionar_metodo(pagamento_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    pagamento, erro = carregar_pagamento(pagamento_id, contexto, para_atualizar=True)
    if erro:
        return erro

    erro = (
        _erro_pagamento_fechado(pagamento)
        or validar_metodo_entrada(dados)
        or validar_soma_com_novo_valor(pagamento, calculos.arredondar(dados["valor"]))
    )
    if erro:
        return erro

    metodo_item = criar_metodos(pagamento, [dados], contexto.usuario)[0]
    recalcular_status_pagamento(pagamento, contexto.usuario)

    logger.info(
        "metodo_adicionado",
        extra={
            "event": "metodo_adicionado",
            "pagamento_id": str(pagamento.id),
            "metodo_item_id": str(metodo_item.id),
            "metodo": metodo_item.metodo,
        },
    )

    return RespostaServico.sucesso(
        "Método de pagamento adicionado com sucesso.",
        serializar_pagamento(pagamento),
        status=201,
    )


@transaction.atomic
def atualizar_metodo(metodo_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Atualiza um método. Alterar valor, parcelas ou primeiro_vencimento
    de um método parcelado refaz o cronograma de parcelas.
    """
    metodo_item, erro = carregar_metodo_item(metodo_id, contexto)
    if erro:
        return erro

    erro = _erro_pagamento_fechado(metodo_item.pagamento)
    if erro:
        return erro

    if _possui_pagamento_registrado(metodo_item):
        return RespostaServico.erro(
            "Não é possível alterar um método que já foi pago ou possui parcelas pagas."
        )

    mesclado = {
        "metodo": dados.get("metodo", metodo_item.metodo),
        "valor": dados.get("valor", metodo_item.valor),
        "parcelas": dados.get("parcelas", metodo_item.parcelas),
        "primeiro_vencimento": dados.get("primeiro_vencimento", metodo_item.primeiro_vencimento),
    }
    erro = validar_metodo_entrada(mesclado) or validar_soma_com_novo_valor(
        metodo_item.pagamento,
        calculos.arredondar(mesclado["valor"]),
        ignorar_metodo_id=metodo_item.pk,
    )
    if erro:
        return erro

    refazer_cronograma = any(
        campo in dados and dados[campo] != getattr(metodo_item, campo)
        for campo in ("valor", "parcelas", "primeiro_vencimento")
    )

    metodo_item.metodo = mesclado["metodo"]
    metodo_item.valor = calculos.arredondar(mesclado["valor"])
    metodo_item.parcelas = mesclado["parcelas"] or None
    metodo_item.primeiro_vencimento = (
        mesclado["primeiro_vencimento"] if metodo_item.parcelas else None
    )
    if metodo_item.parcelado:
        metodo_item.pago = False
        metodo_item.pago_em = None
    campos = metodo_item.carimbar_auditoria(contexto.usuario, atualizacao=True)
    metodo_item.save(
        update_fields=[
            "metodo",
            "valor",
            "parcelas",
            "primeiro_vencimento",
            "pago",
            "pago_em",
            *campos,
        ]
    )

    if refazer_cronograma or not metodo_item.parcelado:
        metodo_item.itens_parcela.all().delete()
    if metodo_item.parcelado and not metodo_item.itens_parcela.exists():
        gerar_parcelas(metodo_item, contexto.usuario)

    recalcular_status_pagamento(metodo_item.pagamento, contexto.usuario)

    logger.info(
        "metodo_atualizado",
        extra={
            "event": "metodo_atualizado",
            "metodo_item_id": str(metodo_item.id),
            "cronograma_refeito": refazer_cronograma,
        },
    )

    return RespostaServico.sucesso(
        "Método de pagamento atualizado com sucesso.",
        serializar_pagamento(metodo_item.pagamento),
    )


@transaction.atomic
def remover_metodo(metodo_id, contexto: ContextoRequisicao) -> RespostaServico:
    metodo_item, erro = carregar_metodo_item(metodo_id, contexto)
    if erro:
        return erro

    erro = _erro_pagamento_fechado(metodo_item.pagamento)
    if erro:
        return erro

    if _possui_pagamento_registrado(metodo_item):
        return RespostaServico.erro(
            "Não é possível remover um método que já foi pago ou possui parcelas pagas."
        )

    pagamento = metodo_item.pagamento
    metodo_item.itens_parcela.all().delete()
    metodo_item.delete()

    recalcular_status_pagamento(pagamento, contexto.usuario)

    logger.info(
        "metodo_removido",
        extra={"event": "metodo_removido", "metodo_item_id": str(metodo_id)},
    )
    return RespostaServico.sucesso("Método de pagamento removido com sucesso.")


@transaction.atomic
def pagar_metodo_item(metodo_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Quita um método à vista (PIX, dinheiro, cartão sem parcelas).
    Métodos parcelados são pagos parcela a parcela.
    """
    metodo_item, erro = carregar_metodo_item(metodo_id, contexto)
    if erro:
        return erro

    metodo_item = PagamentoMetodoItem.objects.select_for_update().select_related("pagamento").get(
        pk=metodo_item.pk
    )

    if metodo_item.pagamento.status == StatusPagamento.CANCELED:
        return RespostaServico.erro("Não é possível modificar um pagamento cancelado.")

    if metodo_item.parcelado:
        return RespostaServico.erro(
            "Método parcelado deve ser pago por parcela."
        )

    if metodo_item.pago:
        return RespostaServico.erro("Este método de pagamento já foi pago.")

    metodo_item.pago = True
    metodo_item.pago_em = dados.get("pago_em") or timezone.now()
    campos = metodo_item.carimbar_auditoria(contexto.usuario, atualizacao=True)
    metodo_item.save(update_fields=["pago", "pago_em", *campos])

    pagamento = recalcular_status_pagamento(metodo_item.pagamento, contexto.usuario)

    logger.info(
        "metodo_pago",
        extra={
            "event": "metodo_pago",
            "metodo_item_id": str(metodo_item.id),
            "pagamento_id": str(pagamento.id),
            "status_pagamento": pagamento.status,
        },
    )

    return RespostaServico.sucesso(
        "Pagamento do método registrado com sucesso.",
        serializar_pagamento(pagamento),
    )
