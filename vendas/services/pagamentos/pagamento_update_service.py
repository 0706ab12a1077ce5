# vendas/services/pagamentos/pagamento_update_service.py

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from commons.contexto import ContextoRequisicao
from commons.respostas import RespostaServico
from vendas.models import PagamentoParcela, StatusPagamento
from vendas.serializers.pagamento_serializers import (
    PagamentoMetodoItemSerializer,
)
from vendas.services.pagamentos import calculos
from vendas.services.pagamentos.acesso import carregar_pagamento
from vendas.services.pagamentos.integridade_service import (
    recalcular_status_pagamento,
    validar_integridade_pagamento,
)
from vendas.services.pagamentos.pagamento_service import (
    criar_metodos,
    serializar_pagamento,
    validar_metodo_entrada,
    validar_soma_metodos,
)

logger = logging.getLogger(__name__)


def _possui_parcela_paga(pagamento) -> bool:
    return PagamentoParcela.objects.filter(
        metodo_item__pagamento=pagamento,
        metodo_item__ativo=True,
        ativo=True,
        pago_em__isnull=False,
    ).exists()


def _erro_transicao(status_atual: str, novo_status: str):
    if status_atual == StatusPagamento.CONFIRMED and novo_status == StatusPagamento.PENDING:
        return RespostaServico.erro("Não é possível reabrir um pagamento já confirmado.")
    if status_atual == StatusPagamento.CANCELED and novo_status != StatusPagamento.CANCELED:
        return RespostaServico.erro("Não é possível modificar um pagamento cancelado.")
    return None


def _aplicar_status(pagamento, novo_status: str, motivo: str = "") -> list:
    """Aplica a transição e devolve os campos alterados."""
    campos = ["status"]
    pagamento.status = novo_status

    if novo_status == StatusPagamento.CANCELED and motivo:
        pagamento.motivo_cancelamento = motivo
        campos.append("motivo_cancelamento")

    if novo_status == StatusPagamento.CONFIRMED:
        # confirmação manual: consolida pelo total líquido
        pagamento.valor_pago = calculos.arredondar(pagamento.total - pagamento.desconto)
        pagamento.ultimo_pagamento_em = timezone.now()
        campos += ["valor_pago", "ultimo_pagamento_em"]

    return campos


@transaction.atomic
def atualizar_pagamento(pagamento_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Atualiza total/desconto/status e, opcionalmente, substitui os métodos.

    - Cancelado não pode ser alterado.
    - Confirmado só aceita mudança de status (e motivo_cancelamento).
    - Alterar o total sem enviar métodos exige que os métodos atuais
      continuem somando o novo total.
    - Substituir métodos é proibido quando já existe parcela paga; a
      soma dos novos métodos deve bater com o total (novo ou atual).
    """
    pagamento, erro = carregar_pagamento(pagamento_id, contexto, para_atualizar=True)
    if erro:
        return erro

    if pagamento.status == StatusPagamento.CANCELED:
        return RespostaServico.erro("Não é possível atualizar um pagamento cancelado.")

    novo_status = dados.get("status")

    if pagamento.status == StatusPagamento.CONFIRMED:
        bloqueados = [
            campo for campo in dados if campo not in ("status", "motivo_cancelamento")
        ]
        if bloqueados:
            return RespostaServico.erro(
                "Pagamento confirmado só pode ter o status alterado. "
                f"Campos bloqueados: {', '.join(bloqueados)}"
            )

    if novo_status:
        erro = _erro_transicao(pagamento.status, novo_status)
        if erro:
            return erro

    metodos = dados.get("metodos")
    if metodos is not None:
        if _possui_parcela_paga(pagamento):
            return RespostaServico.erro(
                "Não é possível alterar os métodos de pagamento quando já existem parcelas pagas."
            )

        for metodo in metodos:
            erro = validar_metodo_entrada(metodo)
            if erro:
                return erro

        erro = validar_soma_metodos(metodos, dados.get("total", pagamento.total))
        if erro:
            return erro
    elif "total" in dados and pagamento.metodos.filter(ativo=True).exists():
        soma_atual = calculos.somar(
            pagamento.metodos.filter(ativo=True).values_list("valor", flat=True)
        )
        if not calculos.dentro_da_tolerancia(soma_atual, dados["total"]):
            return RespostaServico.erro(
                f"O novo total (R$ {calculos.arredondar(dados['total']):.2f}) não bate com a "
                f"soma dos métodos (R$ {soma_atual:.2f}). Envie os métodos junto com o total."
            )

    campos = []
    for campo in ("total", "desconto"):
        if campo in dados:
            setattr(pagamento, campo, calculos.arredondar(dados[campo]))
            campos.append(campo)

    if novo_status and novo_status != pagamento.status:
        campos += _aplicar_status(pagamento, novo_status, dados.get("motivo_cancelamento", ""))

    if campos:
        campos += pagamento.carimbar_auditoria(contexto.usuario, atualizacao=True)
        pagamento.save(update_fields=campos)

    if metodos is not None:
        # substituição: remove os métodos atuais (e parcelas) e recria
        pagamento.metodos.all().delete()
        criar_metodos(pagamento, metodos, contexto.usuario)
        if pagamento.status == StatusPagamento.PENDING:
            pagamento = recalcular_status_pagamento(pagamento, contexto.usuario)

    logger.info(
        "pagamento_atualizado",
        extra={
            "event": "pagamento_atualizado",
            "pagamento_id": str(pagamento.id),
            "campos": campos,
            "metodos_substituidos": metodos is not None,
        },
    )

    return RespostaServico.sucesso(
        "Pagamento atualizado com sucesso.",
        serializar_pagamento(pagamento),
    )


@transaction.atomic
def atualizar_status(pagamento_id, status: str, motivo: str, contexto: ContextoRequisicao) -> RespostaServico:
    pagamento, erro = carregar_pagamento(pagamento_id, contexto, para_atualizar=True)
    if erro:
        return erro

    erro = _erro_transicao(pagamento.status, status)
    if erro:
        return erro

    status_anterior = pagamento.status
    campos = _aplicar_status(pagamento, status, motivo or "")
    campos += pagamento.carimbar_auditoria(contexto.usuario, atualizacao=True)
    pagamento.save(update_fields=campos)

    logger.info(
        "status_pagamento_alterado",
        extra={
            "event": "status_pagamento_alterado",
            "pagamento_id": str(pagamento.id),
            "status_anterior": status_anterior,
            "status": status,
        },
    )

    return RespostaServico.sucesso(
        "Status do pagamento atualizado com sucesso.",
        serializar_pagamento(pagamento),
    )


def validar_pagamento(pagamento_id, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Relatório de integridade: 200 quando íntegro, 400 com as
    inconsistências caso contrário. Sempre acompanha estatísticas.
    """
    pagamento, erro = carregar_pagamento(pagamento_id, contexto)
    if erro:
        return erro

    resultado = validar_integridade_pagamento(pagamento)

    metodos = list(pagamento.metodos.filter(ativo=True).prefetch_related("itens_parcela"))
    parcelas = [p for m in metodos for p in m.itens_parcela.all() if p.ativo]

    stats = {
        "pagamento_id": str(pagamento.id),
        "venda_id": str(pagamento.venda_id),
        "status": pagamento.status,
        "total": calculos.como_texto(pagamento.total),
        "desconto": calculos.como_texto(pagamento.desconto),
        "qtd_metodos": len(metodos),
        "soma_metodos": calculos.como_texto(calculos.somar(m.valor for m in metodos)),
        "parcelas_geradas": len(parcelas),
        "parcelas_pagas": pagamento.parcelas_pagas,
        "valor_pago": calculos.como_texto(pagamento.valor_pago),
    }

    if resultado.valido:
        return RespostaServico.sucesso(
            "Pagamento íntegro e consistente.",
            {
                "valido": True,
                "stats": stats,
                "metodos": PagamentoMetodoItemSerializer(metodos, many=True).data,
            },
        )

    logger.warning(
        "pagamento_inconsistente",
        extra={
            "event": "pagamento_inconsistente",
            "pagamento_id": str(pagamento.id),
            "erro": resultado.erro,
        },
    )
    return RespostaServico.erro(
        resultado.erro or "Inconsistências detectadas no pagamento.",
        400,
        {
            "valido": False,
            "stats": stats,
            "inconsistencias": resultado.inconsistencias,
        },
    )
