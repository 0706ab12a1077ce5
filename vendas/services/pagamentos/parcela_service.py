# vendas/services/pagamentos/parcela_service.py

from __future__ import annotations

import logging
from datetime import date

from django.db import transaction
from django.utils import timezone

from commons.contexto import ContextoRequisicao
from commons.respostas import Paginacao, RespostaServico
from vendas.models import PagamentoParcela, StatusPagamento
from vendas.serializers.pagamento_serializers import PagamentoParcelaSerializer
from vendas.services.pagamentos import calculos
from vendas.services.pagamentos.acesso import carregar_pagamento, carregar_parcela

logger = logging.getLogger(__name__)


def enriquecer_parcela(parcela: PagamentoParcela, hoje: date) -> dict:
    dados = dict(PagamentoParcelaSerializer(parcela).data)

    paga = parcela.pago_em is not None
    atraso = calculos.dias_em_atraso(parcela.data_vencimento, hoje, paga)

    dados["metodo"] = parcela.metodo_item.metodo
    dados["esta_paga"] = paga
    dados["parcialmente_paga"] = parcela.valor_pago > 0 and not paga
    dados["vencida"] = atraso > 0
    dados["dias_atraso"] = atraso
    dados["valor_restante"] = calculos.como_texto(parcela.valor - parcela.valor_pago)
    return dados


def listar_parcelas_do_pagamento(pagamento_id, contexto: ContextoRequisicao) -> RespostaServico:
    pagamento, erro = carregar_pagamento(pagamento_id, contexto)
    if erro:
        return erro

    hoje = timezone.localdate()
    parcelas = list(
        PagamentoParcela.objects.filter(
            metodo_item__pagamento=pagamento,
            metodo_item__ativo=True,
            ativo=True,
        )
        .select_related("metodo_item")
        .order_by("metodo_item__created_at", "sequencia")
    )
    itens = [enriquecer_parcela(p, hoje) for p in parcelas]

    resumo = {
        "total": len(itens),
        "pagas": sum(1 for i in itens if i["esta_paga"]),
        "pendentes": sum(1 for i in itens if not i["esta_paga"]),
        "vencidas": sum(1 for i in itens if i["vencida"]),
        "valor_total": calculos.como_texto(calculos.somar(p.valor for p in parcelas)),
        "valor_pago": calculos.como_texto(calculos.somar(p.valor_pago for p in parcelas)),
        "valor_restante": calculos.como_texto(
            calculos.somar(p.valor - p.valor_pago for p in parcelas)
        ),
    }

    return RespostaServico.sucesso(
        "Parcelas listadas com sucesso.",
        {
            "pagamento_id": str(pagamento.id),
            "venda_id": str(pagamento.venda_id),
            "resumo": resumo,
            "parcelas": itens,
        },
    )


def buscar_parcela(parcela_id, contexto: ContextoRequisicao) -> RespostaServico:
    parcela, erro = carregar_parcela(parcela_id, contexto)
    if erro:
        return erro
    return RespostaServico.sucesso(
        "Parcela encontrada com sucesso.",
        enriquecer_parcela(parcela, timezone.localdate()),
    )


@transaction.atomic
def atualizar_parcela(parcela_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Edita valor/vencimento/sequência de uma parcela ainda sem pagamento.
    Um novo valor precisa manter a soma das parcelas igual ao valor do
    método (tolerância de 1 centavo).
    """
    parcela, erro = carregar_parcela(parcela_id, contexto, para_atualizar=True)
    if erro:
        return erro

    if parcela.valor_pago > 0:
        return RespostaServico.erro(
            "Não é possível editar parcelas que já receberam pagamento."
        )

    if parcela.metodo_item.pagamento.status == StatusPagamento.CANCELED:
        return RespostaServico.erro("Não é possível modificar um pagamento cancelado.")

    metodo_item = parcela.metodo_item
    campos = []

    if "valor" in dados and calculos.arredondar(dados["valor"]) != parcela.valor:
        novo_valor = calculos.arredondar(dados["valor"])
        irmas = PagamentoParcela.objects.filter(metodo_item=metodo_item, ativo=True)
        nova_soma = calculos.somar(
            novo_valor if p.pk == parcela.pk else p.valor for p in irmas
        )
        if not calculos.dentro_da_tolerancia(nova_soma, metodo_item.valor):
            return RespostaServico.erro(
                f"A soma das parcelas (R$ {nova_soma:.2f}) deve ser igual ao "
                f"valor do método (R$ {metodo_item.valor:.2f})."
            )
        parcela.valor = novo_valor
        campos.append("valor")

    if "data_vencimento" in dados:
        parcela.data_vencimento = dados["data_vencimento"]
        campos.append("data_vencimento")

    if "sequencia" in dados and dados["sequencia"] != parcela.sequencia:
        quantidade = PagamentoParcela.objects.filter(metodo_item=metodo_item, ativo=True).count()
        if not 1 <= dados["sequencia"] <= quantidade:
            return RespostaServico.erro(
                f"Sequência deve estar entre 1 e {quantidade} para este método."
            )
        ocupada = (
            PagamentoParcela.objects.filter(metodo_item=metodo_item, sequencia=dados["sequencia"])
            .exclude(pk=parcela.pk)
            .exists()
        )
        if ocupada:
            return RespostaServico.erro(
                f"Já existe a parcela {dados['sequencia']} neste método.", 409
            )
        parcela.sequencia = dados["sequencia"]
        campos.append("sequencia")

    if campos:
        campos += parcela.carimbar_auditoria(contexto.usuario, atualizacao=True)
        parcela.save(update_fields=campos)

    logger.info(
        "parcela_atualizada",
        extra={"event": "parcela_atualizada", "parcela_id": str(parcela.id), "campos": campos},
    )

    return RespostaServico.sucesso(
        "Parcela atualizada com sucesso.",
        enriquecer_parcela(parcela, timezone.localdate()),
    )


def listar_parcelas_vencidas(contexto: ContextoRequisicao, paginacao: Paginacao) -> RespostaServico:
    """
    Parcelas vencidas (vencimento < hoje, sem pago_em), mais antigas
    primeiro, com nome/telefone do cliente e estatísticas.
    """
    hoje = timezone.localdate()
    qs = (
        PagamentoParcela.objects.filter(
            ativo=True,
            pago_em__isnull=True,
            data_vencimento__lt=hoje,
            metodo_item__ativo=True,
            metodo_item__pagamento__ativo=True,
        )
        .exclude(metodo_item__pagamento__status=StatusPagamento.CANCELED)
        .select_related(
            "metodo_item",
            "metodo_item__pagamento",
            "metodo_item__pagamento__venda__cliente",
        )
        .order_by("data_vencimento", "sequencia")
    )

    usuario = contexto.usuario
    if not usuario.is_superuser:
        qs = qs.filter(metodo_item__pagamento__filial_id__in=usuario.filiais_ids())

    total = qs.count()
    pagina = list(qs[paginacao.offset: paginacao.offset + paginacao.limite])

    itens = []
    for parcela in pagina:
        dados = enriquecer_parcela(parcela, hoje)
        cliente = parcela.metodo_item.pagamento.venda.cliente
        dados["pagamento_id"] = str(parcela.metodo_item.pagamento_id)
        dados["cliente_nome"] = cliente.nome if cliente else "N/A"
        dados["cliente_telefone"] = (cliente.telefone or None) if cliente else None
        itens.append(dados)

    stats = {
        "total_vencidas": total,
        "valor_total": calculos.como_texto(
            calculos.somar(p.valor - p.valor_pago for p in pagina)
        ),
        "media_dias_atraso": (
            round(sum(i["dias_atraso"] for i in itens) / len(itens)) if itens else 0
        ),
    }

    return RespostaServico.paginada(
        "Parcelas vencidas listadas com sucesso.",
        itens,
        paginacao.pagina,
        paginacao.limite,
        total,
        stats,
    )
