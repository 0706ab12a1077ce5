# vendas/services/pagamentos/acesso.py
"""
Carga de pagamento/método/parcela já validando existência (404) e
acesso do usuário à filial do registro (403).

Cada função devolve (objeto, None) ou (None, RespostaServico de erro).
"""

from __future__ import annotations

from typing import Optional, Tuple

from django.core.exceptions import ValidationError

from commons.contexto import ContextoRequisicao, usuario_tem_acesso_filial
from commons.respostas import RespostaServico
from vendas.models import Pagamento, PagamentoMetodoItem, PagamentoParcela

MSG_SEM_PERMISSAO_PAGAMENTO = "Você não tem permissão para acessar este pagamento."
MSG_SEM_PERMISSAO_METODO = "Você não tem permissão para acessar este método."
MSG_SEM_PERMISSAO_PARCELA = "Você não tem permissão para acessar esta parcela."


def _buscar(queryset, pk):
    try:
        return queryset.filter(pk=pk).first()
    except (ValueError, ValidationError):
        # pk malformado (não-UUID) equivale a não encontrado
        return None


def carregar_pagamento(
    pagamento_id, contexto: ContextoRequisicao, *, para_atualizar: bool = False
) -> Tuple[Optional[Pagamento], Optional[RespostaServico]]:
    qs = Pagamento.objects.filter(ativo=True).select_related("venda", "venda__cliente")
    if para_atualizar:
        qs = qs.select_for_update(of=("self",))

    pagamento = _buscar(qs, pagamento_id)
    if pagamento is None:
        return None, RespostaServico.erro("Pagamento não encontrado.", 404)

    if not usuario_tem_acesso_filial(contexto.usuario, pagamento.filial_id):
        return None, RespostaServico.erro(MSG_SEM_PERMISSAO_PAGAMENTO, 403)

    return pagamento, None


def carregar_metodo_item(
    metodo_id, contexto: ContextoRequisicao
) -> Tuple[Optional[PagamentoMetodoItem], Optional[RespostaServico]]:
    qs = PagamentoMetodoItem.objects.filter(
        ativo=True, pagamento__ativo=True
    ).select_related("pagamento")

    metodo_item = _buscar(qs, metodo_id)
    if metodo_item is None:
        return None, RespostaServico.erro("Método de pagamento não encontrado.", 404)

    if not usuario_tem_acesso_filial(contexto.usuario, metodo_item.pagamento.filial_id):
        return None, RespostaServico.erro(MSG_SEM_PERMISSAO_METODO, 403)

    return metodo_item, None


def carregar_parcela(
    parcela_id, contexto: ContextoRequisicao, *, para_atualizar: bool = False
) -> Tuple[Optional[PagamentoParcela], Optional[RespostaServico]]:
    qs = PagamentoParcela.objects.filter(
        ativo=True, metodo_item__pagamento__ativo=True
    ).select_related("metodo_item", "metodo_item__pagamento")
    if para_atualizar:
        qs = qs.select_for_update(of=("self",))

    parcela = _buscar(qs, parcela_id)
    if parcela is None:
        return None, RespostaServico.erro("Parcela não encontrada.", 404)

    if not usuario_tem_acesso_filial(contexto.usuario, parcela.metodo_item.pagamento.filial_id):
        return None, RespostaServico.erro(MSG_SEM_PERMISSAO_PARCELA, 403)

    return parcela, None
