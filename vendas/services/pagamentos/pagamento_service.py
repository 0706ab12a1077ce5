# vendas/services/pagamentos/pagamento_service.py

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Exists, OuterRef, Prefetch
from django.utils import timezone

from commons.contexto import ContextoRequisicao, usuario_tem_acesso_filial
from commons.respostas import Paginacao, RespostaServico
from vendas.models import (
    MetodoPagamentoTipo,
    Pagamento,
    PagamentoMetodoItem,
    PagamentoParcela,
    StatusPagamento,
    Venda,
)
from vendas.serializers.pagamento_serializers import PagamentoSerializer
from vendas.services.pagamentos import calculos
from vendas.services.pagamentos.acesso import carregar_pagamento
from vendas.services.pagamentos.integridade_service import gerar_parcelas

logger = logging.getLogger(__name__)


def _queryset_base():
    return (
        Pagamento.objects.filter(ativo=True)
        .select_related("venda", "venda__cliente", "filial")
        .prefetch_related(
            Prefetch(
                "metodos",
                queryset=PagamentoMetodoItem.objects.filter(ativo=True).prefetch_related(
                    Prefetch(
                        "itens_parcela",
                        queryset=PagamentoParcela.objects.filter(ativo=True).order_by("sequencia"),
                    )
                ),
            )
        )
    )


def serializar_pagamento(pagamento: Pagamento) -> dict:
    """Recarrega com métodos/parcelas e serializa."""
    pagamento = _queryset_base().get(pk=pagamento.pk)
    return PagamentoSerializer(pagamento).data


def _escopo_filiais(qs, contexto: ContextoRequisicao):
    usuario = contexto.usuario
    if usuario.is_superuser:
        return qs
    return qs.filter(filial_id__in=usuario.filiais_ids())


def _parcelas_vencidas(hoje):
    return PagamentoParcela.objects.filter(
        metodo_item__pagamento=OuterRef("pk"),
        metodo_item__ativo=True,
        ativo=True,
        pago_em__isnull=True,
        data_vencimento__lt=hoje,
    )


def _enriquecer(pagamento: Pagamento, hoje) -> dict:
    dados = PagamentoSerializer(pagamento).data

    pendentes = [
        p
        for m in pagamento.metodos.all()
        for p in m.itens_parcela.all()
        if p.pago_em is None and p.data_vencimento is not None
    ]
    vencidas = [p for p in pendentes if p.data_vencimento < hoje]
    a_vencer = sorted(
        (p for p in pendentes if p.data_vencimento >= hoje),
        key=lambda p: (p.data_vencimento, p.sequencia),
    )
    proxima = a_vencer[0] if a_vencer else None

    dados["tem_parcelas_vencidas"] = bool(vencidas)
    dados["qtd_parcelas_vencidas"] = len(vencidas)
    dados["proximo_vencimento"] = proxima.data_vencimento.isoformat() if proxima else None
    dados["proximo_valor"] = calculos.como_texto(proxima.valor) if proxima else None
    return dados


def listar_pagamentos(
    contexto: ContextoRequisicao,
    filtros: dict,
    paginacao: Paginacao,
) -> RespostaServico:
    """
    Lista pagamentos (mais recentes primeiro) com filtros:
    status, metodo, data_inicio/data_fim (criação), cliente_id,
    cliente_nome, com_parcelas_vencidas, parcialmente_pago,
    vencimento_em_dias.
    """
    hoje = timezone.localdate()
    qs = _escopo_filiais(_queryset_base(), contexto)

    if filtros.get("status"):
        qs = qs.filter(status=filtros["status"])

    if filtros.get("metodo"):
        qs = qs.filter(metodos__metodo=filtros["metodo"], metodos__ativo=True)

    if filtros.get("data_inicio"):
        qs = qs.filter(created_at__date__gte=filtros["data_inicio"])
    if filtros.get("data_fim"):
        qs = qs.filter(created_at__date__lte=filtros["data_fim"])

    if filtros.get("cliente_id"):
        qs = qs.filter(venda__cliente_id=filtros["cliente_id"])
    if filtros.get("cliente_nome"):
        qs = qs.filter(venda__cliente__nome__icontains=filtros["cliente_nome"])

    if filtros.get("com_parcelas_vencidas"):
        qs = qs.filter(Exists(_parcelas_vencidas(hoje)))

    if filtros.get("parcialmente_pago"):
        qs = qs.filter(parcelas_pagas__gt=0, status=StatusPagamento.PENDING)

    dias = filtros.get("vencimento_em_dias")
    if dias is not None:
        limite = hoje + timedelta(days=dias)
        a_vencer = PagamentoParcela.objects.filter(
            metodo_item__pagamento=OuterRef("pk"),
            metodo_item__ativo=True,
            ativo=True,
            pago_em__isnull=True,
            data_vencimento__gte=hoje,
            data_vencimento__lte=limite,
        )
        qs = qs.filter(Exists(a_vencer))

    qs = qs.distinct().order_by("-created_at")

    total = qs.count()
    pagina = list(qs[paginacao.offset: paginacao.offset + paginacao.limite])

    logger.info(
        "pagamentos_listados",
        extra={
            "event": "pagamentos_listados",
            "total": total,
            "pagina": paginacao.pagina,
            "filial_id": str(contexto.filial_id) if contexto.filial_id else None,
        },
    )

    return RespostaServico.paginada(
        "Pagamentos listados com sucesso.",
        [_enriquecer(p, hoje) for p in pagina],
        paginacao.pagina,
        paginacao.limite,
        total,
    )


def buscar_pagamento(pagamento_id, contexto: ContextoRequisicao) -> RespostaServico:
    pagamento, erro = carregar_pagamento(pagamento_id, contexto)
    if erro:
        return erro
    return RespostaServico.sucesso(
        "Pagamento encontrado com sucesso.",
        serializar_pagamento(pagamento),
    )


def status_por_venda(venda_id, contexto: ContextoRequisicao) -> RespostaServico:
    pagamento = (
        Pagamento.objects.filter(venda_id=venda_id, ativo=True)
        .only("id", "venda_id", "status", "filial_id")
        .first()
    )
    if pagamento is None:
        return RespostaServico.erro("Pagamento não encontrado para esta venda.", 404)

    if not usuario_tem_acesso_filial(contexto.usuario, pagamento.filial_id):
        return RespostaServico.erro("Você não tem permissão para acessar este pagamento.", 403)

    return RespostaServico.sucesso(
        "Status do pagamento obtido com sucesso.",
        {
            "venda_id": str(pagamento.venda_id),
            "pagamento_id": str(pagamento.id),
            "status": pagamento.status,
        },
    )


def validar_soma_metodos(metodos: list, total) -> Optional[RespostaServico]:
    soma = calculos.somar(m["valor"] for m in metodos)
    if not calculos.dentro_da_tolerancia(soma, total):
        return RespostaServico.erro(
            f"A soma dos métodos (R$ {soma:.2f}) deve ser igual ao total "
            f"(R$ {Decimal(total):.2f})."
        )
    return None


def validar_soma_com_novo_valor(
    pagamento: Pagamento, valor, ignorar_metodo_id=None
) -> Optional[RespostaServico]:
    """Soma dos métodos ativos com `valor` no lugar de `ignorar_metodo_id`."""
    outros = pagamento.metodos.filter(ativo=True)
    if ignorar_metodo_id is not None:
        outros = outros.exclude(pk=ignorar_metodo_id)
    soma = calculos.somar([*outros.values_list("valor", flat=True), valor])
    if soma > pagamento.total + calculos.TOLERANCIA:
        return RespostaServico.erro(
            f"A soma dos métodos (R$ {soma:.2f}) ultrapassa o total do pagamento "
            f"(R$ {pagamento.total:.2f})."
        )
    return None


def validar_metodo_entrada(dados: dict) -> Optional[RespostaServico]:
    parcelas = dados.get("parcelas") or 0
    if dados.get("metodo") == MetodoPagamentoTipo.INSTALLMENT and parcelas < 1:
        return RespostaServico.erro("Método INSTALLMENT exige ao menos 1 parcela.")
    if parcelas > 0 and not dados.get("primeiro_vencimento"):
        return RespostaServico.erro(
            "Para método parcelado, é necessário informar primeiro_vencimento."
        )
    if parcelas > 0 and calculos.arredondar(dados.get("valor") or 0) < calculos.CENTAVO * parcelas:
        return RespostaServico.erro("Valor insuficiente para o número de parcelas informado.")
    return None


def criar_metodos(pagamento: Pagamento, metodos: list, usuario) -> list:
    """Cria os métodos e gera as parcelas dos métodos parcelados."""
    usuario_id = getattr(usuario, "pk", None)
    criados = []
    for dados in metodos:
        parcelas = dados.get("parcelas") or None
        metodo_item = PagamentoMetodoItem.objects.create(
            pagamento=pagamento,
            metodo=dados["metodo"],
            valor=calculos.arredondar(dados["valor"]),
            parcelas=parcelas,
            primeiro_vencimento=dados.get("primeiro_vencimento") if parcelas else None,
            criado_por_id=usuario_id,
            atualizado_por_id=usuario_id,
        )
        if metodo_item.parcelado:
            gerar_parcelas(metodo_item, usuario)
        criados.append(metodo_item)
    return criados


def criar_pagamento(dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Cria o pagamento de uma venda (caso ela ainda não tenha um ativo).
    total/desconto, quando omitidos, vêm da venda.
    """
    venda = Venda.objects.filter(pk=dados["venda_id"], ativo=True).first()
    if venda is None:
        return RespostaServico.erro("Venda não encontrada.", 404)

    if not usuario_tem_acesso_filial(contexto.usuario, venda.filial_id):
        return RespostaServico.erro("Você não tem permissão para acessar esta venda.", 403)

    if Pagamento.objects.filter(venda=venda, ativo=True).exists():
        return RespostaServico.erro("Já existe um pagamento para esta venda.", 409)

    total = dados.get("total", venda.total)
    desconto = dados.get("desconto", venda.desconto)
    metodos = dados.get("metodos") or []

    for metodo in metodos:
        erro = validar_metodo_entrada(metodo)
        if erro:
            return erro

    if metodos:
        erro = validar_soma_metodos(metodos, total)
        if erro:
            return erro

    with transaction.atomic():
        pagamento = Pagamento(
            venda=venda,
            filial_id=venda.filial_id,
            total=calculos.arredondar(total),
            desconto=calculos.arredondar(desconto),
            status=StatusPagamento.PENDING,
        )
        pagamento.carimbar_auditoria(contexto.usuario)
        pagamento.save()
        criar_metodos(pagamento, metodos, contexto.usuario)

    logger.info(
        "pagamento_criado",
        extra={
            "event": "pagamento_criado",
            "pagamento_id": str(pagamento.id),
            "venda_id": str(venda.id),
            "total": str(pagamento.total),
            "metodos": len(metodos),
        },
    )

    return RespostaServico.sucesso(
        "Pagamento criado com sucesso.",
        serializar_pagamento(pagamento),
        status=201,
    )


def excluir_pagamento(pagamento_id, contexto: ContextoRequisicao) -> RespostaServico:
    pagamento, erro = carregar_pagamento(pagamento_id, contexto)
    if erro:
        return erro

    if pagamento.status != StatusPagamento.PENDING:
        return RespostaServico.erro(
            "Somente pagamentos com status PENDING podem ser excluídos."
        )

    pagamento.ativo = False
    campos = pagamento.carimbar_auditoria(contexto.usuario, atualizacao=True)
    pagamento.save(update_fields=["ativo", *campos])

    logger.info(
        "pagamento_excluido",
        extra={"event": "pagamento_excluido", "pagamento_id": str(pagamento.id)},
    )
    return RespostaServico.sucesso("Pagamento removido com sucesso.")
