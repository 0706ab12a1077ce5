# vendas/services/vendas/venda_service.py

from __future__ import annotations

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Optional, Tuple

from django.db import transaction
from django.db.models import F, Prefetch

from clientes.models import Cliente
from commons.contexto import ContextoRequisicao, usuario_tem_acesso_filial
from commons.respostas import Paginacao, RespostaServico
from produtos.models import Produto
from receitas.models import Receita
from vendas.models import Pagamento, StatusPagamento, Venda, VendaItem
from vendas.serializers.venda_serializers import VendaSerializer
from vendas.services.pagamentos import calculos

logger = logging.getLogger(__name__)


def _queryset_base():
    return (
        Venda.objects.filter(ativo=True)
        .select_related("filial", "cliente", "receita")
        .prefetch_related(
            Prefetch("itens", queryset=VendaItem.objects.select_related("produto")),
        )
    )


def serializar_venda(venda: Venda) -> dict:
    return VendaSerializer(_queryset_base().get(pk=venda.pk)).data


def _carregar_venda(venda_id, contexto: ContextoRequisicao, *, para_atualizar=False):
    qs = Venda.objects.filter(ativo=True)
    if para_atualizar:
        qs = qs.select_for_update()
    venda = qs.filter(pk=venda_id).first()
    if venda is None:
        return None, RespostaServico.erro("Venda não encontrada.", 404)
    if not usuario_tem_acesso_filial(contexto.usuario, venda.filial_id):
        return None, RespostaServico.erro("Você não tem permissão para acessar esta venda.", 403)
    return venda, None


def _agrupar_itens(itens: list) -> "OrderedDict":
    """Soma quantidades do mesmo produto informado mais de uma vez."""
    agrupados = OrderedDict()
    for item in itens:
        agrupados[item["produto_id"]] = agrupados.get(item["produto_id"], 0) + item["quantidade"]
    return agrupados


def _reservar_produtos(
    itens: list, filial_id, devolvido: Optional[dict] = None
) -> Tuple[list, Optional[RespostaServico]]:
    """
    Trava os produtos e confere existência e estoque.

    `devolvido` é o estoque que volta dos itens atuais da venda (edição),
    somado ao disponível antes da conferência.
    """
    devolvido = devolvido or {}
    reservados = []
    for produto_id, quantidade in _agrupar_itens(itens).items():
        produto = (
            Produto.objects.select_for_update()
            .filter(pk=produto_id, filial_id=filial_id, ativo=True)
            .first()
        )
        if produto is None:
            return [], RespostaServico.erro(f"Produto não encontrado: {produto_id}", 404)

        disponivel = produto.estoque + devolvido.get(produto.pk, 0)
        if disponivel < quantidade:
            logger.warning(
                "estoque_insuficiente",
                extra={
                    "event": "estoque_insuficiente",
                    "produto_id": str(produto.pk),
                    "disponivel": disponivel,
                    "solicitado": quantidade,
                },
            )
            return [], RespostaServico.erro(f"Estoque insuficiente para {produto.nome}", 409)

        reservados.append((produto, quantidade))
    return reservados, None


def _subtotal(reservados: list) -> Decimal:
    return calculos.somar(produto.preco_venda * quantidade for produto, quantidade in reservados)


def _gravar_itens(venda: Venda, reservados: list) -> None:
    """Cria os itens com snapshot do preço e baixa o estoque."""
    for produto, quantidade in reservados:
        VendaItem.objects.create(
            venda=venda,
            produto=produto,
            quantidade=quantidade,
            preco_unitario=produto.preco_venda,
        )
        Produto.objects.filter(pk=produto.pk).update(estoque=F("estoque") - quantidade)


def _devolver_estoque(venda: Venda) -> None:
    for item in venda.itens.all():
        Produto.objects.filter(pk=item.produto_id).update(estoque=F("estoque") + item.quantidade)


def _quantidades_atuais(venda: Venda) -> dict:
    atuais = {}
    for item in venda.itens.all():
        atuais[item.produto_id] = atuais.get(item.produto_id, 0) + item.quantidade
    return atuais


def _resolver_receita(receita_id, cliente: Cliente):
    if not receita_id:
        return None, None
    receita = Receita.objects.filter(pk=receita_id, cliente=cliente, ativo=True).first()
    if receita is None:
        return None, RespostaServico.erro("Receita não encontrada para este cliente.", 404)
    return receita, None


def listar_vendas(contexto: ContextoRequisicao, filtros: dict, paginacao: Paginacao) -> RespostaServico:
    qs = _queryset_base()
    if not contexto.usuario.is_superuser:
        qs = qs.filter(filial_id__in=contexto.usuario.filiais_ids())

    if filtros.get("cliente_id"):
        qs = qs.filter(cliente_id=filtros["cliente_id"])
    if filtros.get("data_inicio"):
        qs = qs.filter(created_at__date__gte=filtros["data_inicio"])
    if filtros.get("data_fim"):
        qs = qs.filter(created_at__date__lte=filtros["data_fim"])

    qs = qs.order_by("-created_at")
    total = qs.count()
    pagina = qs[paginacao.offset: paginacao.offset + paginacao.limite]

    return RespostaServico.paginada(
        "Vendas listadas com sucesso.",
        VendaSerializer(pagina, many=True).data,
        paginacao.pagina,
        paginacao.limite,
        total,
    )


def buscar_venda(venda_id, contexto: ContextoRequisicao) -> RespostaServico:
    venda, erro = _carregar_venda(venda_id, contexto)
    if erro:
        return erro
    return RespostaServico.sucesso("Venda encontrada com sucesso.", serializar_venda(venda))


def criar_venda(dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Cria a venda com seus itens e o pagamento PENDING (sem métodos).

    O estoque é baixado na mesma transação; qualquer recusa (produto
    inexistente, estoque insuficiente, desconto acima do subtotal)
    desfaz tudo.
    """
    filial_id = contexto.filial_id
    if filial_id is None:
        return RespostaServico.erro("Filial não identificada para o usuário.")
    if not usuario_tem_acesso_filial(contexto.usuario, filial_id):
        return RespostaServico.erro("Usuário sem acesso à filial informada.", 403)

    cliente = Cliente.objects.filter(pk=dados["cliente_id"], filial_id=filial_id, ativo=True).first()
    if cliente is None:
        return RespostaServico.erro("Cliente não encontrado.", 404)

    itens = dados.get("itens") or []
    if not itens:
        return RespostaServico.erro("É necessário pelo menos um produto.")

    receita, erro = _resolver_receita(dados.get("receita_id"), cliente)
    if erro:
        return erro

    desconto = calculos.arredondar(dados.get("desconto") or calculos.ZERO)

    with transaction.atomic():
        reservados, erro = _reservar_produtos(itens, filial_id)
        if erro:
            return erro

        subtotal = _subtotal(reservados)
        if desconto > subtotal:
            return RespostaServico.erro("Desconto não pode ser maior que o subtotal.")

        venda = Venda(
            filial_id=filial_id,
            cliente=cliente,
            receita=receita,
            subtotal=subtotal,
            desconto=desconto,
            total=calculos.arredondar(subtotal - desconto),
            observacoes=dados.get("observacoes", ""),
        )
        venda.carimbar_auditoria(contexto.usuario)
        venda.save()
        _gravar_itens(venda, reservados)

        pagamento = Pagamento(
            venda=venda,
            filial_id=filial_id,
            total=venda.total,
            desconto=venda.desconto,
            status=StatusPagamento.PENDING,
        )
        pagamento.carimbar_auditoria(contexto.usuario)
        pagamento.save()

    logger.info(
        "venda_criada",
        extra={
            "event": "venda_criada",
            "venda_id": str(venda.id),
            "pagamento_id": str(pagamento.id),
            "filial_id": str(filial_id),
            "total": str(venda.total),
            "itens": len(reservados),
        },
    )

    return RespostaServico.sucesso("Venda criada com sucesso.", serializar_venda(venda), status=201)


def atualizar_venda(venda_id, dados: dict, contexto: ContextoRequisicao) -> RespostaServico:
    """
    Edita a venda enquanto o pagamento estiver PENDING e sem valor pago.

    Quando `itens` é enviado, os itens atuais são substituídos: o estoque
    dos antigos volta e o dos novos é baixado. Total e desconto do
    pagamento acompanham a venda, por isso o pagamento ainda não pode ter
    métodos definidos.
    """
    with transaction.atomic():
        venda, erro = _carregar_venda(venda_id, contexto, para_atualizar=True)
        if erro:
            return erro

        pagamento = venda.pagamento
        if pagamento is not None and (
            pagamento.status != StatusPagamento.PENDING or pagamento.valor_pago > 0
        ):
            return RespostaServico.erro(
                "Venda não pode ser editada com pagamento iniciado.", 409
            )
        if pagamento is not None and pagamento.metodos.filter(ativo=True).exists():
            return RespostaServico.erro(
                "Venda não pode ser editada com métodos de pagamento definidos. "
                "Remova os métodos antes de alterar a venda.",
                409,
            )

        cliente = venda.cliente
        if dados.get("cliente_id") and dados["cliente_id"] != venda.cliente_id:
            cliente = Cliente.objects.filter(
                pk=dados["cliente_id"], filial_id=venda.filial_id, ativo=True
            ).first()
            if cliente is None:
                return RespostaServico.erro("Cliente não encontrado.", 404)
            venda.cliente = cliente

        if "receita_id" in dados:
            receita, erro = _resolver_receita(dados["receita_id"], cliente)
            if erro:
                return erro
            venda.receita = receita

        if "observacoes" in dados:
            venda.observacoes = dados["observacoes"]
        if "desconto" in dados:
            venda.desconto = calculos.arredondar(dados["desconto"])

        itens = dados.get("itens")
        reservados = None
        if itens is not None:
            if not itens:
                return RespostaServico.erro("É necessário pelo menos um produto.")

            reservados, erro = _reservar_produtos(
                itens, venda.filial_id, devolvido=_quantidades_atuais(venda)
            )
            if erro:
                return erro
            venda.subtotal = _subtotal(reservados)

        if venda.desconto > venda.subtotal:
            return RespostaServico.erro("Desconto não pode ser maior que o subtotal.")

        if reservados is not None:
            _devolver_estoque(venda)
            venda.itens.all().delete()
            _gravar_itens(venda, reservados)

        venda.total = calculos.arredondar(venda.subtotal - venda.desconto)
        venda.carimbar_auditoria(contexto.usuario, atualizacao=True)
        venda.save()

        if pagamento is not None:
            pagamento.total = venda.total
            pagamento.desconto = venda.desconto
            campos = pagamento.carimbar_auditoria(contexto.usuario, atualizacao=True)
            pagamento.save(update_fields=["total", "desconto", *campos])

    logger.info(
        "venda_atualizada",
        extra={
            "event": "venda_atualizada",
            "venda_id": str(venda.id),
            "itens_substituidos": itens is not None,
            "total": str(venda.total),
        },
    )

    return RespostaServico.sucesso("Venda atualizada com sucesso.", serializar_venda(venda))


@transaction.atomic
def excluir_venda(venda_id, contexto: ContextoRequisicao) -> RespostaServico:
    venda, erro = _carregar_venda(venda_id, contexto, para_atualizar=True)
    if erro:
        return erro

    pagamento = venda.pagamento
    if pagamento is not None and (
        pagamento.status == StatusPagamento.CONFIRMED or pagamento.valor_pago > 0
    ):
        return RespostaServico.erro(
            "Não é possível excluir uma venda já paga ou parcialmente paga.", 409
        )

    _devolver_estoque(venda)

    if pagamento is not None:
        # métodos e parcelas caem em cascata
        pagamento.delete()

    venda.ativo = False
    campos = venda.carimbar_auditoria(contexto.usuario, atualizacao=True)
    venda.save(update_fields=["ativo", *campos])

    logger.info(
        "venda_excluida",
        extra={"event": "venda_excluida", "venda_id": str(venda.id)},
    )
    return RespostaServico.sucesso("Venda excluída com sucesso.")
