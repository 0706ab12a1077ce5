# vendas/services/pagamentos/integridade_service.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings
from django.db import transaction

from vendas.models import (
    Pagamento,
    PagamentoMetodoItem,
    PagamentoParcela,
    StatusPagamento,
)
from vendas.services.pagamentos import calculos

logger = logging.getLogger(__name__)


@dataclass
class ResultadoIntegridade:
    valido: bool
    erro: Optional[str] = None
    inconsistencias: List[dict] = field(default_factory=list)

    @classmethod
    def de_inconsistencias(cls, inconsistencias: List[dict]) -> "ResultadoIntegridade":
        if not inconsistencias:
            return cls(valido=True)
        return cls(
            valido=False,
            erro=f"{len(inconsistencias)} inconsistência(s) detectada(s)",
            inconsistencias=inconsistencias,
        )

    def como_dict(self) -> dict:
        return {
            "valido": self.valido,
            "erro": self.erro,
            "inconsistencias": self.inconsistencias,
        }


def _tolerancia():
    return getattr(settings, "PAGAMENTOS_TOLERANCIA", calculos.TOLERANCIA)


def _intervalo_dias() -> int:
    return getattr(settings, "PAGAMENTOS_INTERVALO_PARCELAS_DIAS", calculos.INTERVALO_PARCELAS_DIAS)


# ---------------------------------------------------------------------------
# Geração de parcelas
# ---------------------------------------------------------------------------

@transaction.atomic
def gerar_parcelas(metodo_item: PagamentoMetodoItem, usuario=None) -> List[PagamentoParcela]:
    """
    Gera as parcelas 1..N de um método parcelado.

    - Valor dividido igualmente; resíduo do arredondamento na última.
    - Vencimentos a cada 30 dias a partir de primeiro_vencimento.
    - Não gera nada se o método já possui parcelas.
    - Inconsistências detectadas após a geração são apenas registradas
      em log (não interrompem o fluxo).
    """
    if not metodo_item.parcelado:
        return []

    if metodo_item.itens_parcela.exists():
        logger.warning(
            "parcelas_ja_existentes",
            extra={
                "event": "parcelas_ja_existentes",
                "metodo_item_id": str(metodo_item.id),
            },
        )
        return []

    valores = calculos.dividir_em_parcelas(metodo_item.valor, metodo_item.parcelas)

    if metodo_item.primeiro_vencimento:
        vencimentos = calculos.datas_vencimento(
            metodo_item.primeiro_vencimento,
            metodo_item.parcelas,
            _intervalo_dias(),
        )
    else:
        vencimentos = [None] * metodo_item.parcelas

    usuario_id = getattr(usuario, "pk", None)
    criadas = PagamentoParcela.objects.bulk_create(
        [
            PagamentoParcela(
                metodo_item=metodo_item,
                sequencia=seq,
                valor=valor,
                data_vencimento=vencimento,
                criado_por_id=usuario_id,
                atualizado_por_id=usuario_id,
            )
            for seq, (valor, vencimento) in enumerate(zip(valores, vencimentos), start=1)
        ]
    )

    logger.info(
        "parcelas_geradas",
        extra={
            "event": "parcelas_geradas",
            "metodo_item_id": str(metodo_item.id),
            "quantidade": len(criadas),
            "valor": str(metodo_item.valor),
        },
    )

    resultado = validar_integridade_metodo_item(metodo_item)
    if not resultado.valido:
        logger.warning(
            "inconsistencia_parcelas",
            extra={
                "event": "inconsistencia_parcelas",
                "metodo_item_id": str(metodo_item.id),
                "erro": resultado.erro,
                "inconsistencias": resultado.inconsistencias,
            },
        )

    return criadas


# ---------------------------------------------------------------------------
# Validações (somente leitura)
# ---------------------------------------------------------------------------

def validar_integridade_metodo_item(metodo_item: PagamentoMetodoItem) -> ResultadoIntegridade:
    parcelas = list(metodo_item.itens_parcela.filter(ativo=True).order_by("sequencia"))

    if not parcelas:
        # métodos à vista não têm parcelas
        return ResultadoIntegridade(valido=True)

    inconsistencias = []

    lacuna = calculos.lacunas_na_sequencia([p.sequencia for p in parcelas])
    if lacuna is not None:
        esperado, encontrado = lacuna
        inconsistencias.append({
            "campo": "sequencia",
            "esperado": esperado,
            "encontrado": encontrado,
            "mensagem": (
                f"Sequência com lacunas. Esperado: [{', '.join(map(str, esperado))}], "
                f"Encontrado: [{', '.join(map(str, encontrado))}]"
            ),
        })

    sem_vencimento = [p for p in parcelas if p.data_vencimento is None]
    if sem_vencimento:
        inconsistencias.append({
            "campo": "data_vencimento",
            "mensagem": f"{len(sem_vencimento)} parcela(s) sem data de vencimento.",
            "parcelas": [str(p.id) for p in sem_vencimento],
        })

    soma = calculos.somar(p.valor for p in parcelas)
    if not calculos.dentro_da_tolerancia(soma, metodo_item.valor, _tolerancia()):
        inconsistencias.append({
            "campo": f"metodo_item#{metodo_item.id}.valor",
            "esperado": calculos.como_texto(metodo_item.valor),
            "encontrado": calculos.como_texto(soma),
            "mensagem": (
                f"Soma das parcelas do método {metodo_item.metodo} (R$ {soma:.2f}) "
                f"diverge do valor (R$ {metodo_item.valor:.2f})"
            ),
        })

    return ResultadoIntegridade.de_inconsistencias(inconsistencias)


def validar_integridade_pagamento(pagamento: Pagamento) -> ResultadoIntegridade:
    metodos = list(pagamento.metodos.filter(ativo=True))

    if not metodos:
        return ResultadoIntegridade(valido=False, erro="Pagamento sem métodos cadastrados.")

    inconsistencias = []

    soma = calculos.somar(m.valor for m in metodos)
    if not calculos.dentro_da_tolerancia(soma, pagamento.total, _tolerancia()):
        inconsistencias.append({
            "campo": "total",
            "esperado": calculos.como_texto(pagamento.total),
            "encontrado": calculos.como_texto(soma),
            "diferenca": calculos.como_texto(abs(soma - pagamento.total)),
            "mensagem": (
                f"Soma dos métodos (R$ {soma:.2f}) diverge do total "
                f"(R$ {pagamento.total:.2f})"
            ),
        })

    for metodo in metodos:
        if not metodo.parcelado:
            continue

        if not metodo.itens_parcela.filter(ativo=True).exists():
            inconsistencias.append({
                "campo": f"metodo_item#{metodo.id}",
                "metodo": metodo.metodo,
                "mensagem": f"Método {metodo.metodo} parcelado sem parcelas geradas.",
            })
            continue

        resultado = validar_integridade_metodo_item(metodo)
        if not resultado.valido:
            inconsistencias.append({
                "campo": f"metodo_item#{metodo.id}",
                "metodo": metodo.metodo,
                "erro": resultado.erro,
                "inconsistencias": resultado.inconsistencias,
            })

    return ResultadoIntegridade.de_inconsistencias(inconsistencias)


# ---------------------------------------------------------------------------
# Recálculo do agregado
# ---------------------------------------------------------------------------

@transaction.atomic
def recalcular_status_pagamento(pagamento: Pagamento, usuario=None) -> Pagamento:
    """
    Recalcula valor_pago, parcelas_pagas, ultimo_pagamento_em e status
    a partir dos métodos e parcelas.

    - CANCELED não é tocado.
    - CONFIRMED nunca volta para PENDING (e valor_pago não diminui, para
      preservar uma confirmação manual).
    """
    pagamento = Pagamento.objects.select_for_update().get(pk=pagamento.pk)

    if pagamento.status == StatusPagamento.CANCELED:
        logger.info(
            "recalculo_ignorado_cancelado",
            extra={"event": "recalculo_ignorado_cancelado", "pagamento_id": str(pagamento.id)},
        )
        return pagamento

    metodos = list(pagamento.metodos.filter(ativo=True).prefetch_related("itens_parcela"))

    a_vista = [
        calculos.SituacaoMetodo(valor=m.valor, pago=m.pago, pago_em=m.pago_em)
        for m in metodos
        if not m.parcelado
    ]
    parcelas = [
        calculos.SituacaoParcela(valor_pago=p.valor_pago, pago_em=p.pago_em)
        for m in metodos
        if m.parcelado
        for p in m.itens_parcela.all()
        if p.ativo
    ]

    consolidacao = calculos.consolidar(a_vista, parcelas)
    status_anterior = pagamento.status
    novo_status = calculos.proximo_status(status_anterior, consolidacao)

    valor_pago = consolidacao.valor_pago
    if status_anterior == StatusPagamento.CONFIRMED:
        valor_pago = max(valor_pago, pagamento.valor_pago)

    pagamento.valor_pago = valor_pago
    pagamento.parcelas_pagas = consolidacao.parcelas_pagas
    pagamento.ultimo_pagamento_em = consolidacao.ultimo_pagamento_em or pagamento.ultimo_pagamento_em
    pagamento.status = novo_status
    campos = pagamento.carimbar_auditoria(usuario, atualizacao=True)
    pagamento.save(
        update_fields=[
            "valor_pago",
            "parcelas_pagas",
            "ultimo_pagamento_em",
            "status",
            *campos,
        ]
    )

    logger.info(
        "pagamento_recalculado",
        extra={
            "event": "pagamento_recalculado",
            "pagamento_id": str(pagamento.id),
            "status_anterior": status_anterior,
            "status": novo_status,
            "valor_pago": str(valor_pago),
            "parcelas_pagas": consolidacao.parcelas_pagas,
        },
    )
    return pagamento
