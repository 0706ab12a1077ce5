# vendas/services/pagamentos/calculos.py
"""
Aritmética de pagamentos, sem acesso ao banco.

Tudo em Decimal com 2 casas (ROUND_HALF_UP; a divisão em parcelas trunca).
Comparações de soma usam tolerância de 1 centavo.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Tuple

CENTAVO = Decimal("0.01")
ZERO = Decimal("0.00")
TOLERANCIA = Decimal("0.01")
INTERVALO_PARCELAS_DIAS = 30
MAX_PARCELAS = 60

STATUS_PENDING = "PENDING"
STATUS_CONFIRMED = "CONFIRMED"
STATUS_CANCELED = "CANCELED"


def arredondar(valor) -> Decimal:
    return Decimal(str(valor)).quantize(CENTAVO, rounding=ROUND_HALF_UP)


def dentro_da_tolerancia(a, b, tolerancia: Decimal = TOLERANCIA) -> bool:
    return abs(Decimal(str(a)) - Decimal(str(b))) <= tolerancia


def somar(valores: Iterable) -> Decimal:
    total = ZERO
    for v in valores:
        total += Decimal(str(v))
    return arredondar(total)


def dividir_em_parcelas(valor, quantidade: int) -> List[Decimal]:
    """
    Divide `valor` em `quantidade` parcelas iguais truncadas a 2 casas.
    O resíduo (sempre >= 0) vai para a última parcela, de modo que a soma
    bata exatamente com o valor e nenhuma parcela fique negativa.

    >>> dividir_em_parcelas(Decimal("100.00"), 3)
    [Decimal('33.33'), Decimal('33.33'), Decimal('33.34')]
    """
    if quantidade < 1:
        raise ValueError("quantidade de parcelas deve ser >= 1")

    valor = arredondar(valor)
    base = (valor / quantidade).quantize(CENTAVO, rounding=ROUND_DOWN)
    parcelas = [base] * quantidade
    parcelas[-1] = valor - base * (quantidade - 1)
    return parcelas


def datas_vencimento(
    primeiro_vencimento: date,
    quantidade: int,
    intervalo_dias: int = INTERVALO_PARCELAS_DIAS,
) -> List[date]:
    return [
        primeiro_vencimento + timedelta(days=(i - 1) * intervalo_dias)
        for i in range(1, quantidade + 1)
    ]


def lacunas_na_sequencia(sequencias: Sequence[int]) -> Optional[Tuple[List[int], List[int]]]:
    """
    Retorna (esperado, encontrado) quando a sequência não é 1..N contínua;
    None quando está íntegra.
    """
    encontrado = sorted(sequencias)
    esperado = list(range(1, len(encontrado) + 1))
    if encontrado != esperado:
        return esperado, encontrado
    return None


@dataclass(frozen=True)
class SituacaoMetodo:
    """Método à vista: valor e se foi quitado."""

    valor: Decimal
    pago: bool
    pago_em: Optional[datetime] = None


@dataclass(frozen=True)
class SituacaoParcela:
    valor_pago: Decimal
    pago_em: Optional[datetime] = None


@dataclass(frozen=True)
class Consolidacao:
    valor_pago: Decimal
    parcelas_pagas: int
    ultimo_pagamento_em: Optional[datetime]
    tudo_quitado: bool
    possui_metodos: bool


def consolidar(
    metodos_a_vista: Sequence[SituacaoMetodo],
    parcelas: Sequence[SituacaoParcela],
) -> Consolidacao:
    """
    valor_pago = métodos à vista quitados + valor_pago de todas as parcelas.
    Quitado quando todo método à vista está pago e toda parcela tem pago_em.
    """
    valor_pago = somar(
        [m.valor for m in metodos_a_vista if m.pago]
        + [p.valor_pago for p in parcelas]
    )

    datas = [m.pago_em for m in metodos_a_vista if m.pago and m.pago_em]
    datas += [p.pago_em for p in parcelas if p.pago_em]

    possui_metodos = bool(metodos_a_vista) or bool(parcelas)
    tudo_quitado = possui_metodos and (
        all(m.pago for m in metodos_a_vista)
        and all(p.pago_em is not None for p in parcelas)
    )

    return Consolidacao(
        valor_pago=valor_pago,
        parcelas_pagas=sum(1 for p in parcelas if p.pago_em is not None),
        ultimo_pagamento_em=max(datas) if datas else None,
        tudo_quitado=tudo_quitado,
        possui_metodos=possui_metodos,
    )


def proximo_status(status_atual: str, consolidacao: Consolidacao) -> str:
    """
    - CANCELED nunca muda por recálculo.
    - CONFIRMED nunca volta para PENDING.
    - Sem métodos: mantém o status atual.
    """
    if status_atual == STATUS_CANCELED:
        return STATUS_CANCELED
    if not consolidacao.possui_metodos:
        return status_atual
    if consolidacao.tudo_quitado:
        return STATUS_CONFIRMED
    if status_atual == STATUS_CONFIRMED:
        return STATUS_CONFIRMED
    return STATUS_PENDING


def dias_em_atraso(data_vencimento: Optional[date], hoje: date, quitada: bool) -> int:
    if data_vencimento is None or quitada or data_vencimento >= hoje:
        return 0
    return (hoje - data_vencimento).days


def como_texto(valor) -> Optional[str]:
    """Decimal -> '12.30' para respostas JSON."""
    if valor is None:
        return None
    return str(arredondar(valor))
