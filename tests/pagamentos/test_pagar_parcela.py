# tests/pagamentos/test_pagar_parcela.py

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django_tenants.utils import schema_context

from commons.tests.helpers import adicionar_metodo, contexto_de, criar_venda_com_pagamento
from vendas.models import Pagamento, StatusPagamento
from vendas.services.pagamentos.parcela_pagar_service import pagar_parcela
from vendas.services.pagamentos.parcela_service import atualizar_parcela

pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def carne(two_tenants_with_admins, admin_user):
    """Pagamento de 300,00 em carnê de 3x de 100,00 no tenant1."""
    ctx = two_tenants_with_admins
    admin = admin_user(ctx["schema1"], ctx["admin_username_1"])

    with schema_context(ctx["schema1"]):
        _, pagamento = criar_venda_com_pagamento(ctx["filial1_id"], total="300.00")
        metodo = adicionar_metodo(
            pagamento,
            "INSTALLMENT",
            "300.00",
            parcelas=3,
            primeiro_vencimento=date.today() + timedelta(days=5),
        )
        parcelas = list(metodo.itens_parcela.order_by("sequencia"))

    return {
        "schema": ctx["schema1"],
        "contexto": contexto_de(admin, ctx["filial1_id"], ctx["schema1"]),
        "pagamento": pagamento,
        "parcelas": parcelas,
    }


def test_pagamento_parcial_nao_quita_parcela(carne):
    parcela = carne["parcelas"][0]

    with schema_context(carne["schema"]):
        resp = pagar_parcela(parcela.id, {"valor_pago": Decimal("40.00")}, carne["contexto"])

        assert resp.status == 200, resp.mensagem
        assert resp.dados["mensagem"] == "Pagamento parcial registrado. Restante: R$ 60.00"
        assert resp.dados["parcela"]["parcialmente_paga"] is True

        parcela.refresh_from_db()
        assert parcela.valor_pago == Decimal("40.00")
        assert parcela.pago_em is None

        pagamento = Pagamento.objects.get(pk=carne["pagamento"].pk)
        assert pagamento.valor_pago == Decimal("40.00")
        assert pagamento.parcelas_pagas == 0
        assert pagamento.status == StatusPagamento.PENDING


def test_pagamento_que_completa_parcela_preenche_pago_em(carne):
    parcela = carne["parcelas"][0]

    with schema_context(carne["schema"]):
        pagar_parcela(parcela.id, {"valor_pago": Decimal("40.00")}, carne["contexto"])
        resp = pagar_parcela(parcela.id, {"valor_pago": Decimal("60.00")}, carne["contexto"])

        assert resp.status == 200
        assert resp.dados["mensagem"] == "Parcela paga completamente."
        assert resp.dados["pagamento"]["parcelas_pagas"] == 1

        parcela.refresh_from_db()
        assert parcela.pago_em is not None


def test_sobrepagamento_recusado_sem_alterar_estado(carne):
    parcela = carne["parcelas"][0]

    with schema_context(carne["schema"]):
        pagar_parcela(parcela.id, {"valor_pago": Decimal("30.00")}, carne["contexto"])

        resp = pagar_parcela(parcela.id, {"valor_pago": Decimal("70.01")}, carne["contexto"])

        assert resp.status == 400
        assert resp.mensagem == (
            "O valor pago (70.01) não pode ser maior que o valor restante da parcela (70.00)."
        )

        parcela.refresh_from_db()
        assert parcela.valor_pago == Decimal("30.00")
        assert parcela.pago_em is None
        assert Pagamento.objects.get(pk=carne["pagamento"].pk).valor_pago == Decimal("30.00")


@pytest.mark.parametrize("valor", ["0.00", "-5.00"])
def test_valor_nao_positivo_recusado(carne, valor):
    parcela = carne["parcelas"][1]

    with schema_context(carne["schema"]):
        resp = pagar_parcela(parcela.id, {"valor_pago": Decimal(valor)}, carne["contexto"])

        assert resp.status == 400
        assert resp.mensagem == "O valor pago deve ser maior que zero."


def test_parcela_ja_quitada_recusada(carne):
    parcela = carne["parcelas"][2]

    with schema_context(carne["schema"]):
        pagar_parcela(parcela.id, {"valor_pago": Decimal("100.00")}, carne["contexto"])
        resp = pagar_parcela(parcela.id, {"valor_pago": Decimal("1.00")}, carne["contexto"])

        assert resp.status == 400
        assert resp.mensagem == "Esta parcela já foi paga completamente."


def test_pagamento_cancelado_recusa_parcela(carne):
    parcela = carne["parcelas"][0]

    with schema_context(carne["schema"]):
        Pagamento.objects.filter(pk=carne["pagamento"].pk).update(status=StatusPagamento.CANCELED)

        resp = pagar_parcela(parcela.id, {"valor_pago": Decimal("10.00")}, carne["contexto"])

        assert resp.status == 400
        assert resp.mensagem == "Não é possível pagar parcela de um pagamento cancelado."
        parcela.refresh_from_db()
        assert parcela.valor_pago == Decimal("0.00")


def test_todas_parcelas_pagas_confirma_pagamento(carne):
    with schema_context(carne["schema"]):
        for parcela in carne["parcelas"]:
            resp = pagar_parcela(parcela.id, {"valor_pago": parcela.valor}, carne["contexto"])
            assert resp.status == 200

        pagamento = Pagamento.objects.get(pk=carne["pagamento"].pk)
        assert pagamento.status == StatusPagamento.CONFIRMED
        assert pagamento.valor_pago == Decimal("300.00")
        assert pagamento.parcelas_pagas == 3
        assert pagamento.ultimo_pagamento_em is not None


def test_parcela_inexistente_404(carne):
    with schema_context(carne["schema"]):
        resp = pagar_parcela(
            "00000000-0000-0000-0000-000000000000",
            {"valor_pago": Decimal("1.00")},
            carne["contexto"],
        )
        assert resp.status == 404


def test_editar_parcela_com_pagamento_sempre_falha(carne):
    parcela = carne["parcelas"][0]
    vencimento_original = parcela.data_vencimento

    with schema_context(carne["schema"]):
        pagar_parcela(parcela.id, {"valor_pago": Decimal("0.01")}, carne["contexto"])

        for dados in (
            {"valor": Decimal("100.00")},
            {"data_vencimento": date.today()},
            {"sequencia": 3},
        ):
            resp = atualizar_parcela(parcela.id, dados, carne["contexto"])
            assert resp.status == 400
            assert resp.mensagem == "Não é possível editar parcelas que já receberam pagamento."

        parcela.refresh_from_db()
        assert parcela.data_vencimento == vencimento_original
        assert parcela.valor == Decimal("100.00")
        assert parcela.sequencia == 1
