# tests/vendas/test_vendas_api.py

import logging
from decimal import Decimal

import pytest
from django_tenants.utils import schema_context

from commons.tests.helpers import criar_cliente, criar_produto
from produtos.models import Produto
from vendas.models import Pagamento, Venda

logger = logging.getLogger(__name__)

pytestmark = pytest.mark.django_db(transaction=True)

VENDAS = "/api/v1/vendas/"


@pytest.fixture
def loja(two_tenants_with_admins, admin_user, tenant_api):
    """Cliente + armação (estoque 5) + lente (estoque 2) no tenant1."""
    ctx = two_tenants_with_admins
    admin = admin_user(ctx["schema1"], ctx["admin_username_1"])

    with schema_context(ctx["schema1"]):
        cliente = criar_cliente(ctx["filial1_id"], nome="Carlos Lima")
        armacao = criar_produto(ctx["filial1_id"], nome="Armação Redonda", preco="200.00", estoque=5)
        lente = criar_produto(
            ctx["filial1_id"], nome="Lente Antirreflexo", preco="150.00", estoque=2, categoria="LENS"
        )

    return {
        "schema": ctx["schema1"],
        "api": tenant_api(ctx["schema1"], admin),
        "cliente": cliente,
        "armacao": armacao,
        "lente": lente,
    }


def _estoque(loja, produto):
    with schema_context(loja["schema"]):
        return Produto.objects.get(pk=produto.pk).estoque


def _criar_venda(loja, itens, **extra):
    payload = {
        "cliente_id": str(loja["cliente"].id),
        "itens": [{"produto_id": str(p.id), "quantidade": q} for p, q in itens],
        **extra,
    }
    return loja["api"].post(VENDAS, data=payload)


def test_criar_venda_baixa_estoque_e_cria_pagamento(loja):
    resp = _criar_venda(loja, [(loja["armacao"], 1), (loja["lente"], 2)], desconto="50.00")

    assert resp.status_code == 201, resp.content
    venda = resp.json()["data"]
    assert venda["subtotal"] == "500.00"
    assert venda["desconto"] == "50.00"
    assert venda["total"] == "450.00"
    assert len(venda["itens"]) == 2
    assert venda["pagamento"]["status"] == "PENDING"

    assert _estoque(loja, loja["armacao"]) == 4
    assert _estoque(loja, loja["lente"]) == 0

    with schema_context(loja["schema"]):
        pagamento = Pagamento.objects.get(venda_id=venda["id"], ativo=True)
        assert pagamento.total == Decimal("450.00")
        assert pagamento.desconto == Decimal("50.00")
        assert not pagamento.metodos.exists()


def test_estoque_insuficiente_409_sem_efeitos(loja):
    resp = _criar_venda(loja, [(loja["armacao"], 1), (loja["lente"], 3)])

    assert resp.status_code == 409
    assert resp.json()["message"] == "Estoque insuficiente para Lente Antirreflexo"
    assert _estoque(loja, loja["armacao"]) == 5

    with schema_context(loja["schema"]):
        assert not Venda.objects.exists()


def test_produto_inexistente_404(loja):
    payload = {
        "cliente_id": str(loja["cliente"].id),
        "itens": [{"produto_id": "00000000-0000-0000-0000-000000000001", "quantidade": 1}],
    }
    resp = loja["api"].post(VENDAS, data=payload)

    assert resp.status_code == 404


def test_venda_sem_itens_400(loja):
    resp = _criar_venda(loja, [])

    assert resp.status_code == 400
    assert resp.json()["message"] == "É necessário pelo menos um produto."


def test_desconto_maior_que_subtotal_400(loja):
    resp = _criar_venda(loja, [(loja["armacao"], 1)], desconto="250.00")

    assert resp.status_code == 400
    assert _estoque(loja, loja["armacao"]) == 5


def test_atualizar_itens_devolve_e_baixa_estoque(loja):
    venda = _criar_venda(loja, [(loja["armacao"], 2)]).json()["data"]

    resp = loja["api"].put(
        f"{VENDAS}{venda['id']}/",
        data={"itens": [{"produto_id": str(loja["lente"].id), "quantidade": 1}]},
    )

    assert resp.status_code == 200, resp.content
    assert resp.json()["data"]["total"] == "150.00"
    assert _estoque(loja, loja["armacao"]) == 5
    assert _estoque(loja, loja["lente"]) == 1

    with schema_context(loja["schema"]):
        assert Pagamento.objects.get(venda_id=venda["id"]).total == Decimal("150.00")


def test_atualizar_mesmo_produto_considera_estoque_devolvido(loja):
    venda = _criar_venda(loja, [(loja["lente"], 2)]).json()["data"]
    assert _estoque(loja, loja["lente"]) == 0

    resp = loja["api"].put(
        f"{VENDAS}{venda['id']}/",
        data={"itens": [{"produto_id": str(loja["lente"].id), "quantidade": 1}]},
    )

    assert resp.status_code == 200, resp.content
    assert _estoque(loja, loja["lente"]) == 1


def test_atualizar_bloqueado_com_pagamento_iniciado(loja):
    venda = _criar_venda(loja, [(loja["armacao"], 1)]).json()["data"]
    loja["api"].patch(
        f"/api/v1/pagamentos/{venda['pagamento']['id']}/status/", data={"status": "CONFIRMED"}
    )

    resp = loja["api"].put(f"{VENDAS}{venda['id']}/", data={"observacoes": "trocar armação"})

    assert resp.status_code == 409
    assert resp.json()["message"] == "Venda não pode ser editada com pagamento iniciado."


def test_atualizar_bloqueado_com_metodos_definidos(loja):
    venda = _criar_venda(loja, [(loja["armacao"], 1)]).json()["data"]
    loja["api"].post(
        f"/api/v1/pagamentos/{venda['pagamento']['id']}/metodos/",
        data={"metodo": "PIX", "valor": "200.00"},
    )

    resp = loja["api"].put(
        f"{VENDAS}{venda['id']}/",
        data={"itens": [{"produto_id": str(loja["armacao"].id), "quantidade": 2}]},
    )

    assert resp.status_code == 409
    assert _estoque(loja, loja["armacao"]) == 4
    with schema_context(loja["schema"]):
        assert Pagamento.objects.get(venda_id=venda["id"]).total == Decimal("200.00")


def test_excluir_venda_paga_409(loja):
    venda = _criar_venda(loja, [(loja["armacao"], 1)]).json()["data"]
    loja["api"].patch(
        f"/api/v1/pagamentos/{venda['pagamento']['id']}/status/", data={"status": "CONFIRMED"}
    )

    resp = loja["api"].delete(f"{VENDAS}{venda['id']}/")

    assert resp.status_code == 409
    assert resp.json()["message"] == "Não é possível excluir uma venda já paga ou parcialmente paga."
    assert _estoque(loja, loja["armacao"]) == 4


def test_excluir_venda_devolve_estoque_e_remove_pagamento(loja):
    venda = _criar_venda(loja, [(loja["armacao"], 3)]).json()["data"]
    assert _estoque(loja, loja["armacao"]) == 2

    resp = loja["api"].delete(f"{VENDAS}{venda['id']}/")

    assert resp.status_code == 200
    assert _estoque(loja, loja["armacao"]) == 5
    with schema_context(loja["schema"]):
        assert not Pagamento.objects.filter(venda_id=venda["id"]).exists()
        assert Venda.objects.get(pk=venda["id"]).ativo is False

    resp = loja["api"].get(f"{VENDAS}{venda['id']}/")
    assert resp.status_code == 404


def test_listar_vendas_por_cliente(loja):
    _criar_venda(loja, [(loja["armacao"], 1)])
    with schema_context(loja["schema"]):
        outro = criar_cliente(loja["cliente"].filial_id, nome="Beatriz Costa")

    resp = loja["api"].get(VENDAS, data={"cliente_id": str(loja["cliente"].id)})
    assert resp.status_code == 200
    assert resp.json()["data"]["total_elementos"] == 1

    resp = loja["api"].get(VENDAS, data={"cliente_id": str(outro.id)})
    assert resp.json()["data"]["total_elementos"] == 0
