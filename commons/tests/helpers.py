# commons/tests/helpers.py
from datetime import date
from decimal import Decimal

from django.apps import apps
from django.db import connection
from django_tenants.utils import (
    get_tenant_model,
    get_public_schema_name,
)

from commons.contexto import ContextoRequisicao

PUBLIC_HOSTS = ("localhost", "127.0.0.1", "testserver")


def _bootstrap_public_tenant_and_domain():
    """
    Garante que o tenant 'public' existe e que 'localhost', '127.0.0.1'
    e 'testserver' apontam para ele (rotas de urls_public).

    Idempotente: pode ser chamada várias vezes.
    """

    Tenant = get_tenant_model()
    Domain = apps.get_model("tenants", "Domain")

    public_schema = get_public_schema_name()

    # Sempre garante que estamos no schema público ao criar tenants/domínios
    connection.set_schema_to_public()

    public_tenant, _ = Tenant.objects.get_or_create(
        schema_name=public_schema,
        defaults={
            "cnpj_raiz": "00000000000000",
            "nome": "PUBLIC",
        },
    )

    for host in PUBLIC_HOSTS:
        dom, created = Domain.objects.get_or_create(
            domain=host,
            defaults={
                "tenant": public_tenant,
                "is_primary": host == "localhost",
            },
        )
        # Se já existe mas aponta pra outro tenant, força corrigir
        if not created and dom.tenant_id != public_tenant.id:
            dom.tenant = public_tenant
            dom.save(update_fields=["tenant"])


def contexto_de(usuario, filial_id, schema="test") -> ContextoRequisicao:
    """Contexto equivalente ao montado pela view, para chamar services direto."""
    return ContextoRequisicao(usuario=usuario, filial_id=filial_id, schema=schema)


# ---------------------------------------------------------------------------
# Fábricas simples (chamar dentro de schema_context)
# ---------------------------------------------------------------------------


def criar_cliente(filial_id, nome="Maria da Silva", **extra):
    Cliente = apps.get_model("clientes", "Cliente")
    return Cliente.objects.create(filial_id=filial_id, nome=nome, **extra)


def criar_produto(filial_id, nome="Armação Aviador", preco="250.00", estoque=10, **extra):
    Produto = apps.get_model("produtos", "Produto")
    extra.setdefault("categoria", "FRAME")
    return Produto.objects.create(
        filial_id=filial_id,
        nome=nome,
        preco_venda=Decimal(preco),
        estoque=estoque,
        **extra,
    )


def criar_venda_com_pagamento(filial_id, cliente=None, total="300.00", desconto="0.00"):
    """
    Venda mínima (sem itens) já com o Pagamento PENDING, para testes
    focados no fluxo de pagamento.
    """
    Venda = apps.get_model("vendas", "Venda")
    Pagamento = apps.get_model("vendas", "Pagamento")

    cliente = cliente or criar_cliente(filial_id)
    total = Decimal(total)
    desconto = Decimal(desconto)

    venda = Venda.objects.create(
        filial_id=filial_id,
        cliente=cliente,
        subtotal=total + desconto,
        desconto=desconto,
        total=total,
    )
    pagamento = Pagamento.objects.create(
        venda=venda,
        filial_id=filial_id,
        total=total,
        desconto=desconto,
    )
    return venda, pagamento


def adicionar_metodo(pagamento, metodo, valor, parcelas=None, primeiro_vencimento=None):
    """Cria o método e, se parcelado, gera as parcelas."""
    from vendas.services.pagamentos.integridade_service import gerar_parcelas

    PagamentoMetodoItem = apps.get_model("vendas", "PagamentoMetodoItem")
    metodo_item = PagamentoMetodoItem.objects.create(
        pagamento=pagamento,
        metodo=metodo,
        valor=Decimal(valor),
        parcelas=parcelas,
        primeiro_vencimento=primeiro_vencimento or (date.today() if parcelas else None),
    )
    if metodo_item.parcelado:
        gerar_parcelas(metodo_item)
    return metodo_item
