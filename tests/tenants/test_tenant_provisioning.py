# tests/tenants/test_tenant_provisioning.py

import logging

import pytest
from django.apps import apps
from django.db import connection
from django.test import override_settings
from django.urls import reverse
from django_tenants.utils import get_tenant_model, schema_context
from rest_framework.test import APIClient

from commons.tests.helpers import _bootstrap_public_tenant_and_domain

logger = logging.getLogger(__name__)

SCHEMAS_TESTE = ("99111111000191", "99222222000191")


def _drop_schema_if_exists(schema_name: str) -> None:
    """
    O django-tenants não derruba o schema ao deletar o tenant
    (TENANT_AUTO_DROP_SCHEMA=False), então o teste limpa na mão.
    """
    connection.set_schema_to_public()
    with connection.cursor() as cursor:
        # schema_name é controlado pelo teste (numérico)
        cursor.execute(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE;')


def _cleanup_tenant_if_exists(schema_name: str) -> None:
    TenantModel = get_tenant_model()
    DomainModel = apps.get_model("tenants", "Domain")

    connection.set_schema_to_public()

    tenant = TenantModel.objects.filter(schema_name=schema_name).first()
    if tenant:
        logger.warning("Removendo tenant de teste pré-existente: %s", schema_name)
        DomainModel.objects.filter(tenant=tenant).delete()
        tenant.delete()

    _drop_schema_if_exists(schema_name)


def _payload(cnpj_raiz="99111111000191", filial_cnpj="99111111000109", **extra):
    payload = {
        "cnpj_raiz": cnpj_raiz,
        "nome": "Ótica Central LTDA",
        "domain": f"tenant-{cnpj_raiz}.test.local",
        "admin_username": "gerente",
        "admin_password": "senha-forte-123",
        "filial": {
            "razao_social": "Ótica Central LTDA",
            "nome_fantasia": "Ótica Central",
            "cnpj": filial_cnpj,
            "telefone": "1133334444",
            "logradouro": "Rua Augusta",
            "numero": "500",
            "bairro": "Consolação",
            "cidade": "São Paulo",
            "uf": "SP",
            "cep": "01305000",
        },
    }
    payload.update(extra)
    return payload


def _post(payload, token="test-token"):
    connection.set_schema_to_public()
    client = APIClient()
    url = reverse("tenants:criar-tenant")
    return client.post(url, data=payload, format="json", HTTP_X_TENANT_PROVISIONING_TOKEN=token)


@pytest.fixture(autouse=True)
def _cleanup_tenants_testes():
    for schema_name in SCHEMAS_TESTE:
        _cleanup_tenant_if_exists(schema_name)
    yield
    for schema_name in SCHEMAS_TESTE:
        _cleanup_tenant_if_exists(schema_name)


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token",
)
def test_criar_tenant_cria_schema_filial_e_admin():
    _bootstrap_public_tenant_and_domain()
    payload = _payload()

    resp = _post(payload)
    assert resp.status_code == 201, resp.content
    body = resp.json()

    assert body["schema"] == payload["cnpj_raiz"]
    assert body["domain"] == payload["domain"]
    assert body["admin_username"] == "gerente"

    TenantModel = get_tenant_model()
    DomainModel = apps.get_model("tenants", "Domain")
    tenant = TenantModel.objects.get(schema_name=payload["cnpj_raiz"])
    assert DomainModel.objects.filter(domain=payload["domain"], tenant=tenant, is_primary=True).exists()

    with schema_context(tenant.schema_name):
        Filial = apps.get_model("filial", "Filial")
        User = apps.get_model("usuario", "User")
        UserFilial = apps.get_model("usuario", "UserFilial")

        filial = Filial.objects.get(id=body["filial_id"])
        assert filial.cnpj == payload["filial"]["cnpj"]
        assert filial.cidade == "São Paulo"
        assert filial.uf == "SP"

        admin = User.objects.get(id=body["admin_user_id"])
        assert admin.papel == User.Papel.ADMIN
        assert admin.check_password("senha-forte-123")
        assert UserFilial.objects.filter(user=admin, filial_id=filial.id).exists()


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token",
)
def test_criar_tenant_duplicado_retorna_400():
    _bootstrap_public_tenant_and_domain()

    assert _post(_payload()).status_code == 201

    resp = _post(_payload(domain="outro-dominio.test.local"))
    assert resp.status_code == 400
    assert resp.json()["code"] == "tenant_already_exists"

    resp = _post(_payload(cnpj_raiz="99222222000191", domain="tenant-99111111000191.test.local"))
    assert resp.status_code == 400
    assert resp.json()["code"] == "domain_already_exists"
    assert not get_tenant_model().objects.filter(schema_name="99222222000191").exists()


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token",
)
def test_usuarios_isolados_por_tenant():
    """Cada schema tem seu próprio admin; um não enxerga o outro."""
    _bootstrap_public_tenant_and_domain()

    body1 = _post(_payload(admin_username="admin-a")).json()
    body2 = _post(
        _payload(cnpj_raiz="99222222000191", filial_cnpj="99222222000109", admin_username="admin-b")
    ).json()

    User = apps.get_model("usuario", "User")
    with schema_context(body1["schema"]):
        assert list(User.objects.values_list("username", flat=True)) == ["admin-a"]
    with schema_context(body2["schema"]):
        assert list(User.objects.values_list("username", flat=True)) == ["admin-b"]
