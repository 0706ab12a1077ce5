# tests/tenants/test_tenant_provisioning_security.py

import pytest
from django.db import connection
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from commons.tests.helpers import _bootstrap_public_tenant_and_domain


def _build_payload_tenant_valido():
    """CNPJs próprios deste arquivo; nenhum tenant chega a ser criado."""
    return {
        "cnpj_raiz": "99333333000191",
        "nome": "Ótica Segurança LTDA",
        "domain": "tenant-99333333000191.test.local",
        "filial": {
            "razao_social": "Ótica Segurança LTDA",
            "nome_fantasia": "Ótica Segurança",
            "cnpj": "99333333000109",
        },
    }


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token-seguro",
)
def test_criar_tenant_sem_token_retorna_403():
    _bootstrap_public_tenant_and_domain()
    connection.set_schema_to_public()

    client = APIClient()
    resp = client.post(reverse("tenants:criar-tenant"), data=_build_payload_tenant_valido(), format="json")

    assert resp.status_code == 403, resp.content


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token-seguro",
)
def test_criar_tenant_com_token_incorreto_retorna_403():
    _bootstrap_public_tenant_and_domain()
    connection.set_schema_to_public()

    client = APIClient()
    resp = client.post(
        reverse("tenants:criar-tenant"),
        data=_build_payload_tenant_valido(),
        format="json",
        HTTP_X_TENANT_PROVISIONING_TOKEN="token-invalido",
    )

    assert resp.status_code == 403, resp.content
    assert resp.json()["status"] == 403


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token-seguro",
)
def test_criar_tenant_com_metodo_get_nao_permitido():
    _bootstrap_public_tenant_and_domain()
    connection.set_schema_to_public()

    resp = APIClient().get(reverse("tenants:criar-tenant"))

    # permissão é checada antes do método
    assert resp.status_code in (403, 405), resp.content


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="test-token-seguro",
)
def test_criar_tenant_com_header_x_admin_token_retorna_403():
    _bootstrap_public_tenant_and_domain()
    connection.set_schema_to_public()

    resp = APIClient().post(
        reverse("tenants:criar-tenant"),
        data=_build_payload_tenant_valido(),
        format="json",
        HTTP_X_ADMIN_TOKEN="test-token-seguro",
    )

    assert resp.status_code == 403, resp.content


@pytest.mark.django_db(transaction=True)
@override_settings(
    ROOT_URLCONF="config.urls_public",
    ALLOWED_HOSTS=["*", "testserver"],
    TENANT_PROVISIONING_TOKEN="",
)
def test_criar_tenant_sem_token_configurado_retorna_403():
    _bootstrap_public_tenant_and_domain()
    connection.set_schema_to_public()

    resp = APIClient().post(
        reverse("tenants:criar-tenant"),
        data=_build_payload_tenant_valido(),
        format="json",
        HTTP_X_TENANT_PROVISIONING_TOKEN="",
    )

    assert resp.status_code == 403, resp.content
    assert resp.json()["message"] == "Provisionamento de ótica não autorizado."
