# conftest.py (na raiz do projeto)

import logging

import pytest
from django.apps import apps
from django.core.cache import cache
from django.db import connection
from django.urls import reverse
from django_tenants.utils import get_tenant_model, schema_context
from rest_framework.test import APIClient

from commons.tests.helpers import _bootstrap_public_tenant_and_domain


logger = logging.getLogger(__name__)

TENANT1_SCHEMA = "99666666000191"
TENANT2_SCHEMA = "99777777000191"


# =============================================================================
# UTILITÁRIOS PARA LIMPEZA DE SCHEMA E TENANTS
# =============================================================================

def _drop_schema_if_exists(schema_name: str) -> None:
    connection.set_schema_to_public()
    with connection.cursor() as cursor:
        cursor.execute(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE;')

    logger.info("[conftest] Schema '%s' dropado (se existia).", schema_name)


def _cleanup_tenant_if_exists(schema_name: str) -> None:
    """
    Remove tenant e domínio associados, além do schema físico.
    """
    TenantModel = get_tenant_model()
    DomainModel = apps.get_model("tenants", "Domain")

    connection.set_schema_to_public()

    tenant = TenantModel.objects.filter(schema_name=schema_name).first()
    if tenant:
        logger.warning("[conftest] Removendo tenant antigo: %s", schema_name)
        DomainModel.objects.filter(tenant=tenant).delete()
        tenant.delete()

    _drop_schema_if_exists(schema_name)


# =============================================================================
# HELPERS PARA CRIAÇÃO DE TENANTS
# =============================================================================

def tenant_domain(schema_name: str) -> str:
    return f"tenant-{schema_name}.test.local"


def _build_tenant_payload(cnpj_raiz: str, empresa_nome: str, filial_cnpj: str) -> dict:
    return {
        "cnpj_raiz": cnpj_raiz,
        "nome": empresa_nome,
        "domain": tenant_domain(cnpj_raiz),
        "admin_username": f"admin-{cnpj_raiz}",
        "admin_password": "senha-forte-123",
        "filial": {
            "razao_social": empresa_nome,
            "nome_fantasia": f"Ótica {empresa_nome}",
            "cnpj": filial_cnpj,
            "telefone": "11999990000",
            "logradouro": "Av. Paulista",
            "numero": "1000",
            "bairro": "Bela Vista",
            "cidade": "São Paulo",
            "uf": "SP",
            "cep": "01311000",
        },
    }


def _provision_tenant_via_api(payload: dict, token: str) -> dict:
    """
    Usa o endpoint público /criar-tenant/ para criar o tenant real.
    """
    connection.set_schema_to_public()
    client = APIClient()

    url = reverse("tenants:criar-tenant", urlconf="config.urls_public")

    logger.info("[conftest] Provisionando tenant %s...", payload["domain"])

    resp = client.post(
        url,
        data=payload,
        format="json",
        HTTP_X_TENANT_PROVISIONING_TOKEN=token,
    )
    assert resp.status_code == 201, resp.content

    body = resp.json()
    logger.info(
        "[conftest] Tenant criado: schema=%s, admin=%s",
        body["schema"],
        body["admin_username"],
    )
    return body


# =============================================================================
# FIXTURE PRINCIPAL: DOIS TENANTS PRONTOS PARA USO EM QUALQUER TESTE
# =============================================================================

@pytest.fixture
def two_tenants_with_admins(db, settings):
    """
    Cria 2 tenants REAIS via /criar-tenant, cada um com filial e admin.

    Retorna:
    {
        "schema1", "schema2",
        "domain1", "domain2",
        "filial1_id", "filial2_id",
        "admin_username_1", "admin_username_2",
        "body1", "body2",
    }
    """
    settings.ALLOWED_HOSTS = ["*"]
    settings.TENANT_PROVISIONING_TOKEN = "test-token-global"

    for schema in (TENANT1_SCHEMA, TENANT2_SCHEMA):
        _cleanup_tenant_if_exists(schema)

    _bootstrap_public_tenant_and_domain()

    payload1 = _build_tenant_payload(TENANT1_SCHEMA, "Ótica Visão LTDA", "99666666000109")
    payload2 = _build_tenant_payload(TENANT2_SCHEMA, "Ótica Foco LTDA", "99777777000109")

    body1 = _provision_tenant_via_api(payload1, settings.TENANT_PROVISIONING_TOKEN)
    body2 = _provision_tenant_via_api(payload2, settings.TENANT_PROVISIONING_TOKEN)

    ctx = {
        "schema1": body1["schema"],
        "schema2": body2["schema"],
        "domain1": body1["domain"],
        "domain2": body2["domain"],
        "filial1_id": body1["filial_id"],
        "filial2_id": body2["filial_id"],
        "admin_username_1": body1["admin_username"],
        "admin_username_2": body2["admin_username"],
        "body1": body1,
        "body2": body2,
    }

    yield ctx

    for schema in (TENANT1_SCHEMA, TENANT2_SCHEMA):
        _cleanup_tenant_if_exists(schema)


# =============================================================================
# FIXTURES DE APOIO PARA TESTES MULTITENANT
# =============================================================================

@pytest.fixture(autouse=True)
def _limpar_throttle():
    """
    O throttle do DRF conta por pk de usuário no cache; schemas recriados
    repetem os mesmos pks entre testes.
    """
    cache.clear()
    yield


@pytest.fixture
def admin_user():
    """
    Retorna uma função que, dado schema e username, carrega o User real
    de dentro do schema do tenant.
    """
    User = apps.get_model("usuario", "User")

    def _get(schema: str, username: str):
        with schema_context(schema):
            return User.objects.get(username=username)

    return _get


@pytest.fixture
def tenant_api():
    """
    Cliente DRF autenticado que roteia pelo domínio do tenant
    (TenantMainMiddleware resolve o schema pelo Host).

    Uso:
        api = tenant_api(schema, user)
        resp = api.get(url)
        resp = api.post(url, data={...})
    """

    class TenantAPI:
        def __init__(self, schema: str, user, filial_id=None):
            self.schema = schema
            self.client = APIClient()
            self.client.force_authenticate(user=user)
            self.headers = {"HTTP_HOST": tenant_domain(schema)}
            if filial_id is not None:
                self.headers["HTTP_X_FILIAL_ID"] = str(filial_id)

        def _execute(self, method: str, url: str, **kwargs):
            if method != "get":
                kwargs.setdefault("format", "json")
            resp = getattr(self.client, method)(url, **self.headers, **kwargs)
            connection.set_schema_to_public()
            return resp

        # atalhos
        def get(self, url, **kw): return self._execute("get", url, **kw)
        def post(self, url, **kw): return self._execute("post", url, **kw)
        def put(self, url, **kw): return self._execute("put", url, **kw)
        def patch(self, url, **kw): return self._execute("patch", url, **kw)
        def delete(self, url, **kw): return self._execute("delete", url, **kw)

    def _factory(schema: str, user, filial_id=None):
        return TenantAPI(schema, user, filial_id)

    return _factory
