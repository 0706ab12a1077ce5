# tenants/views/tenants_views.py

import logging

from django.apps import apps
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.db import connection, IntegrityError
from django_tenants.utils import get_tenant_model, schema_context
from rest_framework import status
from rest_framework.decorators import (
    api_view,
    permission_classes,
    authentication_classes,
)
from rest_framework.response import Response

from tenants.permissions import PublicProvisioningPermission
from tenants.serializers import TenantCreateSerializer

logger = logging.getLogger(__name__)


def _drop_schema_if_exists(schema_name: str) -> None:
    """
    Dropa o schema de um tenant diretamente no PostgreSQL, caso exista.
    """
    connection.set_schema_to_public()
    with connection.cursor() as cursor:
        cursor.execute(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE;')
    logger.info("Schema '%s' dropado (se existia).", schema_name)


def _safe_cleanup_tenant(tenant) -> None:
    """
    Limpa tenant parcialmente provisionado (Domain + schema + Tenant).
    Falhas aqui são registradas e não mascaram o erro original.
    """
    if tenant is None:
        return

    TenantModel = get_tenant_model()
    DomainModel = apps.get_model("tenants", "Domain")

    connection.set_schema_to_public()

    try:
        tenant_db = TenantModel.objects.filter(pk=tenant.pk).first()
        if not tenant_db:
            return

        logger.warning(
            "Fazendo cleanup de tenant '%s' (schema_name=%s) após falha no provisionamento.",
            tenant_db.cnpj_raiz,
            tenant_db.schema_name,
        )

        DomainModel.objects.filter(tenant=tenant_db).delete()
        schema_name = tenant_db.schema_name

        tenant_db.delete()
        _drop_schema_if_exists(schema_name)
    except Exception:
        logger.exception("Erro ao limpar tenant após falha no provisionamento.")


def _criar_usuario_admin_para_filial(filial, username=None, password=None):
    """
    Cria o usuário ADMIN do tenant, vinculado à filial inicial.

    Sem senha informada, a senha fica inutilizável (definição posterior).
    """
    User = get_user_model()
    UserFilial = apps.get_model(User._meta.app_label, "UserFilial")

    admin_user = User.objects.create(
        username=username or f"admin-{filial.cnpj}",
        email="",
        papel=User.Papel.ADMIN,
        is_superuser=True,
        is_staff=True,
        is_active=True,
    )
    if password:
        admin_user.set_password(password)
    else:
        admin_user.set_unusable_password()
    admin_user.save(update_fields=["password"])

    UserFilial.objects.create(
        user=admin_user,
        filial_id=filial.id,
    )

    return admin_user


@api_view(["POST"])
@authentication_classes([])
@permission_classes([PublicProvisioningPermission])
def criar_tenant(request):
    """
    Cria um novo tenant (ótica) + schema + domínio e, dentro do novo
    schema, a filial inicial e o usuário ADMIN vinculado a ela.

    Em caso de falha após o schema ter sido criado, faz cleanup
    (tenant + domain + schema) e devolve resposta segura.
    """
    ser = TenantCreateSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data

    Tenant = get_tenant_model()
    Domain = apps.get_model("tenants", "Domain")

    schema_name = data["cnpj_raiz"]
    domain_name = data["domain"]

    connection.set_schema_to_public()

    if Tenant.objects.filter(schema_name=schema_name).exists():
        return Response(
            {
                "detail": "Já existe um tenant provisionado com este CNPJ raiz.",
                "field": "cnpj_raiz",
                "code": "tenant_already_exists",
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    if Domain.objects.filter(domain=domain_name).exists():
        return Response(
            {
                "detail": "Já existe um domínio provisionado com este valor.",
                "field": "domain",
                "code": "domain_already_exists",
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    tenant = None
    filial = None
    admin_user = None

    try:
        tenant = Tenant(
            schema_name=schema_name,
            cnpj_raiz=data["cnpj_raiz"],
            nome=data["nome"],
        )
        tenant.save()  # cria o schema no banco

        call_command(
            "migrate_schemas",
            tenant=True,
            schema_name=tenant.schema_name,
            interactive=False,
            verbosity=0,
        )

        Domain.objects.create(
            domain=domain_name,
            tenant=tenant,
            is_primary=True,
        )

        filial_payload = data["filial"]

        with schema_context(tenant.schema_name):
            FilialModel = apps.get_model("filial", "Filial")

            filial = FilialModel.objects.create(
                razao_social=filial_payload["razao_social"],
                nome_fantasia=filial_payload["nome_fantasia"],
                cnpj=filial_payload["cnpj"],
                telefone=filial_payload.get("telefone") or "",
                logradouro=filial_payload.get("logradouro") or "",
                numero=filial_payload.get("numero") or "",
                bairro=filial_payload.get("bairro") or "",
                cidade=filial_payload.get("cidade") or "",
                uf=filial_payload.get("uf") or "",
                cep=filial_payload.get("cep") or "",
                ativo=True,
            )

            admin_user = _criar_usuario_admin_para_filial(
                filial,
                username=data.get("admin_username"),
                password=data.get("admin_password"),
            )

    except IntegrityError:
        logger.exception("Erro de integridade ao provisionar tenant '%s'.", schema_name)
        _safe_cleanup_tenant(tenant)
        return Response(
            {
                "detail": "Não foi possível provisionar o tenant devido a um "
                          "conflito de dados (integridade).",
                "code": "integrity_error",
            },
            status=status.HTTP_400_BAD_REQUEST,
        )
    except Exception:
        logger.exception("Erro inesperado ao provisionar tenant '%s'.", schema_name)
        _safe_cleanup_tenant(tenant)
        return Response(
            {
                "detail": "Ocorreu um erro interno ao provisionar o tenant.",
                "code": "unexpected_error",
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info(
        "tenant_provisionado",
        extra={
            "event": "tenant_provisionado",
            "schema": tenant.schema_name,
            "filial_id": str(filial.id),
        },
    )

    return Response(
        {
            "tenant": tenant.cnpj_raiz,
            "schema": tenant.schema_name,
            "domain": domain_name,
            "filial_id": str(filial.id),
            "admin_user_id": str(admin_user.id),
            "admin_username": admin_user.username,
        },
        status=status.HTTP_201_CREATED,
    )
