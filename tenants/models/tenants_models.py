from django.db import models
from django_tenants.models import DomainMixin, TenantMixin


class Tenant(TenantMixin):
    """
    Empresa (ótica) assinante. Cada tenant tem seu próprio schema;
    as filiais (lojas) vivem dentro do schema do tenant.
    """

    cnpj_raiz = models.CharField(max_length=14, unique=True)
    nome = models.CharField(max_length=150)
    ativo = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    auto_create_schema = True

    def __str__(self):
        return f"{self.nome} ({self.schema_name})"


class Domain(DomainMixin):
    pass
