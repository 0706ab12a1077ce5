from .tenants_models import Domain, Tenant

__all__ = ["Tenant", "Domain"]
