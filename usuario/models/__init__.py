from .usuario_models import User, UserFilial

__all__ = ["User", "UserFilial"]
