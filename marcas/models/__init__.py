from .marca_models import Marca

__all__ = ["Marca"]
