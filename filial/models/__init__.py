from .filial_models import Filial

__all__ = ["Filial"]
