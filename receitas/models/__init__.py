from .receita_models import Receita

__all__ = ["Receita"]
