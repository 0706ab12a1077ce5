from .produtos_models import Produto, CategoriaProduto

__all__ = ["Produto", "CategoriaProduto"]
