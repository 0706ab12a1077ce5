# vendas/services/vendas/__init__.py

from .venda_service import (
    atualizar_venda,
    buscar_venda,
    criar_venda,
    excluir_venda,
    listar_vendas,
)

__all__ = [
    "atualizar_venda",
    "buscar_venda",
    "criar_venda",
    "excluir_venda",
    "listar_vendas",
]
