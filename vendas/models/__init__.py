from .venda_models import Venda
from .venda_item_models import VendaItem
from .pagamento_models import (
    StatusPagamento,
    MetodoPagamentoTipo,
    Pagamento,
    PagamentoMetodoItem,
    PagamentoParcela,
)

__all__ = [
    "Venda",
    "VendaItem",
    "StatusPagamento",
    "MetodoPagamentoTipo",
    "Pagamento",
    "PagamentoMetodoItem",
    "PagamentoParcela",
]
