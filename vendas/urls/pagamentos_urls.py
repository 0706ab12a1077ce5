# vendas/urls/pagamentos_urls.py
from django.urls import path

from vendas.api.v1.pagamentos_views import (
    MetodoItemDetailView,
    MetodoItemPagarView,
    PagamentoDetailView,
    PagamentoListCreateView,
    PagamentoMetodosView,
    PagamentoParcelasView,
    PagamentoPorVendaView,
    PagamentoStatusView,
    PagamentoValidarView,
    ParcelaDetailView,
    ParcelaPagarView,
    ParcelasVencidasView,
)

urlpatterns = [
    path("", PagamentoListCreateView.as_view(), name="pagamento-list"),
    path("por-venda/<uuid:venda_id>/", PagamentoPorVendaView.as_view(), name="pagamento-por-venda"),

    # métodos
    path("metodos/<uuid:metodo_id>/", MetodoItemDetailView.as_view(), name="metodo-detail"),
    path("metodos/<uuid:metodo_id>/pagar/", MetodoItemPagarView.as_view(), name="metodo-pagar"),

    # parcelas ("vencidas" antes do detalhe)
    path("parcelas/vencidas/", ParcelasVencidasView.as_view(), name="parcelas-vencidas"),
    path("parcelas/<uuid:parcela_id>/", ParcelaDetailView.as_view(), name="parcela-detail"),
    path("parcelas/<uuid:parcela_id>/pagar/", ParcelaPagarView.as_view(), name="parcela-pagar"),

    path("<uuid:pagamento_id>/", PagamentoDetailView.as_view(), name="pagamento-detail"),
    path("<uuid:pagamento_id>/status/", PagamentoStatusView.as_view(), name="pagamento-status"),
    path("<uuid:pagamento_id>/validar/", PagamentoValidarView.as_view(), name="pagamento-validar"),
    path("<uuid:pagamento_id>/metodos/", PagamentoMetodosView.as_view(), name="pagamento-metodos"),
    path("<uuid:pagamento_id>/parcelas/", PagamentoParcelasView.as_view(), name="pagamento-parcelas"),
]
