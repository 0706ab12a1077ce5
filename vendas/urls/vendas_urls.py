# vendas/urls/vendas_urls.py
from django.urls import path

from vendas.api.v1.vendas_views import VendaDetailView, VendaListCreateView

urlpatterns = [
    path("", VendaListCreateView.as_view(), name="venda-list"),
    path("<uuid:venda_id>/", VendaDetailView.as_view(), name="venda-detail"),
]
