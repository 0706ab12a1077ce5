# config/urls.py
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("api/v1/usuario/", include("usuario.urls")),
    path("api/v1/filiais/", include("filial.urls")),
    path("api/v1/marcas/", include("marcas.urls")),
    path("api/v1/clientes/", include("clientes.urls")),
    path("api/v1/produtos/", include("produtos.urls")),
    path("api/v1/receitas/", include("receitas.urls")),
    path("api/v1/vendas/", include(("vendas.urls.vendas_urls", "vendas"), namespace="vendas")),
    path(
        "api/v1/pagamentos/",
        include(("vendas.urls.pagamentos_urls", "pagamentos"), namespace="pagamentos"),
    ),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
]
