# produtos/urls.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter

from produtos.views.produto_views import ProdutoViewSet

router = SimpleRouter()
router.register(r"", ProdutoViewSet, basename="produto")

urlpatterns = [
    path("", include(router.urls)),
]
