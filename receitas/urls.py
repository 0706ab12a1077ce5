# receitas/urls.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter

from receitas.views.receita_views import ReceitaViewSet

router = SimpleRouter()
router.register(r"", ReceitaViewSet, basename="receita")

urlpatterns = [
    path("", include(router.urls)),
]
