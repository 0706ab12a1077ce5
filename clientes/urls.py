# clientes/urls.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter

from clientes.views.cliente_views import ClienteViewSet

router = SimpleRouter()
router.register(r"", ClienteViewSet, basename="cliente")

urlpatterns = [
    path("", include(router.urls)),
]
