# marcas/urls.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter

from marcas.views.marca_views import MarcaViewSet

router = SimpleRouter()
router.register(r"", MarcaViewSet, basename="marca")

urlpatterns = [
    path("", include(router.urls)),
]
