# filial/urls.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter

from filial.views.filial_views import FilialViewSet

router = SimpleRouter()
router.register(r"", FilialViewSet, basename="filial")

urlpatterns = [
    path("", include(router.urls)),
]
