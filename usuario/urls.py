from django.urls import path
from .views.usuario_views import login, refresh

app_name = "usuario"

urlpatterns = [
    path("login/", login, name="login"),
    path("refresh/", refresh, name="refresh"),
]
