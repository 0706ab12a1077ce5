from django.apps import AppConfig


class MarcasConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marcas"
