from django.apps import AppConfig


class DarajaAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "daraja"
    verbose_name = "Daraja STK push"
