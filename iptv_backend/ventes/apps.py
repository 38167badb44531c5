# ventes/apps.py

from django.apps import AppConfig


class VentesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ventes"
    verbose_name = "Ventes"
