# produits/apps.py

from django.apps import AppConfig


class ProduitsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "produits"
    verbose_name = "Produits"
