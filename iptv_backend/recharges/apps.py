# recharges/apps.py

from django.apps import AppConfig


class RechargesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "recharges"
    verbose_name = "Recharges"
