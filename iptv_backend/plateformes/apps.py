# plateformes/apps.py

"""
PLATEFORMES APP CONFIG

Upstream panels holding reseller credit, and the balance ledger that keeps
their balance consistent with recharges and sales.
"""

from django.apps import AppConfig


class PlateformesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "plateformes"
    verbose_name = "Plateformes & Balance Ledger"
