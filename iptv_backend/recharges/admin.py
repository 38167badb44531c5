# recharges/admin.py

from django.contrib import admin

from recharges.models import Recharge


@admin.register(Recharge)
class RechargeAdmin(admin.ModelAdmin):
    """
    Read-only: balance effects only happen through the recharge API.
    """

    list_display = ("id", "plateforme", "montant", "devise", "statut", "date_recharge")
    list_filter = ("statut", "plateforme")
    search_fields = ("plateforme__nom", "notes", "preuve_paiement")
    ordering = ("-date_recharge",)
    readonly_fields = (
        "plateforme",
        "montant",
        "devise",
        "statut",
        "date_recharge",
        "preuve_paiement",
        "notes",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
