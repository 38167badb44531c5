# ventes/admin.py

from django.contrib import admin

from ventes.models import Vente


@admin.register(Vente)
class VenteAdmin(admin.ModelAdmin):
    """
    Read-only: stock and balance effects only happen through the sale API.
    """

    list_display = (
        "id",
        "date_vente",
        "client",
        "produit",
        "plateforme",
        "quantite",
        "total",
        "purchase_cost",
        "statut_paiement",
    )
    list_filter = ("statut_paiement", "methode_paiement", "plateforme")
    search_fields = ("client__nom", "client__telephone", "produit__nom")
    ordering = ("-date_vente",)
    date_hierarchy = "date_vente"

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
