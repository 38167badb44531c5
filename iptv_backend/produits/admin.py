# produits/admin.py

from django.contrib import admin

from produits.models import Produit


@admin.register(Produit)
class ProduitAdmin(admin.ModelAdmin):
    list_display = (
        "nom",
        "plateforme",
        "categorie",
        "duree_mois",
        "stock_actuel",
        "seuil_alerte",
        "prix_vente_calcule",
        "cost_type",
    )
    list_filter = ("categorie", "cost_type", "is_multi_panel", "plateforme")
    search_fields = ("nom", "description")
    ordering = ("nom",)
    readonly_fields = ("prix_vente_calcule", "created_at", "updated_at")
