# produits/views.py

"""
PRODUIT VIEWSET

Staff CRUD over products. Reads carry the platform name, the low-stock
flag and sales counters.

Delete rule:
- refused while ventes reference the product
"""

from django.apps import apps
from django.db.models import Count, Sum
from django.db.models.functions import Coalesce

from core.exceptions import ServiceValidationError
from core.viewsets import EnvelopeModelViewSet
from produits.filters import ProduitFilter
from produits.models import Produit
from produits.serializers import ProduitSerializer


class ProduitViewSet(EnvelopeModelViewSet):
    serializer_class = ProduitSerializer
    filterset_class = ProduitFilter

    not_found_label = "Produit"
    created_message = "Produit created successfully"
    updated_message = "Produit updated successfully"
    deleted_message = "Produit deleted successfully"

    def get_queryset(self):
        return (
            Produit.objects
            .select_related("plateforme")
            .annotate(
                total_ventes=Count("ventes"),
                quantite_vendue=Coalesce(Sum("ventes__quantite"), 0),
            )
            .order_by("-created_at", "-id")
        )

    def perform_create(self, serializer):
        instance = serializer.save()
        return self.get_queryset().get(pk=instance.pk)

    def perform_update(self, serializer):
        instance = serializer.save()
        return self.get_queryset().get(pk=instance.pk)

    def perform_destroy(self, instance):
        Vente = apps.get_model("ventes", "Vente")
        if Vente.objects.filter(produit=instance).exists():
            raise ServiceValidationError("Cannot delete produit with existing sales")
        instance.delete()
