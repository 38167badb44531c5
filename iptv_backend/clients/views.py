# clients/views.py

"""
CLIENT VIEWSET

Staff CRUD over customers, with purchase stats on every read
(total_achats, montant_total_achats, dernier_achat).

Delete rule:
- refused while ventes reference the client
"""

from decimal import Decimal

from django.apps import apps
from django.db.models import Count, DecimalField, Max, Sum
from django.db.models.functions import Coalesce

from clients.filters import ClientFilter
from clients.models import Client
from clients.serializers import ClientSerializer
from core.exceptions import ServiceValidationError
from core.viewsets import EnvelopeModelViewSet


class ClientViewSet(EnvelopeModelViewSet):
    serializer_class = ClientSerializer
    filterset_class = ClientFilter

    not_found_label = "Client"
    created_message = "Client created successfully"
    updated_message = "Client updated successfully"
    deleted_message = "Client deleted successfully"

    def get_queryset(self):
        return (
            Client.objects
            .annotate(
                total_achats=Count("ventes"),
                montant_total_achats=Coalesce(
                    Sum("ventes__total"),
                    Decimal("0.00"),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                ),
                dernier_achat=Max("ventes__date_vente"),
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
        if Vente.objects.filter(client=instance).exists():
            raise ServiceValidationError("Cannot delete client with existing sales")
        instance.delete()
