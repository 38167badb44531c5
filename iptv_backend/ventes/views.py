# ventes/views.py

"""
VENTE VIEWSET

Every write goes through ventes.services.vente_service:
- POST   /ventes               create (stock decrement + balance debit)
- PUT    /ventes/<id>          descriptive update
- DELETE /ventes/<id>          delete (reversal per VENTES_REVERSE_ON_DELETE)
- DELETE /ventes/bulk-delete   delete every sale -> {"deleted": n}
"""

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action

from core.responses import success_response
from core.viewsets import EnvelopeModelViewSet
from ventes.filters import VenteFilter
from ventes.models import Vente
from ventes.serializers import (
    BulkDeleteResultSerializer,
    VenteCreateSerializer,
    VenteSerializer,
    VenteUpdateSerializer,
)
from ventes.services import vente_service


class VenteViewSet(EnvelopeModelViewSet):
    serializer_class = VenteSerializer
    read_serializer_class = VenteSerializer
    filterset_class = VenteFilter

    not_found_label = "Vente"
    created_message = "Vente created successfully"
    updated_message = "Vente updated successfully"
    deleted_message = "Vente deleted successfully"

    def get_queryset(self):
        return (
            Vente.objects
            .select_related("client", "produit", "plateforme")
            .order_by("-date_vente", "-id")
        )

    def get_serializer_class(self):
        if self.action == "create":
            return VenteCreateSerializer
        if self.action in ("update", "partial_update"):
            return VenteUpdateSerializer
        return VenteSerializer

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        return vente_service.create_vente(
            client_id=data.pop("id_client"),
            produit_id=data.pop("id_produit"),
            plateforme_id=data.pop("id_plateforme"),
            **data,
        )

    def perform_update(self, serializer):
        return vente_service.update_vente(serializer.instance.pk, **serializer.validated_data)

    def perform_destroy(self, instance):
        vente_service.delete_vente(instance.pk)

    @extend_schema(request=None, responses={200: BulkDeleteResultSerializer})
    @action(detail=False, methods=["delete"], url_path="bulk-delete")
    def bulk_delete(self, request):
        deleted = vente_service.bulk_delete_ventes()
        if deleted == 0:
            message = "No sales to delete"
        else:
            message = f"Successfully deleted {deleted} sales records"
        return success_response({"deleted": deleted}, message=message)
