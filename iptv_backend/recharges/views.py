# recharges/views.py

"""
RECHARGE VIEWSET

Every write is delegated to recharges.services.recharge_service so the
platform balance moves in the same transaction as the recharge row.
"""

from core.viewsets import EnvelopeModelViewSet
from recharges.filters import RechargeFilter
from recharges.models import Recharge
from recharges.serializers import (
    RechargeCreateSerializer,
    RechargeSerializer,
    RechargeUpdateSerializer,
)
from recharges.services import recharge_service


class RechargeViewSet(EnvelopeModelViewSet):
    serializer_class = RechargeSerializer
    read_serializer_class = RechargeSerializer
    filterset_class = RechargeFilter

    not_found_label = "Recharge"
    created_message = "Recharge created successfully"
    updated_message = "Recharge updated successfully"
    deleted_message = "Recharge deleted successfully"

    def get_queryset(self):
        return Recharge.objects.select_related("plateforme").order_by("-date_recharge", "-id")

    def get_serializer_class(self):
        if self.action == "create":
            return RechargeCreateSerializer
        if self.action in ("update", "partial_update"):
            return RechargeUpdateSerializer
        return RechargeSerializer

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        result = recharge_service.create_recharge(
            plateforme_id=data.pop("id_plateforme"),
            **data,
        )
        return self.get_queryset().get(pk=result.recharge.pk)

    def perform_update(self, serializer):
        result = recharge_service.update_recharge(
            serializer.instance.pk,
            **serializer.validated_data,
        )
        return self.get_queryset().get(pk=result.recharge.pk)

    def perform_destroy(self, instance):
        recharge_service.delete_recharge(instance.pk)
