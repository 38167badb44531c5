# plateformes/views.py

"""
PLATEFORME VIEWSET

Staff endpoints:
- CRUD over platforms (balance is read-only here)
- GET  /plateformes/<id>/mouvements      balance journal (paginated)
- POST /plateformes/<id>/ajustement      manual, journaled adjustment
- GET  /plateformes/<id>/reconciliation  ledger drift report

Delete rule:
- refused while recharges, produits or ventes reference the platform
- journal and platform rows are deleted in one transaction
"""

from decimal import Decimal

from django.apps import apps
from django.db import transaction
from django.db.models import Count, DecimalField, IntegerField, OuterRef, Subquery, Sum
from django.db.models.functions import Coalesce
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action

from core.exceptions import ServiceValidationError
from core.responses import success_response
from core.viewsets import EnvelopeModelViewSet
from plateformes.filters import PlateformeFilter
from plateformes.models import BalanceMovement, Plateforme
from plateformes.serializers import (
    BalanceAdjustmentInputSerializer,
    BalanceMovementSerializer,
    PlateformeSerializer,
    ReconciliationSerializer,
)
from plateformes.services import ledger


def _recharge_total(statut):
    Recharge = apps.get_model("recharges", "Recharge")
    return Coalesce(
        Subquery(
            Recharge.objects
            .filter(plateforme=OuterRef("pk"), statut=statut)
            .order_by()
            .values("plateforme")
            .annotate(total=Sum("montant"))
            .values("total")[:1],
            output_field=DecimalField(max_digits=14, decimal_places=2),
        ),
        Decimal("0.00"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )


def _count_of(app_label, model_name):
    model = apps.get_model(app_label, model_name)
    return Coalesce(
        Subquery(
            model.objects
            .filter(plateforme=OuterRef("pk"))
            .order_by()
            .values("plateforme")
            .annotate(n=Count("pk"))
            .values("n")[:1],
            output_field=IntegerField(),
        ),
        0,
    )


class PlateformeViewSet(EnvelopeModelViewSet):
    serializer_class = PlateformeSerializer
    filterset_class = PlateformeFilter

    not_found_label = "Plateforme"
    created_message = "Plateforme created successfully"
    updated_message = "Plateforme updated successfully"
    deleted_message = "Plateforme deleted successfully"

    def get_queryset(self):
        Recharge = apps.get_model("recharges", "Recharge")
        return Plateforme.objects.annotate(
            total_recharges=_count_of("recharges", "Recharge"),
            total_recharge_paye=_recharge_total(Recharge.Statut.PAYE),
            total_recharge_attente=_recharge_total(Recharge.Statut.EN_ATTENTE),
            nb_produits=_count_of("produits", "Produit"),
        ).order_by("-created_at", "-id")

    def perform_create(self, serializer):
        instance = serializer.save()
        return self.get_queryset().get(pk=instance.pk)

    def perform_update(self, serializer):
        instance = serializer.save()
        return self.get_queryset().get(pk=instance.pk)

    @transaction.atomic
    def perform_destroy(self, instance):
        Recharge = apps.get_model("recharges", "Recharge")
        Produit = apps.get_model("produits", "Produit")
        Vente = apps.get_model("ventes", "Vente")

        if (
            Recharge.objects.filter(plateforme=instance).exists()
            or Produit.objects.filter(plateforme=instance).exists()
        ):
            raise ServiceValidationError(
                "Cannot delete plateforme with existing recharges or produits"
            )

        # A sale may debit a platform other than its product's own.
        if Vente.objects.filter(plateforme=instance).exists():
            raise ServiceValidationError("Cannot delete plateforme with existing ventes")

        # The journal is owned by the platform; it goes with it.
        BalanceMovement.objects.filter(plateforme=instance).delete()
        instance.delete()

    # -----------------------------
    # Ledger journal
    # -----------------------------
    @extend_schema(responses={200: BalanceMovementSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="mouvements")
    def mouvements(self, request, pk=None):
        plateforme = self.get_object()
        qs = BalanceMovement.objects.filter(plateforme=plateforme).order_by("-created_at", "-id")
        page = self.paginate_queryset(qs)
        data = BalanceMovementSerializer(page, many=True).data
        return self.get_paginated_response(data)

    # -----------------------------
    # Manual adjustment
    # -----------------------------
    @extend_schema(
        request=BalanceAdjustmentInputSerializer,
        responses={200: PlateformeSerializer},
        description="Apply a signed, journaled adjustment to the platform balance.",
    )
    @action(detail=True, methods=["post"], url_path="ajustement")
    def ajustement(self, request, pk=None):
        plateforme = self.get_object()

        ser = BalanceAdjustmentInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ledger.adjust_balance(
            plateforme.pk,
            ser.validated_data["delta"],
            reason=BalanceMovement.Reason.AJUSTEMENT,
            source_type=BalanceMovement.SourceType.MANUEL,
            note=ser.validated_data.get("note", ""),
        )

        refreshed = self.get_queryset().get(pk=plateforme.pk)
        return success_response(
            PlateformeSerializer(refreshed).data,
            message="Platform balance adjusted",
            status=status.HTTP_200_OK,
        )

    # -----------------------------
    # Reconciliation report
    # -----------------------------
    @extend_schema(responses={200: ReconciliationSerializer})
    @action(detail=True, methods=["get"], url_path="reconciliation")
    def reconciliation(self, request, pk=None):
        plateforme = self.get_object()
        report = ledger.reconcile_plateforme(plateforme, fix=False)
        return success_response(ReconciliationSerializer(report).data)
