# ventes/models.py

from decimal import Decimal

from django.db import models
from django.utils import timezone

from produits.models import CostType


class Vente(models.Model):
    """
    Sale of a product to a client, paid for with platform credit.

    AUDIT SNAPSHOT (IMPORTANT):
    - panel_balance_before is the platform balance right before the debit
    - panel_balance_after == panel_balance_before - purchase_cost
    - both are written once, by ventes.services.vente_service

    total = quantite * prix_unitaire, recomputed on every save.
    """

    class MethodePaiement(models.TextChoices):
        ESPECE = "Espèce", "Espèce"
        CCP = "CCP", "CCP"
        BARIDIMOB = "BaridiMob", "BaridiMob"
        AUTRE = "Autre", "Autre"

    class StatutPaiement(models.TextChoices):
        PAYE = "Payé", "Payé"
        EN_ATTENTE = "En attente", "En attente"

    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.PROTECT,
        related_name="ventes",
    )
    produit = models.ForeignKey(
        "produits.Produit",
        on_delete=models.PROTECT,
        related_name="ventes",
    )
    plateforme = models.ForeignKey(
        "plateformes.Plateforme",
        on_delete=models.PROTECT,
        related_name="ventes",
    )

    quantite = models.PositiveIntegerField()
    prix_unitaire = models.DecimalField(max_digits=14, decimal_places=2)
    total = models.DecimalField(max_digits=14, decimal_places=2, editable=False)

    date_vente = models.DateTimeField(default=timezone.now)
    methode_paiement = models.CharField(max_length=16, choices=MethodePaiement.choices)
    statut_paiement = models.CharField(max_length=16, choices=StatutPaiement.choices)
    notes = models.TextField(blank=True, default="")

    purchase_cost = models.DecimalField(max_digits=14, decimal_places=2)
    cost_type_vente = models.CharField(
        max_length=10,
        choices=CostType.choices,
        default=CostType.CURRENCY,
    )
    panel_balance_before = models.DecimalField(max_digits=14, decimal_places=2, editable=False)
    panel_balance_after = models.DecimalField(max_digits=14, decimal_places=2, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_vente", "-id"]
        indexes = [
            models.Index(fields=["date_vente"], name="vente_date_idx"),
            models.Index(fields=["plateforme", "date_vente"], name="vente_plat_date_idx"),
            models.Index(fields=["statut_paiement"], name="vente_statut_idx"),
        ]

    def __str__(self):
        return f"Vente #{self.pk} {self.quantite} x {self.prix_unitaire} = {self.total}"

    def compute_total(self) -> Decimal:
        return Decimal(self.quantite or 0) * Decimal(str(self.prix_unitaire or "0.00"))

    def save(self, *args, **kwargs):
        self.total = self.compute_total()

        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"total", "updated_at"}

        return super().save(*args, **kwargs)
