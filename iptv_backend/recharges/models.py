# recharges/models.py

from django.db import models
from django.utils import timezone


class Recharge(models.Model):
    """
    Credit top-up bought for a platform.

    BALANCE RULE:
    - only recharges whose statut is PAYE count in the platform balance
    - every statut/montant change is mirrored in the balance by
      recharges.services.recharge_service, never by saving this model
    """

    class Statut(models.TextChoices):
        EN_ATTENTE = "En attente", "En attente"
        PAYE = "Payé", "Payé"
        ANNULE = "Annulé", "Annulé"

    DEVISE = "DZD"

    plateforme = models.ForeignKey(
        "plateformes.Plateforme",
        on_delete=models.PROTECT,
        related_name="recharges",
    )

    montant = models.DecimalField(max_digits=14, decimal_places=2)
    devise = models.CharField(max_length=8, default=DEVISE, editable=False)
    statut = models.CharField(
        max_length=16,
        choices=Statut.choices,
        default=Statut.EN_ATTENTE,
    )
    date_recharge = models.DateTimeField(default=timezone.now)

    # Receipt URL or reference; the upload itself lives elsewhere.
    preuve_paiement = models.CharField(max_length=500, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_recharge", "-id"]
        indexes = [
            models.Index(fields=["plateforme", "statut"], name="recharge_plat_statut_idx"),
            models.Index(fields=["date_recharge"], name="recharge_date_idx"),
        ]

    def __str__(self):
        return f"Recharge #{self.pk} {self.montant} {self.devise} ({self.statut})"

    @property
    def is_paid(self) -> bool:
        return self.statut == self.Statut.PAYE
