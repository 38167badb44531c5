# plateformes/models/balance_movement.py

"""
BALANCE MOVEMENT MODEL

Append-only journal of every signed change applied to Plateforme.balance.

Guarantees:
- Immutable once created (no updates, no deletes)
- delta is signed and never zero
- balance_after is the platform balance right after the change
- source_type/source_id point at the recharge or vente that caused it
  (plain ids, the source row may since have been deleted)
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class BalanceMovement(models.Model):
    class Reason(models.TextChoices):
        RECHARGE_PAYEE = "RECHARGE_PAYEE", "Recharge payée"
        RECHARGE_ANNULEE = "RECHARGE_ANNULEE", "Recharge sortie du statut payé"
        RECHARGE_MODIFIEE = "RECHARGE_MODIFIEE", "Montant de recharge modifié"
        RECHARGE_SUPPRIMEE = "RECHARGE_SUPPRIMEE", "Recharge payée supprimée"
        VENTE = "VENTE", "Vente"
        VENTE_ANNULEE = "VENTE_ANNULEE", "Vente supprimée (reversement)"
        AJUSTEMENT = "AJUSTEMENT", "Ajustement manuel"

    class SourceType(models.TextChoices):
        RECHARGE = "RECHARGE", "Recharge"
        VENTE = "VENTE", "Vente"
        MANUEL = "MANUEL", "Manuel"

    plateforme = models.ForeignKey(
        "plateformes.Plateforme",
        on_delete=models.PROTECT,
        related_name="mouvements",
    )

    delta = models.DecimalField(max_digits=14, decimal_places=2)
    balance_after = models.DecimalField(max_digits=14, decimal_places=2)

    reason = models.CharField(max_length=32, choices=Reason.choices)
    source_type = models.CharField(max_length=16, choices=SourceType.choices)
    source_id = models.PositiveBigIntegerField(null=True, blank=True)
    note = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["plateforme", "created_at"], name="mouvement_plat_created_idx"),
            models.Index(fields=["source_type", "source_id"], name="mouvement_source_idx"),
        ]

    def __str__(self):
        sign = "+" if self.delta >= 0 else ""
        return f"{self.reason} {sign}{self.delta} → {self.plateforme_id}"

    def clean(self):
        if self.delta is None or self.delta == 0:
            raise ValidationError("Balance movement delta must be non-zero")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("BalanceMovement records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("BalanceMovement records are immutable and cannot be deleted")
