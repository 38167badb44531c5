# plateformes/models/plateforme.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class BalanceType(models.TextChoices):
    CURRENCY = "currency", "Currency"
    POINTS = "points", "Points"


class Plateforme(models.Model):
    """
    Upstream panel on which the reseller holds credit.

    BALANCE MODEL (IMPORTANT):
    - `balance` is the authoritative, materialised current credit
    - it is mutated ONLY by plateformes.services.ledger (F() expressions)
    - every mutation is journaled in BalanceMovement
    - `solde_initial` is the opening balance and never changes

    balance == solde_initial + sum(BalanceMovement.delta)
    """

    nom = models.CharField(max_length=150, unique=True)
    description = models.TextField(blank=True, default="")
    url = models.CharField(max_length=255, blank=True, default="")

    solde_initial = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Opening balance at creation.",
    )

    balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Current credit. Mutated only through the balance ledger.",
    )

    balance_type = models.CharField(
        max_length=10,
        choices=BalanceType.choices,
        default=BalanceType.CURRENCY,
    )
    balance_unit = models.CharField(max_length=20, default="DZD")
    point_conversion_rate = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        null=True,
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["nom"], name="plateforme_nom_idx"),
        ]

    def __str__(self):
        return f"{self.nom} ({self.balance} {self.balance_unit})"

    @property
    def is_points(self) -> bool:
        return self.balance_type == BalanceType.POINTS

    def clean(self):
        if self.balance_type not in BalanceType.values:
            raise ValidationError({"balance_type": 'Must be "currency" or "points"'})

        if self.solde_initial is not None and self.solde_initial < 0:
            raise ValidationError({"solde_initial": "Must be a positive number"})

        if self.point_conversion_rate is not None and self.point_conversion_rate <= 0:
            raise ValidationError({"point_conversion_rate": "Must be a positive number"})

    def save(self, *args, **kwargs):
        # Opening balance seeds the materialised balance exactly once.
        if self._state.adding:
            self.balance = self.solde_initial or Decimal("0.00")
        return super().save(*args, **kwargs)
