# produits/models/produit.py

from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import models


class Categorie(models.TextChoices):
    IPTV = "IPTV", "IPTV"
    NETFLIX = "Netflix", "Netflix"
    AUTRE = "Autre", "Autre"


class CostType(models.TextChoices):
    CURRENCY = "currency", "Currency"
    POINTS = "points", "Points"


class Produit(models.Model):
    """
    Subscription product sold from a platform's credit.

    STOCK MODEL (IMPORTANT):
    - `stock_actuel` is the number of activations on hand, never negative
    - sales decrement it through produits.services.stock (F() expressions)

    PRICING:
    - prix_vente_calcule = prix_achat_moyen * (1 + marge / 100)
    - recomputed on every save, rounded half-up to 2 places
    """

    plateforme = models.ForeignKey(
        "plateformes.Plateforme",
        on_delete=models.PROTECT,
        related_name="produits",
    )

    nom = models.CharField(max_length=150)
    description = models.TextField(blank=True, default="")
    categorie = models.CharField(
        max_length=16,
        choices=Categorie.choices,
        default=Categorie.IPTV,
    )

    duree_mois = models.PositiveIntegerField()
    duration_weeks = models.PositiveIntegerField(null=True, blank=True)
    is_multi_panel = models.BooleanField(default=False)

    stock_actuel = models.PositiveIntegerField(default=0)
    seuil_alerte = models.PositiveIntegerField(default=5)

    prix_achat_moyen = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    marge = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Margin in percent.",
    )
    prix_vente_calcule = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )

    cost_type = models.CharField(
        max_length=10,
        choices=CostType.choices,
        default=CostType.CURRENCY,
    )
    default_cost = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["plateforme", "categorie"], name="produit_plat_categorie_idx"),
            models.Index(fields=["nom"], name="produit_nom_idx"),
        ]

    def __str__(self):
        return f"{self.nom} ({self.categorie}, {self.duree_mois} mois)"

    @property
    def stock_faible(self) -> bool:
        return self.stock_actuel <= self.seuil_alerte

    def compute_prix_vente(self) -> Decimal:
        cost = Decimal(str(self.prix_achat_moyen or "0.00"))
        marge = Decimal(str(self.marge or "0.00"))
        price = cost * (Decimal("1.00") + marge / Decimal("100.00"))
        return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def clean(self):
        if self.duree_mois is None or self.duree_mois <= 0:
            raise ValidationError({"duree_mois": "duree_mois must be greater than 0"})

        if self.duration_weeks is not None and self.duration_weeks <= 0:
            raise ValidationError({"duration_weeks": "duration_weeks must be greater than 0"})

        for field in ("prix_achat_moyen", "marge", "default_cost"):
            value = getattr(self, field)
            if value is not None and Decimal(value) < 0:
                raise ValidationError({field: f"{field} must be >= 0"})

    def save(self, *args, **kwargs):
        if self.duration_weeks is None and self.duree_mois:
            self.duration_weeks = self.duree_mois * 4

        self.prix_vente_calcule = self.compute_prix_vente()

        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"prix_vente_calcule", "updated_at"}

        return super().save(*args, **kwargs)
