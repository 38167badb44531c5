# plateformes/serializers/plateforme.py

from decimal import Decimal

from rest_framework import serializers

from core.exceptions import ConflictError
from plateformes.models import BalanceType, Plateforme


class PlateformeSerializer(serializers.ModelSerializer):
    """
    Platform read/write serializer.

    WRITE RULES:
    - `balance` is never writable (ledger only)
    - `solde_initial` and `balance_type` are fixed at creation
    - duplicate `nom` -> 409 Conflict

    Read-only stats are annotated by PlateformeViewSet.get_queryset().
    """

    total_recharges = serializers.IntegerField(read_only=True, default=0)
    total_recharge_paye = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True, default=Decimal("0.00")
    )
    total_recharge_attente = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True, default=Decimal("0.00")
    )
    nb_produits = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Plateforme
        fields = [
            "id",
            "nom",
            "description",
            "url",
            "solde_initial",
            "balance",
            "balance_type",
            "balance_unit",
            "point_conversion_rate",
            "total_recharges",
            "total_recharge_paye",
            "total_recharge_attente",
            "nb_produits",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "balance", "created_at", "updated_at"]
        extra_kwargs = {
            "nom": {"validators": []},
            "balance_unit": {"required": False},
        }

    def validate_nom(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")

        qs = Plateforme.objects.filter(nom__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise ConflictError("A plateforme with this name already exists")
        return value

    def validate_solde_initial(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Invalid solde_initial. Must be a positive number")
        return value

    def validate_point_conversion_rate(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError(
                "Invalid point_conversion_rate. Must be a positive number"
            )
        return value

    def validate(self, attrs):
        if self.instance is not None:
            for field in ("solde_initial", "balance_type"):
                if field in attrs and attrs[field] != getattr(self.instance, field):
                    raise serializers.ValidationError(
                        {field: f"{field} cannot be changed after creation"}
                    )
        elif "solde_initial" not in attrs:
            raise serializers.ValidationError({"solde_initial": "This field is required."})

        if self.instance is None and not attrs.get("balance_unit"):
            balance_type = attrs.get("balance_type", BalanceType.CURRENCY)
            attrs["balance_unit"] = "pts" if balance_type == BalanceType.POINTS else "DZD"

        return attrs


class BalanceAdjustmentInputSerializer(serializers.Serializer):
    delta = serializers.DecimalField(max_digits=14, decimal_places=2)
    note = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)

    def validate_delta(self, value):
        if value == 0:
            raise serializers.ValidationError("delta must be non-zero")
        return value


class ReconciliationSerializer(serializers.Serializer):
    plateforme_id = serializers.IntegerField()
    nom = serializers.CharField()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    ledger_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    historical_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    drift = serializers.DecimalField(max_digits=14, decimal_places=2)
    fixed = serializers.BooleanField()
