# produits/serializers.py

"""
PRODUIT SERIALIZER

- id_plateforme is fixed at creation (unknown id -> 404 "Plateforme not found")
- prix_vente_calcule is derived by the model, never written
- total_ventes / quantite_vendue are annotated by ProduitViewSet
"""

from rest_framework import serializers

from core.exceptions import NotFoundError
from plateformes.models import Plateforme
from produits.models import CostType, Produit


class ProduitSerializer(serializers.ModelSerializer):
    id_plateforme = serializers.IntegerField(source="plateforme_id")
    plateforme_nom = serializers.CharField(source="plateforme.nom", read_only=True)

    stock_faible = serializers.BooleanField(read_only=True)
    total_ventes = serializers.IntegerField(read_only=True, default=0)
    quantite_vendue = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Produit
        fields = [
            "id",
            "id_plateforme",
            "plateforme_nom",
            "nom",
            "description",
            "categorie",
            "duree_mois",
            "duration_weeks",
            "is_multi_panel",
            "stock_actuel",
            "seuil_alerte",
            "stock_faible",
            "prix_achat_moyen",
            "marge",
            "prix_vente_calcule",
            "cost_type",
            "default_cost",
            "total_ventes",
            "quantite_vendue",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "prix_vente_calcule",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "categorie": {
                "required": True,
                "error_messages": {
                    "invalid_choice": "Invalid categorie. Must be IPTV, Netflix, or Autre",
                },
            },
            "cost_type": {
                "error_messages": {
                    "invalid_choice": 'Invalid cost_type. Must be "currency" or "points"',
                },
            },
            "prix_achat_moyen": {"required": True},
            "marge": {"required": True},
        }

    def validate_id_plateforme(self, value):
        if self.instance is None and not Plateforme.objects.filter(pk=value).exists():
            raise NotFoundError("Plateforme not found")
        return value

    def validate_nom(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value

    def validate_duree_mois(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("duree_mois must be greater than 0")
        return value

    def validate_duration_weeks(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("duration_weeks must be greater than 0")
        return value

    def validate_prix_achat_moyen(self, value):
        if value < 0:
            raise serializers.ValidationError("prix_achat_moyen must be >= 0")
        return value

    def validate_marge(self, value):
        if value < 0:
            raise serializers.ValidationError("marge must be >= 0")
        return value

    def validate_default_cost(self, value):
        if value < 0:
            raise serializers.ValidationError("default_cost must be >= 0")
        return value

    def validate(self, attrs):
        if self.instance is not None:
            # Products never move between platforms.
            attrs.pop("plateforme_id", None)
            if not attrs:
                raise serializers.ValidationError("No valid fields to update")
            return attrs

        attrs.setdefault("cost_type", CostType.CURRENCY)
        if "default_cost" not in attrs:
            attrs["default_cost"] = attrs["prix_achat_moyen"]
        if not attrs.get("duration_weeks"):
            attrs["duration_weeks"] = attrs["duree_mois"] * 4
        return attrs

