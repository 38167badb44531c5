# ventes/serializers.py

"""
VENTE SERIALIZERS

- VenteSerializer:        read shape with client / produit / plateforme names
- VenteCreateSerializer:  POST input (required fields + types)
- VenteUpdateSerializer:  PUT input (descriptive fields only)

Value rules (> 0, stock, balance) are enforced by ventes.services.vente_service.
"""

from rest_framework import serializers

from produits.models import CostType
from ventes.models import Vente

_METHODE_ERRORS = {
    "invalid_choice": 'Invalid methode_paiement. Must be "Espèce", "CCP", "BaridiMob", or "Autre"',
}
_STATUT_ERRORS = {
    "invalid_choice": 'Invalid statut_paiement. Must be "Payé" or "En attente"',
}


class VenteSerializer(serializers.ModelSerializer):
    id_client = serializers.IntegerField(source="client_id", read_only=True)
    id_produit = serializers.IntegerField(source="produit_id", read_only=True)
    id_plateforme = serializers.IntegerField(source="plateforme_id", read_only=True)

    client_nom = serializers.SerializerMethodField()
    client_telephone = serializers.CharField(source="client.telephone", read_only=True)
    produit_nom = serializers.CharField(source="produit.nom", read_only=True)
    plateforme_nom = serializers.CharField(source="plateforme.nom", read_only=True)

    class Meta:
        model = Vente
        fields = [
            "id",
            "id_client",
            "client_nom",
            "client_telephone",
            "id_produit",
            "produit_nom",
            "id_plateforme",
            "plateforme_nom",
            "quantite",
            "prix_unitaire",
            "total",
            "date_vente",
            "methode_paiement",
            "statut_paiement",
            "notes",
            "purchase_cost",
            "cost_type_vente",
            "panel_balance_before",
            "panel_balance_after",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_client_nom(self, obj) -> str:
        return f"{obj.client.prenom} {obj.client.nom}".strip()


class VenteCreateSerializer(serializers.Serializer):
    id_client = serializers.IntegerField()
    id_produit = serializers.IntegerField()
    id_plateforme = serializers.IntegerField()
    quantite = serializers.IntegerField()
    prix_unitaire = serializers.DecimalField(max_digits=14, decimal_places=2)
    date_vente = serializers.DateTimeField()
    methode_paiement = serializers.ChoiceField(
        choices=Vente.MethodePaiement.choices, error_messages=_METHODE_ERRORS
    )
    statut_paiement = serializers.ChoiceField(
        choices=Vente.StatutPaiement.choices, error_messages=_STATUT_ERRORS
    )
    purchase_cost = serializers.DecimalField(max_digits=14, decimal_places=2)
    cost_type_vente = serializers.ChoiceField(
        choices=CostType.choices, required=False, default=CostType.CURRENCY
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class VenteUpdateSerializer(serializers.Serializer):
    quantite = serializers.IntegerField(required=False)
    prix_unitaire = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    date_vente = serializers.DateTimeField(required=False)
    methode_paiement = serializers.ChoiceField(
        choices=Vente.MethodePaiement.choices, required=False, error_messages=_METHODE_ERRORS
    )
    statut_paiement = serializers.ChoiceField(
        choices=Vente.StatutPaiement.choices, required=False, error_messages=_STATUT_ERRORS
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BulkDeleteResultSerializer(serializers.Serializer):
    deleted = serializers.IntegerField()
