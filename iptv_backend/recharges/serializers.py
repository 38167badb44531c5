# recharges/serializers.py

"""
RECHARGE SERIALIZERS

- RechargeSerializer:        read shape (with plateforme_nom)
- RechargeCreateSerializer:  input for POST (types + required fields)
- RechargeUpdateSerializer:  input for PUT (every field optional)

Business rules (montant > 0, balance effects) live in
recharges.services.recharge_service.
"""

from rest_framework import serializers

from recharges.models import Recharge

_STATUT_ERRORS = {
    "invalid_choice": 'Invalid statut. Must be "En attente", "Payé", or "Annulé"',
}


class RechargeSerializer(serializers.ModelSerializer):
    id_plateforme = serializers.IntegerField(source="plateforme_id", read_only=True)
    plateforme_nom = serializers.CharField(source="plateforme.nom", read_only=True)

    class Meta:
        model = Recharge
        fields = [
            "id",
            "id_plateforme",
            "plateforme_nom",
            "montant",
            "devise",
            "statut",
            "date_recharge",
            "preuve_paiement",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RechargeCreateSerializer(serializers.Serializer):
    id_plateforme = serializers.IntegerField()
    montant = serializers.DecimalField(max_digits=14, decimal_places=2)
    statut = serializers.ChoiceField(choices=Recharge.Statut.choices, error_messages=_STATUT_ERRORS)
    date_recharge = serializers.DateTimeField()
    preuve_paiement = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=500
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RechargeUpdateSerializer(serializers.Serializer):
    montant = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    statut = serializers.ChoiceField(
        choices=Recharge.Statut.choices, required=False, error_messages=_STATUT_ERRORS
    )
    date_recharge = serializers.DateTimeField(required=False)
    preuve_paiement = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=500
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
