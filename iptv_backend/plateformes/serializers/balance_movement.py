# plateformes/serializers/balance_movement.py

from rest_framework import serializers

from plateformes.models import BalanceMovement


class BalanceMovementSerializer(serializers.ModelSerializer):
    id_plateforme = serializers.IntegerField(source="plateforme_id", read_only=True)

    class Meta:
        model = BalanceMovement
        fields = [
            "id",
            "id_plateforme",
            "delta",
            "balance_after",
            "reason",
            "source_type",
            "source_id",
            "note",
            "created_at",
        ]
        read_only_fields = fields
