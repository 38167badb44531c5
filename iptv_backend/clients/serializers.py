# clients/serializers.py

from rest_framework import serializers

from clients.models import Client
from core.exceptions import ConflictError


class ClientSerializer(serializers.ModelSerializer):
    """
    Client read/write serializer.

    - duplicate telephone -> 409 Conflict
    - purchase stats are annotated by ClientViewSet
    """

    nom_complet = serializers.CharField(read_only=True)
    total_achats = serializers.IntegerField(read_only=True, default=0)
    montant_total_achats = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True, default=0
    )
    dernier_achat = serializers.DateTimeField(read_only=True, default=None)

    class Meta:
        model = Client
        fields = [
            "id",
            "nom",
            "prenom",
            "nom_complet",
            "telephone",
            "email",
            "wilaya",
            "adresse",
            "facebook",
            "instagram",
            "notes",
            "total_achats",
            "montant_total_achats",
            "dernier_achat",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "telephone": {"validators": []},
            "email": {"error_messages": {"invalid": "Invalid email format"}},
        }

    def validate_telephone(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")

        qs = Client.objects.filter(telephone=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise ConflictError("A client with this telephone number already exists")
        return value

    def validate_email(self, value):
        return value or None

    def validate(self, attrs):
        if self.instance is not None and not attrs:
            raise serializers.ValidationError("No valid fields to update")
        return attrs
