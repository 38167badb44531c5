# ventes/filters.py

import django_filters

from ventes.models import Vente


class VenteFilter(django_filters.FilterSet):
    id_client = django_filters.NumberFilter(field_name="client_id")
    id_produit = django_filters.NumberFilter(field_name="produit_id")
    id_plateforme = django_filters.NumberFilter(field_name="plateforme_id")
    statut_paiement = django_filters.ChoiceFilter(choices=Vente.StatutPaiement.choices)
    methode_paiement = django_filters.ChoiceFilter(choices=Vente.MethodePaiement.choices)
    date_debut = django_filters.DateFilter(field_name="date_vente", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_vente", lookup_expr="date__lte")

    class Meta:
        model = Vente
        fields = [
            "id_client",
            "id_produit",
            "id_plateforme",
            "statut_paiement",
            "methode_paiement",
            "date_debut",
            "date_fin",
        ]
