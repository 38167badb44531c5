# recharges/filters.py

import django_filters

from recharges.models import Recharge


class RechargeFilter(django_filters.FilterSet):
    id_plateforme = django_filters.NumberFilter(field_name="plateforme_id")
    statut = django_filters.ChoiceFilter(choices=Recharge.Statut.choices)
    date_debut = django_filters.DateFilter(field_name="date_recharge", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_recharge", lookup_expr="date__lte")

    class Meta:
        model = Recharge
        fields = ["id_plateforme", "statut", "date_debut", "date_fin"]
