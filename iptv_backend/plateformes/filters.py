# plateformes/filters.py

import django_filters
from django.db.models import Q

from plateformes.models import Plateforme


class PlateformeFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    balance_type = django_filters.ChoiceFilter(choices=Plateforme._meta.get_field("balance_type").choices)

    class Meta:
        model = Plateforme
        fields = ["search", "balance_type"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(nom__icontains=value) | Q(description__icontains=value))
