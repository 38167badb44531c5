# clients/filters.py

import django_filters
from django.db.models import Q

from clients.models import Client


class ClientFilter(django_filters.FilterSet):
    wilaya = django_filters.CharFilter(field_name="wilaya", lookup_expr="iexact")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Client
        fields = ["wilaya", "search"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(nom__icontains=value)
            | Q(prenom__icontains=value)
            | Q(telephone__icontains=value)
            | Q(email__icontains=value)
        )
