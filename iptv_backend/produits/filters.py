# produits/filters.py

import django_filters
from django.db.models import F, Q

from produits.models import Categorie, Produit


class ProduitFilter(django_filters.FilterSet):
    STOCK_STATUS_CHOICES = (
        ("in_stock", "In stock"),
        ("low_stock", "Low stock"),
        ("out_of_stock", "Out of stock"),
    )

    id_plateforme = django_filters.NumberFilter(field_name="plateforme_id")
    categorie = django_filters.ChoiceFilter(choices=Categorie.choices)
    search = django_filters.CharFilter(method="filter_search")
    stock_status = django_filters.ChoiceFilter(
        choices=STOCK_STATUS_CHOICES,
        method="filter_stock_status",
    )

    class Meta:
        model = Produit
        fields = ["id_plateforme", "categorie", "search", "stock_status"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(nom__icontains=value) | Q(description__icontains=value))

    def filter_stock_status(self, queryset, name, value):
        if value == "out_of_stock":
            return queryset.filter(stock_actuel=0)
        if value == "low_stock":
            return queryset.filter(stock_actuel__gt=0, stock_actuel__lte=F("seuil_alerte"))
        if value == "in_stock":
            return queryset.filter(stock_actuel__gt=F("seuil_alerte"))
        return queryset
