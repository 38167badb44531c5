# ventes/urls.py

"""
VENTES URLS

    /api/ventes               list / create
    /api/ventes/bulk-delete   DELETE every sale
    /api/ventes/<id>          retrieve / update / delete
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from ventes.views import VenteViewSet

router = SimpleRouter(trailing_slash="/?")
router.register(r"ventes", VenteViewSet, basename="ventes")

urlpatterns = [
    path("", include(router.urls)),
]
