# plateformes/urls.py

"""
PLATEFORMES URLS

Mounted under /api/ by backend/urls.py (trailing slash optional):
    /api/plateformes                      list / create
    /api/plateformes/<id>                 retrieve / update / delete
    /api/plateformes/<id>/mouvements      ledger journal
    /api/plateformes/<id>/ajustement      manual adjustment
    /api/plateformes/<id>/reconciliation  drift report
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from plateformes.views import PlateformeViewSet

router = SimpleRouter(trailing_slash="/?")
router.register(r"plateformes", PlateformeViewSet, basename="plateformes")

urlpatterns = [
    path("", include(router.urls)),
]
