# produits/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from produits.views import ProduitViewSet

router = SimpleRouter(trailing_slash="/?")
router.register(r"produits", ProduitViewSet, basename="produits")

urlpatterns = [
    path("", include(router.urls)),
]
