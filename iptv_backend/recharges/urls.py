# recharges/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from recharges.views import RechargeViewSet

router = SimpleRouter(trailing_slash="/?")
router.register(r"recharges", RechargeViewSet, basename="recharges")

urlpatterns = [
    path("", include(router.urls)),
]
