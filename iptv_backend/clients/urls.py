# clients/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from clients.views import ClientViewSet

router = SimpleRouter(trailing_slash="/?")
router.register(r"clients", ClientViewSet, basename="clients")

urlpatterns = [
    path("", include(router.urls)),
]
