"""Client URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.clients.views import ClientViewSet

router = SimpleRouter(trailing_slash=False)
router.register("clientes", ClientViewSet, basename="cliente")

urlpatterns = router.urls
