"""Delivery URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.deliveries.views import DeliveryViewSet

router = SimpleRouter(trailing_slash=False)
router.register("entregas", DeliveryViewSet, basename="entrega")

urlpatterns = router.urls
