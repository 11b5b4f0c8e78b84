"""URL routes for the catalog app."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import ProductVariantViewSet, ProductViewSet

router = SimpleRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"variants", ProductVariantViewSet, basename="variant")

urlpatterns = [path("", include(router.urls))]
