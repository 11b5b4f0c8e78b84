from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .admin_views import OrderAdminViewSet

router = SimpleRouter()
router.register(r"", OrderAdminViewSet, basename="admin-order")

urlpatterns = [path("", include(router.urls))]
