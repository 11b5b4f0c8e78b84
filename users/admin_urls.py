from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .admin_views import UserAdminViewSet

router = SimpleRouter()
router.register(r"", UserAdminViewSet, basename="admin-user")

urlpatterns = [path("", include(router.urls))]
