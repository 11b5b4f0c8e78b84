"""Root URL configuration.

Storefront endpoints live under ``/api/v1/``; back-office endpoints under
``/api/v1/admin/`` and require staff users.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from .health import health

admin.site.site_header = "Refrielectricos Admin"
admin.site.index_title = "Administración"

urlpatterns = [
    path("admin/", admin.site.urls),
    # API schema and Swagger UI
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="api-schema"), name="api-docs"),
    # Healthcheck
    path("health/", health, name="health"),
    # Storefront (v1)
    path("api/v1/", include("users.urls")),
    path("api/v1/catalog/", include("catalog.urls")),
    path("api/v1/cart/", include("cart.urls")),
    path("api/v1/orders/", include("orders.urls")),
    path("api/v1/customer/", include("customer.urls")),
    path("api/v1/reviews/", include("reviews.urls")),
    path("api/v1/wishlists/", include("wishlists.urls")),
    # Back office (v1)
    path("api/v1/admin/catalog/", include("catalog.admin_urls")),
    path("api/v1/admin/orders/", include("orders.admin_urls")),
    path("api/v1/admin/users/", include("users.admin_urls")),
    path("api/v1/admin/dashboard/", include("dashboard.urls")),
]
