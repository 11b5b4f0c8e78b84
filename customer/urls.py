"""Customer URL routes (v1)."""

from django.urls import path

from .views import AddressDetailView, AddressListCreateView

app_name = "customer"

urlpatterns = [
    path("addresses/", AddressListCreateView.as_view(), name="address-list"),
    path("addresses/<int:pk>/", AddressDetailView.as_view(), name="address-detail"),
]
