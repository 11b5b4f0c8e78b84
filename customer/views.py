"""Address book endpoints, scoped to the authenticated user."""

from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view
from rest_framework import generics, permissions

from .selectors import list_addresses
from .serializers import AddressSerializer
from .services import create_address, delete_address, update_address


@extend_schema_view(
    get=extend_schema(tags=["Customer Endpoints"], summary="List my addresses"),
    post=extend_schema(
        tags=["Customer Endpoints"],
        summary="Create address",
        description="The first address becomes the default; creating another default unsets the previous one.",
        examples=[
            OpenApiExample(
                "Address",
                value={
                    "full_name": "Ana Gómez",
                    "phone": "+573001234567",
                    "address_line1": "Calle 10 # 5-20",
                    "city": "Bucaramanga",
                    "state": "Santander",
                    "zip_code": "680001",
                },
                request_only=True,
            )
        ],
    ),
)
class AddressListCreateView(generics.ListCreateAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AddressSerializer
    pagination_class = None
    throttle_scope = "addresses"

    def get_queryset(self):
        return list_addresses(user=self.request.user)

    def perform_create(self, serializer):
        serializer.instance = create_address(user=self.request.user, **serializer.validated_data)


@extend_schema_view(
    get=extend_schema(tags=["Customer Endpoints"], summary="Get address"),
    put=extend_schema(tags=["Customer Endpoints"], summary="Replace address"),
    patch=extend_schema(tags=["Customer Endpoints"], summary="Update address"),
    delete=extend_schema(tags=["Customer Endpoints"], summary="Delete address"),
)
class AddressDetailView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AddressSerializer
    throttle_scope = "addresses"

    def get_queryset(self):
        return list_addresses(user=self.request.user)

    def perform_update(self, serializer):
        serializer.instance = update_address(address=serializer.instance, **serializer.validated_data)

    def perform_destroy(self, instance):
        delete_address(address=instance)
