"""Admin viewsets for catalog writes, restricted to staff users."""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from . import services
from .admin_serializers import BulkVariantSerializer, ProductAdminSerializer, ProductVariantAdminSerializer
from .models import Product, ProductVariant


class AdminBaseViewSet(viewsets.ModelViewSet):
    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "admin_write"

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            instance = self.create_instance(serializer.validated_data)
        except services.CatalogError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(instance).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            instance = self.update_instance(instance, serializer.validated_data)
        except services.CatalogError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(instance).data)


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List products (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get product (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create product"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update product"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update product"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete product"),
)
class ProductAdminViewSet(AdminBaseViewSet):
    queryset = Product.objects.all().order_by("-created_at", "-id")
    serializer_class = ProductAdminSerializer
    filterset_fields = ["category", "brand", "is_active"]
    search_fields = ["name", "sku", "brand"]

    def create_instance(self, data):
        return services.create_product(**data)

    def update_instance(self, instance, data):
        return services.update_product(product=instance, **data)

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Bulk create variants",
        description="Creates several variants of the product at once; the first becomes the default when none exists",
        request=BulkVariantSerializer(many=True),
        responses={201: ProductVariantAdminSerializer(many=True)},
    )
    @action(detail=True, methods=["post"], url_path="variants/bulk")
    def bulk_variants(self, request, pk=None):
        product = self.get_object()
        serializer = BulkVariantSerializer(data=request.data, many=True)
        serializer.is_valid(raise_exception=True)
        try:
            variants = services.bulk_create_variants(product_id=product.pk, variants=serializer.validated_data)
        except services.CatalogError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ProductVariantAdminSerializer(variants, many=True).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List variants (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get variant (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create variant"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update variant"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update variant"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete variant"),
)
class ProductVariantAdminViewSet(AdminBaseViewSet):
    queryset = ProductVariant.objects.select_related("product").order_by("product_id", "position", "id")
    serializer_class = ProductVariantAdminSerializer
    filterset_fields = ["product", "is_active", "is_default"]
    search_fields = ["name", "sku"]

    def create_instance(self, data):
        data = dict(data)
        product = data.pop("product")
        return services.create_variant(product_id=product.pk, **data)

    def update_instance(self, instance, data):
        data = dict(data)
        # Variants never move between products
        data.pop("product", None)
        return services.update_variant(variant=instance, **data)
