"""Read-only storefront endpoints for the catalog."""

from django_filters import rest_framework as filters
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from . import selectors
from .serializers import (
    CatalogMetadataSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductVariantSerializer,
    VariantWithProductSerializer,
)


class CatalogPagination(PageNumberPagination):
    page_size = 12
    page_size_query_param = "limit"
    max_page_size = 100


class ProductFilterSet(filters.FilterSet):
    category = filters.CharFilter(field_name="category")
    brand = filters.CharFilter(field_name="brand")
    min_price = filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="price", lookup_expr="lte")


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        description=(
            "Returns active products, newest first, 12 per page by default. Supports `search` (name, description, "
            "brand), `category`, `brand`, `min_price`, `max_price`, `page` and `limit`."
        ),
        tags=["Catalog Endpoints"],
        parameters=[
            OpenApiParameter("search", OpenApiTypes.STR, location="query", description="Search products by text"),
            OpenApiParameter("category", OpenApiTypes.STR, location="query", description="Exact category"),
            OpenApiParameter("brand", OpenApiTypes.STR, location="query", description="Exact brand"),
            OpenApiParameter("min_price", OpenApiTypes.NUMBER, location="query"),
            OpenApiParameter("max_price", OpenApiTypes.NUMBER, location="query"),
            OpenApiParameter("limit", OpenApiTypes.INT, location="query", description="Page size"),
        ],
    ),
    retrieve=extend_schema(
        summary="Get product by id or slug",
        description="Returns an active product with its active variants",
        tags=["Catalog Endpoints"],
    ),
)
class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    lookup_field = "term"
    lookup_value_regex = "[^/]+"
    pagination_class = CatalogPagination
    filterset_class = ProductFilterSet
    search_fields = ["name", "description", "brand"]
    ordering_fields = ["price", "name", "created_at"]
    throttle_scope = "catalog"

    def get_queryset(self):
        return selectors.list_products()

    def get_object(self):
        return selectors.get_product(self.kwargs["term"])

    def get_serializer_class(self):
        return ProductDetailSerializer if self.action == "retrieve" else ProductListSerializer

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Catalog metadata",
        description="Distinct categories and brands for the filter sidebar",
        responses=CatalogMetadataSerializer,
    )
    @action(detail=False, methods=["get"], url_path="metadata", pagination_class=None, filter_backends=[])
    def metadata(self, request):
        return Response(CatalogMetadataSerializer(selectors.get_metadata()).data)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Related products",
        description="Up to four active products sharing the product's category",
        responses=ProductListSerializer(many=True),
    )
    @action(detail=True, methods=["get"], url_path="related", pagination_class=None, filter_backends=[])
    def related(self, request, term=None):
        product = self.get_object()
        qs = selectors.list_related_products(category=product.category, exclude_id=product.pk)
        return Response(ProductListSerializer(qs, many=True).data)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="List product variants",
        description="Returns the active variants of an active product, default first",
        responses=ProductVariantSerializer(many=True),
    )
    @action(detail=True, methods=["get"], url_path="variants", pagination_class=None, filter_backends=[])
    def variants(self, request, term=None):
        product = self.get_object()
        qs = selectors.list_variants(product=product)
        return Response(ProductVariantSerializer(qs, many=True).data)


@extend_schema_view(
    retrieve=extend_schema(
        summary="Get variant by slug",
        description="Returns an active variant with its product and the product's active variants",
        tags=["Catalog Endpoints"],
    ),
)
class ProductVariantViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    serializer_class = VariantWithProductSerializer
    lookup_field = "slug"
    lookup_value_regex = "[^/]+"
    throttle_scope = "catalog"

    def get_object(self):
        return selectors.get_variant_by_slug(self.kwargs["slug"])
