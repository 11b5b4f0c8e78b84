"""Public (read-only) serializers for the catalog app."""

from rest_framework import serializers

from .models import Product, ProductVariant


class ProductVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = [
            "id",
            "name",
            "slug",
            "sku",
            "price",
            "original_price",
            "stock",
            "image_url",
            "images_url",
            "attributes",
            "is_default",
            "position",
        ]


class ProductListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "price",
            "stock",
            "image_url",
            "category",
            "subcategory",
            "brand",
            "created_at",
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    variants = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "stock",
            "image_url",
            "images_url",
            "category",
            "subcategory",
            "brand",
            "sku",
            "tags",
            "specifications",
            "variants",
            "created_at",
            "updated_at",
        ]

    def get_variants(self, obj):
        qs = obj.variants.filter(is_active=True).order_by("-is_default", "position", "name")
        return ProductVariantSerializer(qs, many=True).data


class CatalogMetadataSerializer(serializers.Serializer):
    categories = serializers.ListField(child=serializers.CharField())
    brands = serializers.ListField(child=serializers.CharField())


class VariantWithProductSerializer(ProductVariantSerializer):
    """A variant together with its product and the product's active variants."""

    product = serializers.SerializerMethodField()

    class Meta(ProductVariantSerializer.Meta):
        fields = ProductVariantSerializer.Meta.fields + ["product"]

    def get_product(self, obj):
        return ProductDetailSerializer(obj.product).data
