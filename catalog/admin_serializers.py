"""Admin serializers for catalog write endpoints."""

from rest_framework import serializers

from .models import Product, ProductVariant


class ProductAdminSerializer(serializers.ModelSerializer):
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
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["slug", "created_at", "updated_at"]

    def validate_specifications(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Expected a list of {label, value} objects.")
        for spec in value:
            if not isinstance(spec, dict) or not {"label", "value"} <= set(spec):
                raise serializers.ValidationError("Each specification needs a label and a value.")
        return value

    def validate_images_url(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Expected a list of URLs.")
        return value

    def validate_tags(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Expected a list of tags.")
        return value


class ProductVariantAdminSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = [
            "id",
            "product",
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
            "is_active",
            "position",
        ]
        extra_kwargs = {"slug": {"required": False}}

    def validate_attributes(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Expected an object of attribute values.")
        return value


class BulkVariantSerializer(ProductVariantAdminSerializer):
    """One entry of a bulk create; the product comes from the URL."""

    class Meta(ProductVariantAdminSerializer.Meta):
        fields = [f for f in ProductVariantAdminSerializer.Meta.fields if f != "product"]
