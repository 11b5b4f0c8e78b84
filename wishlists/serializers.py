from rest_framework import serializers

from .models import Wishlist, WishlistItem


class WishlistItemSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(source="product.id", read_only=True)
    name = serializers.CharField(source="product.name", read_only=True)
    slug = serializers.CharField(source="product.slug", read_only=True)
    price = serializers.DecimalField(source="product.price", max_digits=12, decimal_places=2, read_only=True)
    image_url = serializers.CharField(source="product.image_url", read_only=True)

    class Meta:
        model = WishlistItem
        fields = ["id", "product_id", "name", "slug", "price", "image_url", "created_at"]


class WishlistSerializer(serializers.ModelSerializer):
    items = WishlistItemSerializer(many=True, read_only=True)

    class Meta:
        model = Wishlist
        fields = ["id", "name", "items", "created_at"]


class WishlistCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)


class WishlistItemCreateSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
