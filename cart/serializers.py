"""Cart serializers for read and write operations."""

from rest_framework import serializers

from .models import CartItem
from .selectors import cart_lines, cart_totals


class CartItemReadSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField()
    variant_id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField(source="product.name")
    slug = serializers.CharField(source="product.slug")
    variant_name = serializers.CharField(source="variant.name", default=None)
    image_url = serializers.SerializerMethodField()
    stock = serializers.SerializerMethodField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "variant_id",
            "name",
            "slug",
            "variant_name",
            "image_url",
            "stock",
            "quantity",
            "unit_price",
            "line_total",
        ]

    def get_image_url(self, obj) -> str:
        if obj.variant_id and obj.variant.image_url:
            return obj.variant.image_url
        return obj.product.image_url

    def get_stock(self, obj) -> int:
        return obj.variant.stock if obj.variant_id else obj.product.stock


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    items = CartItemReadSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()

    @classmethod
    def from_cart(cls, *, cart):
        lines = cart_lines(cart=cart)
        return cls({"id": cart.id, "items": lines, **cart_totals(cart=cart, lines=lines)})


class GuestCartLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    variant_id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    variant_name = serializers.CharField(allow_null=True)
    image_url = serializers.CharField(allow_blank=True)
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class GuestCartReadSerializer(serializers.Serializer):
    items = GuestCartLineSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()


class AddItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    variant_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    quantity = serializers.IntegerField(min_value=1)


class UpdateItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class LineQuerySerializer(serializers.Serializer):
    """`?variant_id=` on item routes; absent means the variant-less line."""

    variant_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class CheckoutSerializer(serializers.Serializer):
    address_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)
