from decimal import Decimal

from rest_framework import serializers

from .models import MAX_RATING, MIN_RATING, Review


class ReviewSerializer(serializers.ModelSerializer):
    user = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = ["id", "product", "user", "rating", "comment", "created_at"]
        read_only_fields = fields

    def get_user(self, obj) -> dict:
        return {"id": obj.user_id, "name": obj.user.name}


class MyReviewSerializer(serializers.ModelSerializer):
    product = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = ["id", "product", "rating", "comment", "created_at"]
        read_only_fields = fields

    def get_product(self, obj) -> dict:
        p = obj.product
        return {"id": p.id, "name": p.name, "slug": p.slug, "image_url": p.image_url}


class ReviewCreateSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    rating = serializers.DecimalField(max_digits=2, decimal_places=1, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = serializers.CharField(required=False, allow_blank=True, default="", max_length=2000)

    def validate_rating(self, value: Decimal) -> Decimal:
        if (value * 2) % 1:
            raise serializers.ValidationError("Rating must be a multiple of 0.5.")
        return value


class EligibilitySerializer(serializers.Serializer):
    can_review = serializers.BooleanField()
    has_purchased = serializers.BooleanField()
    has_reviewed = serializers.BooleanField()


class PendingProductSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    image_url = serializers.CharField()
