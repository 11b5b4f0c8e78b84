import re

from rest_framework import serializers

from .models import Address

PHONE_RE = re.compile(r"^\+?[0-9]{7,15}$")


class AddressSerializer(serializers.ModelSerializer):
    # Accepts "+57 300 123 4567"; spaces are dropped before the format check.
    phone = serializers.CharField(max_length=24)

    class Meta:
        model = Address
        fields = [
            "id",
            "full_name",
            "phone",
            "address_line1",
            "address_line2",
            "city",
            "state",
            "zip_code",
            "country",
            "is_default",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_phone(self, value: str) -> str:
        value = value.replace(" ", "").strip()
        if not PHONE_RE.match(value):
            raise serializers.ValidationError("Use only digits, optionally prefixed with +")
        return value
